# users/urls.py

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import AdminCheckAuthView, AdminLoginView, AdminLogoutView, CreateAdminView

app_name = "users"

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("admin/login/", AdminLoginView.as_view(), name="admin-login"),
    path("admin/me/", AdminCheckAuthView.as_view(), name="admin-me"),
    path("admin/logout/", AdminLogoutView.as_view(), name="admin-logout"),
    # ---------------- ADMINS ONLY ----------------
    path("admin/create/", CreateAdminView.as_view(), name="admin-create"),
    # ---------------- TOKENS ----------------
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
]
