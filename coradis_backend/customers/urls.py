# customers/urls.py

from django.urls import path

from .views import (
    AvailableDiscountView,
    CustomerCheckAuthView,
    CustomerLoginView,
    CustomerLogoutView,
    CustomerProfileView,
    CustomerRegisterView,
    FavoriteOrderDetailView,
    FavoriteOrderListView,
    MyOrdersView,
    ScratchCardListView,
    ScratchCardScratchView,
    UseReferralCodeView,
)

app_name = "customers"

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("register/", CustomerRegisterView.as_view(), name="register"),
    path("login/", CustomerLoginView.as_view(), name="login"),
    path("me/", CustomerCheckAuthView.as_view(), name="me"),
    path("logout/", CustomerLogoutView.as_view(), name="logout"),
    # ---------------- PROFILE ----------------
    path("profile/", CustomerProfileView.as_view(), name="profile"),
    path("referral/", UseReferralCodeView.as_view(), name="referral"),
    # ---------------- ORDERS ----------------
    path("orders/", MyOrdersView.as_view(), name="orders"),
    path("favorites/", FavoriteOrderListView.as_view(), name="favorites"),
    path("favorites/<int:favorite_id>/", FavoriteOrderDetailView.as_view(), name="favorite-detail"),
    # ---------------- LOYALTY ----------------
    path("discount/", AvailableDiscountView.as_view(), name="discount"),
    path("scratch-cards/", ScratchCardListView.as_view(), name="scratch-cards"),
    path("scratch-cards/<int:card_id>/scratch/", ScratchCardScratchView.as_view(), name="scratch-card"),
]
