from django.urls import path

from .views import DeleteOtpView, SendOtpView, VerifyOtpView

app_name = "otp"

urlpatterns = [
    path("send/", SendOtpView.as_view(), name="send"),
    path("verify/", VerifyOtpView.as_view(), name="verify"),
    path("delete/", DeleteOtpView.as_view(), name="delete"),
]
