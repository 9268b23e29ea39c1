from .admin_auth import (
    AdminCheckAuthView,
    AdminLoginView,
    AdminLogoutView,
    CreateAdminView,
)

__all__ = [
    "AdminLoginView",
    "AdminCheckAuthView",
    "AdminLogoutView",
    "CreateAdminView",
]
