# permissions/roles.py

from __future__ import annotations

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS
# =========================================================
# Kept in sync with users.User.ROLE_CHOICES.
ROLE_ADMIN = "admin"
ROLE_CUSTOMER = "customer"

ALL_ROLES = {
    ROLE_ADMIN,
    ROLE_CUSTOMER,
}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views protect capabilities, not raw roles.
CAP_ORDERS_VIEW = "orders.view"            # dashboard listing + stats
CAP_ORDERS_MANAGE = "orders.manage"        # status changes, deletion
CAP_CATALOG_EDIT = "catalog.edit"
CAP_MESSAGES_MANAGE = "messages.manage"    # contact inbox
CAP_ADMINS_MANAGE = "admins.manage"        # create other admin accounts
CAP_LOYALTY_USE = "loyalty.use"            # points, referral codes, scratch cards

ALL_CAPABILITIES = {
    CAP_ORDERS_VIEW,
    CAP_ORDERS_MANAGE,
    CAP_CATALOG_EDIT,
    CAP_MESSAGES_MANAGE,
    CAP_ADMINS_MANAGE,
    CAP_LOYALTY_USE,
}


# =========================================================
# ROLE → CAPABILITY MAP
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        CAP_ORDERS_VIEW,
        CAP_ORDERS_MANAGE,
        CAP_CATALOG_EDIT,
        CAP_MESSAGES_MANAGE,
        CAP_ADMINS_MANAGE,
    },
    ROLE_CUSTOMER: {
        CAP_LOYALTY_USE,
    },
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> str | None:
    return getattr(user, "role", None)


def capabilities_for(user) -> set[str]:
    if not user or not getattr(user, "is_authenticated", False):
        return set()
    if getattr(user, "is_superuser", False):
        return set(ALL_CAPABILITIES)
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    return capability in capabilities_for(user)


# =========================================================
# Base Role Permission (Internal Use)
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Base permission for role-based access control.

    Subclasses must define:
    - allowed_roles (set)
    """

    allowed_roles: set[str] = set()

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        user_role = get_user_role(user)
        if not user_role:
            return False

        return user_role in self.allowed_roles


# =========================================================
# Capability Permissions
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        required_capability = CAP_ORDERS_MANAGE
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # Deny-by-default so a view without a capability is never open
            return False

        return user_has_capability(user, required)


class IsAdmin(BaseRolePermission):
    allowed_roles = {ROLE_ADMIN}


class IsCustomer(BaseRolePermission):
    allowed_roles = {ROLE_CUSTOMER}
