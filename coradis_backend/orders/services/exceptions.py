# orders/services/exceptions.py

"""
Order domain errors. Views map them to {"detail": ...} responses.
"""


class OrderServiceError(Exception):
    """400 unless a subclass says otherwise."""


class EmptyCart(OrderServiceError):
    pass


class ProductUnavailable(OrderServiceError):
    pass


class InvalidDeliveryZone(OrderServiceError):
    pass


class InvalidDeliveryDate(OrderServiceError):
    pass


class RewardCardUnavailable(OrderServiceError):
    pass


# ============================================================
# LIFECYCLE
# ============================================================


class OrderLifecycleError(OrderServiceError):
    pass


class InvalidOrderTransition(OrderLifecycleError):
    """409"""
