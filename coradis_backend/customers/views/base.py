# customers/views/base.py

from __future__ import annotations

from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from customers.services.accounts import customer_for
from customers.services.exceptions import (
    CustomerServiceError,
    InvalidCustomerCredentials,
    ScratchCardAlreadyScratched,
    ScratchCardNotFound,
    ScratchCardNotOwned,
)
from permissions.roles import CAP_LOYALTY_USE, HasCapability


def error_status(exc: CustomerServiceError) -> int:
    if isinstance(exc, InvalidCustomerCredentials):
        return 401
    if isinstance(exc, ScratchCardNotFound):
        return 404
    if isinstance(exc, ScratchCardNotOwned):
        return 403
    if isinstance(exc, ScratchCardAlreadyScratched):
        return 409
    return 400


class CustomerAPIView(APIView):
    """
    Base for endpoints that act on the signed-in customer's own data.
    """

    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_LOYALTY_USE

    def get_customer(self):
        customer = customer_for(self.request.user)
        if customer is None:
            raise NotFound("Client non trouvé")
        return customer
