# customers/services/exceptions.py


class CustomerServiceError(Exception):
    """Base class for customer account and loyalty errors (400)."""


# ---------------- ACCOUNTS ----------------
class InvalidPhoneNumber(CustomerServiceError):
    pass


class PhoneAlreadyUsed(CustomerServiceError):
    pass


class PhoneNotVerified(CustomerServiceError):
    pass


class InvalidCustomerCredentials(CustomerServiceError):
    """401"""


# ---------------- LOYALTY ----------------
class LoyaltyError(CustomerServiceError):
    pass


class InvalidReferralCode(LoyaltyError):
    pass


class OwnReferralCode(LoyaltyError):
    pass


class AlreadyReferred(LoyaltyError):
    pass


class ScratchCardNotFound(LoyaltyError):
    """404"""


class ScratchCardNotOwned(LoyaltyError):
    """403"""


class ScratchCardAlreadyScratched(LoyaltyError):
    """409"""
