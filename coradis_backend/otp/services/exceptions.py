# otp/services/exceptions.py


class OtpError(Exception):
    """Base class for phone verification failures (400)."""


class PhoneAlreadyRegistered(OtpError):
    pass


class InvalidOtpCode(OtpError):
    pass


class OtpExpired(OtpError):
    """410: the code existed but is past its TTL (it has been deleted)."""


class TooManyOtpAttempts(OtpError):
    """429: the code was burned after too many wrong guesses."""


class OtpDeliveryFailed(OtpError):
    """502: WhatsApp refused the verification message."""
