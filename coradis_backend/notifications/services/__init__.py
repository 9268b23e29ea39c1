from .whatsapp import (
    WhatsAppDeliveryError,
    is_whatsapp_configured,
    notify_new_order,
    send_otp_whatsapp,
    send_whatsapp_message,
)

__all__ = [
    "WhatsAppDeliveryError",
    "is_whatsapp_configured",
    "notify_new_order",
    "send_otp_whatsapp",
    "send_whatsapp_message",
]
