# notifications/services/whatsapp.py
"""
PATH: notifications/services/whatsapp.py

WHATSAPP DELIVERY (Twilio Messages REST API)

- Credentials come from settings.WHATSAPP (ACCOUNT_SID, AUTH_TOKEN, FROM,
  SHOP_NUMBER).
- Not configured -> warning logged, nothing sent, returns False.
- Provider rejection -> logged (with a hint for well-known Twilio codes)
  and WhatsAppDeliveryError raised. Callers decide whether that is fatal.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from django.conf import settings

logger = logging.getLogger(__name__)

TWILIO_BASE = "https://api.twilio.com/2010-04-01"

KNOWN_ERROR_HINTS = {
    21408: "Numéro non autorisé dans le Sandbox Twilio: ajoutez-le au Sandbox ou passez en compte production.",
    21211: "Numéro de téléphone invalide.",
    20003: "Authentification Twilio échouée: vérifiez TWILIO_ACCOUNT_SID et TWILIO_AUTH_TOKEN.",
}


class WhatsAppDeliveryError(RuntimeError):
    def __init__(self, message: str, *, code: int | None = None, status: int | None = None):
        super().__init__(message)
        self.code = code
        self.status = status


def _cfg() -> dict:
    return getattr(settings, "WHATSAPP", {}) or {}


def is_whatsapp_configured() -> bool:
    cfg = _cfg()
    return bool((cfg.get("ACCOUNT_SID") or "").strip() and (cfg.get("AUTH_TOKEN") or "").strip())


def _whatsapp_address(number: str) -> str:
    number = (number or "").strip()
    if number.startswith("whatsapp:"):
        return number
    return f"whatsapp:{number}"


def _safe_preview(text: str, limit: int = 500) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + " …(truncated)"


def _parse_error(raw: str) -> dict[str, Any]:
    try:
        parsed = json.loads(raw or "")
    except ValueError:
        return {}
    return parsed if isinstance(parsed, dict) else {}


def send_whatsapp_message(to: str, body: str, *, timeout: int = 15) -> bool:
    """
    Send one WhatsApp message. Returns True when Twilio accepted it,
    False when WhatsApp is not configured.
    """
    if not is_whatsapp_configured():
        logger.warning(
            "WhatsApp not configured; message not sent",
            extra={"to": to, "preview": _safe_preview(body, 120)},
        )
        return False

    cfg = _cfg()
    sid = cfg["ACCOUNT_SID"].strip()
    token = cfg["AUTH_TOKEN"].strip()
    to_addr = _whatsapp_address(to)

    data = urlencode(
        {
            "From": _whatsapp_address(cfg.get("FROM") or ""),
            "To": to_addr,
            "Body": body,
        }
    ).encode("utf-8")

    basic = base64.b64encode(f"{sid}:{token}".encode("utf-8")).decode("ascii")

    req = Request(
        f"{TWILIO_BASE}/Accounts/{sid}/Messages.json",
        data=data,
        headers={
            "Authorization": f"Basic {basic}",
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        },
        method="POST",
    )

    logger.info("Sending WhatsApp message", extra={"to": to_addr})

    try:
        with urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8", errors="replace")
    except HTTPError as e:
        try:
            raw = e.read().decode("utf-8", errors="replace")
        except OSError:
            raw = ""
        err = _parse_error(raw)
        code = err.get("code")
        message = err.get("message") or _safe_preview(raw) or str(e)

        logger.error(
            "WhatsApp delivery failed",
            extra={"to": to_addr, "status": e.code, "twilio_code": code, "error": message},
        )
        hint = KNOWN_ERROR_HINTS.get(code)
        if hint:
            logger.error(hint, extra={"twilio_code": code})

        raise WhatsAppDeliveryError(message, code=code, status=e.code) from e
    except URLError as e:
        logger.error("WhatsApp provider unreachable", extra={"to": to_addr, "error": str(e)})
        raise WhatsAppDeliveryError(f"Twilio URLError: {e}") from e

    sid_out = _parse_error(raw).get("sid")
    logger.info("WhatsApp message accepted", extra={"to": to_addr, "message_sid": sid_out})
    return True


# ---------------- MESSAGES ----------------
def send_otp_whatsapp(phone: str, code: str) -> bool:
    ttl = int(getattr(settings, "OTP", {}).get("TTL_MINUTES", 10))
    body = (
        "🔐 *Coradis - Code de Vérification*\n\n"
        f"Votre code de vérification est : *{code}*\n\n"
        f"Ce code expire dans {ttl} minutes.\n\n"
        "Ne partagez ce code avec personne ! 🔒"
    )
    return send_whatsapp_message(phone, body)


def format_order_message(order) -> str:
    lines = [
        f"🧊 *Nouvelle commande {order.order_no}*",
        "",
        f"👤 {order.customer_name} ({order.customer_phone})",
        f"📍 {order.delivery_address} - {order.get_delivery_zone_display()}",
        f"📅 {order.delivery_date:%d/%m/%Y}",
    ]
    if order.is_urgent:
        lines.append("⚡ Livraison express")

    lines.append("")
    for item in order.items.all():
        label = f"{item.quantity} x {item.product_name}"
        if item.is_reward:
            label += " (cadeau)"
        lines.append(f"- {label}: {item.total_price} FCFA")

    lines.append("")
    lines.append(f"Livraison: {order.delivery_fee + order.express_fee} FCFA")
    lines.append(f"*Total: {order.total_amount} FCFA*")

    if order.notes:
        lines.append(f"📝 {order.notes}")

    return "\n".join(lines)


def notify_new_order(order) -> bool:
    """Send the order summary to the shop's WhatsApp number."""
    shop = (_cfg().get("SHOP_NUMBER") or "").strip()
    if not shop:
        logger.info("No shop WhatsApp number; order notification skipped", extra={"order_no": order.order_no})
        return False

    return send_whatsapp_message(shop, format_order_message(order))
