# notifications/tests/test_whatsapp.py

import io
import json
from unittest import mock
from urllib.error import HTTPError
from urllib.parse import parse_qs

from django.test import SimpleTestCase, override_settings

from notifications.services import whatsapp
from notifications.services.whatsapp import (
    WhatsAppDeliveryError,
    is_whatsapp_configured,
    send_otp_whatsapp,
    send_whatsapp_message,
)

CONFIGURED = {
    "ACCOUNT_SID": "AC123",
    "AUTH_TOKEN": "tok",
    "FROM": "whatsapp:+14155238886",
    "SHOP_NUMBER": "+2250700000000",
}


class _FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


def _http_error(status, payload):
    return HTTPError(
        url="https://api.twilio.com",
        code=status,
        msg="error",
        hdrs=None,
        fp=io.BytesIO(json.dumps(payload).encode("utf-8")),
    )


class WhatsAppNotConfiguredTests(SimpleTestCase):
    @override_settings(WHATSAPP={"ACCOUNT_SID": "", "AUTH_TOKEN": "", "FROM": "", "SHOP_NUMBER": ""})
    def test_not_configured_returns_false_without_http(self):
        with mock.patch.object(whatsapp, "urlopen") as urlopen:
            with self.assertLogs("notifications.services.whatsapp", level="WARNING"):
                self.assertFalse(send_whatsapp_message("+2250707070707", "Bonjour"))

        self.assertFalse(is_whatsapp_configured())
        urlopen.assert_not_called()


@override_settings(WHATSAPP=CONFIGURED)
class WhatsAppSendTests(SimpleTestCase):
    def test_posts_form_encoded_message_with_basic_auth(self):
        with mock.patch.object(whatsapp, "urlopen", return_value=_FakeResponse(b'{"sid": "SM1"}')) as urlopen:
            self.assertTrue(send_whatsapp_message("+2250707070707", "Bonjour"))

        req = urlopen.call_args[0][0]
        self.assertEqual(req.full_url, "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json")
        self.assertEqual(req.get_method(), "POST")
        self.assertTrue(req.get_header("Authorization").startswith("Basic "))

        form = parse_qs(req.data.decode("utf-8"))
        self.assertEqual(form["To"], ["whatsapp:+2250707070707"])
        self.assertEqual(form["From"], ["whatsapp:+14155238886"])
        self.assertEqual(form["Body"], ["Bonjour"])

    def test_provider_error_is_logged_with_hint_and_raised(self):
        err = _http_error(400, {"code": 21408, "message": "Permission to send denied"})

        with mock.patch.object(whatsapp, "urlopen", side_effect=err):
            with self.assertLogs("notifications.services.whatsapp", level="ERROR") as logs:
                with self.assertRaises(WhatsAppDeliveryError) as ctx:
                    send_whatsapp_message("+2250707070707", "Bonjour")

        self.assertEqual(ctx.exception.code, 21408)
        self.assertEqual(ctx.exception.status, 400)
        self.assertTrue(any("Sandbox" in line for line in logs.output))

    def test_otp_message_contains_code(self):
        with mock.patch.object(whatsapp, "urlopen", return_value=_FakeResponse(b"{}")) as urlopen:
            send_otp_whatsapp("+2250707070707", "123456")

        body = parse_qs(urlopen.call_args[0][0].data.decode("utf-8"))["Body"][0]
        self.assertIn("*123456*", body)
        self.assertIn("Code de Vérification", body)
