"""
brikvest/test_mailer.py

Tests for outbound email dispatch and templates. No network access: SMTP and
HTTP clients are mocked.

Run:
    pytest brikvest/test_mailer.py -v
"""

import smtplib
from unittest.mock import MagicMock, patch

import requests

from brikvest import email_templates, mailer


class TestProviderSwitch:
    def test_disabled_sends_nothing(self):
        with patch.object(mailer, "EMAIL_PROVIDER", ""), patch("brikvest.mailer.requests.post") as post:
            assert mailer.send_email("a@example.com", "Hi", "<p>Hi</p>") is False
        post.assert_not_called()

    def test_unknown_provider(self):
        with patch.object(mailer, "EMAIL_PROVIDER", "pigeon"):
            assert mailer.send_email("a@example.com", "Hi", "<p>Hi</p>") is False


class TestSendGrid:
    def test_success(self):
        response = MagicMock(status_code=202)
        with patch.object(mailer, "EMAIL_PROVIDER", "sendgrid"), \
                patch.object(mailer, "SENDGRID_API_KEY", "SG.test"), \
                patch("brikvest.mailer.requests.post", return_value=response) as post:
            assert mailer.send_email("a@example.com", "Hi", "<p>Hi</p>") is True

        payload = post.call_args.kwargs["json"]
        assert payload["personalizations"][0]["to"][0]["email"] == "a@example.com"
        assert payload["content"][0]["type"] == "text/html"
        assert post.call_args.kwargs["headers"]["Authorization"] == "Bearer SG.test"

    def test_missing_key(self):
        with patch.object(mailer, "EMAIL_PROVIDER", "sendgrid"), patch.object(mailer, "SENDGRID_API_KEY", ""):
            assert mailer.send_email("a@example.com", "Hi", "<p>Hi</p>") is False

    def test_http_error_is_swallowed(self):
        with patch.object(mailer, "EMAIL_PROVIDER", "sendgrid"), \
                patch.object(mailer, "SENDGRID_API_KEY", "SG.test"), \
                patch("brikvest.mailer.requests.post", side_effect=requests.ConnectionError("down")):
            assert mailer.send_email("a@example.com", "Hi", "<p>Hi</p>") is False

    def test_rejected_status(self):
        with patch.object(mailer, "EMAIL_PROVIDER", "sendgrid"), \
                patch.object(mailer, "SENDGRID_API_KEY", "SG.test"), \
                patch("brikvest.mailer.requests.post", return_value=MagicMock(status_code=401)):
            assert mailer.send_email("a@example.com", "Hi", "<p>Hi</p>") is False


class TestSmtp:
    def test_success(self):
        with patch.object(mailer, "EMAIL_PROVIDER", "smtp"), \
                patch.object(mailer, "SMTP_USERNAME", "info@brikvest.com"), \
                patch("brikvest.mailer.smtplib.SMTP") as smtp_cls:
            assert mailer.send_email("a@example.com", "Hi", "<p>Hi</p>") is True

        smtp = smtp_cls.return_value.__enter__.return_value
        smtp.starttls.assert_called_once()
        smtp.login.assert_called_once()
        sent = smtp.send_message.call_args.args[0]
        assert sent["To"] == "a@example.com"
        assert sent["Subject"] == "Hi"

    def test_failure_is_swallowed(self):
        with patch.object(mailer, "EMAIL_PROVIDER", "smtp"), \
                patch("brikvest.mailer.smtplib.SMTP", side_effect=smtplib.SMTPConnectError(421, "busy")):
            assert mailer.send_email("a@example.com", "Hi", "<p>Hi</p>") is False


class TestTemplates:
    def test_investment_confirmation(self):
        subject, html = email_templates.investment_confirmation("Ada Obi", "Eko Atlantic Towers", 5_000_000, "ADA2025")

        assert "Investment Confirmation" in subject
        assert "Hello Ada Obi" in html
        assert "₦5,000,000" in html
        assert "ADA2025" in html

    def test_investment_confirmation_without_referral(self):
        _, html = email_templates.investment_confirmation("Ada", "Lekki Gardens", 500_000)
        assert "Referral Code" not in html

    def test_names_are_escaped(self):
        _, html = email_templates.developer_bid_acknowledgement("<script>x</script>", "A & B Ltd")
        assert "<script>" not in html
        assert "A &amp; B Ltd" in html
