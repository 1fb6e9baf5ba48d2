"""Outbound email supporting SMTP and SendGrid.

Delivery is best effort: every failure is logged and reported as False,
never raised, so a mail outage cannot fail the request that queued it.
"""

import logging
import smtplib
from email.message import EmailMessage
from email.utils import parseaddr

import requests

from brikvest.config import (
    EMAIL_PROVIDER,
    MAIL_FROM,
    MAIL_TIMEOUT_SECONDS,
    SENDGRID_API_KEY,
    SMTP_HOST,
    SMTP_PASSWORD,
    SMTP_PORT,
    SMTP_USERNAME,
)

logger = logging.getLogger(__name__)

SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"


def get_email_provider() -> str:
    return EMAIL_PROVIDER


def send_email(to_email: str, subject: str, html_content: str) -> bool:
    """Send an email using the configured provider.

    Returns:
        bool: True if the provider accepted the message, False otherwise
    """
    provider = get_email_provider()

    if provider == "smtp":
        return _send_smtp(to_email, subject, html_content)
    elif provider == "sendgrid":
        return _send_sendgrid(to_email, subject, html_content)
    elif not provider:
        logger.info("[MAILER] Email disabled, not sending %r to %s", subject, to_email)
        return False
    else:
        logger.warning("[MAILER] Unknown email provider: %s", provider)
        return False


def _send_smtp(to_email: str, subject: str, html_content: str) -> bool:
    message = EmailMessage()
    message["From"] = MAIL_FROM
    message["To"] = to_email
    message["Subject"] = subject
    message.set_content("This message requires an HTML-capable mail client.")
    message.add_alternative(html_content, subtype="html")

    try:
        with smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=MAIL_TIMEOUT_SECONDS) as smtp:
            smtp.starttls()
            if SMTP_USERNAME:
                smtp.login(SMTP_USERNAME, SMTP_PASSWORD)
            smtp.send_message(message)
    except (smtplib.SMTPException, OSError) as e:
        logger.error("[MAILER] SMTP error sending to %s: %s", to_email, e)
        return False

    logger.info("[MAILER] SMTP email sent to %s", to_email)
    return True


def _send_sendgrid(to_email: str, subject: str, html_content: str) -> bool:
    if not SENDGRID_API_KEY:
        logger.error("[MAILER] SENDGRID_API_KEY not set, email not sent")
        return False

    from_name, from_addr = parseaddr(MAIL_FROM)
    sender = {"email": from_addr}
    if from_name:
        sender["name"] = from_name

    payload = {
        "personalizations": [{"to": [{"email": to_email}]}],
        "from": sender,
        "subject": subject,
        "content": [{"type": "text/html", "value": html_content}],
    }

    try:
        response = requests.post(
            SENDGRID_URL,
            headers={
                "Authorization": f"Bearer {SENDGRID_API_KEY}",
                "Content-Type": "application/json",
            },
            json=payload,
            timeout=MAIL_TIMEOUT_SECONDS,
        )
    except requests.RequestException as e:
        logger.error("[MAILER] SendGrid error sending to %s: %s", to_email, e)
        return False

    logger.info("[MAILER] SendGrid email to %s, status: %s", to_email, response.status_code)
    return response.status_code in (200, 201, 202)
