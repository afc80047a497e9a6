"""
Email Service using SMTP
Renders MJML templates and delivers them through the configured SMTP server
"""

import logging
import smtplib
import ssl
from datetime import datetime, timezone
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional, Union
from zoneinfo import ZoneInfo

from mjml import mjml_to_html

from .config import (
    DISPLAY_TIMEZONE,
    EMAIL_FROM_NAME,
    SMTP_HOST,
    SMTP_PASS,
    SMTP_PORT,
    SMTP_USE_TLS,
    SMTP_USER,
)
from .email_templates import reservation_confirmed_template
from .services.base import NotificationError
from .utils.sanitization import sanitize_string

logger = logging.getLogger(__name__)


def get_sender_address() -> str:
    return formataddr((EMAIL_FROM_NAME, SMTP_USER or ""))


def format_slot_time(start: datetime, tz_name: str = DISPLAY_TIMEZONE) -> str:
    """Render a naive-UTC slot start for humans, e.g. 'Monday, 01 January 2024 at 10:00 UTC'"""
    local = start.replace(tzinfo=timezone.utc).astimezone(ZoneInfo(tz_name))
    return local.strftime("%A, %d %B %Y at %H:%M %Z")


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
        # mjml_to_html returns a dict with 'html' and 'errors' keys
        if isinstance(result, dict):
            if result.get("errors"):
                logger.warning(f"MJML compilation warnings: {result['errors']}")
            return result.get("html", "")
        return str(result)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise NotificationError(f"Failed to compile MJML template: {str(e)}") from e


def send_via_smtp(
    to: Union[str, list[str]],
    subject: str,
    html_content: str,
    from_address: str,
) -> dict:
    """Send email via the configured SMTP server"""
    if not SMTP_HOST:
        raise NotificationError("Email service not configured - SMTP_HOST missing")

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = from_address
    msg["To"] = to if isinstance(to, str) else ", ".join(to)
    msg.attach(MIMEText(html_content, "html"))

    recipients = [to] if isinstance(to, str) else to

    try:
        if SMTP_PORT == 465:
            context = ssl.create_default_context()
            server = smtplib.SMTP_SSL(SMTP_HOST, SMTP_PORT, context=context, timeout=30)
        else:
            server = smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=30)
            if SMTP_USE_TLS:
                context = ssl.create_default_context()
                server.starttls(context=context)

        if SMTP_USER and SMTP_PASS:
            server.login(SMTP_USER, SMTP_PASS)
        server.sendmail(SMTP_USER or from_address, recipients, msg.as_string())
        server.quit()
    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"❌ SMTP send failed: {e}")
        raise NotificationError(f"SMTP failed: {str(e)}") from e

    logger.info(f"✅ SMTP email sent successfully via {SMTP_HOST}")
    return {"id": f"smtp-{datetime.utcnow().timestamp()}", "success": True}


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send an email rendered from an MJML template

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        from_address: Optional custom from address

    Returns:
        Send response dict
    """
    html_content = compile_mjml_to_html(mjml_content)
    sender = from_address or get_sender_address()

    logger.info(f"📧 Sending email via SMTP to: {to}")
    return send_via_smtp(to=to, subject=subject, html_content=html_content, from_address=sender)


async def send_reservation_confirmation(
    to: str,
    first_name: str,
    service_title: str,
    start: datetime,
    meeting_link: Optional[str],
) -> dict:
    """
    Send the payment/reservation confirmation to the customer.
    first_name is stored escaped at booking time; the service title is escaped here.
    """
    mjml_content = reservation_confirmed_template(
        first_name=first_name,
        service_title=sanitize_string(service_title),
        scheduled_at=format_slot_time(start),
        meeting_link=meeting_link,
    )
    return await send_email(
        to=to,
        subject=f'✅ Your reservation for "{service_title}" is confirmed',
        mjml_content=mjml_content,
    )


class SmtpNotifier:
    """Notifier that delivers confirmations by email"""

    async def send_reservation_confirmation(
        self,
        *,
        to: str,
        first_name: str,
        service_title: str,
        start: datetime,
        meeting_link: Optional[str],
    ) -> None:
        await send_reservation_confirmation(
            to=to,
            first_name=first_name,
            service_title=service_title,
            start=start,
            meeting_link=meeting_link,
        )
