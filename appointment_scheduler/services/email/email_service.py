# ===== appointment_scheduler/services/email/email_service.py =====
import smtplib
from datetime import datetime
from html import escape
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional
import logging

from appointment_scheduler.config.settings import Settings, get_settings
from appointment_scheduler.utils.timeutils import ensure_utc

logger = logging.getLogger(__name__)


class EmailService:
    """Sends emails via SMTP. Used as the reminder notifier."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _get_smtp_connection(self):
        """Create and return SMTP connection"""
        try:
            if self.settings.EMAIL_USE_TLS:
                server = smtplib.SMTP(self.settings.EMAIL_HOST, self.settings.EMAIL_PORT)
                server.starttls()
            else:
                server = smtplib.SMTP_SSL(self.settings.EMAIL_HOST, self.settings.EMAIL_PORT)

            if self.settings.EMAIL_USERNAME and self.settings.EMAIL_PASSWORD:
                server.login(self.settings.EMAIL_USERNAME, self.settings.EMAIL_PASSWORD)

            return server
        except Exception as e:
            logger.error(f"Failed to connect to SMTP server: {e}")
            raise

    def send(self, recipient: str, subject: str, body: str, html_content: Optional[str] = None) -> bool:
        """
        Send an email using SMTP

        Args:
            recipient: Recipient email address
            subject: Email subject
            body: Plain text content
            html_content: Optional HTML alternative

        Returns:
            bool: True if the message was handed to the SMTP server
        """
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{self.settings.EMAIL_FROM_NAME} <{self.settings.EMAIL_FROM_ADDRESS}>"
        msg['To'] = recipient

        msg.attach(MIMEText(body, 'plain'))
        if html_content:
            msg.attach(MIMEText(html_content, 'html'))

        server = self._get_smtp_connection()
        try:
            server.sendmail(self.settings.EMAIL_FROM_ADDRESS, [recipient], msg.as_string())
        finally:
            server.quit()

        logger.info(f"Email sent successfully to {recipient}")
        return True


def build_reminder_message(customer_name: Optional[str], start_time: datetime,
                           business_name: str) -> tuple:
    """Return (subject, plain-text body, HTML body) for an upcoming-appointment reminder"""
    start_time = ensure_utc(start_time)
    display_name = customer_name or "there"
    when = start_time.strftime("%A, %B %d, %Y at %H:%M UTC")

    subject = f"Reminder: your appointment with {business_name}"
    body = (
        f"Hi {display_name},\n\n"
        f"This is a friendly reminder of your appointment with {business_name} on {when}.\n\n"
        f"If you can no longer make it, please cancel from your account so the slot can be offered to someone else.\n\n"
        f"See you soon,\n"
        f"{business_name}\n"
    )

    safe_name = escape(display_name)
    safe_business = escape(business_name)
    html_content = f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="UTF-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background-color: #4a6cf7; padding: 24px; text-align: center; border-radius: 10px 10px 0 0;">
            <h1 style="color: white; margin: 0; font-size: 24px;">Appointment Reminder</h1>
        </div>

        <div style="background-color: #ffffff; padding: 30px; border: 1px solid #e0e0e0; border-top: none; border-radius: 0 0 10px 10px;">
            <h2 style="color: #333; margin-top: 0;">Hi {safe_name},</h2>

            <p style="font-size: 16px; color: #555;">
                This is a friendly reminder of your appointment with {safe_business}.
            </p>

            <p style="font-size: 18px; font-weight: bold; text-align: center; margin: 24px 0;">
                {when}
            </p>

            <p style="font-size: 14px; color: #777;">
                If you can no longer make it, please cancel from your account so the slot can be offered to someone else.
            </p>
        </div>

        <div style="text-align: center; padding: 20px; font-size: 12px; color: #999;">
            <p>{safe_business}</p>
        </div>
    </body>
    </html>
    """
    return subject, body, html_content
