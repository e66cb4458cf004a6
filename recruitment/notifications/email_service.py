"""
Transactional email over SMTP.

When SMTP is not configured the message is logged instead of sent, which
keeps local development and tests free of a mail server. A configured
transport that fails raises ``EmailDeliveryError``; nothing is retried.
"""
import smtplib
from html import escape
from email.message import EmailMessage
from typing import Optional

from recruitment.core.config import settings
from recruitment.core.errors import EmailDeliveryError
from recruitment.core.logger_setup import setup_logger

logger = setup_logger(__name__)

PLATFORM_NAME = "Recruitment Platform"

_FOOTER = (
    '<hr style="border: none; border-top: 1px solid #DFE1E6; margin: 30px 0;">'
    '<p style="color: #5E6C84; font-size: 12px;">'
    f"{PLATFORM_NAME}<br>This is an automated email, please do not reply.</p>"
)


def _wrap(body_html: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f"{body_html}{_FOOTER}</div>"
    )


class EmailService:
    def __init__(self, settings=settings):
        self.settings = settings

    def send_email(self, to: str, subject: str, html: str, text: Optional[str] = None) -> None:
        if not self.settings.SMTP_CONFIGURED:
            logger.info(f"SMTP not configured; email to {to} not sent. Subject: {subject}")
            logger.debug(text or html)
            return

        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = f'"{PLATFORM_NAME}" <{self.settings.SMTP_FROM}>'
        msg["To"] = to
        msg.set_content(text or "This message requires an HTML capable email client.")
        msg.add_alternative(html, subtype="html")

        try:
            with smtplib.SMTP(self.settings.SMTP_HOST, self.settings.SMTP_PORT, timeout=10) as server:
                server.starttls()
                server.login(self.settings.SMTP_USER, self.settings.SMTP_PASSWORD)
                server.send_message(msg)
            logger.info(f"Email sent successfully to {to}")
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending email to {to}: {str(e)}")
            raise EmailDeliveryError("Failed to send email") from e

    def send_password_reset_email(self, email: str, reset_token: str, role: str) -> None:
        reset_url = f"{self.settings.FRONTEND_URL}/reset-password?token={reset_token}&role={role}"
        expires = self.settings.RESET_TOKEN_EXPIRES_MINUTES
        html = _wrap(
            '<h2 style="color: #0052CC;">Password Reset Request</h2>'
            "<p>Hello,</p>"
            "<p>You requested to reset your password. Use the link below to reset it:</p>"
            f'<p><a href="{reset_url}">Reset Password</a></p>'
            f'<p style="color: #5E6C84; word-break: break-all;">{reset_url}</p>'
            f"<p>This link will expire in {expires} minutes. "
            "If you didn't request this, please ignore this email.</p>"
        )
        text = (
            "Password Reset Request\n\n"
            f"You requested to reset your password. Use this link to reset it:\n{reset_url}\n\n"
            f"This link will expire in {expires} minutes. If you didn't request this, please ignore this email.\n"
        )
        self.send_email(email, "Reset Your Password", html, text)

    def send_welcome_email(self, email: str, name: str, role: str) -> None:
        approval_note = ""
        if role == "COMPANY" and self.settings.COMPANY_REQUIRES_APPROVAL:
            approval_note = (
                "<p><strong>Note:</strong> Your account is pending admin approval. "
                "You will receive an email once your account is activated.</p>"
            )
        html = _wrap(
            f'<h2 style="color: #0052CC;">Welcome to {PLATFORM_NAME}!</h2>'
            f"<p>Hello {escape(name)},</p>"
            f"<p>Thank you for registering as a {role.lower()}.</p>"
            f"{approval_note}"
            "<p>We're excited to have you on board!</p>"
        )
        self.send_email(email, f"Welcome to {PLATFORM_NAME}!", html)

    def send_company_activated_email(self, email: str, company_name: str) -> None:
        login_url = f"{self.settings.FRONTEND_URL}/login"
        html = _wrap(
            '<h2 style="color: #0052CC;">Your account is active</h2>'
            f"<p>Hello {escape(company_name)},</p>"
            "<p>An administrator has approved your company account. You can now sign in and post jobs.</p>"
            f'<p><a href="{login_url}">Sign in</a></p>'
        )
        self.send_email(email, "Your company account has been activated", html)

    def send_application_status_email(self, email: str, candidate_name: str, job_title: str, status: str) -> None:
        html = _wrap(
            '<h2 style="color: #0052CC;">Application update</h2>'
            f"<p>Hello {escape(candidate_name or 'there')},</p>"
            f"<p>The status of your application for <strong>{escape(job_title)}</strong> "
            f"is now <strong>{escape(status.lower())}</strong>.</p>"
        )
        self.send_email(email, f"Update on your application: {' '.join(job_title.split())}", html)


def get_email_service() -> EmailService:
    return EmailService(settings)
