"""
Email Manager Service for centralized email sending.

This module is the email gateway of the identity flows: it renders the OTP
and password reset templates and hands them to BrevoService. Every send is
bounded by ``EMAIL_SEND_TIMEOUT_SECONDS`` and reports failure as ``False``
rather than raising, so callers treat delivery problems as a recoverable
business failure.

Example usage:
    # Initialize the service
    EmailManagerService.init()

    # Send OTP email
    await EmailManagerService.send_otp_email(
        email="user@example.com",
        otp_code="123456",
        verification_url="http://localhost:8000/user/verify?email=...&otp=123456",
        user_name="alice123456",
    )
"""

import asyncio
from datetime import datetime
from typing import Any

from app.core.config import email_manager_logger, settings
from app.core.services.base import SingletonService
from app.core.services.brevo import BrevoService, Contact, ListContact
from app.core.services.template import Renderer


__all__ = ["EmailManagerService"]


class EmailManagerService(SingletonService):
    """
    Centralized email management service.

    This class renders Jinja2 templates and delivers them with BrevoService.
    It follows the singleton pattern with class methods.

    Attributes:
        _timeout: Upper bound in seconds for one rendered-and-sent email.

    Example:
        >>> EmailManagerService.init()
        >>> await EmailManagerService.send_password_reset_email(
        ...     email="user@example.com",
        ...     reset_code="123456",
        ... )
        True
    """

    _timeout: float = settings.EMAIL_SEND_TIMEOUT_SECONDS

    @classmethod
    def init(cls, timeout: float | None = None) -> None:
        """
        Initialize the EmailManagerService.

        Should be called during application startup after BrevoService and
        Renderer are initialized.

        Args:
            timeout: Optional override of the per-email timeout in seconds.
        """
        if timeout is not None:
            cls._timeout = timeout
        cls._initialized = True
        email_manager_logger.info("EmailManagerService initialized")

    @classmethod
    async def _render_and_send(
        cls,
        email: str,
        subject: str,
        html_template: str,
        context: dict[str, Any],
        text_template: str | None,
        recipient_name: str | None,
    ) -> None:
        html_content = await Renderer.render_template(html_template, context=context)

        text_content = None
        if text_template:
            text_content = await Renderer.render_template(
                text_template, context=context
            )

        await BrevoService.send_transactional_email(
            to=ListContact(to=[Contact(email=email, name=recipient_name)]),
            subject=subject,
            htmlContent=html_content,
            textContent=text_content,
        )

    @classmethod
    async def send_email(
        cls,
        email: str,
        subject: str,
        html_template: str,
        context: dict[str, Any],
        text_template: str | None = None,
        recipient_name: str | None = None,
    ) -> bool:
        """
        Send an email using a template.

        Renders the provided templates with the given context and sends the
        email via BrevoService within the configured timeout.

        Args:
            email: Recipient email address.
            subject: Email subject line.
            html_template: Name of the HTML template file.
            context: Dictionary of context variables for template rendering.
            text_template: Optional name of the plain text template file.
            recipient_name: Optional recipient name for personalization.

        Returns:
            bool: True if email was sent successfully, False otherwise.
        """
        try:
            await asyncio.wait_for(
                cls._render_and_send(
                    email=email,
                    subject=subject,
                    html_template=html_template,
                    context=context,
                    text_template=text_template,
                    recipient_name=recipient_name,
                ),
                timeout=cls._timeout,
            )
        except asyncio.TimeoutError:
            email_manager_logger.error(
                f"Timed out sending email after {cls._timeout}s: "
                f"subject='{subject}', to='{email}'"
            )
            return False
        except Exception as e:
            email_manager_logger.error(
                f"Failed to send email: subject='{subject}', to='{email}', error={e}"
            )
            return False

        email_manager_logger.info(
            f"Email sent successfully: subject='{subject}', to='{email}'"
        )
        return True

    @classmethod
    async def send_otp_email(
        cls,
        email: str,
        otp_code: str,
        verification_url: str,
        user_name: str | None = None,
    ) -> bool:
        """
        Send a registration OTP email.

        Args:
            email: Recipient email address.
            otp_code: The OTP code to include in the email.
            verification_url: Link that verifies the code in one click.
            user_name: Optional recipient name for personalization.

        Returns:
            bool: True if email was sent successfully, False otherwise.
        """
        display_name = user_name or "User"

        context = {
            "app_name": settings.APP_NAME,
            "user_name": display_name,
            "otp_code": otp_code,
            "verification_url": verification_url,
            "expiry_minutes": settings.OTP_EXPIRY_MINUTES,
            "year": datetime.now().year,
        }

        return await cls.send_email(
            email=email,
            subject=f"Verify Your Email - {settings.APP_NAME}",
            html_template="otp_email.html",
            text_template="otp_email.txt",
            context=context,
            recipient_name=display_name,
        )

    @classmethod
    async def send_password_reset_email(
        cls,
        email: str,
        reset_code: str,
        user_name: str | None = None,
    ) -> bool:
        """
        Send a password reset code.

        Args:
            email: Recipient email address.
            reset_code: The single-use reset code.
            user_name: Optional recipient name for personalization.

        Returns:
            bool: True if email was sent successfully, False otherwise.
        """
        display_name = user_name or "User"

        context = {
            "app_name": settings.APP_NAME,
            "user_name": display_name,
            "reset_code": reset_code,
            "expiry_minutes": settings.PASSWORD_RESET_EXPIRY_MINUTES,
            "year": datetime.now().year,
        }

        return await cls.send_email(
            email=email,
            subject=f"Password Reset - {settings.APP_NAME}",
            html_template="password_reset_email.html",
            text_template="password_reset_email.txt",
            context=context,
            recipient_name=display_name,
        )
