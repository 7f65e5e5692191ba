# apps/core/mailer.py

import logging
import smtplib

from django.conf import settings
from django.core.mail import send_mail
from django.utils.html import format_html

from .exceptions import UpstreamError

logger = logging.getLogger(__name__)


class VerificationMailer:
    """Envia o email com o link de verificação da conta"""

    subject = 'Email Verification'

    def __init__(self, base_url: str = None, from_email: str = None):
        self._base_url = (base_url or settings.TASKPRO_BASE_URL).rstrip('/')
        self._from_email = from_email or settings.DEFAULT_FROM_EMAIL

    def verification_link(self, verification_token: str) -> str:
        return f"{self._base_url}/taskPro/verify/{verification_token}/"

    def send_verification(self, user) -> None:
        """
        Envia o link de verificação para o email do usuário

        Raises:
            UpstreamError: o servidor de email recusou ou não respondeu
        """
        link = self.verification_link(user.verification_token)

        message = f"""
Hello {user.name},

For account verification open the following link:
{link}

If you did not create a TaskPro account, ignore this email.
        """
        html_message = format_html(
            '<p>For account verification click on the following link '
            '<b><a href="{}">Click Here!</a></b></p>',
            link
        )

        try:
            send_mail(
                subject=self.subject,
                message=message,
                from_email=self._from_email,
                recipient_list=[user.email],
                html_message=html_message,
                fail_silently=False
            )
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Falha ao enviar email de verificação para %s: %s", user.email, e)
            raise UpstreamError('Could not send verification email') from e

        logger.info("Email de verificação enviado para %s", user.email)
