import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from armoire.email.config import settings
from armoire.email.exceptions import EmailConfigurationException, EmailSendingException
from armoire.email.sender import AbstractEmailSender

logger = logging.getLogger(__name__)


class SmtpEmailSender(AbstractEmailSender):
    """Implémentation de l'envoi d'email via SMTP standard."""

    def __init__(self,
                 smtp_host: Optional[str] = None,
                 smtp_port: Optional[int] = None,
                 smtp_user: Optional[str] = None,
                 smtp_password: Optional[str] = None,
                 default_sender: Optional[str] = None,
                 use_tls: Optional[bool] = None):
        self.smtp_host = smtp_host or settings.SMTP_HOST
        self.smtp_port = smtp_port or settings.SMTP_PORT
        self.smtp_user = smtp_user or settings.SMTP_USER
        self.smtp_password = smtp_password or settings.SMTP_PASSWORD
        self.default_sender = default_sender or settings.SENDER_EMAIL
        self.use_tls = settings.USE_TLS if use_tls is None else use_tls

        if not all([self.smtp_host, self.smtp_port, self.default_sender]):
            logger.error("[SmtpEmailSender] Configuration SMTP incomplète.")
            raise EmailConfigurationException("Configuration SMTP (host, port, sender) incomplète.")
        if self.smtp_user and not self.smtp_password:
            raise EmailConfigurationException("SMTP_USER est défini sans SMTP_PASSWORD.")
        logger.info(f"[SmtpEmailSender] Initialisé pour {self.smtp_host}:{self.smtp_port}")

    def _build_message(self, sender: str, recipient_email: str, subject: str, html_content: str) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = f"{settings.DEFAULT_FROM_NAME} <{sender}>" if settings.DEFAULT_FROM_NAME else sender
        msg["To"] = recipient_email
        msg["Subject"] = subject
        msg.attach(MIMEText(html_content, "html", "utf-8"))
        return msg

    def _send_sync(self, sender: str, recipient_email: str, msg: MIMEMultipart) -> None:
        logger.debug(f"[SmtpEmailSender] Connexion à {self.smtp_host}:{self.smtp_port}")
        server = smtplib.SMTP(self.smtp_host, self.smtp_port)
        try:
            if self.use_tls:
                server.starttls()
            if self.smtp_user:
                server.login(self.smtp_user, self.smtp_password)
            server.sendmail(sender, [recipient_email], msg.as_string())
        finally:
            server.quit()

    async def send_email(
        self,
        recipient_email: str,
        subject: str,
        html_content: str,
        sender_email: Optional[str] = None,
    ) -> bool:
        final_sender = sender_email or self.default_sender
        msg = self._build_message(final_sender, recipient_email, subject, html_content)

        try:
            logger.info(f"[SmtpEmailSender] Envoi de l'email à {recipient_email} (Sujet: {subject})")
            await asyncio.to_thread(self._send_sync, final_sender, recipient_email, msg)
            logger.info(f"[SmtpEmailSender] Email envoyé avec succès à {recipient_email}")
            return True
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"[SmtpEmailSender] Échec authentification SMTP: {e}", exc_info=True)
            raise EmailSendingException("Échec authentification SMTP.", original_exception=e)
        except smtplib.SMTPRecipientsRefused as e:
            logger.error(f"[SmtpEmailSender] Destinataire refusé: {recipient_email}. Détails: {e.recipients}")
            return False
        except smtplib.SMTPException as e:
            logger.error(f"[SmtpEmailSender] Erreur SMTP lors de l'envoi à {recipient_email}: {e}", exc_info=True)
            raise EmailSendingException(f"Erreur SMTP: {e}", original_exception=e)
        except OSError as e:
            logger.error(f"[SmtpEmailSender] Serveur SMTP injoignable: {e}", exc_info=True)
            raise EmailSendingException(f"Serveur SMTP injoignable: {e}", original_exception=e)
