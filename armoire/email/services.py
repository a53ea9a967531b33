import logging
from pathlib import Path
from typing import Any, Dict

import jinja2

from armoire.email.config import settings
from armoire.email.exceptions import EmailSendingException
from armoire.email.sender import AbstractEmailSender

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=jinja2.select_autoescape(["html", "xml"]),
)

VERIFICATION_LINK_HOURS = 24
PASSWORD_RESET_LINK_HOURS = 1


class EmailService:
    """Service applicatif pour l'envoi des emails transactionnels."""

    def __init__(self, email_sender: AbstractEmailSender):
        self.email_sender = email_sender

    def _render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Charge et rend un template Jinja2."""
        template = env.get_template(template_name)
        return template.render(context)

    async def _send(self, recipient_email: str, subject: str, html_content: str, label: str) -> bool:
        try:
            success = await self.email_sender.send_email(
                recipient_email=recipient_email,
                subject=subject,
                html_content=html_content,
            )
            if success:
                logger.info(f"[EmailService] Email {label} envoyé à {recipient_email}")
            else:
                logger.warning(f"[EmailService] L'envoi de l'email {label} a échoué (retour sender: False) pour {recipient_email}")
            return success
        except EmailSendingException as e:
            logger.error(f"[EmailService] Erreur lors de l'envoi email {label} à {recipient_email}: {e}", exc_info=True)
            return False

    async def send_verification_email(self, recipient_email: str, user_name: str, token: str) -> bool:
        """Envoie le lien de vérification d'adresse email (valable 24h)."""
        link = f"{settings.FRONTEND_URL}/verify-email?token={token}"
        html_content = self._render_template("verification_email.html", {
            "user_name": user_name,
            "link": link,
            "hours": VERIFICATION_LINK_HOURS,
        })
        return await self._send(recipient_email, "Vérifiez votre adresse email - Armoire", html_content, "vérification")

    async def send_password_reset_email(self, recipient_email: str, user_name: str, token: str) -> bool:
        """Envoie le lien de réinitialisation du mot de passe (valable 1h)."""
        link = f"{settings.FRONTEND_URL}/reset-password?token={token}"
        html_content = self._render_template("password_reset_email.html", {
            "user_name": user_name,
            "link": link,
            "hours": PASSWORD_RESET_LINK_HOURS,
        })
        return await self._send(recipient_email, "Réinitialisation de votre mot de passe - Armoire", html_content, "réinitialisation")
