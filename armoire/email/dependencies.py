from typing import Annotated

from fastapi import Depends

from armoire.email.sender import AbstractEmailSender
from armoire.email.services import EmailService
from armoire.email.smtp_sender import SmtpEmailSender


def get_email_sender() -> AbstractEmailSender:
    """
    Fournit l'implémentation concrète de l'Email Sender.

    SmtpEmailSender lève EmailConfigurationException si la configuration manque.
    """
    return SmtpEmailSender()

EmailSenderDep = Annotated[AbstractEmailSender, Depends(get_email_sender)]


def get_email_service(email_sender: EmailSenderDep) -> EmailService:
    return EmailService(email_sender=email_sender)

EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
