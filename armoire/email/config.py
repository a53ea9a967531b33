from typing import Optional

from pydantic_settings import BaseSettings


class EmailSettings(BaseSettings):
    """Configuration du module email.

    Les paramètres sont chargés depuis les variables d'environnement avec le préfixe EMAIL_.
    Sans SMTP_USER, la connexion se fait sans authentification (relais local).
    """
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SENDER_EMAIL: str = "no-reply@armoire.local"
    USE_TLS: bool = True
    DEFAULT_FROM_NAME: Optional[str] = "Armoire"
    FRONTEND_URL: str = "http://localhost:5173"

    class Config:
        env_prefix = "EMAIL_"
        env_file = ".env"
        extra = "ignore"

# Instance globale des paramètres
settings = EmailSettings()
