"""
Module contenant la logique métier (services) pour les utilisateurs.

Utilise FastCRUD pour les lectures simples et des requêtes SQLAlchemy
explicites pour les écritures transactionnelles.
"""
import logging
import secrets
import uuid
from datetime import timedelta
from typing import Optional

from fastapi import BackgroundTasks
from fastcrud import FastCRUD
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from armoire.addresses.models import Address, AddressRead
from armoire.addresses.repositories import SQLAlchemyAddressRepository
from armoire.config import settings
from armoire.core.utils import as_utc, utcnow
from armoire.email.services import EmailService
from armoire.users.exceptions import InvalidTokenError, UserAlreadyExistsError, UserNotFoundError
from armoire.users.models import User, UserCreate, UserProfile, UserUpdate

logger = logging.getLogger(__name__)


def user_for_update_query(user_id: uuid.UUID):
    """Requête qui verrouille la ligne utilisateur jusqu'à la fin de la transaction."""
    return select(User).where(User.id == user_id).with_for_update()


def _new_token() -> str:
    return secrets.token_urlsafe(32)


class UserService:
    """Service pour gérer les opérations sur les utilisateurs."""

    def __init__(
        self,
        user_crud: FastCRUD,
        db: AsyncSession,
        email_service: Optional[EmailService] = None,
        background_tasks: Optional[BackgroundTasks] = None,
    ):
        self.user_crud = user_crud
        self.db = db
        self.email_service = email_service
        # Avec une file de tâches, les emails partent après l'envoi de la réponse HTTP
        self.background_tasks = background_tasks

    async def lock_owner(self, user_id: uuid.UUID) -> bool:
        """
        Verrouille la ligne de l'utilisateur (SELECT ... FOR UPDATE).

        Sérialise les écritures concurrentes portant sur les adresses d'un même
        propriétaire. Le verrou est relâché au commit ou au rollback de la session.

        Returns:
            bool: True si l'utilisateur existe.
        """
        result = await self.db.execute(user_for_update_query(user_id))
        return result.scalar_one_or_none() is not None

    async def create_user(self, user_data: UserCreate) -> UserProfile:
        """Crée un utilisateur et lui envoie l'email de vérification."""
        logger.debug(f"[UserService] Tentative de création utilisateur: {user_data.email}")

        if await self.user_crud.exists(db=self.db, email=user_data.email):
            logger.warning(f"[UserService] Email déjà existant: {user_data.email}")
            raise UserAlreadyExistsError(user_data.email)

        user = User(
            email=user_data.email,
            user_name=user_data.user_name,
            phone=user_data.phone,
        )
        self._issue_verification_token(user)
        try:
            self.db.add(user)
            await self.db.commit()
            await self.db.refresh(user)
        except Exception as e:
            logger.error(f"[UserService] Erreur création utilisateur {user_data.email}: {e}", exc_info=True)
            await self.db.rollback()
            raise
        logger.info(f"[UserService] Utilisateur créé avec ID: {user.id}")

        await self._send_verification(user)
        return UserProfile.model_validate({**user.model_dump(), "addresses": []})

    async def get_user_profile(self, user_id: uuid.UUID) -> UserProfile:
        """Récupère le profil d'un utilisateur avec ses adresses."""
        logger.debug(f"[UserService] Récupération profil ID: {user_id}")

        user = await self.user_crud.get(db=self.db, id=user_id)
        if not user:
            logger.warning(f"[UserService] Utilisateur ID {user_id} non trouvé.")
            raise UserNotFoundError(user_id)

        addresses = await SQLAlchemyAddressRepository(self.db).list_by_user_id(user_id)
        return UserProfile.model_validate({
            **user,
            "addresses": [AddressRead.model_validate(a) for a in addresses],
        })

    async def update_profile(self, user_id: uuid.UUID, user_data: UserUpdate) -> UserProfile:
        """
        Met à jour partiellement le profil.

        Un changement d'email remet `email_verified` à False et déclenche un
        nouvel email de vérification.

        Raises:
            UserNotFoundError: si l'utilisateur n'existe pas.
            UserAlreadyExistsError: si le nouvel email est déjà utilisé.
        """
        logger.info(f"[UserService] Mise à jour profil ID: {user_id}")
        user = await self.db.get(User, user_id)
        if not user:
            raise UserNotFoundError(user_id)

        update_data = user_data.model_dump(exclude_none=True)
        new_email = update_data.pop("email", None)
        email_changed = new_email is not None and new_email != user.email
        if email_changed and await self.user_crud.exists(db=self.db, email=new_email):
            logger.warning(f"[UserService] Email déjà existant: {new_email}")
            raise UserAlreadyExistsError(new_email)

        try:
            for key, value in update_data.items():
                setattr(user, key, value)
            if email_changed:
                user.email = new_email
                user.email_verified = False
                self._issue_verification_token(user)
            user.updated_at = utcnow()
            await self.db.commit()
        except Exception as e:
            logger.error(f"[UserService] Erreur mise à jour profil {user_id}: {e}", exc_info=True)
            await self.db.rollback()
            raise

        if email_changed:
            await self._send_verification(user)
        return await self.get_user_profile(user_id)

    async def delete_user(self, user_id: uuid.UUID) -> None:
        """Supprime un utilisateur et toutes ses adresses."""
        logger.info(f"[UserService] Suppression utilisateur ID: {user_id}")
        if not await self.user_crud.exists(db=self.db, id=user_id):
            raise UserNotFoundError(user_id)

        try:
            await self.db.execute(delete(Address).where(Address.user_id == user_id))
            await self.user_crud.delete(db=self.db, id=user_id, commit=False)
            await self.db.commit()
        except Exception as e:
            logger.error(f"[UserService] Erreur suppression utilisateur {user_id}: {e}", exc_info=True)
            await self.db.rollback()
            raise
        logger.info(f"[UserService] Utilisateur ID {user_id} supprimé avec ses adresses.")

    async def verify_email(self, token: str) -> None:
        """Valide l'email associé au token de vérification."""
        result = await self.db.execute(select(User).where(User.verification_token == token))
        user = result.scalar_one_or_none()
        if not user:
            logger.warning("[UserService] Token de vérification inconnu.")
            raise InvalidTokenError()
        if user.verification_token_expiry is None or as_utc(user.verification_token_expiry) < utcnow():
            logger.warning(f"[UserService] Token de vérification expiré pour {user.email}")
            raise InvalidTokenError("Le token de vérification a expiré")

        user.email_verified = True
        user.verification_token = None
        user.verification_token_expiry = None
        user.updated_at = utcnow()
        await self.db.commit()
        logger.info(f"[UserService] Email vérifié pour l'utilisateur {user.id}")

    async def request_password_reset(self, email: str) -> None:
        """
        Génère un token de réinitialisation et envoie l'email correspondant.

        Un email inconnu est ignoré sans erreur pour ne pas révéler les comptes existants.
        """
        result = await self.db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if not user:
            logger.info(f"[UserService] Réinitialisation demandée pour un email inconnu: {email}")
            return

        user.password_reset_token = _new_token()
        user.password_reset_token_expiry = utcnow() + timedelta(hours=settings.PASSWORD_RESET_TOKEN_HOURS)
        user.updated_at = utcnow()
        await self.db.commit()

        if self.email_service:
            await self._dispatch(
                self.email_service.send_password_reset_email,
                recipient_email=user.email,
                user_name=user.user_name,
                token=user.password_reset_token,
            )

    def _issue_verification_token(self, user: User) -> None:
        user.verification_token = _new_token()
        user.verification_token_expiry = utcnow() + timedelta(hours=settings.VERIFICATION_TOKEN_HOURS)

    async def _send_verification(self, user: User) -> None:
        if not self.email_service:
            return
        await self._dispatch(
            self.email_service.send_verification_email,
            recipient_email=user.email,
            user_name=user.user_name,
            token=user.verification_token,
        )

    async def _dispatch(self, send, **kwargs) -> None:
        if self.background_tasks is not None:
            logger.debug("[UserService] Envoi d'email planifié en tâche de fond.")
            self.background_tasks.add_task(send, **kwargs)
            return
        await send(**kwargs)
