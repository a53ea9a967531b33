"""
Dépendances FastAPI pour le module utilisateur.

Fournit une instance de FastCRUD pour le modèle User, et le service
UserService injecté avec la session DB, le CRUD et le service email.
"""
import logging
from typing import Annotated

from fastapi import BackgroundTasks, Depends
from fastcrud import FastCRUD
from sqlalchemy.ext.asyncio import AsyncSession

from armoire.database import get_db_session
from armoire.email.dependencies import EmailServiceDep
from armoire.users.models import User
from armoire.users.service import UserService

logger = logging.getLogger(__name__)

# Type hint pour la dépendance de session DB
DbSessionDep = Annotated[AsyncSession, Depends(get_db_session)]


def get_user_crud() -> FastCRUD:
    """Fournit une instance de FastCRUD pour le modèle User."""
    return FastCRUD(User)

UserCrudDep = Annotated[FastCRUD, Depends(get_user_crud)]


def get_user_service(
    user_crud: UserCrudDep,
    db: DbSessionDep,
    email_service: EmailServiceDep,
    background_tasks: BackgroundTasks,
) -> UserService:
    """
    Fournit le service utilisateur complet (avec envoi d'emails).

    Args:
        user_crud: Instance de FastCRUD pour le modèle User
        db: Session de base de données asynchrone
        email_service: Service d'envoi des emails transactionnels
        background_tasks: Tâches de fond de la requête, qui portent l'envoi des emails

    Returns:
        UserService: Instance du service de gestion des utilisateurs
    """
    logger.debug("Fourniture de UserService")
    return UserService(
        user_crud=user_crud,
        db=db,
        email_service=email_service,
        background_tasks=background_tasks,
    )

UserServiceDep = Annotated[UserService, Depends(get_user_service)]


def get_user_directory(user_crud: UserCrudDep, db: DbSessionDep) -> UserService:
    """Fournit UserService sans service email, pour les autres modules (ex: adresses)."""
    return UserService(user_crud=user_crud, db=db)

UserDirectoryDep = Annotated[UserService, Depends(get_user_directory)]
