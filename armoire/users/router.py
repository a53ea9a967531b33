import logging
import uuid

from fastapi import APIRouter, HTTPException, Query, Response, status

from armoire.core.schemas import ApiResponse
from armoire.users.dependencies import UserServiceDep
from armoire.users.exceptions import InvalidTokenError, UserAlreadyExistsError, UserNotFoundError
from armoire.users.models import PasswordResetRequest, UserCreate, UserProfile, UserUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_user_service_errors(e: Exception):
    if isinstance(e, UserNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, UserAlreadyExistsError):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    elif isinstance(e, InvalidTokenError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[User API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne lors du traitement de l'utilisateur.")


@router.post("", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def create_user(user_in: UserCreate, service: UserServiceDep):
    """Crée un utilisateur et envoie l'email de vérification."""
    logger.info(f"API create_user: {user_in.email}")
    try:
        return await service.create_user(user_in)
    except Exception as e:
        handle_user_service_errors(e)


@router.post("/verify-email", response_model=ApiResponse)
async def verify_email(service: UserServiceDep, token: str = Query(..., min_length=1)):
    """Valide l'adresse email à partir du token reçu par email."""
    try:
        await service.verify_email(token)
    except Exception as e:
        handle_user_service_errors(e)
    return ApiResponse(success=True, message="Email vérifié avec succès.")


@router.post("/password-reset", response_model=ApiResponse, status_code=status.HTTP_202_ACCEPTED)
async def request_password_reset(request: PasswordResetRequest, service: UserServiceDep):
    """Demande un lien de réinitialisation. La réponse est identique que l'email existe ou non."""
    try:
        await service.request_password_reset(request.email)
    except Exception as e:
        handle_user_service_errors(e)
    return ApiResponse(
        success=True,
        message="Si un compte existe pour cet email, un lien de réinitialisation a été envoyé.",
    )


@router.get("/{user_id}", response_model=UserProfile)
async def get_user_profile(user_id: uuid.UUID, service: UserServiceDep):
    """Récupère le profil d'un utilisateur avec ses adresses."""
    try:
        return await service.get_user_profile(user_id)
    except Exception as e:
        handle_user_service_errors(e)


@router.patch("/{user_id}", response_model=UserProfile)
async def update_user_profile(user_id: uuid.UUID, user_in: UserUpdate, service: UserServiceDep):
    """Met à jour partiellement le profil."""
    logger.info(f"API update_profile: ID={user_id}")
    try:
        return await service.update_profile(user_id, user_in)
    except Exception as e:
        handle_user_service_errors(e)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: uuid.UUID, service: UserServiceDep):
    """Supprime un utilisateur et ses adresses."""
    logger.info(f"API delete_user: ID={user_id}")
    try:
        await service.delete_user(user_id)
    except Exception as e:
        handle_user_service_errors(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

user_router = router
