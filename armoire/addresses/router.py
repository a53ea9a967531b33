import logging
import uuid
from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from armoire.addresses.dependencies import AddressServiceDep
from armoire.addresses.exceptions import AddressNotFoundException, AddressOwnerNotFoundException
from armoire.addresses.models import AddressCreate, AddressRead, AddressUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


def handle_address_service_errors(e: Exception):
    if isinstance(e, (AddressNotFoundException, AddressOwnerNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    logger.error(f"[Address API] Unexpected error: {e}", exc_info=True)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne lors du traitement de l'adresse.")


@router.get("", response_model=List[AddressRead])
async def list_user_addresses(user_id: uuid.UUID, service: AddressServiceDep):
    """Liste les adresses d'un utilisateur."""
    return await service.list_addresses(user_id)


@router.post("", response_model=AddressRead, status_code=status.HTTP_201_CREATED)
async def add_user_address(user_id: uuid.UUID, address: AddressCreate, service: AddressServiceDep):
    """Ajoute une adresse. `isDefault=true` retire le statut par défaut des autres adresses."""
    logger.info(f"API add_address: user={user_id}, default={address.is_default}")
    try:
        return await service.add_address(user_id, address)
    except Exception as e:
        handle_address_service_errors(e)


@router.patch("/{address_id}", response_model=AddressRead)
async def update_user_address(
    user_id: uuid.UUID,
    address_id: uuid.UUID,
    address: AddressUpdate,
    service: AddressServiceDep,
):
    """Met à jour partiellement une adresse de l'utilisateur."""
    logger.info(f"API update_address: user={user_id}, address={address_id}")
    try:
        return await service.update_address(user_id, address_id, address)
    except Exception as e:
        handle_address_service_errors(e)


@router.delete("/{address_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user_address(user_id: uuid.UUID, address_id: uuid.UUID, service: AddressServiceDep):
    """Supprime une adresse de l'utilisateur."""
    logger.info(f"API delete_address: user={user_id}, address={address_id}")
    try:
        await service.delete_address(user_id, address_id)
    except Exception as e:
        handle_address_service_errors(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
