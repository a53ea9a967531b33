import logging
from typing import Annotated

from fastapi import Depends

from armoire.addresses.repositories import SQLAlchemyAddressRepository
from armoire.addresses.service import AddressService
from armoire.users.dependencies import DbSessionDep, UserDirectoryDep

logger = logging.getLogger(__name__)


def get_address_service(db: DbSessionDep, user_service: UserDirectoryDep) -> AddressService:
    """
    Fournit une instance du service d'adresses.

    Le repository et UserService partagent la même session, ce qui permet au
    verrou sur l'utilisateur de couvrir les écritures d'adresses.
    """
    logger.debug("Fourniture de AddressService avec DB Session et UserService")
    return AddressService(
        repository=SQLAlchemyAddressRepository(db),
        user_service=user_service,
        db=db,
    )

# Alias pour l'injection simplifiée du service
AddressServiceDep = Annotated[AddressService, Depends(get_address_service)]
