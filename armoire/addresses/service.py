"""
Service applicatif des adresses.

Règle gérée ici: pour un utilisateur donné, au plus une adresse porte
`is_default=True`. Chaque opération d'écriture s'exécute dans une seule
transaction, après verrouillage de la ligne du propriétaire.
"""
import logging
import uuid
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from armoire.addresses.exceptions import AddressNotFoundException, AddressOwnerNotFoundException
from armoire.addresses.interfaces.repositories import AbstractAddressRepository
from armoire.addresses.models import Address, AddressCreate, AddressRead, AddressUpdate
from armoire.users.service import UserService

logger = logging.getLogger(__name__)


class AddressService:
    """Service applicatif pour la gestion des adresses."""

    def __init__(self, repository: AbstractAddressRepository, user_service: UserService, db: AsyncSession):
        self.repository = repository
        self.user_service = user_service
        self.db = db

    async def list_addresses(self, user_id: uuid.UUID) -> List[AddressRead]:
        """Liste les adresses d'un utilisateur (vide si l'utilisateur n'existe pas)."""
        logger.debug(f"[AddressService] Liste des adresses pour l'utilisateur {user_id}")
        addresses = await self.repository.list_by_user_id(user_id)
        return [AddressRead.model_validate(a) for a in addresses]

    async def add_address(self, user_id: uuid.UUID, address_data: AddressCreate) -> AddressRead:
        """
        Ajoute une adresse à un utilisateur.

        Args:
            user_id: Identifiant du propriétaire
            address_data: Données de la nouvelle adresse

        Returns:
            AddressRead: L'adresse créée

        Raises:
            AddressOwnerNotFoundException: Si l'utilisateur n'existe pas
        """
        logger.info(f"[AddressService] Ajout d'une adresse pour l'utilisateur {user_id}")
        try:
            if not await self.user_service.lock_owner(user_id):
                logger.warning(f"[AddressService] Utilisateur {user_id} introuvable")
                raise AddressOwnerNotFoundException(user_id)

            address = Address(user_id=user_id, **address_data.model_dump())
            if address.is_default:
                await self._claim_default(user_id, keep_id=None)
            await self.repository.add(address)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"[AddressService] Adresse {address.id} créée (défaut={address.is_default})")
        return AddressRead.model_validate(address)

    async def update_address(self, user_id: uuid.UUID, address_id: uuid.UUID, address_data: AddressUpdate) -> AddressRead:
        """
        Met à jour partiellement une adresse.

        Seuls les champs fournis sont appliqués. `is_default=True` retire le
        statut par défaut des autres adresses; `is_default=False` ne touche
        qu'à cette adresse.

        Raises:
            AddressNotFoundException: Si l'adresse n'existe pas ou appartient à un autre utilisateur
        """
        logger.info(f"[AddressService] Mise à jour de l'adresse {address_id} (utilisateur {user_id})")
        update_data = address_data.model_dump(exclude_none=True)
        make_default: Optional[bool] = update_data.pop("is_default", None)
        try:
            await self.user_service.lock_owner(user_id)
            address = await self._get_owned(user_id, address_id)

            for key, value in update_data.items():
                setattr(address, key, value)

            if make_default is True:
                await self._claim_default(user_id, keep_id=address.id)
                address.is_default = True
            elif make_default is False:
                address.is_default = False

            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return AddressRead.model_validate(address)

    async def delete_address(self, user_id: uuid.UUID, address_id: uuid.UUID) -> None:
        """
        Supprime une adresse.

        Aucune autre adresse n'est promue par défaut si l'adresse supprimée l'était.
        """
        logger.info(f"[AddressService] Suppression de l'adresse {address_id} (utilisateur {user_id})")
        try:
            address = await self._get_owned(user_id, address_id)
            await self.repository.delete(address)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

    async def _get_owned(self, user_id: uuid.UUID, address_id: uuid.UUID) -> Address:
        address = await self.repository.get_by_id_and_user_id(address_id, user_id)
        if not address:
            # Même erreur que l'adresse appartienne à un autre utilisateur ou n'existe pas.
            logger.warning(f"[AddressService] Adresse {address_id} introuvable pour l'utilisateur {user_id}")
            raise AddressNotFoundException(address_id)
        return address

    async def _claim_default(self, user_id: uuid.UUID, keep_id: Optional[uuid.UUID]) -> None:
        """Seul point du code qui retire le statut par défaut des adresses d'un utilisateur."""
        cleared = await self.repository.clear_defaults(user_id, keep_id=keep_id)
        if cleared:
            logger.debug(f"[AddressService] {cleared} ancienne(s) adresse(s) par défaut pour {user_id}")
