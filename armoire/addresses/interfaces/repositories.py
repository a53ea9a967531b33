"""Interfaces pour les repositories d'adresses.

Aucune méthode ne commite: la transaction est démarquée par le service.
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from armoire.addresses.models import Address


class AbstractAddressRepository(ABC):
    """Interface pour le repository des adresses."""

    @abstractmethod
    async def list_by_user_id(self, user_id: uuid.UUID) -> List[Address]:
        """Liste les adresses d'un utilisateur dans l'ordre de création."""
        pass

    @abstractmethod
    async def get_by_id_and_user_id(self, address_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Address]:
        """Récupère une adresse uniquement si elle appartient à l'utilisateur."""
        pass

    @abstractmethod
    async def add(self, address: Address) -> Address:
        """Ajoute une adresse à la session et la flush."""
        pass

    @abstractmethod
    async def clear_defaults(self, user_id: uuid.UUID, keep_id: Optional[uuid.UUID] = None) -> int:
        """Retire le statut par défaut de toutes les adresses de l'utilisateur, sauf `keep_id`."""
        pass

    @abstractmethod
    async def delete(self, address: Address) -> None:
        """Supprime une adresse."""
        pass
