"""
Implémentation SQLAlchemy du repository d'adresses.
"""
import logging
import uuid
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from armoire.addresses.interfaces.repositories import AbstractAddressRepository
from armoire.addresses.models import Address

logger = logging.getLogger(__name__)


class SQLAlchemyAddressRepository(AbstractAddressRepository):
    """Implémentation SQLAlchemy du repository d'adresses."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_by_user_id(self, user_id: uuid.UUID) -> List[Address]:
        query = (
            select(Address)
            .where(Address.user_id == user_id)
            .order_by(Address.created_at.asc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_by_id_and_user_id(self, address_id: uuid.UUID, user_id: uuid.UUID) -> Optional[Address]:
        query = select(Address).where(Address.id == address_id, Address.user_id == user_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def add(self, address: Address) -> Address:
        self.session.add(address)
        await self.session.flush()
        return address

    async def clear_defaults(self, user_id: uuid.UUID, keep_id: Optional[uuid.UUID] = None) -> int:
        """
        UPDATE groupé: is_default=False pour toutes les adresses de l'utilisateur.

        Returns:
            int: nombre de lignes modifiées
        """
        stmt = (
            update(Address)
            .where(Address.user_id == user_id, Address.is_default == True)  # noqa: E712
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        if keep_id is not None:
            stmt = stmt.where(Address.id != keep_id)
        result = await self.session.execute(stmt)
        logger.debug(f"{result.rowcount} adresse(s) par défaut retirée(s) pour l'utilisateur {user_id}")
        return result.rowcount

    async def delete(self, address: Address) -> None:
        await self.session.delete(address)
        await self.session.flush()
