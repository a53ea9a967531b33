import logging
import uuid
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from armoire.designs.interfaces.repositories import AbstractDesignRepository
from armoire.designs.models import Design, DesignCategory

logger = logging.getLogger(__name__)


class SQLAlchemyDesignRepository(AbstractDesignRepository):
    """Implémentation SQLAlchemy du repository du catalogue."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_active_categories(self) -> List[Tuple[DesignCategory, int]]:
        query = (
            select(DesignCategory, func.count(Design.id))
            .outerjoin(Design, and_(Design.category_id == DesignCategory.id, Design.is_active == True))  # noqa: E712
            .where(DesignCategory.is_active == True)  # noqa: E712
            .group_by(DesignCategory.id)
            .order_by(DesignCategory.display_order.asc(), DesignCategory.name.asc())
        )
        result = await self.session.execute(query)
        return [(category, count) for category, count in result.all()]

    async def get_category_by_slug(self, slug: str) -> Optional[DesignCategory]:
        query = select(DesignCategory).where(DesignCategory.slug == slug, DesignCategory.is_active == True)  # noqa: E712
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_category_by_id(self, category_id: uuid.UUID) -> Optional[DesignCategory]:
        query = select(DesignCategory).where(DesignCategory.id == category_id, DesignCategory.is_active == True)  # noqa: E712
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def count_active_designs(self, category_id: uuid.UUID) -> int:
        query = select(func.count()).select_from(Design).where(
            Design.category_id == category_id, Design.is_active == True  # noqa: E712
        )
        return await self.session.scalar(query) or 0

    async def get_design_with_category(self, design_id: uuid.UUID) -> Optional[Tuple[Design, DesignCategory]]:
        query = (
            select(Design, DesignCategory)
            .join(DesignCategory, Design.category_id == DesignCategory.id)
            .where(Design.id == design_id, Design.is_active == True)  # noqa: E712
        )
        result = await self.session.execute(query)
        row = result.first()
        return (row[0], row[1]) if row else None

    async def find_designs(
        self,
        conditions: Sequence[Any],
        order_by: Sequence[Any],
        offset: int,
        limit: int,
    ) -> Tuple[List[Design], int]:
        base = select(Design).where(Design.is_active == True, *conditions)  # noqa: E712

        total = await self.session.scalar(select(func.count()).select_from(base.subquery())) or 0
        result = await self.session.execute(base.order_by(*order_by).offset(offset).limit(limit))
        designs = list(result.scalars().all())
        logger.debug(f"{len(designs)}/{total} design(s) retourné(s) (offset={offset}, limit={limit})")
        return designs, total
