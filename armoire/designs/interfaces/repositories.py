import uuid
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple

from armoire.designs.models import Design, DesignCategory


class AbstractDesignRepository(ABC):
    """Interface pour le repository du catalogue de designs."""

    @abstractmethod
    async def list_active_categories(self) -> List[Tuple[DesignCategory, int]]:
        """Catégories actives triées par display_order, avec leur nombre de designs actifs."""
        pass

    @abstractmethod
    async def get_category_by_slug(self, slug: str) -> Optional[DesignCategory]:
        pass

    @abstractmethod
    async def get_category_by_id(self, category_id: uuid.UUID) -> Optional[DesignCategory]:
        pass

    @abstractmethod
    async def count_active_designs(self, category_id: uuid.UUID) -> int:
        pass

    @abstractmethod
    async def get_design_with_category(self, design_id: uuid.UUID) -> Optional[Tuple[Design, DesignCategory]]:
        pass

    @abstractmethod
    async def find_designs(
        self,
        conditions: Sequence[Any],
        order_by: Sequence[Any],
        offset: int,
        limit: int,
    ) -> Tuple[List[Design], int]:
        """Designs actifs satisfaisant `conditions`, paginés, avec le total."""
        pass
