"""
Service applicatif du catalogue de designs.

Les lectures unitaires (catégories, catégorie par slug, design par id) passent
par le cache; les listes paginées interrogent toujours la base.
"""
import json
import logging
import uuid
from typing import Any, List, Optional, Sequence

from sqlalchemy import func, or_

from armoire.config import settings
from armoire.core.schemas import PagedResponse
from armoire.designs.cache import DesignCache, design_categories_key, design_category_key, design_key
from armoire.designs.exceptions import (
    DesignCategoryNotFoundException,
    DesignNotFoundException,
    InvalidSortFieldException,
)
from armoire.designs.interfaces.repositories import AbstractDesignRepository
from armoire.designs.models import (
    Design,
    DesignCategory,
    DesignCategoryRead,
    DesignCategorySummary,
    DesignFilter,
    DesignListItem,
    DesignRead,
)

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "createdAt": Design.created_at,
    "name": Design.name,
    "downloadCount": Design.download_count,
    "price": Design.price,
}


def parse_tags(tags: Optional[str]) -> List[str]:
    """Découpe "a, b,,c" en ["a", "b", "c"]."""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Neutralise les jokers LIKE (`%`, `_`) pour une recherche littérale."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def parse_product_types(raw: Optional[str]) -> Optional[List[str]]:
    """
    Décode la liste JSON des types de produits autorisés.

    Returns:
        None si aucune restriction (compatible avec tous les produits, valeur
        absente ou vide), [] si le JSON est invalide.
    """
    if raw is None or not raw.strip():
        return None
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning(f"[DesignService] allowed_product_types invalide: {raw!r}")
        return []
    if not isinstance(value, list):
        return []
    return [str(v) for v in value]


def _to_list_item(design: Design) -> DesignListItem:
    return DesignListItem(
        id=design.id,
        category_id=design.category_id,
        name=design.name,
        slug=design.slug,
        thumbnail_url=design.thumbnail_url,
        tags=parse_tags(design.tags),
        is_premium=design.is_premium,
        download_count=design.download_count,
        price=design.price,
        created_at=design.created_at,
    )


def _to_read(design: Design, category: DesignCategory) -> DesignRead:
    return DesignRead(
        **_to_list_item(design).model_dump(),
        description=design.description,
        design_image_url=design.design_image_url,
        allowed_product_types=parse_product_types(design.allowed_product_types),
        category=DesignCategorySummary.model_validate(category),
    )


def _to_category_read(category: DesignCategory, design_count: int) -> DesignCategoryRead:
    return DesignCategoryRead(
        id=category.id,
        name=category.name,
        slug=category.slug,
        description=category.description,
        display_order=category.display_order,
        design_count=design_count,
    )


class DesignService:
    """Service de consultation du catalogue."""

    def __init__(self, repository: AbstractDesignRepository, cache: DesignCache, max_page_size: int = 100):
        self.repository = repository
        self.cache = cache
        self.max_page_size = max_page_size

    # --- Catégories ---

    async def list_categories(self) -> List[DesignCategoryRead]:
        cached = await self.cache.get(design_categories_key())
        if cached is not None:
            logger.debug("[DesignService] Catégories servies depuis le cache")
            return [DesignCategoryRead.model_validate(c) for c in cached]

        rows = await self.repository.list_active_categories()
        categories = [_to_category_read(category, count) for category, count in rows]
        await self.cache.set(design_categories_key(), [c.model_dump(mode="json") for c in categories])
        return categories

    async def get_category_by_slug(self, slug: str) -> DesignCategoryRead:
        key = design_category_key(slug)
        cached = await self.cache.get(key)
        if cached is not None:
            return DesignCategoryRead.model_validate(cached)

        category = await self.repository.get_category_by_slug(slug)
        if not category:
            logger.warning(f"[DesignService] Catégorie '{slug}' introuvable")
            raise DesignCategoryNotFoundException(slug)
        result = _to_category_read(category, await self.repository.count_active_designs(category.id))
        await self.cache.set(key, result.model_dump(mode="json"))
        return result

    # --- Designs ---

    async def get_design_by_id(self, design_id: uuid.UUID) -> DesignRead:
        key = design_key(design_id)
        cached = await self.cache.get(key)
        if cached is not None:
            return DesignRead.model_validate(cached)

        row = await self.repository.get_design_with_category(design_id)
        if not row:
            logger.warning(f"[DesignService] Design {design_id} introuvable")
            raise DesignNotFoundException(design_id)
        result = _to_read(*row)
        await self.cache.set(key, result.model_dump(mode="json"))
        return result

    async def list_designs(self, page: int = 0, size: int = settings.DEFAULT_PAGE_SIZE, sort_by: str = "createdAt", sort_direction: str = "DESC") -> PagedResponse[DesignListItem]:
        return await self.filter_designs(DesignFilter(page=page, size=size, sort_by=sort_by, sort_direction=sort_direction))

    async def get_designs_by_category(self, category_id: uuid.UUID, page: int = 0, size: int = settings.DEFAULT_PAGE_SIZE) -> PagedResponse[DesignListItem]:
        category = await self.repository.get_category_by_id(category_id)
        if not category:
            raise DesignCategoryNotFoundException(category_id)
        return await self._page(
            conditions=[Design.category_id == category_id],
            order_by=[Design.created_at.desc(), Design.id],
            page=page,
            size=size,
        )

    async def get_designs_by_category_slug(self, slug: str, page: int = 0, size: int = settings.DEFAULT_PAGE_SIZE) -> PagedResponse[DesignListItem]:
        category = await self.repository.get_category_by_slug(slug)
        if not category:
            raise DesignCategoryNotFoundException(slug)
        return await self.get_designs_by_category(category.id, page=page, size=size)

    async def search_designs(self, term: str, page: int = 0, size: int = settings.DEFAULT_PAGE_SIZE) -> PagedResponse[DesignListItem]:
        """Recherche insensible à la casse dans le nom et les tags, par popularité."""
        logger.debug(f"[DesignService] Recherche: '{term}'")
        return await self._page(
            conditions=[self._search_condition(term)],
            order_by=[Design.download_count.desc(), Design.id],
            page=page,
            size=size,
        )

    async def filter_designs(self, design_filter: DesignFilter) -> PagedResponse[DesignListItem]:
        """
        Filtre combiné: catégorie, terme, premium et types de produits.

        Un design sans restriction de type de produit correspond à tous les types.

        Raises:
            InvalidSortFieldException: si `sort_by` n'est pas un champ triable
        """
        if design_filter.sort_by not in SORTABLE_FIELDS:
            raise InvalidSortFieldException(design_filter.sort_by, SORTABLE_FIELDS.keys())

        conditions: List[Any] = []
        if design_filter.category_id is not None:
            conditions.append(Design.category_id == design_filter.category_id)
        if design_filter.search_term and design_filter.search_term.strip():
            conditions.append(self._search_condition(design_filter.search_term))
        if design_filter.is_premium is not None:
            conditions.append(Design.is_premium == design_filter.is_premium)
        if design_filter.product_types:
            conditions.append(or_(
                Design.allowed_product_types.is_(None),
                func.trim(Design.allowed_product_types) == "",
                *[
                    Design.allowed_product_types.like(f'%"{escape_like(t)}"%', escape=LIKE_ESCAPE)
                    for t in design_filter.product_types
                ],
            ))

        column = SORTABLE_FIELDS[design_filter.sort_by]
        ordering = column.asc() if design_filter.sort_direction.upper() == "ASC" else column.desc()
        return await self._page(
            conditions=conditions,
            order_by=[ordering, Design.id],
            page=design_filter.page,
            size=design_filter.size,
        )

    @staticmethod
    def _search_condition(term: str):
        pattern = f"%{escape_like(term.strip())}%"
        return or_(
            Design.name.ilike(pattern, escape=LIKE_ESCAPE),
            Design.tags.ilike(pattern, escape=LIKE_ESCAPE),
        )

    async def _page(self, conditions: Sequence[Any], order_by: Sequence[Any], page: int, size: int) -> PagedResponse[DesignListItem]:
        page = max(page, 0)
        size = min(max(size, 1), self.max_page_size)
        designs, total = await self.repository.find_designs(conditions, order_by, offset=page * size, limit=size)
        return PagedResponse[DesignListItem].build(
            content=[_to_list_item(d) for d in designs],
            page=page,
            size=size,
            total_elements=total,
        )
