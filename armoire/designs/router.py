import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from armoire.config import settings
from armoire.core.schemas import PagedResponse
from armoire.designs.dependencies import DesignServiceDep
from armoire.designs.exceptions import (
    DesignCategoryNotFoundException,
    DesignNotFoundException,
    InvalidSortFieldException,
)
from armoire.designs.models import DesignCategoryRead, DesignFilter, DesignListItem, DesignRead

logger = logging.getLogger(__name__)

design_router = APIRouter()
category_router = APIRouter()


def handle_design_service_errors(e: Exception):
    if isinstance(e, (DesignNotFoundException, DesignCategoryNotFoundException)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    elif isinstance(e, InvalidSortFieldException):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    else:
        logger.error(f"[Design API] Unexpected error: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Erreur interne lors de la lecture du catalogue.")


# --- Catégories ---

@category_router.get("", response_model=List[DesignCategoryRead])
async def read_design_categories(service: DesignServiceDep):
    """Catégories actives, dans l'ordre d'affichage."""
    try:
        return await service.list_categories()
    except Exception as e:
        handle_design_service_errors(e)


@category_router.get("/{slug}", response_model=DesignCategoryRead)
async def read_design_category(slug: str, service: DesignServiceDep):
    try:
        return await service.get_category_by_slug(slug)
    except Exception as e:
        handle_design_service_errors(e)


@category_router.get("/{slug}/designs", response_model=PagedResponse[DesignListItem])
async def read_category_designs(
    slug: str,
    service: DesignServiceDep,
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
):
    """Designs d'une catégorie, du plus récent au plus ancien."""
    try:
        return await service.get_designs_by_category_slug(slug, page=page, size=size)
    except Exception as e:
        handle_design_service_errors(e)


# --- Designs ---

@design_router.get("", response_model=PagedResponse[DesignListItem])
async def read_designs(
    service: DesignServiceDep,
    category_id: Optional[uuid.UUID] = Query(None, alias="categoryId"),
    search_term: Optional[str] = Query(None, alias="searchTerm"),
    is_premium: Optional[bool] = Query(None, alias="isPremium"),
    product_types: Optional[List[str]] = Query(None, alias="productTypes"),
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_direction: str = Query("DESC", alias="sortDirection"),
):
    """Liste filtrée et paginée des designs actifs."""
    logger.info(f"API read_designs: category={category_id}, term={search_term}, page={page}, size={size}")
    design_filter = DesignFilter(
        category_id=category_id,
        search_term=search_term,
        is_premium=is_premium,
        product_types=product_types,
        page=page,
        size=size,
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    try:
        return await service.filter_designs(design_filter)
    except Exception as e:
        handle_design_service_errors(e)


@design_router.get("/search", response_model=PagedResponse[DesignListItem])
async def search_designs(
    service: DesignServiceDep,
    q: str = Query(..., min_length=1),
    page: int = Query(0, ge=0),
    size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
):
    """Recherche par nom ou tag, les plus téléchargés en premier."""
    try:
        return await service.search_designs(q, page=page, size=size)
    except Exception as e:
        handle_design_service_errors(e)


@design_router.get("/{design_id}", response_model=DesignRead)
async def read_design(design_id: uuid.UUID, service: DesignServiceDep):
    try:
        return await service.get_design_by_id(design_id)
    except Exception as e:
        handle_design_service_errors(e)
