import uuid
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field as PydanticField
from sqlalchemy import Column, Text
from sqlmodel import SQLModel, Field

from armoire.config import settings
from armoire.core.schemas import ApiModel
from armoire.core.utils import UTC_DATETIME, utcnow


# --- Tables ---
class DesignCategory(SQLModel, table=True):
    __tablename__ = "design_categories"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=100)
    slug: str = Field(max_length=100, unique=True, index=True)
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    display_order: int = Field(default=0)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTC_DATETIME)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTC_DATETIME)


class Design(SQLModel, table=True):
    """
    Design du catalogue.

    Attributes:
        tags: liste séparée par des virgules ("fleurs, été")
        allowed_product_types: tableau JSON ('["TSHIRT", "MUG"]'); NULL ou vide signifie
            compatible avec tous les produits
    """
    __tablename__ = "designs"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    category_id: uuid.UUID = Field(foreign_key="design_categories.id", index=True)
    name: str = Field(max_length=200)
    slug: str = Field(max_length=200, unique=True, index=True)
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    design_image_url: str = Field(max_length=500)
    thumbnail_url: Optional[str] = Field(default=None, max_length=500)
    tags: Optional[str] = Field(default=None, max_length=500)
    allowed_product_types: Optional[str] = Field(default=None, sa_column=Column(Text))
    is_active: bool = Field(default=True)
    is_premium: bool = Field(default=False)
    download_count: int = Field(default=0)
    price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTC_DATETIME)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTC_DATETIME)


# --- Schémas API ---
class DesignCategorySummary(ApiModel):
    id: uuid.UUID
    name: str
    slug: str


class DesignCategoryRead(DesignCategorySummary):
    description: Optional[str] = None
    display_order: int
    design_count: int = 0


class DesignListItem(ApiModel):
    id: uuid.UUID
    category_id: uuid.UUID
    name: str
    slug: str
    thumbnail_url: Optional[str] = None
    tags: List[str] = []
    is_premium: bool
    download_count: int
    price: Decimal
    created_at: datetime


class DesignRead(DesignListItem):
    description: Optional[str] = None
    design_image_url: str
    allowed_product_types: Optional[List[str]] = None
    category: DesignCategorySummary


class DesignFilter(ApiModel):
    """Critères de filtrage du catalogue. Tous les critères sont optionnels."""
    category_id: Optional[uuid.UUID] = None
    search_term: Optional[str] = None
    is_premium: Optional[bool] = None
    product_types: Optional[List[str]] = None
    page: int = PydanticField(default=0, ge=0)
    size: int = PydanticField(default=settings.DEFAULT_PAGE_SIZE, ge=1)
    sort_by: str = "createdAt"
    sort_direction: str = "DESC"
