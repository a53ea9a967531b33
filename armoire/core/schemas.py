import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# ======================================================
# Configuration Commune Pydantic
# ======================================================

class OrmBaseModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True
    )


class ApiModel(OrmBaseModel):
    """Base des DTO exposés: champs en camelCase, entrée acceptée en snake_case."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


T = TypeVar("T")


class PagedResponse(ApiModel, Generic[T]):
    """Page de résultats (numérotation à partir de 0)."""
    content: List[T]
    page: int
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool
    has_next: bool
    has_previous: bool

    @classmethod
    def build(cls, content: List[T], page: int, size: int, total_elements: int) -> "PagedResponse[T]":
        total_pages = math.ceil(total_elements / size) if size > 0 else 0
        has_next = page + 1 < total_pages
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages,
            first=page == 0,
            last=not has_next,
            has_next=has_next,
            has_previous=page > 0,
        )


class ApiResponse(ApiModel, Generic[T]):
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None
