"""Category DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``) and carry types only; field constraints live
in ``constants.CATEGORY_CONSTRAINTS`` and are checked by the service.

- ``CreateCategoryDTO``: input for category creation.
- ``UpdateCategoryDTO``: input for partial category updates.
- ``CategoryOutputDTO``: output with all category fields.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from modules.categories.models import Category


class CreateCategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    icon: str | None = None
    parent_id: str | None = None


class UpdateCategoryDTO(BaseModel):
    """Partial update: only fields explicitly supplied are applied.

    Passing ``parent_id=None`` explicitly detaches the category from its
    parent; omitting it keeps the current parent.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    description: str | None = None
    icon: str | None = None
    parent_id: str | None = None


class CategoryOutputDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    description: str | None
    icon: str | None
    parent_id: UUID | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, category: Category) -> CategoryOutputDTO:
        """Build an output DTO from a Category model instance."""
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            icon=category.icon,
            parent_id=category.parent_id,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )
