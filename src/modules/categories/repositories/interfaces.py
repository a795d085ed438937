"""Category repository interface.

Extends ``IRepository[Category]`` with the look-ups required by the name
uniqueness and hierarchy rules.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.categories.models import Category


class ICategoryRepository(IRepository["Category"]):
    """Repository contract for the Category aggregate."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Category]:
        """Retrieve a category by exact name."""

    @abstractmethod
    def list_children(self, parent_id: str) -> List[Category]:
        """Categories whose parent is ``parent_id``, ordered by name."""

    @abstractmethod
    def has_children(self, id: str) -> bool:
        """Whether any category has ``id`` as parent."""
