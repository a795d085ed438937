"""Supplier repository interface.

Extends ``IRepository[Supplier]`` with the look-ups required by the
name and email uniqueness rules and by name search.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.suppliers.models import Supplier


class ISupplierRepository(IRepository["Supplier"]):
    """Repository contract for the Supplier aggregate."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Supplier]:
        """Retrieve a supplier by exact name."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Supplier]:
        """Retrieve a supplier by email address."""

    @abstractmethod
    def search_by_name(self, fragment: str) -> List[Supplier]:
        """Suppliers whose name contains ``fragment``, ordered by name."""
