"""Product repository interface.

Extends ``IRepository[Product]`` with explicit relation loading
(``get_with_category`` / ``get_with_category_and_supplier``), the name
look-up behind the uniqueness rule, and soft-delete recovery.  Every
query takes an ``include_deleted`` flag instead of filtering implicitly.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_id(self, id: str, include_deleted: bool = False) -> Optional[Product]:
        """Retrieve a product (category joined) by primary key."""

    @abstractmethod
    def get_with_category(
        self, id: str, include_deleted: bool = False
    ) -> Optional[Product]:
        """Retrieve a product with its category joined."""

    @abstractmethod
    def get_with_category_and_supplier(
        self, id: str, include_deleted: bool = False
    ) -> Optional[Product]:
        """Retrieve a product with category and supplier joined.

        A dangling supplier reference resolves to ``None``.
        """

    @abstractmethod
    def get_by_name(self, name: str, include_deleted: bool = True) -> Optional[Product]:
        """Retrieve a product by exact name."""

    @abstractmethod
    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Sequence[str] = ("name",),
        include_deleted: bool = False,
    ) -> List[Product]:
        """List products (category and supplier joined)."""

    @abstractmethod
    def restore(self, entity: Product) -> Product:
        """Clear ``deleted_at`` on a soft-deleted product."""
