"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
(or empty lists) for missing or malformed ids; the Service Layer decides
how to translate a missing entity into a domain error.

Relations are always loaded explicitly with ``select_related``: the
category on every read, the supplier on lists and on
``get_with_category_and_supplier``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import structlog

from django.core.exceptions import ValidationError
from django.db import transaction

from modules.core.models import SoftDeleteQuerySet
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    @staticmethod
    def _queryset(include_deleted: bool) -> SoftDeleteQuerySet:
        queryset = Product.objects.get_queryset()
        if not include_deleted:
            queryset = queryset.alive()
        return queryset

    def _get(self, queryset: SoftDeleteQuerySet, id: str) -> Optional[Product]:
        try:
            return queryset.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_id(self, id: str, include_deleted: bool = False) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        return self.get_with_category(id, include_deleted=include_deleted)

    def get_with_category(
        self, id: str, include_deleted: bool = False
    ) -> Optional[Product]:
        queryset = self._queryset(include_deleted).select_related("category")
        return self._get(queryset, id)

    def get_with_category_and_supplier(
        self, id: str, include_deleted: bool = False
    ) -> Optional[Product]:
        queryset = self._queryset(include_deleted).select_related(
            "category", "supplier"
        )
        return self._get(queryset, id)

    def get_by_name(self, name: str, include_deleted: bool = True) -> Optional[Product]:
        return self._queryset(include_deleted).filter(name=name).first()

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Sequence[str] = ("name",),
        include_deleted: bool = False,
    ) -> List[Product]:
        """List products with optional Django ORM look-ups.

        Examples of valid filters::

            {"active": True}
            {"sell_price__range": (Decimal("1.00"), Decimal("9.99"))}
        """
        queryset = self._queryset(include_deleted).select_related(
            "category", "supplier"
        )
        if order_by:
            queryset = queryset.order_by(*order_by)
        try:
            if filters:
                queryset = queryset.filter(**filters)
            return list(queryset)
        except (ValueError, ValidationError):
            return []

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.debug("product.saved", product_id=str(entity.id), name=entity.name)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Soft-delete a product by ID.

        Already-deleted products are stamped again.  Returns ``False`` if
        no row exists with the given ID.
        """
        product = self.get_by_id(id, include_deleted=True)
        if not product:
            return False
        product.delete()
        logger.debug("product.soft_deleted", product_id=str(id))
        return True

    @transaction.atomic
    def restore(self, entity: Product) -> Product:
        entity.restore()
        logger.debug("product.restored", product_id=str(entity.id))
        return entity

    def count(self) -> int:
        """Total rows, soft-deleted included."""
        return Product.objects.count()
