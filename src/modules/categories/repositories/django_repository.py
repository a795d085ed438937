"""Django ORM implementation of the Category repository.

Satisfies ``ICategoryRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
(or empty results) for missing or malformed ids; the Service Layer decides
how to translate a missing entity into a domain error.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import structlog

from django.core.exceptions import ValidationError
from django.db import transaction

from modules.categories.models import Category
from modules.categories.repositories.interfaces import ICategoryRepository

logger = structlog.get_logger(__name__)


class CategoryDjangoRepository(ICategoryRepository):
    """Concrete Category repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Category]:
        """Retrieve a category by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Category.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_name(self, name: str) -> Optional[Category]:
        return Category.objects.filter(name=name).first()

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Sequence[str] = ("-created_at", "-id"),
    ) -> List[Category]:
        queryset = Category.objects.all()
        if order_by:
            queryset = queryset.order_by(*order_by)
        try:
            if filters:
                queryset = queryset.filter(**filters)
            return list(queryset)
        except (ValueError, ValidationError):
            return []

    def list_children(self, parent_id: str) -> List[Category]:
        return self.list({"parent_id": parent_id}, order_by=("name",))

    def has_children(self, id: str) -> bool:
        try:
            return Category.objects.filter(parent_id=id).exists()
        except (ValueError, ValidationError):
            return False

    @transaction.atomic
    def save(self, entity: Category) -> Category:
        """Persist (create or update) a category."""
        entity.save()
        logger.debug("category.saved", category_id=str(entity.id), name=entity.name)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Physically remove a category by ID.

        Returns ``False`` if no category exists with the given ID.  Raises
        ``django.db.models.ProtectedError`` while children or products
        still reference it.
        """
        category = self.get_by_id(id)
        if not category:
            return False
        category.delete()
        logger.debug("category.deleted", category_id=str(id))
        return True

    def count(self) -> int:
        return Category.objects.count()
