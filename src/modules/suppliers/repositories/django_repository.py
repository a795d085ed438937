"""Django ORM implementation of the Supplier repository.

Satisfies ``ISupplierRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
for missing or malformed ids.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import structlog

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Value
from django.db.models.functions import StrIndex

from modules.suppliers.models import Supplier
from modules.suppliers.repositories.interfaces import ISupplierRepository

logger = structlog.get_logger(__name__)


class SupplierDjangoRepository(ISupplierRepository):
    """Concrete Supplier repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Supplier]:
        """Retrieve a supplier by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Supplier.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_name(self, name: str) -> Optional[Supplier]:
        return Supplier.objects.filter(name=name).first()

    def get_by_email(self, email: str) -> Optional[Supplier]:
        return Supplier.objects.filter(email=email).first()

    def list(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Sequence[str] = ("name",),
    ) -> List[Supplier]:
        queryset = Supplier.objects.all()
        if order_by:
            queryset = queryset.order_by(*order_by)
        try:
            if filters:
                queryset = queryset.filter(**filters)
            return list(queryset)
        except (ValueError, ValidationError):
            return []

    def search_by_name(self, fragment: str) -> List[Supplier]:
        """Case-sensitive substring match on ``name``, ordered by name.

        ``StrIndex`` maps to ``INSTR``/``STRPOS``, which never fold case,
        unlike ``__contains`` on SQLite.
        """
        return list(
            Supplier.objects.annotate(
                fragment_position=StrIndex("name", Value(fragment))
            )
            .filter(fragment_position__gt=0)
            .order_by("name")
        )

    @transaction.atomic
    def save(self, entity: Supplier) -> Supplier:
        """Persist (create or update) a supplier."""
        entity.save()
        logger.debug("supplier.saved", supplier_id=str(entity.id), name=entity.name)
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Physically remove a supplier by ID.

        Returns ``False`` if no supplier exists with the given ID.
        """
        supplier = self.get_by_id(id)
        if not supplier:
            return False
        supplier.delete()
        logger.debug("supplier.deleted", supplier_id=str(id))
        return True

    def count(self) -> int:
        return Supplier.objects.count()
