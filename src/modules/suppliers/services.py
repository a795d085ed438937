"""Supplier service layer (Use Cases).

Orchestrates business logic for the Supplier aggregate, delegating
persistence to the injected ``ISupplierRepository``.

Business rules enforced here:
- Supplier name must be unique.
- Supplier email, when present, must be unique.
- Removal is unconditional; no dependency check.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import structlog
from django.db import IntegrityError, transaction

from modules.core.validation import ensure_valid
from modules.suppliers.constants import SUPPLIER_CONSTRAINTS
from modules.suppliers.exceptions import SupplierAlreadyExists, SupplierNotFound
from modules.suppliers.models import Supplier

if TYPE_CHECKING:
    from modules.suppliers.dtos import CreateSupplierDTO, UpdateSupplierDTO
    from modules.suppliers.repositories.interfaces import ISupplierRepository

logger = structlog.get_logger(__name__)


class SupplierService:
    """Application service for Supplier use-cases.

    Receives an ``ISupplierRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: ISupplierRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_supplier(self, dto: CreateSupplierDTO) -> Supplier:
        """Create a new supplier after enforcing uniqueness rules.

        Raises:
            InvalidArgument: if a field constraint is violated.
            SupplierAlreadyExists: if the name or the email is taken.
        """
        ensure_valid(dto.model_dump(), SUPPLIER_CONSTRAINTS)
        log = logger.bind(name=dto.name)

        self._ensure_name_available(dto.name)
        if dto.email:
            self._ensure_email_available(dto.email)

        supplier = Supplier(
            name=dto.name,
            email=dto.email,
            phone=dto.phone,
            pix_key=dto.pix_key,
        )
        supplier = self._save(supplier)
        log.info("supplier.created", supplier_id=str(supplier.id))
        return supplier

    @transaction.atomic
    def update_supplier(self, id: str, dto: UpdateSupplierDTO) -> Supplier:
        """Apply the supplied fields to an existing supplier.

        Raises:
            SupplierNotFound: if the supplier does not exist.
            SupplierAlreadyExists: if the new name or email collides.
        """
        supplier = self.get_supplier(id)
        changes = ensure_valid(
            dto.model_dump(exclude_unset=True), SUPPLIER_CONSTRAINTS, partial=True
        )
        log = logger.bind(supplier_id=str(supplier.id))

        if "name" in changes and changes["name"] != supplier.name:
            self._ensure_name_available(changes["name"])

        new_email = changes.get("email")
        if new_email and new_email != supplier.email:
            self._ensure_email_available(new_email)

        for field in ("name", "email", "phone", "pix_key"):
            if field in changes:
                setattr(supplier, field, changes[field])

        supplier = self._save(supplier)
        log.info("supplier.updated", fields=sorted(changes))
        return supplier

    @transaction.atomic
    def delete_supplier(self, id: str) -> None:
        """Physically remove a supplier.

        Products referencing it keep the (now dangling) reference.

        Raises:
            SupplierNotFound: if the supplier does not exist.
        """
        supplier = self.get_supplier(id)
        self._repo.delete(str(supplier.id))
        logger.info("supplier.deleted", supplier_id=str(supplier.id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_suppliers(self) -> List[Supplier]:
        """All suppliers ordered by name."""
        return self._repo.list()

    def get_supplier(self, id: str) -> Supplier:
        """Retrieve a single supplier by ID.

        Raises:
            SupplierNotFound: if the supplier does not exist.
        """
        supplier = self._repo.get_by_id(id)
        if not supplier:
            raise SupplierNotFound(
                f'Supplier with ID "{id}" not found.', field="id", value=id
            )
        return supplier

    def search_suppliers_by_name(self, fragment: str) -> List[Supplier]:
        """Suppliers whose name contains ``fragment``; may be empty."""
        return self._repo.search_by_name(fragment)

    def count_suppliers(self) -> int:
        return self._repo.count()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _ensure_name_available(self, name: str) -> None:
        if self._repo.get_by_name(name):
            logger.warning("supplier.duplicate_name", name=name)
            raise SupplierAlreadyExists(
                f'Supplier with name "{name}" already exists.',
                field="name",
                value=name,
            )

    def _ensure_email_available(self, email: str) -> None:
        if self._repo.get_by_email(email):
            logger.warning("supplier.duplicate_email")
            raise SupplierAlreadyExists(
                f'Email "{email}" is already in use.',
                field="email",
                value=email,
            )

    def _save(self, supplier: Supplier) -> Supplier:
        try:
            return self._repo.save(supplier)
        except IntegrityError as exc:
            raise SupplierAlreadyExists(
                f'Supplier "{supplier.name}" collides with an existing supplier.',
                field="name",
                value=supplier.name,
            ) from exc


def build_supplier_service() -> SupplierService:
    """``SupplierService`` wired to the Django ORM repository."""
    from modules.suppliers.repositories.django_repository import (
        SupplierDjangoRepository,
    )

    return SupplierService(repository=SupplierDjangoRepository())
