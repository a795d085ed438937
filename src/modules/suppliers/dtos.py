"""Supplier DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``); constraints are checked by the service
against ``constants.SUPPLIER_CONSTRAINTS``.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

if TYPE_CHECKING:
    from modules.suppliers.models import Supplier


class CreateSupplierDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str | None = None
    phone: str | None = None
    pix_key: str | None = None

    @field_validator("email")
    @classmethod
    def blank_email_is_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v


class UpdateSupplierDTO(BaseModel):
    """Partial update: only fields explicitly supplied are applied."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    pix_key: str | None = None

    @field_validator("email")
    @classmethod
    def blank_email_is_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v


class SupplierOutputDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    email: str | None
    phone: str | None
    pix_key: str | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, supplier: Supplier) -> SupplierOutputDTO:
        """Build an output DTO from a Supplier model instance."""
        return cls(
            id=supplier.id,
            name=supplier.name,
            email=supplier.email,
            phone=supplier.phone,
            pix_key=supplier.pix_key,
            created_at=supplier.created_at,
            updated_at=supplier.updated_at,
        )
