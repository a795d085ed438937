"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  DTOs are
immutable (``frozen=True``) and carry types only; field constraints live
in ``constants.PRODUCT_CONSTRAINTS`` and are checked by the service.

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``ProductOutputDTO``: output with the category and, when attached,
  the supplier embedded.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from modules.categories.dtos import CategoryOutputDTO
from modules.suppliers.dtos import SupplierOutputDTO

if TYPE_CHECKING:
    from modules.products.models import Product


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    ``profit_margin_percent`` is derived from the prices when omitted.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    category_id: str
    cost_price: Decimal
    sell_price: Decimal
    supplier_id: str | None = None
    profit_margin_percent: Decimal | None = None
    promotional_price: Decimal | None = None
    stock_quantity: int = 0
    unit: str = "UN"
    active: bool = True
    notes: str | None = None


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    Only fields explicitly supplied are applied.  ``supplier_id=None``
    detaches the supplier.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    category_id: str | None = None
    supplier_id: str | None = None
    cost_price: Decimal | None = None
    sell_price: Decimal | None = None
    profit_margin_percent: Decimal | None = None
    promotional_price: Decimal | None = None
    stock_quantity: int | None = None
    unit: str | None = None
    active: bool | None = None
    notes: str | None = None


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for product responses."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    category: CategoryOutputDTO
    supplier: SupplierOutputDTO | None
    cost_price: Decimal
    sell_price: Decimal
    profit_margin_percent: Decimal
    promotional_price: Decimal | None
    stock_quantity: int
    unit: str
    active: bool
    notes: str | None
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product loaded with its relations.

        The supplier is only embedded when it was joined by the
        repository; it is never fetched lazily here.
        """
        supplier = None
        if type(product).supplier.is_cached(product) and product.supplier is not None:
            supplier = SupplierOutputDTO.from_entity(product.supplier)
        return cls(
            id=product.id,
            name=product.name,
            category=CategoryOutputDTO.from_entity(product.category),
            supplier=supplier,
            cost_price=product.cost_price,
            sell_price=product.sell_price,
            profit_margin_percent=product.profit_margin_percent,
            promotional_price=product.promotional_price,
            stock_quantity=product.stock_quantity,
            unit=product.unit,
            active=product.active,
            notes=product.notes,
            created_at=product.created_at,
            updated_at=product.updated_at,
            deleted_at=product.deleted_at,
        )
