"""Unit tests for Product DTOs.

Covers:
- CreateProductDTO: defaults, decimal coercion, frozen immutability.
- UpdateProductDTO: unset vs explicit ``None``.
- ProductOutputDTO: from_entity with and without a joined supplier.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.dtos import CreateProductDTO, ProductOutputDTO, UpdateProductDTO
from modules.products.models import Product

pytestmark = pytest.mark.unit


# ===========================================================================
# Input DTOs
# ===========================================================================


class TestCreateProductDTO:
    def test_defaults(self):
        dto = CreateProductDTO(
            name="Apple", category_id="c1", cost_price="3.50", sell_price="5.90"
        )

        assert dto.cost_price == Decimal("3.50")
        assert dto.supplier_id is None
        assert dto.profit_margin_percent is None
        assert dto.stock_quantity == 0
        assert dto.unit == "UN"
        assert dto.active is True

    def test_missing_category_rejected(self):
        with pytest.raises(ValidationError):
            CreateProductDTO(name="Apple", cost_price="3.50", sell_price="5.90")

    def test_is_frozen(self):
        dto = CreateProductDTO(
            name="Apple", category_id="c1", cost_price="3.50", sell_price="5.90"
        )
        with pytest.raises(ValidationError):
            dto.name = "Pear"


class TestUpdateProductDTO:
    def test_only_supplied_fields_are_dumped(self):
        dto = UpdateProductDTO(sell_price="7.00", supplier_id=None)

        assert dto.model_dump(exclude_unset=True) == {
            "sell_price": Decimal("7.00"),
            "supplier_id": None,
        }

    def test_empty_update(self):
        assert UpdateProductDTO().model_dump(exclude_unset=True) == {}


# ===========================================================================
# ProductOutputDTO
# ===========================================================================


class TestProductOutputDTO:
    def test_from_entity_with_supplier(self, make_product, acme):
        product = make_product(supplier=acme)
        loaded = Product.objects.select_related("category", "supplier").get(id=product.id)

        dto = ProductOutputDTO.from_entity(loaded)

        assert dto.id == product.id
        assert dto.category.name == "Fruits"
        assert dto.supplier.name == "Acme Foods"
        assert dto.profit_margin_percent == Decimal("68.57")
        assert dto.deleted_at is None

    def test_supplier_not_joined_is_omitted(self, make_product, acme):
        product = make_product(supplier=acme)
        loaded = Product.objects.select_related("category").get(id=product.id)

        assert ProductOutputDTO.from_entity(loaded).supplier is None

    def test_deleted_product_exposes_deleted_at(self, make_product):
        product = make_product()
        product.delete()
        loaded = Product.objects.select_related("category", "supplier").get(id=product.id)

        assert ProductOutputDTO.from_entity(loaded).deleted_at is not None
