"""End-to-end catalog scenarios through the services and the Django ORM.

Covers:
- Product creation with derived margin and duplicate name conflict.
- Pricing rule and column bounds on create and update.
- Stock writes rely on the column CHECK for negative quantities.
- Category hierarchy removal order; loops beyond self-parenting are stored.
- Soft delete / restore round trip and name reservation.
- Low stock query, price range query, supplier lookups.
- Removed supplier leaves a product readable with no supplier.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import IntegrityError

from modules.categories.dtos import CreateCategoryDTO, UpdateCategoryDTO
from modules.categories.exceptions import (
    CategoryHasChildren,
    CategoryInUse,
    CategoryNotFound,
)
from modules.core.exceptions import Conflict, InvalidArgument, NotFound
from modules.products.dtos import CreateProductDTO, ProductOutputDTO, UpdateProductDTO
from modules.products.exceptions import (
    InvalidPricing,
    ProductAlreadyExists,
    ProductNotFound,
)
from modules.suppliers.dtos import CreateSupplierDTO, UpdateSupplierDTO

pytestmark = pytest.mark.integration


def _apple(category_id, **overrides) -> CreateProductDTO:
    data = {
        "name": "Apple",
        "category_id": category_id,
        "cost_price": Decimal("3.50"),
        "sell_price": Decimal("5.90"),
        "stock_quantity": 20,
    }
    data.update(overrides)
    return CreateProductDTO(**data)


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class TestProductCreation:
    def test_margin_derived_and_duplicate_rejected(self, category_service, product_service):
        fruits = category_service.create_category(CreateCategoryDTO(name="Fruits"))

        apple = product_service.create_product(_apple(str(fruits.id)))

        assert apple.profit_margin_percent == Decimal("68.57")
        assert apple.deleted_at is None
        with pytest.raises(Conflict):
            product_service.create_product(_apple(str(fruits.id)))

    def test_sell_below_cost_rejected(self, fruits, product_service):
        with pytest.raises(InvalidArgument):
            product_service.create_product(
                _apple(
                    str(fruits.id),
                    name="Bad",
                    cost_price=Decimal("5.00"),
                    sell_price=Decimal("3.00"),
                )
            )
        assert product_service.count_products() == 0

    def test_unknown_category_is_not_found(self, product_service):
        with pytest.raises(NotFound):
            product_service.create_product(
                _apple("00000000-0000-0000-0000-000000000000")
            )

    def test_malformed_category_id_is_not_found(self, product_service):
        with pytest.raises(CategoryNotFound):
            product_service.create_product(_apple("not-a-uuid"))

    def test_update_price_recomputes_margin(self, fruits, product_service):
        apple = product_service.create_product(_apple(str(fruits.id)))

        updated = product_service.update_product(
            str(apple.id), UpdateProductDTO(cost_price=Decimal("2.95"))
        )

        assert updated.profit_margin_percent == Decimal("100.00")
        reloaded = product_service.get_product(str(apple.id))
        assert reloaded.profit_margin_percent == Decimal("100.00")

    def test_update_to_invalid_pricing_keeps_row(self, fruits, product_service):
        apple = product_service.create_product(_apple(str(fruits.id)))

        with pytest.raises(InvalidArgument):
            product_service.update_product(
                str(apple.id), UpdateProductDTO(sell_price=Decimal("1.00"))
            )

        assert product_service.get_product(str(apple.id)).sell_price == Decimal("5.90")

    def test_update_stock(self, fruits, product_service):
        apple = product_service.create_product(_apple(str(fruits.id)))

        product_service.update_stock(str(apple.id), 4)

        assert product_service.get_product(str(apple.id)).stock_quantity == 4

    def test_negative_stock_hits_column_check(self, fruits, product_service):
        apple = product_service.create_product(_apple(str(fruits.id)))

        with pytest.raises(IntegrityError):
            product_service.update_stock(str(apple.id), -1)

        assert product_service.get_product(str(apple.id)).stock_quantity == 20

    def test_margin_too_large_for_column_rejected(self, fruits, product_service):
        with pytest.raises(InvalidPricing) as exc_info:
            product_service.create_product(
                _apple(
                    str(fruits.id),
                    cost_price=Decimal("0.01"),
                    sell_price=Decimal("99999999.99"),
                )
            )

        assert exc_info.value.field == "profit_margin_percent"
        assert product_service.count_products() == 0
        assert product_service.list_products() == []

    def test_price_above_column_range_rejected(self, fruits, product_service):
        with pytest.raises(InvalidArgument) as exc_info:
            product_service.create_product(
                _apple(str(fruits.id), sell_price=Decimal("100000000.00"))
            )

        assert exc_info.value.field == "sell_price"
        assert [v.code for v in exc_info.value.violations] == ["max_value"]

    def test_large_margin_within_column_reads_back(self, fruits, product_service):
        product = product_service.create_product(
            _apple(
                str(fruits.id),
                cost_price=Decimal("1.00"),
                sell_price=Decimal("999999.99"),
            )
        )

        reloaded = product_service.get_product(str(product.id))
        assert reloaded.profit_margin_percent == Decimal("99999899.00")
        assert [p.id for p in product_service.list_products()] == [product.id]


class TestSoftDeleteLifecycle:
    def test_remove_then_restore(self, fruits, product_service):
        apple = product_service.create_product(_apple(str(fruits.id)))
        before = ProductOutputDTO.from_entity(
            product_service.get_product(str(apple.id), with_supplier=True)
        )

        product_service.delete_product(str(apple.id))

        with pytest.raises(ProductNotFound):
            product_service.get_product(str(apple.id))
        deleted = product_service.get_product(str(apple.id), include_deleted=True)
        assert deleted.deleted_at is not None
        assert product_service.list_products() == []
        assert len(product_service.list_products(include_deleted=True)) == 1

        product_service.restore_product(str(apple.id))

        after = ProductOutputDTO.from_entity(
            product_service.get_product(str(apple.id), with_supplier=True)
        )
        assert after.model_dump(exclude={"updated_at"}) == before.model_dump(
            exclude={"updated_at"}
        )

    def test_deleted_name_stays_reserved(self, fruits, product_service):
        apple = product_service.create_product(_apple(str(fruits.id)))
        product_service.delete_product(str(apple.id))

        with pytest.raises(ProductAlreadyExists):
            product_service.create_product(_apple(str(fruits.id)))

    def test_remove_twice_is_allowed(self, fruits, product_service):
        apple = product_service.create_product(_apple(str(fruits.id)))

        product_service.delete_product(str(apple.id))
        product_service.delete_product(str(apple.id))

        assert product_service.count_products() == 1

    def test_remove_unknown_is_not_found(self, product_service):
        with pytest.raises(ProductNotFound):
            product_service.delete_product("00000000-0000-0000-0000-000000000000")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestProductQueries:
    def test_low_stock(self, fruits, product_service):
        product_service.create_product(_apple(str(fruits.id), name="Low", stock_quantity=2))
        product_service.create_product(_apple(str(fruits.id), name="Edge", stock_quantity=10))
        product_service.create_product(_apple(str(fruits.id), name="Plenty", stock_quantity=50))
        product_service.create_product(
            _apple(str(fruits.id), name="Inactive", stock_quantity=0, active=False)
        )
        gone = product_service.create_product(
            _apple(str(fruits.id), name="Gone", stock_quantity=0)
        )
        product_service.delete_product(str(gone.id))

        result = product_service.list_low_stock_products()

        assert [p.name for p in result] == ["Low", "Edge"]
        assert all(p.stock_quantity <= 10 and p.active for p in result)

    def test_price_range_inclusive(self, fruits, product_service):
        for name, sell in (("A", "4.00"), ("B", "6.00"), ("C", "9.00")):
            product_service.create_product(
                _apple(str(fruits.id), name=name, sell_price=Decimal(sell))
            )

        result = product_service.list_products_by_price_range(
            Decimal("4.00"), Decimal("6.00")
        )

        assert [p.name for p in result] == ["A", "B"]

    def test_by_category_and_search(self, category_service, fruits, product_service):
        veg = category_service.create_category(CreateCategoryDTO(name="Vegetables"))
        product_service.create_product(_apple(str(fruits.id)))
        product_service.create_product(_apple(str(fruits.id), name="Pineapple"))
        product_service.create_product(_apple(str(veg.id), name="Carrot"))

        by_category = product_service.list_products_by_category(str(fruits.id))
        search = product_service.search_products_by_name("apple")

        assert [p.name for p in by_category] == ["Apple", "Pineapple"]
        assert {p.name for p in search} >= {"Pineapple"}
        assert product_service.list_products_by_category("not-a-uuid") == []


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class TestCategoryHierarchy:
    def test_parent_removed_after_child(self, category_service):
        c1 = category_service.create_category(CreateCategoryDTO(name="C1"))
        c2 = category_service.create_category(
            CreateCategoryDTO(name="C2", parent_id=str(c1.id))
        )

        with pytest.raises(CategoryHasChildren):
            category_service.delete_category(str(c1.id))

        category_service.delete_category(str(c2.id))
        category_service.delete_category(str(c1.id))
        assert category_service.list_categories() == []

    def test_multi_level_loop_is_stored(self, category_service):
        root = category_service.create_category(CreateCategoryDTO(name="Root"))
        mid = category_service.create_category(
            CreateCategoryDTO(name="Mid", parent_id=str(root.id))
        )
        leaf = category_service.create_category(
            CreateCategoryDTO(name="Leaf", parent_id=str(mid.id))
        )

        category_service.update_category(
            str(root.id), UpdateCategoryDTO(parent_id=str(leaf.id))
        )

        assert category_service.get_category(str(root.id)).parent_id == leaf.id
        assert [c.name for c in category_service.list_subcategories(str(leaf.id))] == [
            "Root"
        ]

    def test_subcategories(self, category_service, fruits):
        category_service.create_category(
            CreateCategoryDTO(name="Citrus", parent_id=str(fruits.id))
        )

        children = category_service.list_subcategories(str(fruits.id))

        assert [c.name for c in children] == ["Citrus"]

    def test_category_with_products_cannot_be_removed(
        self, category_service, fruits, product_service
    ):
        product_service.create_product(_apple(str(fruits.id)))

        with pytest.raises(CategoryInUse):
            category_service.delete_category(str(fruits.id))


# ---------------------------------------------------------------------------
# Suppliers
# ---------------------------------------------------------------------------


class TestSuppliers:
    def test_email_and_name_conflicts(self, supplier_service, acme):
        with pytest.raises(Conflict) as exc_info:
            supplier_service.create_supplier(
                CreateSupplierDTO(name="Other", email="sales@acmefoods.com")
            )
        assert exc_info.value.field == "email"

        with pytest.raises(Conflict) as exc_info:
            supplier_service.create_supplier(CreateSupplierDTO(name="Acme Foods"))
        assert exc_info.value.field == "name"

    def test_update_email_to_taken_rejected(self, supplier_service, acme):
        other = supplier_service.create_supplier(
            CreateSupplierDTO(name="Other", email="other@acmefoods.com")
        )

        with pytest.raises(Conflict):
            supplier_service.update_supplier(
                str(other.id), UpdateSupplierDTO(email="sales@acmefoods.com")
            )

    def test_removed_supplier_reads_as_none(
        self, supplier_service, acme, fruits, product_service
    ):
        apple = product_service.create_product(
            _apple(str(fruits.id), supplier_id=str(acme.id))
        )

        supplier_service.delete_supplier(str(acme.id))

        reloaded = product_service.get_product(str(apple.id), with_supplier=True)
        assert reloaded.supplier is None
        assert ProductOutputDTO.from_entity(reloaded).supplier is None
        assert [p.id for p in product_service.list_products_by_supplier(str(acme.id))] == [
            apple.id
        ]

    def test_search_and_count(self, supplier_service, acme):
        supplier_service.create_supplier(CreateSupplierDTO(name="Horta Acme"))
        supplier_service.create_supplier(CreateSupplierDTO(name="Distribuidora"))

        names = [s.name for s in supplier_service.search_suppliers_by_name("Acme")]

        assert names == ["Acme Foods", "Horta Acme"]
        assert supplier_service.count_suppliers() == 3

    def test_search_does_not_fold_case(self, supplier_service):
        supplier_service.create_supplier(CreateSupplierDTO(name="Horta Viva"))

        assert supplier_service.search_suppliers_by_name("horta") == []
        assert [s.name for s in supplier_service.search_suppliers_by_name("Horta")] == [
            "Horta Viva"
        ]
