from decimal import Decimal

import pytest

from modules.categories.models import Category
from modules.categories.repositories.django_repository import CategoryDjangoRepository
from modules.categories.services import CategoryService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService
from modules.suppliers.models import Supplier
from modules.suppliers.repositories.django_repository import SupplierDjangoRepository
from modules.suppliers.services import SupplierService


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def category_service():
    return CategoryService(repository=CategoryDjangoRepository())


@pytest.fixture()
def supplier_service():
    return SupplierService(repository=SupplierDjangoRepository())


@pytest.fixture()
def product_service(category_service, supplier_service):
    return ProductService(
        repository=ProductDjangoRepository(),
        category_service=category_service,
        supplier_service=supplier_service,
    )


@pytest.fixture()
def fruits():
    """A persisted root Category."""
    return Category.objects.create(name="Fruits", icon="🍎")


@pytest.fixture()
def acme():
    """A persisted Supplier."""
    return Supplier.objects.create(name="Acme Foods", email="sales@acmefoods.com")


@pytest.fixture()
def make_product(fruits):
    """Factory persisting Products under ``fruits`` by default."""

    def _make(**overrides) -> Product:
        defaults = {
            "name": "Apple",
            "category": fruits,
            "cost_price": Decimal("3.50"),
            "sell_price": Decimal("5.90"),
            "profit_margin_percent": Decimal("68.57"),
            "stock_quantity": 20,
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
