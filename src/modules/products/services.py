"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository`` and referential checks
to the category and supplier services.

Business rules enforced here:
- Product name must be unique, soft-deleted products included.
- The category must exist; the supplier, when given, must exist.
- ``sell_price`` may never fall below ``cost_price``.
- ``profit_margin_percent`` is derived from the prices unless supplied,
  and always recomputed when a price changes.
- Removal is a soft delete, reversible through ``restore_product``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, List, Optional

import structlog
from django.conf import settings
from django.db import IntegrityError, transaction

from modules.categories.exceptions import CategoryNotFound
from modules.core.validation import ensure_valid
from modules.products.constants import (
    MAX_DECIMAL_VALUE,
    MONEY_QUANTUM,
    PRODUCT_CONSTRAINTS,
)
from modules.products.exceptions import (
    InvalidPricing,
    ProductAlreadyExists,
    ProductNotFound,
)
from modules.products.models import Product
from modules.suppliers.exceptions import SupplierNotFound

if TYPE_CHECKING:
    from modules.categories.models import Category
    from modules.categories.services import CategoryService
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository
    from modules.suppliers.models import Supplier
    from modules.suppliers.services import SupplierService

logger = structlog.get_logger(__name__)


def compute_profit_margin(cost_price: Decimal, sell_price: Decimal) -> Decimal:
    """``(sell - cost) / cost * 100`` rounded half-up to 2 places."""
    margin = (sell_price - cost_price) / cost_price * 100
    return margin.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


class ProductService:
    """Application service for Product use-cases.

    Receives the product repository and the category/supplier services
    via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        category_service: CategoryService,
        supplier_service: SupplierService,
    ) -> None:
        self._repo = repository
        self._categories = category_service
        self._suppliers = supplier_service

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product.

        Raises:
            InvalidArgument: if a field constraint is violated.
            ProductAlreadyExists: if the name is taken (deleted rows count).
            CategoryNotFound: if ``category_id`` does not resolve.
            SupplierNotFound: if ``supplier_id`` is given and does not resolve.
            InvalidPricing: if ``sell_price < cost_price`` or the derived
                margin does not fit its column.
        """
        ensure_valid(dto.model_dump(), PRODUCT_CONSTRAINTS)
        log = logger.bind(name=dto.name)

        self._ensure_name_available(dto.name)
        category = self._resolve_category(dto.category_id)
        supplier = None
        if dto.supplier_id is not None:
            supplier = self._resolve_supplier(dto.supplier_id)

        self._ensure_pricing(dto.cost_price, dto.sell_price)

        margin = dto.profit_margin_percent
        if margin is None:
            margin = self._derive_margin(dto.cost_price, dto.sell_price)

        product = Product(
            name=dto.name,
            category=category,
            supplier=supplier,
            cost_price=dto.cost_price,
            sell_price=dto.sell_price,
            profit_margin_percent=margin,
            promotional_price=dto.promotional_price,
            stock_quantity=dto.stock_quantity,
            unit=dto.unit,
            active=dto.active,
            notes=dto.notes,
        )
        product = self._save(product)
        log.info(
            "product.created",
            product_id=str(product.id),
            profit_margin_percent=str(product.profit_margin_percent),
        )
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Apply the supplied fields to an existing product.

        Prices are checked on their effective values (new if supplied,
        else current).  When either price changes the margin is
        recomputed, overriding any margin passed in the same call.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if the new name collides.
            CategoryNotFound / SupplierNotFound: if a new reference does
                not resolve.
            InvalidPricing: if the effective ``sell_price < cost_price`` or
                the recomputed margin does not fit its column.
        """
        product = self._get_or_raise(id, with_supplier=True)
        changes = ensure_valid(
            dto.model_dump(exclude_unset=True), PRODUCT_CONSTRAINTS, partial=True
        )
        log = logger.bind(product_id=str(product.id))

        if "name" in changes and changes["name"] != product.name:
            self._ensure_name_available(changes["name"], exclude_id=product.id)
            product.name = changes["name"]

        if "category_id" in changes:
            product.category = self._resolve_category(changes["category_id"])

        if "supplier_id" in changes:
            supplier_id = changes["supplier_id"]
            product.supplier = (
                None if supplier_id is None else self._resolve_supplier(supplier_id)
            )

        cost_price = changes.get("cost_price", product.cost_price)
        sell_price = changes.get("sell_price", product.sell_price)
        self._ensure_pricing(cost_price, sell_price)
        product.cost_price = cost_price
        product.sell_price = sell_price

        prices_changed = "cost_price" in changes or "sell_price" in changes
        margin_cleared = (
            "profit_margin_percent" in changes
            and changes["profit_margin_percent"] is None
        )
        if prices_changed or margin_cleared:
            product.profit_margin_percent = self._derive_margin(cost_price, sell_price)
        elif "profit_margin_percent" in changes:
            product.profit_margin_percent = changes["profit_margin_percent"]

        for field in ("promotional_price", "stock_quantity", "unit", "active", "notes"):
            if field in changes:
                setattr(product, field, changes[field])

        product = self._save(product)
        log.info("product.updated", fields=sorted(changes))
        return product

    @transaction.atomic
    def update_stock(self, id: str, quantity: int) -> Product:
        """Set ``stock_quantity`` to ``quantity`` as given.

        No range check happens here; the column's ``CHECK (>= 0)``
        rejects a negative quantity with ``IntegrityError``.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id, with_supplier=True)

        previous = product.stock_quantity
        product.stock_quantity = quantity
        product = self._repo.save(product)
        logger.info(
            "product.stock_updated",
            product_id=str(product.id),
            previous=previous,
            current=quantity,
        )
        return product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Soft-delete a product.

        Deleting an already-deleted product stamps ``deleted_at`` again.

        Raises:
            ProductNotFound: if no row exists with that id.
        """
        product = self._get_or_raise(id, include_deleted=True)
        self._repo.delete(str(product.id))
        logger.info("product.soft_deleted", product_id=str(product.id))

    @transaction.atomic
    def restore_product(self, id: str) -> Product:
        """Clear ``deleted_at``; a no-op on a product that is not deleted.

        Raises:
            ProductNotFound: if no row (deleted or not) has that id.
        """
        product = self._get_or_raise(id, include_deleted=True, with_supplier=True)
        product = self._repo.restore(product)
        logger.info("product.restored", product_id=str(product.id))
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(
        self,
        id: str,
        include_deleted: bool = False,
        with_supplier: bool = False,
    ) -> Product:
        """Retrieve a single product with its category.

        The supplier is joined only when ``with_supplier`` is set.

        Raises:
            ProductNotFound: if the product does not exist (or is deleted
                and ``include_deleted`` is not set).
        """
        return self._get_or_raise(
            id, include_deleted=include_deleted, with_supplier=with_supplier
        )

    def list_products(self, include_deleted: bool = False) -> List[Product]:
        return self._repo.list(include_deleted=include_deleted)

    def list_active_products(self) -> List[Product]:
        return self._repo.list({"active": True})

    def list_products_by_category(self, category_id: str) -> List[Product]:
        """Products of ``category_id``; an unknown id yields ``[]``."""
        return self._repo.list({"category_id": category_id})

    def list_products_by_supplier(self, supplier_id: str) -> List[Product]:
        """Products of ``supplier_id``; an unknown id yields ``[]``."""
        return self._repo.list({"supplier_id": supplier_id})

    def search_products_by_name(self, fragment: str) -> List[Product]:
        return self._repo.list({"name__contains": fragment})

    def list_products_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> List[Product]:
        """Products with ``min_price <= sell_price <= max_price``, cheapest first.

        ``min_price > max_price`` is not rejected; it simply matches nothing.
        """
        return self._repo.list(
            {"sell_price__range": (min_price, max_price)},
            order_by=("sell_price", "name"),
        )

    def list_low_stock_products(self, threshold: Optional[int] = None) -> List[Product]:
        """Active products with ``stock_quantity <= threshold``, lowest first."""
        if threshold is None:
            threshold = settings.CATALOG_LOW_STOCK_THRESHOLD
        return self._repo.list(
            {"stock_quantity__lte": threshold, "active": True},
            order_by=("stock_quantity", "name"),
        )

    def count_products(self) -> int:
        """Total rows, soft-deleted included."""
        return self._repo.count()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(
        self,
        id: str,
        include_deleted: bool = False,
        with_supplier: bool = False,
    ) -> Product:
        if with_supplier:
            product = self._repo.get_with_category_and_supplier(
                id, include_deleted=include_deleted
            )
        else:
            product = self._repo.get_with_category(id, include_deleted=include_deleted)
        if not product:
            raise ProductNotFound(
                f'Product with ID "{id}" not found.', field="id", value=id
            )
        return product

    def _ensure_name_available(self, name: str, exclude_id=None) -> None:
        existing = self._repo.get_by_name(name, include_deleted=True)
        if existing and existing.id != exclude_id:
            logger.warning("product.duplicate_name", name=name)
            raise ProductAlreadyExists(
                f'Product with name "{name}" already exists.',
                field="name",
                value=name,
            )

    def _resolve_category(self, category_id: str) -> Category:
        try:
            return self._categories.get_category(category_id)
        except CategoryNotFound as exc:
            logger.warning("product.category_not_found", category_id=str(category_id))
            raise CategoryNotFound(
                f'Category with ID "{category_id}" not found.',
                field="category_id",
                value=category_id,
            ) from exc

    def _resolve_supplier(self, supplier_id: str) -> Supplier:
        try:
            return self._suppliers.get_supplier(supplier_id)
        except SupplierNotFound as exc:
            logger.warning("product.supplier_not_found", supplier_id=str(supplier_id))
            raise SupplierNotFound(
                f'Supplier with ID "{supplier_id}" not found.',
                field="supplier_id",
                value=supplier_id,
            ) from exc

    @staticmethod
    def _derive_margin(cost_price: Decimal, sell_price: Decimal) -> Decimal:
        margin = compute_profit_margin(cost_price, sell_price)
        if margin > MAX_DECIMAL_VALUE:
            logger.warning(
                "product.margin_out_of_range",
                cost_price=str(cost_price),
                sell_price=str(sell_price),
            )
            raise InvalidPricing(
                f"Derived profit margin {margin}% exceeds {MAX_DECIMAL_VALUE}%.",
                field="profit_margin_percent",
                value=margin,
            )
        return margin

    @staticmethod
    def _ensure_pricing(cost_price: Decimal, sell_price: Decimal) -> None:
        if sell_price < cost_price:
            logger.warning(
                "product.sell_below_cost",
                cost_price=str(cost_price),
                sell_price=str(sell_price),
            )
            raise InvalidPricing(
                f"Sell price {sell_price} cannot be lower than cost price {cost_price}.",
                field="sell_price",
                value=sell_price,
            )

    def _save(self, product: Product) -> Product:
        try:
            return self._repo.save(product)
        except IntegrityError as exc:
            raise ProductAlreadyExists(
                f'Product with name "{product.name}" already exists.',
                field="name",
                value=product.name,
            ) from exc


def build_product_service() -> ProductService:
    """``ProductService`` wired to the Django ORM repositories."""
    from modules.categories.services import build_category_service
    from modules.products.repositories.django_repository import (
        ProductDjangoRepository,
    )
    from modules.suppliers.services import build_supplier_service

    return ProductService(
        repository=ProductDjangoRepository(),
        category_service=build_category_service(),
        supplier_service=build_supplier_service(),
    )
