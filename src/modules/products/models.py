"""Product model with pricing and stock lifecycle.

Business rules implemented:
- Name is unique among non-deleted products (partial UNIQUE index); the
  service additionally rejects names held by soft-deleted rows.
- Exactly one category is required (``PROTECT``).
- Supplier is optional.  The foreign key has no database constraint, so
  removing a supplier leaves a dangling ``fornecedor_id`` that reads back
  as ``None`` when joined.
- ``sell_price >= cost_price`` and positive prices (CHECK constraints).
- Soft delete via ``deleted_at`` (inherited from SoftDeleteModel).
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel


class Unit(models.TextChoices):
    UN = "UN", "Unidade"
    KG = "KG", "Quilograma"
    LT = "LT", "Litro"
    CX = "CX", "Caixa"
    PC = "PC", "Pacote"
    MT = "MT", "Metro"
    DZ = "DZ", "Dúzia"
    ML = "ML", "Mililitro"
    G = "G", "Grama"


class Product(SoftDeleteModel):
    """Sellable item with cost/sell pricing and stock quantity."""

    name = models.CharField(max_length=200)
    category = models.ForeignKey(
        "categories.Category",
        on_delete=models.PROTECT,
        related_name="products",
        db_column="categoria_id",
    )
    supplier = models.ForeignKey(
        "suppliers.Supplier",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name="products",
        db_column="fornecedor_id",
    )
    cost_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    sell_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    profit_margin_percent = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )
    promotional_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        default=None,
    )
    stock_quantity = models.PositiveIntegerField(default=0)
    unit = models.CharField(max_length=2, choices=Unit.choices, default=Unit.UN)
    active = models.BooleanField(default=True)
    notes = models.TextField(null=True, blank=True, default=None)  # noqa: DJ01

    class Meta:
        db_table = "product"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["active"], name="product_active_idx"),
            models.Index(fields=["sell_price"], name="product_sell_price_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["name"],
                condition=models.Q(deleted_at__isnull=True),
                name="product_name_unique_alive",
            ),
            models.CheckConstraint(
                condition=models.Q(cost_price__gt=0),
                name="product_cost_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(sell_price__gte=models.F("cost_price")),
                name="product_sell_not_below_cost",
            ),
            models.CheckConstraint(
                condition=models.Q(profit_margin_percent__gte=0),
                name="product_margin_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.unit})"
