"""Category model with optional single parent.

Business rules implemented:
- Name is globally unique (exact, case-sensitive match).
- A category never parents itself (enforced at service layer and by a
  CHECK constraint).
- Categories with children cannot be removed (``PROTECT`` on ``parent``).
- Removal is physical; there is no soft delete.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Category(BaseModel):
    """Named grouping for products, optionally nested under a parent."""

    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(null=True, blank=True, default=None)  # noqa: DJ01
    icon = models.CharField(max_length=50, null=True, blank=True, default=None)  # noqa: DJ01
    parent = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="children",
        db_column="parent_id",
    )

    class Meta:
        db_table = "category"
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(parent=models.F("id")),
                name="category_not_own_parent",
            ),
        ]

    def __str__(self) -> str:
        return self.name
