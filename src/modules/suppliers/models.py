"""Supplier model.

Business rules implemented:
- Name is globally unique.
- Email, when present, is globally unique (``NULL`` never collides).
- Removal is physical and unconditional; products keep a dangling
  optional reference (see ``modules.products.models``).
"""

from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Supplier(BaseModel):
    """External party supplying products."""

    name = models.CharField(max_length=200, unique=True)
    email = models.EmailField(max_length=100, unique=True, null=True, blank=True, default=None)  # noqa: DJ01
    phone = models.CharField(max_length=20, null=True, blank=True, default=None)  # noqa: DJ01
    pix_key = models.CharField(max_length=100, null=True, blank=True, default=None)  # noqa: DJ01

    class Meta:
        db_table = "supplier"
        ordering = ["name"]

    def save(self, *args, **kwargs) -> None:
        if self.email == "":
            self.email = None
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.name
