"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.  Each one
belongs to the catalog error taxonomy in ``modules.core.exceptions``.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, InvalidArgument, NotFound


class ProductAlreadyExists(Conflict):
    """A product with the same name already exists (deleted or not)."""


class ProductNotFound(NotFound):
    """The requested product does not exist or has been soft-deleted."""


class InvalidPricing(InvalidArgument):
    """The sell price would fall below the cost price."""
