"""Supplier domain exceptions.

Raised by the Service Layer when business rules are violated.  Each one
belongs to the catalog error taxonomy in ``modules.core.exceptions``.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, NotFound


class SupplierNotFound(NotFound):
    """The requested supplier does not exist."""


class SupplierAlreadyExists(Conflict):
    """A supplier with the same name or email already exists.

    ``field`` names which of the two collided.
    """
