"""Category domain exceptions.

Raised by the Service Layer when business rules are violated.  Each one
belongs to the catalog error taxonomy in ``modules.core.exceptions``.
"""

from __future__ import annotations

from modules.core.exceptions import Conflict, InvalidArgument, NotFound


class CategoryNotFound(NotFound):
    """The requested (or referenced parent) category does not exist."""


class CategoryAlreadyExists(Conflict):
    """A category with the same name already exists."""


class CategorySelfParenting(InvalidArgument):
    """A category was given its own id as parent."""


class CategoryHasChildren(InvalidArgument):
    """The category still has subcategories and cannot be removed."""


class CategoryInUse(InvalidArgument):
    """Products still reference the category, so it cannot be removed."""
