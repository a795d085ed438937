"""Catalog error taxonomy.

Every business-rule violation raised by the Service Layer is one of three
kinds.  The request layer translates them into HTTP responses using
``status_code``:

- ``NotFound`` (404): a referenced entity id does not resolve.
- ``Conflict`` (409): a uniqueness rule (name, email) would be violated.
- ``InvalidArgument`` (400): a semantic rule was violated (self-parenting,
  sell price below cost, category with children on delete, field
  constraints).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:
    from modules.core.validation import Violation


class CatalogError(Exception):
    """Base class for domain errors surfaced to the caller."""

    status_code = 500
    code = "error"
    error_type = "server_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        violations: Optional[List[Violation]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value
        self.violations = list(violations or [])

    def to_dict(self) -> Dict[str, Any]:
        """Render the error in the ``{"type", "errors"}`` response format."""
        if self.violations:
            errors = [
                {"code": v.code, "detail": v.message, "attr": v.field}
                for v in self.violations
            ]
        else:
            errors = [{"code": self.code, "detail": self.message, "attr": self.field}]
        return {"type": self.error_type, "errors": errors}


class NotFound(CatalogError):
    status_code = 404
    code = "not_found"
    error_type = "client_error"


class Conflict(CatalogError):
    status_code = 409
    code = "conflict"
    error_type = "client_error"


class InvalidArgument(CatalogError):
    status_code = 400
    code = "invalid"
    error_type = "validation_error"
