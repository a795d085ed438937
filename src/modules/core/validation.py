"""Explicit field validation against plain-data constraint tables.

Each aggregate declares its constraints as a ``dict`` in its
``constants.py``, e.g.::

    CATEGORY_CONSTRAINTS = {
        "name": {"required": True, "max_length": 100},
        "icon": {"max_length": 50},
    }

Supported keys: ``required``, ``min_length``, ``max_length``, ``gt``,
``ge``, ``le``, ``decimal_places``, ``choices``, ``pattern``, ``email``.

Services call ``ensure_valid`` before every create/update.  All
violations are collected, not only the first one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Mapping

from email_validator import EmailNotValidError, validate_email

from modules.core.exceptions import InvalidArgument

Constraints = Mapping[str, Mapping[str, Any]]


@dataclass(frozen=True)
class Violation:
    """A single failed constraint."""

    field: str
    code: str
    message: str


def _check_value(field: str, value: Any, rules: Mapping[str, Any]) -> List[Violation]:
    violations: List[Violation] = []

    if isinstance(value, str):
        if rules.get("required") and not value.strip():
            violations.append(Violation(field, "blank", f"{field} must not be blank."))
        min_length = rules.get("min_length")
        if min_length is not None and len(value) < min_length:
            violations.append(
                Violation(
                    field,
                    "min_length",
                    f"{field} must have at least {min_length} characters.",
                )
            )
        max_length = rules.get("max_length")
        if max_length is not None and len(value) > max_length:
            violations.append(
                Violation(
                    field,
                    "max_length",
                    f"{field} must have at most {max_length} characters.",
                )
            )
        pattern = rules.get("pattern")
        if pattern is not None and not re.fullmatch(pattern, value):
            violations.append(
                Violation(field, "invalid_format", f"{field} has an invalid format.")
            )
        if rules.get("email"):
            try:
                validate_email(value, check_deliverability=False)
            except EmailNotValidError:
                violations.append(
                    Violation(field, "invalid_email", f"{field} is not a valid email.")
                )

    if isinstance(value, Decimal) and not value.is_finite():
        violations.append(
            Violation(field, "invalid_number", f"{field} must be a finite number.")
        )
        return violations

    if isinstance(value, (int, Decimal)) and not isinstance(value, bool):
        gt = rules.get("gt")
        if gt is not None and value <= gt:
            violations.append(
                Violation(field, "min_value", f"{field} must be greater than {gt}.")
            )
        ge = rules.get("ge")
        if ge is not None and value < ge:
            violations.append(
                Violation(field, "min_value", f"{field} cannot be less than {ge}.")
            )
        le = rules.get("le")
        if le is not None and value > le:
            violations.append(
                Violation(field, "max_value", f"{field} cannot be greater than {le}.")
            )

    places = rules.get("decimal_places")
    if places is not None and isinstance(value, Decimal):
        # Trailing zeros do not count: 5.900 has two decimal places.
        exponent = value.normalize().as_tuple().exponent
        if isinstance(exponent, int) and exponent < -places:
            violations.append(
                Violation(
                    field,
                    "decimal_places",
                    f"{field} must have at most {places} decimal places.",
                )
            )

    choices = rules.get("choices")
    if choices is not None and value not in choices:
        allowed = ", ".join(sorted(str(c) for c in choices))
        violations.append(
            Violation(field, "invalid_choice", f"{field} must be one of: {allowed}.")
        )

    return violations


def validate_fields(
    data: Mapping[str, Any],
    constraints: Constraints,
    *,
    partial: bool = False,
) -> List[Violation]:
    """Return every constraint violation found in ``data``.

    With ``partial=True`` (updates) a required field may be omitted, but
    supplying it explicitly as ``None`` is still a violation.
    """
    violations: List[Violation] = []
    for field, rules in constraints.items():
        if field not in data:
            if rules.get("required") and not partial:
                violations.append(
                    Violation(field, "required", f"{field} is required.")
                )
            continue

        value = data[field]
        if value is None:
            if rules.get("required"):
                violations.append(Violation(field, "null", f"{field} may not be null."))
            continue

        violations.extend(_check_value(field, value, rules))
    return violations


def ensure_valid(
    data: Mapping[str, Any],
    constraints: Constraints,
    *,
    partial: bool = False,
) -> Dict[str, Any]:
    """Validate ``data`` and return it as a plain dict.

    Raises:
        InvalidArgument: carrying every violation found.
    """
    violations = validate_fields(data, constraints, partial=partial)
    if violations:
        first = violations[0]
        raise InvalidArgument(
            first.message,
            field=first.field,
            value=data.get(first.field),
            violations=violations,
        )
    return dict(data)
