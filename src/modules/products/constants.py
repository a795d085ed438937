"""Product field constraints and pricing constants.

Constraint tables are plain data checked by ``modules.core.validation``.
"""

from decimal import Decimal

from modules.products.models import Unit

MONEY_QUANTUM = Decimal("0.01")

# Largest value a ``DecimalField(max_digits=10, decimal_places=2)`` column holds.
MAX_DECIMAL_VALUE = Decimal("99999999.99")

# Upper bound of ``PositiveIntegerField`` on every supported backend.
MAX_STOCK_QUANTITY = 2147483647

PRODUCT_CONSTRAINTS: dict[str, dict] = {
    "name": {"required": True, "min_length": 1, "max_length": 200},
    "category_id": {"required": True},
    "cost_price": {
        "required": True,
        "gt": Decimal("0"),
        "le": MAX_DECIMAL_VALUE,
        "decimal_places": 2,
    },
    "sell_price": {
        "required": True,
        "gt": Decimal("0"),
        "le": MAX_DECIMAL_VALUE,
        "decimal_places": 2,
    },
    "profit_margin_percent": {
        "ge": Decimal("0"),
        "le": MAX_DECIMAL_VALUE,
        "decimal_places": 2,
    },
    "promotional_price": {
        "gt": Decimal("0"),
        "le": MAX_DECIMAL_VALUE,
        "decimal_places": 2,
    },
    "stock_quantity": {"required": True, "ge": 0, "le": MAX_STOCK_QUANTITY},
    "unit": {"required": True, "choices": frozenset(Unit.values)},
    "active": {"required": True},
}
