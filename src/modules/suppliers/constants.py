"""Supplier field constraints (plain data, see ``modules.core.validation``)."""

PHONE_PATTERN = r"[0-9+\-\s()]*"

SUPPLIER_CONSTRAINTS: dict[str, dict] = {
    "name": {"required": True, "min_length": 1, "max_length": 200},
    "email": {"email": True, "max_length": 100},
    "phone": {"max_length": 20, "pattern": PHONE_PATTERN},
    "pix_key": {"max_length": 100},
}
