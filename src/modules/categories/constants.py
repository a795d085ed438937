"""Category field constraints (plain data, see ``modules.core.validation``)."""

CATEGORY_CONSTRAINTS: dict[str, dict] = {
    "name": {"required": True, "min_length": 1, "max_length": 100},
    "icon": {"max_length": 50},
}
