"""Domain records and the errors raised by the inventory layers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any


def _ensure_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    return data


def _int_field(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer")
    return value


def _str_field(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


@dataclass
class Category:
    """A product category."""

    id: int = 0
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of the category."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> Category:
        """Build a category from decoded JSON; missing fields take zero values."""
        data = _ensure_mapping(data)
        return cls(id=_int_field(data, "id"), name=_str_field(data, "name"))


@dataclass
class Product:
    """A stocked product."""

    id: int = 0
    name: str = ""
    price: int = 0
    quantity: int = 0
    category_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of the product."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> Product:
        """Build a product from decoded JSON; missing fields take zero values."""
        data = _ensure_mapping(data)
        return cls(
            id=_int_field(data, "id"),
            name=_str_field(data, "name"),
            price=_int_field(data, "price"),
            quantity=_int_field(data, "quantity"),
            category_id=_int_field(data, "category_id"),
        )


class InventoryError(Exception):
    """Base class for every error raised by the package."""


class NotFoundError(InventoryError):
    """The requested record does not exist."""


class FieldRequiredError(InventoryError):
    """A required field is empty."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"field is required: {field}")


class NegativeError(InventoryError):
    """A field holds a value that must be positive."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"cannot be zero or negative: {field}")


class TooManyItemsError(InventoryError):
    """A value exceeds its allowed size."""

    def __init__(self) -> None:
        super().__init__("too many items")