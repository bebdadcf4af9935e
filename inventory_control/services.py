"""Validation rules applied before records reach storage."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from inventory_control.models import (
    Category,
    FieldRequiredError,
    InventoryError,
    NegativeError,
    Product,
    TooManyItemsError,
)

_MAX_NAME_BYTES = 100


class _CategoryRepo(Protocol):
    def create(self, category: Category) -> None: ...

    def read(self, category_id: int) -> Category: ...

    def update(self, category: Category) -> None: ...

    def delete(self, category_id: int) -> None: ...


class _ProductRepo(Protocol):
    def create(self, product: Product) -> int: ...

    def read(self, product_id: int) -> Product: ...

    def update(self, product: Product) -> None: ...

    def delete(self, product_id: int) -> None: ...


@contextmanager
def _storage_step(operation: str) -> Iterator[None]:
    try:
        yield
    except InventoryError as exc:
        raise InventoryError(f"{operation}: {exc}") from exc


def _check_category_name(name: str) -> None:
    if not name:
        raise FieldRequiredError("name")
    if len(name.encode("utf-8")) > _MAX_NAME_BYTES:
        raise TooManyItemsError()


def _check_positive_id(value: int) -> None:
    if value <= 0:
        raise NegativeError("id")


class CategoryService:
    """Category use cases."""

    def __init__(self, storage: _CategoryRepo) -> None:
        self.storage = storage

    def create(self, category: Category) -> None:
        """Validate and store a new category; storage assigns its id."""
        _check_category_name(category.name)
        with _storage_step("storage.categories.Create"):
            self.storage.create(category)

    def read(self, category_id: int) -> Category:
        """Return the category with the given id."""
        _check_positive_id(category_id)
        with _storage_step("storage.categories.Read"):
            return self.storage.read(category_id)

    def update(self, category: Category) -> None:
        """Validate and store changes to an existing category."""
        _check_positive_id(category.id)
        _check_category_name(category.name)
        with _storage_step("storage.categories.Update"):
            self.storage.update(category)

    def delete(self, category_id: int) -> None:
        """Remove the category with the given id."""
        _check_positive_id(category_id)
        with _storage_step("storage.categories.Delete"):
            self.storage.delete(category_id)


def _check_amounts(product: Product) -> None:
    if product.price < 0:
        raise NegativeError("price")
    if product.quantity < 0:
        raise NegativeError("quantity")


class ProductService:
    """Product use cases."""

    def __init__(self, storage: _ProductRepo) -> None:
        self.storage = storage

    def create(self, product: Product) -> int:
        """Validate and store a new product, returning the id storage gave it."""
        if not product.name:
            raise FieldRequiredError("name")
        _check_amounts(product)
        with _storage_step("storage.products.Create"):
            return self.storage.create(product)

    def read(self, product_id: int) -> Product:
        """Return the product with the given id."""
        with _storage_step("storage.products.Read"):
            return self.storage.read(product_id)

    def update(self, product: Product) -> None:
        """Validate and store changes to an existing product."""
        if product.id <= 0:
            raise FieldRequiredError("id")
        if not product.name:
            raise FieldRequiredError("name")
        _check_amounts(product)
        if product.category_id <= 0:
            raise FieldRequiredError("category_id")
        with _storage_step("storage.products.Update"):
            self.storage.update(product)

    def delete(self, product_id: int) -> None:
        """Remove the product with the given id."""
        _check_positive_id(product_id)
        with _storage_step("storage.products.Delete"):
            self.storage.delete(product_id)