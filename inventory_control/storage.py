"""SQLite-backed persistence for categories and products."""

from __future__ import annotations

import sqlite3
import threading
from os import PathLike
from typing import Any

from inventory_control.models import Category, InventoryError, NotFoundError, Product

_SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    category_id INTEGER PRIMARY KEY AUTOINCREMENT,
    category_name TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS products (
    product_id INTEGER PRIMARY KEY AUTOINCREMENT,
    product_name TEXT NOT NULL,
    price INTEGER NOT NULL,
    quantity INTEGER NOT NULL,
    category_id INTEGER NOT NULL REFERENCES categories (category_id)
);
"""


class StorageError(InventoryError):
    """A database operation failed."""


class Database:
    """A thread-safe SQLite connection holding the inventory schema."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = str(path)
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(
                self.path, isolation_level=None, check_same_thread=False
            )
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise StorageError(f"db connect error: {exc}") from exc

    def query_row(self, query: str, *args: Any) -> tuple[Any, ...] | None:
        """Run a query and return its first row, or None when there is none."""
        with self._lock:
            try:
                return self._conn.execute(query, args).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc

    def execute(self, query: str, *args: Any) -> int:
        """Run a statement and return the number of rows it affected."""
        with self._lock:
            try:
                return self._conn.execute(query, args).rowcount
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc

    def _insert(self, query: str, *args: Any) -> int:
        with self._lock:
            try:
                cursor = self._conn.execute(query, args)
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc
            return cursor.lastrowid

    def close(self) -> None:
        """Close the connection."""
        with self._lock:
            self._conn.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class CategoryStorage:
    """Category rows."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def create(self, category: Category) -> None:
        """Insert the category and set its id to the one assigned."""
        try:
            category.id = self.db._insert(
                "INSERT INTO categories (category_name) VALUES (?)", category.name
            )
        except StorageError as exc:
            raise StorageError(f"row INSERT error: {exc}") from exc

    def read(self, category_id: int) -> Category:
        """Return the category with the given id."""
        try:
            row = self.db.query_row(
                "SELECT category_id, category_name FROM categories WHERE category_id = ?",
                category_id,
            )
        except StorageError as exc:
            raise StorageError(f"row SELECT error: {exc}") from exc
        if row is None:
            raise NotFoundError(f"row SELECT error: category {category_id} not found")
        return Category(id=row[0], name=row[1])

    def update(self, category: Category) -> None:
        """Rename an existing category."""
        try:
            affected = self.db.execute(
                "UPDATE categories SET category_name = ? WHERE category_id = ?",
                category.name,
                category.id,
            )
        except StorageError as exc:
            raise StorageError(f"row UPDATE error: {exc}") from exc
        if affected == 0:
            raise NotFoundError(f"category with id {category.id} does not exist")

    def delete(self, category_id: int) -> None:
        """Delete the category with the given id."""
        try:
            affected = self.db.execute(
                "DELETE FROM categories WHERE category_id = ?", category_id
            )
        except StorageError as exc:
            raise StorageError(f"row DELETE error: {exc}") from exc
        if affected == 0:
            raise NotFoundError("not found")


class ProductStorage:
    """Product rows."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def create(self, product: Product) -> int:
        """Insert the product and return the id assigned to it."""
        try:
            return self.db._insert(
                "INSERT INTO products (product_name, price, quantity, category_id) "
                "VALUES (?, ?, ?, ?)",
                product.name,
                product.price,
                product.quantity,
                product.category_id,
            )
        except StorageError as exc:
            raise StorageError(f"row INSERT error: {exc}") from exc

    def read(self, product_id: int) -> Product:
        """Return the product with the given id."""
        try:
            row = self.db.query_row(
                "SELECT product_id, product_name, price, quantity, category_id "
                "FROM products WHERE product_id = ?",
                product_id,
            )
        except StorageError as exc:
            raise StorageError(f"row SELECT error: {exc}") from exc
        if row is None:
            raise NotFoundError(f"row SELECT error: product {product_id} not found")
        return Product(
            id=row[0], name=row[1], price=row[2], quantity=row[3], category_id=row[4]
        )

    def update(self, product: Product) -> None:
        """Overwrite the stored fields of a product."""
        try:
            self.db.execute(
                "UPDATE products SET product_name = ?, price = ?, quantity = ?, "
                "category_id = ? WHERE product_id = ?",
                product.name,
                product.price,
                product.quantity,
                product.category_id,
                product.id,
            )
        except StorageError as exc:
            raise StorageError(f"row UPDATE error: {exc}") from exc

    def delete(self, product_id: int) -> None:
        """Delete the product with the given id."""
        try:
            affected = self.db.execute(
                "DELETE FROM products WHERE product_id = ?", product_id
            )
        except StorageError as exc:
            raise StorageError(f"row DELETE error: {exc}") from exc
        if affected == 0:
            raise NotFoundError("not found")