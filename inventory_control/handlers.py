"""HTTP handlers that translate requests into service calls."""

from __future__ import annotations

import json
import logging
import re
from http import HTTPStatus
from typing import Any, Protocol, TypeVar

from flask import Response, request

from inventory_control.models import Category, InventoryError, Product

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_Model = TypeVar("_Model", Category, Product)


class _CategoryUseCase(Protocol):
    def create(self, category: Category) -> None: ...

    def read(self, category_id: int) -> Category: ...

    def update(self, category: Category) -> None: ...

    def delete(self, category_id: int) -> None: ...


class _ProductUseCase(Protocol):
    def create(self, product: Product) -> Any: ...

    def read(self, product_id: int) -> Product: ...

    def update(self, product: Product) -> None: ...

    def delete(self, product_id: int) -> None: ...


def _parse_id(text: str) -> int:
    """Parse a decimal 64-bit integer, optionally signed."""
    if not _ID_PATTERN.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return value


def _bind(model: type[_Model]) -> _Model:
    """Decode the request body into a model; an empty body gives zero values."""
    body = request.get_data()
    if not body:
        return model()
    if not request.is_json:
        raise ValueError("unsupported media type")
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    return model.from_dict(data)


def _respond(status: HTTPStatus, payload: Any = None) -> Response:
    if status is HTTPStatus.NO_CONTENT:
        return Response(status=int(status))
    body = json.dumps(payload) + "\n"
    return Response(body, status=int(status), mimetype="application/json")


def _status_text(status: HTTPStatus) -> Response:
    return _respond(status, status.phrase)


class CategoryHandler:
    """Category endpoints."""

    def __init__(self, service: _CategoryUseCase, logger: logging.Logger) -> None:
        self.service = service
        self.logger = logger

    def _fail(self, message: str, exc: Exception, status: HTTPStatus) -> Response:
        self.logger.error(message, extra={"error": str(exc)})
        return _status_text(status)

    def create(self) -> Response:
        """Create a category from the JSON body."""
        try:
            category = _bind(Category)
        except ValueError as exc:
            return self._fail("error parsing JSON", exc, HTTPStatus.BAD_REQUEST)
        try:
            self.service.create(category)
        except InventoryError as exc:
            return self._fail(
                "services.categories.Create", exc, HTTPStatus.INTERNAL_SERVER_ERROR
            )
        return _status_text(HTTPStatus.CREATED)

    def read(self, id: str) -> Response:
        """Return the category named by the path id."""
        try:
            category_id = _parse_id(id)
        except ValueError as exc:
            return self._fail("Invalid ID", exc, HTTPStatus.BAD_REQUEST)
        try:
            category = self.service.read(category_id)
        except InventoryError as exc:
            return self._fail("services.categories.Read", exc, HTTPStatus.NOT_FOUND)
        return _respond(HTTPStatus.OK, category.to_dict())

    def update(self) -> Response:
        """Update a category from the JSON body."""
        try:
            category = _bind(Category)
        except ValueError as exc:
            return self._fail("error parsing JSON", exc, HTTPStatus.BAD_REQUEST)
        try:
            self.service.update(category)
        except InventoryError as exc:
            return self._fail(
                "services.categories.Update", exc, HTTPStatus.INTERNAL_SERVER_ERROR
            )
        return _status_text(HTTPStatus.CREATED)

    def delete(self, id: str) -> Response:
        """Delete the category named by the path id."""
        try:
            category_id = _parse_id(id)
        except ValueError as exc:
            return self._fail("Invalid ID", exc, HTTPStatus.BAD_REQUEST)
        try:
            self.service.delete(category_id)
        except InventoryError as exc:
            return self._fail("services.categories.Delete", exc, HTTPStatus.NOT_FOUND)
        return _respond(HTTPStatus.NO_CONTENT)


class ProductHandler:
    """Product endpoints."""

    def __init__(self, service: _ProductUseCase, logger: logging.Logger) -> None:
        self.service = service
        self.logger = logger

    def _fail(self, message: str, exc: Exception, status: HTTPStatus) -> Response:
        self.logger.error(message, extra={"error": str(exc)})
        return _status_text(status)

    def create(self) -> Response:
        """Create a product from the JSON body and echo the request back."""
        try:
            product = _bind(Product)
        except ValueError as exc:
            return self._fail("error parsing JSON", exc, HTTPStatus.BAD_REQUEST)
        try:
            self.service.create(product)
        except InventoryError as exc:
            return self._fail(
                "services.product.Create", exc, HTTPStatus.INTERNAL_SERVER_ERROR
            )
        return _respond(HTTPStatus.CREATED, product.to_dict())

    def read(self, id: str) -> Response:
        """Return the product named by the path id."""
        try:
            product_id = _parse_id(id)
        except ValueError as exc:
            return self._fail("Invalid ID", exc, HTTPStatus.BAD_REQUEST)
        try:
            product = self.service.read(product_id)
        except InventoryError as exc:
            return self._fail("services.products.Read", exc, HTTPStatus.NOT_FOUND)
        return _respond(HTTPStatus.OK, product.to_dict())

    def update(self) -> Response:
        """Update a product from the JSON body and echo the request back."""
        try:
            product = _bind(Product)
        except ValueError as exc:
            return self._fail("error parsing JSON", exc, HTTPStatus.BAD_REQUEST)
        try:
            self.service.update(product)
        except InventoryError as exc:
            return self._fail(
                "services.product.Update", exc, HTTPStatus.INTERNAL_SERVER_ERROR
            )
        return _respond(HTTPStatus.CREATED, product.to_dict())

    def delete(self, id: str) -> Response:
        """Delete the product named by the path id; an unparsable id counts as 0."""
        try:
            product_id = _parse_id(id)
        except ValueError as exc:
            self.logger.error("Invalid ID", extra={"error": str(exc)})
            product_id = 0
        try:
            self.service.delete(product_id)
        except InventoryError as exc:
            return self._fail("services.products.Delete", exc, HTTPStatus.NOT_FOUND)
        return _respond(HTTPStatus.NO_CONTENT)


class Handlers:
    """The category and product handlers sharing one logger."""

    def __init__(
        self,
        categories: _CategoryUseCase,
        products: _ProductUseCase,
        logger: logging.Logger,
    ) -> None:
        self.categories = CategoryHandler(categories, logger)
        self.products = ProductHandler(products, logger)