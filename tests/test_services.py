import pytest

from inventory_control.models import (
    Category,
    FieldRequiredError,
    InventoryError,
    NegativeError,
    NotFoundError,
    Product,
    TooManyItemsError,
)
from inventory_control.services import CategoryService, ProductService


class FakeRepo:
    def __init__(self, error=None, result=None):
        self.calls = []
        self.error = error
        self.result = result

    def _call(self, name, arg):
        self.calls.append((name, arg))
        if self.error is not None:
            raise self.error
        return self.result

    def create(self, item):
        return self._call("create", item)

    def read(self, item_id):
        return self._call("read", item_id)

    def update(self, item):
        return self._call("update", item)

    def delete(self, item_id):
        return self._call("delete", item_id)


def test_category_create_happy_path():
    repo = FakeRepo()
    CategoryService(repo).create(Category(name="Books"))
    assert repo.calls == [("create", Category(name="Books"))]


@pytest.mark.parametrize(
    "category, error, message",
    [
        (Category(name=""), FieldRequiredError, "field is required: name"),
        (Category(name="a" * 101), TooManyItemsError, "too many items"),
    ],
)
def test_category_create_invalid(category, error, message):
    repo = FakeRepo()
    with pytest.raises(error) as excinfo:
        CategoryService(repo).create(category)
    assert str(excinfo.value) == message
    assert repo.calls == []


def test_category_name_of_exactly_limit_is_accepted():
    repo = FakeRepo()
    CategoryService(repo).create(Category(name="a" * 100))
    assert len(repo.calls) == 1


def test_category_name_length_counts_bytes():
    repo = FakeRepo()
    with pytest.raises(TooManyItemsError):
        CategoryService(repo).create(Category(name="é" * 51))
    assert repo.calls == []


def test_category_create_wraps_storage_error():
    cause = InventoryError("duplicate")
    with pytest.raises(InventoryError) as excinfo:
        CategoryService(FakeRepo(error=cause)).create(Category(name="Books"))
    assert str(excinfo.value) == "storage.categories.Create: duplicate"
    assert excinfo.value.__cause__ is cause


def test_category_update_happy_path():
    repo = FakeRepo()
    CategoryService(repo).update(Category(id=1, name="Books"))
    assert repo.calls == [("update", Category(id=1, name="Books"))]


@pytest.mark.parametrize(
    "category, error, message",
    [
        (Category(id=0, name="Books"), NegativeError, "cannot be zero or negative: id"),
        (Category(id=-1, name="Books"), NegativeError, "cannot be zero or negative: id"),
        (Category(id=1, name=""), FieldRequiredError, "field is required: name"),
        (Category(id=1, name="a" * 101), TooManyItemsError, "too many items"),
    ],
)
def test_category_update_invalid(category, error, message):
    repo = FakeRepo()
    with pytest.raises(error) as excinfo:
        CategoryService(repo).update(category)
    assert str(excinfo.value) == message
    assert repo.calls == []


def test_category_read_happy_path():
    repo = FakeRepo(result=Category(id=1, name="Test category"))
    assert CategoryService(repo).read(1) == Category(id=1, name="Test category")
    assert repo.calls == [("read", 1)]


@pytest.mark.parametrize("category_id", [0, -1])
def test_category_read_invalid_id(category_id):
    repo = FakeRepo()
    with pytest.raises(NegativeError) as excinfo:
        CategoryService(repo).read(category_id)
    assert str(excinfo.value) == "cannot be zero or negative: id"
    assert repo.calls == []


def test_category_read_wraps_not_found():
    cause = NotFoundError("not found")
    with pytest.raises(InventoryError) as excinfo:
        CategoryService(FakeRepo(error=cause)).read(5)
    assert str(excinfo.value) == "storage.categories.Read: not found"
    assert excinfo.value.__cause__ is cause


def test_category_delete():
    repo = FakeRepo()
    CategoryService(repo).delete(3)
    assert repo.calls == [("delete", 3)]


def test_category_delete_invalid_id():
    repo = FakeRepo()
    with pytest.raises(NegativeError):
        CategoryService(repo).delete(0)
    assert repo.calls == []


def test_product_create_returns_storage_id():
    repo = FakeRepo(result=9)
    product = Product(name="Pen", price=5, quantity=3, category_id=1)
    assert ProductService(repo).create(product) == 9
    assert repo.calls == [("create", product)]


def test_product_create_allows_zero_amounts():
    repo = FakeRepo(result=1)
    assert ProductService(repo).create(Product(name="Free", price=0, quantity=0)) == 1


@pytest.mark.parametrize(
    "product, error, message",
    [
        (Product(name=""), FieldRequiredError, "field is required: name"),
        (Product(name="Pen", price=-1), NegativeError, "cannot be zero or negative: price"),
        (Product(name="Pen", quantity=-1), NegativeError, "cannot be zero or negative: quantity"),
    ],
)
def test_product_create_invalid(product, error, message):
    repo = FakeRepo()
    with pytest.raises(error) as excinfo:
        ProductService(repo).create(product)
    assert str(excinfo.value) == message
    assert repo.calls == []


@pytest.mark.parametrize(
    "product, error, field",
    [
        (Product(id=0, name="Pen", category_id=1), FieldRequiredError, "id"),
        (Product(id=1, name="", category_id=1), FieldRequiredError, "name"),
        (Product(id=1, name="Pen", price=-2, category_id=1), NegativeError, "price"),
        (Product(id=1, name="Pen", quantity=-2, category_id=1), NegativeError, "quantity"),
        (Product(id=1, name="Pen", category_id=0), FieldRequiredError, "category_id"),
    ],
)
def test_product_update_invalid(product, error, field):
    repo = FakeRepo()
    with pytest.raises(error) as excinfo:
        ProductService(repo).update(product)
    assert excinfo.value.field == field
    assert repo.calls == []


def test_product_update_happy_path():
    repo = FakeRepo()
    product = Product(id=1, name="Pen", price=2, quantity=3, category_id=4)
    ProductService(repo).update(product)
    assert repo.calls == [("update", product)]


def test_product_read_does_not_validate_id():
    repo = FakeRepo(result=Product(id=0))
    assert ProductService(repo).read(0) == Product(id=0)
    assert repo.calls == [("read", 0)]


def test_product_read_wraps_error():
    with pytest.raises(InventoryError) as excinfo:
        ProductService(FakeRepo(error=NotFoundError("gone"))).read(2)
    assert str(excinfo.value) == "storage.products.Read: gone"


def test_product_delete_invalid_id():
    repo = FakeRepo()
    with pytest.raises(NegativeError):
        ProductService(repo).delete(-3)
    assert repo.calls == []


def test_product_delete_wraps_error():
    with pytest.raises(InventoryError) as excinfo:
        ProductService(FakeRepo(error=NotFoundError("not found"))).delete(2)
    assert str(excinfo.value) == "storage.products.Delete: not found"