# inventory-control

A small HTTP service that keeps a catalogue of product categories and
products, with their prices and stock quantities. Records are stored in a
SQLite database file.

## Installing

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
inventory-control [--db PATH] [--port PORT] [--log-level LEVEL]
```

| Option        | Default        | Meaning                                   |
|---------------|----------------|-------------------------------------------|
| `--db`        | `inventory.db` | SQLite database file (created if missing) |
| `--port`      | `8080`         | port to listen on, on all interfaces      |
| `--log-level` | `info`         | `debug`, `info`, `warn` or `error`        |

An unknown log level falls back to `info`. The tables are created when the
database is opened, so no separate setup step is needed.

The server writes its logs as JSON lines to standard output; each line has
`time`, `level` and `msg` keys, plus extra fields such as `method`, `path`,
`status`, `latency_ms` and `ip` for every completed request. On `Ctrl+C`
(or `SIGTERM`) it stops accepting requests, closes the database and exits.
If the database cannot be opened or the port cannot be bound, the command
prints the error and exits with status 1.

## HTTP API

Request bodies are JSON and need a `Content-Type: application/json` header;
an empty body is read as a record with all fields at their zero values.

| Method | Path                   | Body                                                          |
|--------|------------------------|---------------------------------------------------------------|
| GET    | `/categories/<id>`     |                                                               |
| POST   | `/categories/create`   | `{"name": "..."}`                                             |
| PUT    | `/categories/update`   | `{"id": 1, "name": "..."}`                                    |
| DELETE | `/categories/<id>`     |                                                               |
| GET    | `/products/<id>`       |                                                               |
| POST   | `/products/create`     | `{"name": "...", "price": 0, "quantity": 0, "category_id": 1}` |
| PUT    | `/products/update`     | `{"id": 1, "name": "...", "price": 0, "quantity": 0, "category_id": 1}` |
| DELETE | `/products/<id>`       |                                                               |

Responses:

* `201 Created` after a successful create or update; category endpoints
  return the string `"Created"`, product endpoints echo the request body
  back (the id given to a new product is not filled in);
* `200 OK` with the record for a successful read;
* `204 No Content` with an empty body after a successful delete;
* `400 Bad Request` for a malformed body or, on category reads and deletes
  and product reads, a non-numeric id;
* `404 Not Found` when a read or delete fails, including ids that are zero
  or negative; on `DELETE /products/<id>` a non-numeric id is treated as 0
  and so also gives `404`;
* `500 Internal Server Error` when validation or storage rejects a write.

Validation rules:

* a category needs a non-empty name of at most 100 bytes in UTF-8, and
  category names must be unique;
* a product needs a name, and its price and quantity may not be negative;
* on update, ids (and a product's `category_id`) must be positive;
* updating a category that does not exist is an error; updating a product
  that does not exist succeeds without changing anything.

## Using it as a library

The layers can be used directly, without the HTTP server:

```python
from inventory_control.models import Category, FieldRequiredError
from inventory_control.services import CategoryService
from inventory_control.storage import CategoryStorage, Database

with Database("inventory.db") as db:
    categories = CategoryService(CategoryStorage(db))

    books = Category(name="Books")
    categories.create(books)          # books.id is filled in
    print(categories.read(books.id).to_dict())

    try:
        categories.create(Category(name=""))
    except FieldRequiredError as err:
        print(err)                    # field is required: name
```

`Database(":memory:")` gives a throwaway in-memory database.
`ProductService.create` returns the id assigned to the new product.

All failures derive from `inventory_control.models.InventoryError`.
Validation raises `FieldRequiredError`, `NegativeError` or
`TooManyItemsError`. The storage classes raise `NotFoundError` for a
missing record and `StorageError` for a failed query; the services wrap
storage failures in an `InventoryError` whose message names the operation
and whose `__cause__` is the original error.

To wire everything up yourself, `inventory_control.app.create_app(db_path,
port, logger)` returns an `App` with `run()` and `stop(timeout)`, and
`inventory_control.logs.new_logger(level)` gives the JSON logger.

## What it does not do

The service reads no configuration or environment files; everything is set
by the command-line options above. Storage is SQLite only, and there is no
separate schema migration command: the two tables are created on first use
and are never altered afterwards.