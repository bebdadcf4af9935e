[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "inventory-control"
version = "0.1.0"
description = "A small HTTP service for keeping track of product categories and stock, stored in SQLite."
requires-python = ">=3.10"
keywords = ["inventory", "stock", "products", "categories", "rest", "flask", "sqlite"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Office/Business",
]
dependencies = [
    "flask",
    "werkzeug",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
inventory-control = "inventory_control.app:main"

[tool.hatch.build.targets.wheel]
packages = ["inventory_control"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
