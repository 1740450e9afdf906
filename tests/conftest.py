"""
Pytest configuration and fixtures
"""

import json

import pytest
from fastapi.testclient import TestClient

from eshop.main import create_app
from eshop.repos.cart_repo import CartRepo
from eshop.services.cart_service import CartService
from eshop.services.catalog_reader import FileCatalogReader
from eshop.services.catalog_service import CatalogService

SAMPLE_PARTS = [
    {"id": 1, "name": "Ceramic Brake Pads", "description": "Front axle pad set", "manufacturer": "Brembo",
     "category": "Brakes", "price": 64.99, "inStock": True, "stockQuantity": 10, "imageUrl": "/img/1.jpg"},
    {"id": 2, "name": "Brake Rotor", "description": "Slotted front rotor", "manufacturer": "Brembo",
     "category": "Brakes", "price": 89.50, "inStock": True, "stockQuantity": 4, "imageUrl": "/img/2.jpg"},
    {"id": 3, "name": "Oil Filter", "description": "Spin-on filter for synthetic oil", "manufacturer": "Bosch",
     "category": "Filters", "price": 9.99, "inStock": True, "stockQuantity": 100, "imageUrl": "/img/3.jpg"},
    {"id": 4, "name": "Cabin Air Filter", "description": "Charcoal cabin filter", "manufacturer": "Mann-Filter",
     "category": "Filters", "price": 24.75, "inStock": True, "stockQuantity": 20, "imageUrl": "/img/4.jpg"},
    {"id": 5, "name": "Iridium Spark Plug", "description": "Long-life plug", "manufacturer": "NGK",
     "category": "Ignition", "price": 12.49, "inStock": True, "stockQuantity": 3, "imageUrl": "/img/5.jpg"},
    {"id": 6, "name": "Ignition Coil", "description": "Pencil coil", "manufacturer": "Denso",
     "category": "Ignition", "price": 54.00, "inStock": False, "stockQuantity": 0, "imageUrl": "/img/6.jpg"},
    {"id": 7, "name": "AGM Battery", "description": "12V battery made by bosch licence", "manufacturer": "Varta",
     "category": "Electrical", "price": 189.00, "inStock": True, "stockQuantity": 9, "imageUrl": "/img/7.jpg"},
]


def write_catalog(path, parts):
    path.write_text(json.dumps(parts), encoding="utf-8")
    return path


@pytest.fixture
def catalog_file(tmp_path):
    return write_catalog(tmp_path / "parts.json", SAMPLE_PARTS)


@pytest.fixture
def catalog_reader(catalog_file):
    return FileCatalogReader(catalog_file)


@pytest.fixture
def catalog_service(catalog_reader):
    return CatalogService(catalog_reader)


@pytest.fixture
def cart_repo():
    return CartRepo()


@pytest.fixture
def cart_service(cart_repo, catalog_service):
    return CartService(repo=cart_repo, catalog=catalog_service)


@pytest.fixture
def client(catalog_reader, cart_repo):
    app = create_app(catalog_reader=catalog_reader, cart_repo=cart_repo)
    return TestClient(app)
