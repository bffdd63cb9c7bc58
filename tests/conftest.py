# tests/conftest.py
import json
import pytest
from fastapi.testclient import TestClient
from preview_server.config import load_settings
from preview_server.main import create_app

LISTINGS = [
    {"id": 1, "status": "approved", "created_at": "2024-01-01T10:00:00Z", "tag_ids": [5], "tags": ["SUV"], "seller_id": 7},
    {"id": 2, "status": "Sold", "created_at": "2024-03-01T10:00:00Z", "tag_ids": [], "tags": ["Clearance Sale"]},
    {"id": 3, "status": "pending", "created_at": "2024-05-01T10:00:00Z", "tag_ids": [5], "tags": []},
    {"id": "4", "status": "BOOKED", "created_at": None, "tag_ids": ["5"], "tags": [], "sellerId": 9},
    {"id": 5, "status": "approved", "created_at": "not a date", "tag_ids": [109], "tags": []},
    {"id": 6, "status": "rejected", "created_at": "2024-02-01", "tags": ["clearance-sale"]},
    {"id": 7, "status": "approved", "created_at": "2024-02-15", "tag_ids": [8], "tags": ["sedan"]},
]

TAGS = [
    {"id": 5, "slug": "suv", "name": "SUV"},
    {"id": 8, "slug": "sedan", "name": "Sedan"},
    {"id": "109", "slug": "clearance-sale", "name": "Clearance Sale"},
]

BLOGS = [
    {"id": 1, "title": "old", "created_at": "2023-01-01"},
    {"id": 2, "title": "new", "created_at": "2024-06-01T00:00:00+00:00"},
    {"id": "3", "title": "undated"},
]

REVIEWS = [{"id": i, "text": f"review {i}"} for i in range(1, 6)]


@pytest.fixture
def root(tmp_path):
    (tmp_path / "backend").mkdir()
    return tmp_path


@pytest.fixture
def write_snapshot(root):
    def _write(name, data):
        path = root / "backend" / name
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def seeded(write_snapshot):
    write_snapshot("listings.json", LISTINGS)
    write_snapshot("tags.json", TAGS)
    write_snapshot("blogs.json", BLOGS)
    write_snapshot("reviews.json", REVIEWS)
    write_snapshot("categories.json", [{"id": 1, "name": "Cars"}])
    write_snapshot("models.json", [{"id": 1, "name": "Corolla"}])


@pytest.fixture
def settings(root):
    return load_settings(root_dir=root)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c
