"""
Shared fixtures: an app per request store backend, plus its test client.
"""

import io

import pytest

from travel_portal import create_app
from travel_portal.config import TestConfig

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


@pytest.fixture(params=["sqlalchemy", "memory"])
def app(request):
    """App wired to each request store implementation in turn."""
    app = create_app(TestConfig, REQUEST_STORE=request.param)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_app():
    """Factory for tests that need non-default configuration."""
    def _make(**overrides):
        overrides.setdefault("REQUEST_STORE", "memory")
        return create_app(TestConfig, **overrides)
    return _make


def pdf_upload(data=PDF_BYTES, filename="quote.pdf", mimetype="application/pdf"):
    return {"quote": (io.BytesIO(data), filename, mimetype)}


def create_request(client, **fields):
    payload = {"employeeName": "Jane Doe", "startDate": "2024-05-01"}
    payload.update(fields)
    response = client.post("/api/requests", json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()
