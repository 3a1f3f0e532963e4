import pytest
from fastapi.testclient import TestClient


"""Test fixtures and helpers for backend tests.

Provides `prepare_db`, an in-memory SQLite `Database` that is safe to share
with `TestClient` threads (StaticPool, foreign keys on), and `client`, a
`TestClient` whose app uses that database. The app lifespan creates the
schema; seeding is disabled so every test starts from empty tables.
"""


@pytest.fixture
def prepare_db():
    from app.db import Database, make_engine
    from app.schema import create_schema

    database = Database(make_engine("sqlite:///:memory:"))
    create_schema(database)
    yield database
    database.dispose()


@pytest.fixture
def client(prepare_db):
    from app.main import create_app

    app = create_app(database=prepare_db)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_item(client):
    """Create an item through the API and return the response body."""

    def _make(name="PC Desktop", location="Lab 1", quantity=0, **extra):
        resp = client.post(
            "/items", json={"name": name, "location": location, "quantity": quantity, **extra}
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
