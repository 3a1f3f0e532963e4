import importlib

import pytest


def reload_config():
    import app.config as conf

    importlib.reload(conf)
    return conf


@pytest.fixture
def restore_modules(monkeypatch):
    yield
    monkeypatch.undo()
    import app.main as main

    reload_config()
    importlib.reload(main)


def test_main_uses_settings(monkeypatch, restore_modules):
    monkeypatch.setenv("PROJECT_NAME", "smoke-test-app")
    monkeypatch.setenv("DEBUG", "true")
    # Prevent loading repository .env
    monkeypatch.setenv("ENV_FILE", "")

    reload_config()

    import app.main as main

    importlib.reload(main)

    app = main.create_app()

    assert app.title == "smoke-test-app"
    # FastAPI stores debug flag on app.debug
    assert app.debug is True
    assert app.state.database is None


def test_engine_uses_pool_settings():
    from app.db import make_engine

    engine = make_engine("postgresql://user:pass@db:5432/inventory_test", pool_size=5, max_overflow=7)

    # Engine should use the configured database name and host
    assert engine.url.database == "inventory_test"
    assert engine.url.host == "db"
    assert engine.url.drivername == "postgresql+psycopg2"

    pool = engine.pool
    try:
        # QueuePool stores maxsize on the internal queue
        assert pool._pool.maxsize == 5
        assert pool._max_overflow == 7
    except AttributeError:
        pytest.skip("Pool internals not available for assertion")


@pytest.mark.parametrize(
    "url, driver",
    [
        ("postgresql://user:pass@db/inventory", "postgresql+psycopg2"),
        ("postgresql+psycopg2://user:pass@db/inventory", "postgresql+psycopg2"),
        ("postgresql+psycopg://user:pass@db/inventory", "postgresql+psycopg"),
        ("sqlite:///./inventory.db", "sqlite"),
    ],
)
def test_resolve_url_pins_postgres_driver(url, driver):
    from app.db import resolve_url

    resolved = resolve_url(url)
    assert resolved.drivername == driver
    assert resolved.database.endswith("inventory") or resolved.database.endswith("inventory.db")


def test_sqlite_memory_engine_is_shared_and_enforces_foreign_keys():
    from sqlalchemy import text
    from sqlalchemy.pool import StaticPool

    from app.db import Database, make_engine

    database = Database(make_engine("sqlite://"))
    try:
        assert isinstance(database.engine.pool, StaticPool)
        assert database.query_one(text("PRAGMA foreign_keys"))["foreign_keys"] == 1
        assert database.dialect == "sqlite"
    finally:
        database.dispose()


def test_health_reports_dialect(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "OK"
    assert body["database"] == "sqlite"
    assert body["timestamp"]
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
