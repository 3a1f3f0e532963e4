import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Connection

from app.db import Base, Database, execute
from app.models import inventory_codes, items, rooms  # registers tables on Base.metadata
from app.utils import new_id, normalize_timestamp, utcnow

logger = logging.getLogger(__name__)


def create_schema(database: Database) -> None:
    """Create any missing tables. Existing tables are left as they are."""
    Base.metadata.create_all(bind=database.engine, checkfirst=True)
    logger.info("Schema ready (%s)", ", ".join(sorted(Base.metadata.tables)))


def _insert_ignore(conn: Connection, table, values: Dict[str, Any]) -> int:
    # Prefer the dialect's ON CONFLICT DO NOTHING so re-seeding never fails on a primary key
    dialect = conn.engine.dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(table).values(**values).on_conflict_do_nothing()
    elif dialect == "sqlite":
        stmt = sqlite.insert(table).values(**values).on_conflict_do_nothing()
    else:
        exists = conn.execute(select(table.c.id).where(table.c.id == values["id"])).first()
        if exists is not None:
            return 0
        stmt = table.insert().values(**values)
    return execute(conn, stmt)


def load_seed_file(path: str) -> Optional[Dict[str, Any]]:
    seed_path = Path(path)
    if not seed_path.is_file():
        logger.warning("Seed data file %s not found; skipping seed", seed_path)
        return None
    with seed_path.open(encoding="utf-8") as fh:
        return json.load(fh)


def seed_database(database: Database, path: Optional[str]) -> Dict[str, int]:
    """Load the sample dataset when the items table is empty.

    The file holds ``rooms``, ``items`` and ``serialNumbers`` arrays. Rows whose
    id already exists are skipped. Returns the number of rows inserted per table.
    """
    inserted = {"rooms": 0, "items": 0, "inventory_codes": 0}
    if not path:
        return inserted

    existing = database.query_one(select(func.count().label("n")).select_from(items))
    if existing and existing["n"]:
        logger.debug("Items table already populated; skipping seed")
        return inserted

    data = load_seed_file(path)
    if not data:
        return inserted

    now = utcnow()
    with database.transaction() as conn:
        for room in data.get("rooms", []):
            inserted["rooms"] += _insert_ignore(conn, rooms, {
                "id": room.get("id") or new_id(),
                "name": room["name"],
                "description": room.get("description") or "",
                "hidden": bool(room.get("hidden", False)),
                "replaces_default": room.get("replacesDefault"),
                "icon": room.get("icon"),
                "created_at": now,
                "updated_at": now,
            })

        for item in data.get("items", []):
            inserted["items"] += _insert_ignore(conn, items, {
                "id": item["id"],
                "name": item["name"],
                "information": item.get("information") or "",
                "location": item["location"],
                "created_at": now,
                "updated_at": now,
            })

        for serial in data.get("serialNumbers", []):
            inserted["inventory_codes"] += _insert_ignore(conn, inventory_codes, {
                "id": serial["id"],
                "item_id": serial["itemId"],
                "kode_inventaris": serial.get("serialNumber") or "",
                "spesifikasi": serial.get("specs") or "",
                "status": serial.get("status") or "good",
                "date_added": normalize_timestamp(serial.get("dateAdded")),
                "created_at": now,
                "updated_at": now,
            })

    logger.info(
        "Seeded %d rooms, %d items and %d inventory codes from %s",
        inserted["rooms"], inserted["items"], inserted["inventory_codes"], path,
    )
    return inserted


def init_schema(database: Database, seed_path: Optional[str] = None) -> None:
    create_schema(database)
    seed_database(database, seed_path)
