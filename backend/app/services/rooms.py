"""Room operations. Items point at rooms by name, so deleting a room takes its items with it."""
import logging
from typing import Any, Dict, List

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection

from app.db import Database, execute, fetch_one
from app.errors import NotFoundError
from app.models import inventory_codes, items, rooms
from app.utils import new_id, utcnow

logger = logging.getLogger(__name__)

ROOM_FIELDS = ("name", "description", "hidden", "replaces_default", "icon")


def _require_room(conn: Connection, room_id: str) -> Dict[str, Any]:
    row = fetch_one(conn, select(rooms).where(rooms.c.id == room_id))
    if row is None:
        raise NotFoundError("Room", room_id)
    return row


def list_rooms(db: Database) -> List[Dict[str, Any]]:
    return db.query_many(select(rooms).order_by(rooms.c.name.asc()))


def get_room(db: Database, room_id: str) -> Dict[str, Any]:
    row = db.query_one(select(rooms).where(rooms.c.id == room_id))
    if row is None:
        raise NotFoundError("Room", room_id)
    return row


def create_room(db: Database, name: str, description: str = None, hidden: bool = False,
                replaces_default: str = None, icon: str = None) -> Dict[str, Any]:
    room_id = new_id()
    now = utcnow()
    with db.transaction() as conn:
        execute(
            conn,
            insert(rooms).values(
                id=room_id,
                name=name,
                description=description or "",
                hidden=bool(hidden),
                replaces_default=replaces_default,
                icon=icon,
                created_at=now,
                updated_at=now,
            ),
        )
        row = _require_room(conn, room_id)
    logger.info("Created room %s (%r)", room_id, name)
    return row


def update_room(db: Database, room_id: str, **changes: Any) -> Dict[str, Any]:
    """Apply the given room fields; fields passed as None are left untouched."""
    values = {k: v for k, v in changes.items() if k in ROOM_FIELDS and v is not None}
    values["updated_at"] = utcnow()

    with db.transaction() as conn:
        _require_room(conn, room_id)
        execute(conn, update(rooms).where(rooms.c.id == room_id).values(**values))
        return _require_room(conn, room_id)


def delete_room(db: Database, room_id: str) -> int:
    """Delete a room, every item located in it and those items' codes.

    Returns the number of items removed.
    """
    with db.transaction() as conn:
        room = _require_room(conn, room_id)
        located = select(items.c.id).where(items.c.location == room["name"])
        codes_removed = execute(conn, delete(inventory_codes).where(inventory_codes.c.item_id.in_(located)))
        items_removed = execute(conn, delete(items).where(items.c.location == room["name"]))
        execute(conn, delete(rooms).where(rooms.c.id == room_id))

    logger.info(
        "Deleted room %s (%r) with %d items and %d inventory codes",
        room_id, room["name"], items_removed, codes_removed,
    )
    return items_removed
