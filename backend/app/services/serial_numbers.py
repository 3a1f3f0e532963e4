"""Inventory code (serial number) operations."""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection

from app.db import Database, execute, fetch_one
from app.errors import NotFoundError
from app.models import inventory_codes, items
from app.services.items import DEFAULT_STATUS
from app.utils import new_id, normalize_timestamp, utcnow

logger = logging.getLogger(__name__)


def _select_with_item():
    return select(
        inventory_codes,
        items.c.name.label("item_name"),
        items.c.location,
    ).select_from(inventory_codes.outerjoin(items, inventory_codes.c.item_id == items.c.id))


def _require_code(conn: Connection, code_id: str) -> Dict[str, Any]:
    row = fetch_one(conn, select(inventory_codes).where(inventory_codes.c.id == code_id))
    if row is None:
        raise NotFoundError("Serial number", code_id)
    return row


def list_codes(db: Database) -> List[Dict[str, Any]]:
    return db.query_many(_select_with_item().order_by(inventory_codes.c.created_at.desc()))


def get_code(db: Database, code_id: str) -> Dict[str, Any]:
    row = db.query_one(_select_with_item().where(inventory_codes.c.id == code_id))
    if row is None:
        raise NotFoundError("Serial number", code_id)
    return row


def create_code(
    db: Database,
    item_id: str,
    serial_number: Optional[str] = None,
    specs: Optional[str] = None,
    status: Optional[str] = None,
    date_added: Optional[datetime] = None,
) -> Dict[str, Any]:
    code_id = new_id()
    now = utcnow()

    with db.transaction() as conn:
        owner = fetch_one(conn, select(items.c.id).where(items.c.id == item_id))
        if owner is None:
            raise NotFoundError("Item", item_id, itemId=item_id)

        execute(
            conn,
            insert(inventory_codes).values(
                id=code_id,
                item_id=item_id,
                kode_inventaris=serial_number or "",
                spesifikasi=specs or "",
                status=status or DEFAULT_STATUS,
                date_added=normalize_timestamp(date_added) if date_added else now,
                created_at=now,
                updated_at=now,
            ),
        )
        row = _require_code(conn, code_id)

    logger.info("Created inventory code %s for item %s", code_id, item_id)
    return row


def update_code(
    db: Database,
    code_id: str,
    serial_number: Optional[str] = None,
    specs: Optional[str] = None,
    status: Optional[str] = None,
    date_added: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Replace the supplied fields of a code; omitted fields keep their value."""
    values: Dict[str, Any] = {"updated_at": utcnow()}
    if serial_number is not None:
        values["kode_inventaris"] = serial_number
    if specs is not None:
        values["spesifikasi"] = specs
    if status is not None:
        values["status"] = status
    if date_added is not None:
        values["date_added"] = normalize_timestamp(date_added)

    with db.transaction() as conn:
        _require_code(conn, code_id)
        execute(conn, update(inventory_codes).where(inventory_codes.c.id == code_id).values(**values))
        return _require_code(conn, code_id)


def delete_code(db: Database, code_id: str) -> None:
    with db.transaction() as conn:
        _require_code(conn, code_id)
        execute(conn, delete(inventory_codes).where(inventory_codes.c.id == code_id))
    logger.info("Deleted inventory code %s", code_id)
