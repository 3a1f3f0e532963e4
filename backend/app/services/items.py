"""Item operations, including the create-with-codes and delete transactions."""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import case, delete, func, insert, select, update
from sqlalchemy.engine import Connection

from app.db import Database, execute, fetch_all, fetch_one
from app.errors import NotFoundError, PartialWriteError
from app.models import inventory_codes, items
from app.utils import new_id, utcnow

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "good"


@dataclass
class ItemCreateResult:
    item: Dict[str, Any]
    codes: List[Dict[str, Any]] = field(default_factory=list)


def _select_item(item_id: str):
    return select(items).where(items.c.id == item_id)


def _require_item(conn: Connection, item_id: str) -> Dict[str, Any]:
    row = fetch_one(conn, _select_item(item_id))
    if row is None:
        raise NotFoundError("Item", item_id)
    return row


def _count_codes(conn: Connection, item_id: str) -> int:
    stmt = select(func.count()).select_from(inventory_codes).where(inventory_codes.c.item_id == item_id)
    return conn.execute(stmt).scalar_one()


def _codes_for_item(item_id: str):
    return (
        select(inventory_codes)
        .where(inventory_codes.c.item_id == item_id)
        .order_by(inventory_codes.c.date_added.asc(), inventory_codes.c.created_at.asc())
    )


def list_items(db: Database) -> List[Dict[str, Any]]:
    """Every item, newest first, with its code total and good/broken breakdown."""
    counts = (
        select(
            inventory_codes.c.item_id,
            func.count().label("total_codes"),
            func.sum(case((inventory_codes.c.status == "good", 1), else_=0)).label("good_count"),
            func.sum(case((inventory_codes.c.status == "broken", 1), else_=0)).label("broken_count"),
        )
        .group_by(inventory_codes.c.item_id)
        .subquery()
    )
    stmt = (
        select(
            items,
            func.coalesce(counts.c.total_codes, 0).label("total_codes"),
            func.coalesce(counts.c.good_count, 0).label("good_count"),
            func.coalesce(counts.c.broken_count, 0).label("broken_count"),
        )
        .select_from(items.outerjoin(counts, counts.c.item_id == items.c.id))
        .order_by(items.c.created_at.desc())
    )
    return db.query_many(stmt)


def get_item(db: Database, item_id: str) -> Dict[str, Any]:
    row = db.query_one(_select_item(item_id))
    if row is None:
        raise NotFoundError("Item", item_id)
    return row


def create_item(
    db: Database,
    name: str,
    location: str,
    information: Optional[str] = None,
    quantity: int = 0,
) -> ItemCreateResult:
    """Insert an item and `quantity` blank inventory codes in one transaction.

    Raises PartialWriteError (and rolls back) when the number of codes stored
    for the new item differs from `quantity`.
    """
    quantity = max(quantity or 0, 0)
    item_id = new_id()
    now = utcnow()

    with db.transaction() as conn:
        execute(
            conn,
            insert(items).values(
                id=item_id,
                name=name,
                information=information or "",
                location=location,
                created_at=now,
                updated_at=now,
            ),
        )

        for _ in range(quantity):
            stamp = utcnow()
            execute(
                conn,
                insert(inventory_codes).values(
                    id=new_id(),
                    item_id=item_id,
                    kode_inventaris="",
                    spesifikasi="",
                    status=DEFAULT_STATUS,
                    date_added=stamp,
                    created_at=stamp,
                    updated_at=stamp,
                ),
            )

        persisted = _count_codes(conn, item_id)
        if persisted != quantity:
            raise PartialWriteError(quantity, persisted)

        result = ItemCreateResult(
            item=_require_item(conn, item_id),
            codes=fetch_all(conn, _codes_for_item(item_id)) if quantity else [],
        )

    logger.info("Created item %s (%r @ %r) with %d inventory codes", item_id, name, location, quantity)
    return result


def update_item(
    db: Database,
    item_id: str,
    name: str,
    location: str,
    information: Optional[str] = None,
) -> Dict[str, Any]:
    values: Dict[str, Any] = {"name": name, "location": location, "updated_at": utcnow()}
    if information is not None:
        values["information"] = information

    with db.transaction() as conn:
        _require_item(conn, item_id)
        execute(conn, update(items).where(items.c.id == item_id).values(**values))
        return _require_item(conn, item_id)


def delete_item(db: Database, item_id: str) -> int:
    """Delete an item and its codes. Returns the number of codes removed."""
    with db.transaction() as conn:
        _require_item(conn, item_id)
        removed = execute(conn, delete(inventory_codes).where(inventory_codes.c.item_id == item_id))
        execute(conn, delete(items).where(items.c.id == item_id))

    logger.info("Deleted item %s and %d inventory codes", item_id, removed)
    return removed


def list_item_codes(db: Database, item_id: str) -> List[Dict[str, Any]]:
    return db.query_many(_codes_for_item(item_id))


def count_codes_at_location(db: Database, location: str) -> int:
    """Number of inventory codes whose item sits in `location`."""
    stmt = (
        select(func.count().label("total"))
        .select_from(inventory_codes.join(items, inventory_codes.c.item_id == items.c.id))
        .where(items.c.location == location)
    )
    row = db.query_one(stmt)
    return int(row["total"]) if row else 0
