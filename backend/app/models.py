from datetime import timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text, false, func
from sqlalchemy.types import TypeDecorator

from app.db import Base
from app.utils import utcnow


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes on every backend.

    SQLite keeps no offset, so values are stored as UTC wall time and read
    back with UTC attached; PostgreSQL values are converted to UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Item(Base):
    __tablename__ = "items"

    id = Column(String, primary_key=True)
    name = Column(Text, nullable=False)
    information = Column(Text, nullable=True)
    location = Column(Text, nullable=False, index=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())


class InventoryCode(Base):
    __tablename__ = "inventory_codes"

    id = Column(String, primary_key=True)
    item_id = Column(String, ForeignKey("items.id", ondelete="CASCADE"), nullable=False, index=True)
    kode_inventaris = Column(Text, nullable=False, default="", server_default="")
    spesifikasi = Column(Text, nullable=False, default="", server_default="")
    status = Column(String(32), nullable=False, default="good", server_default="good")
    date_added = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())
    created_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String, primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    description = Column(Text, nullable=False, default="", server_default="")
    hidden = Column(Boolean, nullable=False, default=False, server_default=false())
    # name of a built-in room this one stands in for
    replaces_default = Column(Text, nullable=True)
    icon = Column(String(64), nullable=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, server_default=func.now())


items = Item.__table__
inventory_codes = InventoryCode.__table__
rooms = Room.__table__
