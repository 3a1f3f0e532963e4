from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    """Request bodies reject fields they do not declare."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class _Row(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Items

class ItemCreate(_Body):
    # presence of name/location is checked by the route so the error is a plain 400
    name: Optional[str] = None
    information: Optional[str] = None
    location: Optional[str] = None
    quantity: Optional[int] = None


class ItemUpdate(_Body):
    name: Optional[str] = None
    information: Optional[str] = None
    location: Optional[str] = None


class ItemRead(_Row):
    id: str
    name: str
    information: Optional[str] = None
    location: str
    created_at: datetime
    updated_at: datetime


class ItemWithCounts(ItemRead):
    total_codes: int = 0
    good_count: int = 0
    broken_count: int = 0


# Inventory codes

class InventoryCodeCreate(_Body):
    item_id: Optional[str] = Field(default=None, alias="itemId")
    serial_number: Optional[str] = Field(default=None, alias="serialNumber")
    specs: Optional[str] = None
    status: Optional[str] = None
    date_added: Optional[datetime] = Field(default=None, alias="dateAdded")


class InventoryCodeUpdate(_Body):
    serial_number: Optional[str] = Field(default=None, alias="serialNumber")
    specs: Optional[str] = None
    status: Optional[str] = None
    date_added: Optional[datetime] = Field(default=None, alias="dateAdded")


class InventoryCodeRead(_Row):
    id: str
    item_id: str
    kode_inventaris: str = ""
    spesifikasi: str = ""
    status: str
    date_added: datetime
    created_at: datetime
    updated_at: datetime


class InventoryCodeWithItem(InventoryCodeRead):
    item_name: Optional[str] = None
    location: Optional[str] = None


class SerialNumberRead(BaseModel):
    """Compact view of a code as listed under its item."""

    id: str
    serialNumber: str
    specs: str
    status: str


class ItemCreated(BaseModel):
    item: ItemRead
    inventory_codes: List[InventoryCodeRead] = []


# Rooms

class RoomCreate(_Body):
    name: Optional[str] = None
    description: Optional[str] = None
    hidden: bool = False
    replaces_default: Optional[str] = None
    icon: Optional[str] = None


class RoomUpdate(_Body):
    name: Optional[str] = None
    description: Optional[str] = None
    hidden: Optional[bool] = None
    replaces_default: Optional[str] = None
    icon: Optional[str] = None


class RoomRead(_Row):
    id: str
    name: str
    description: str = ""
    hidden: bool = False
    replaces_default: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# Misc

class DeleteResult(BaseModel):
    success: bool = True
    id: str


class RoomDeleteResult(DeleteResult):
    deleted_items: int = 0


class LocationCount(BaseModel):
    location: str
    total: int


class HealthStatus(BaseModel):
    status: str
    database: str
    timestamp: datetime
