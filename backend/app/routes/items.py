from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app import schemas
from app.db import Database, get_db
from app.services import items as item_service

router = APIRouter(tags=["items"])


def _require_name_and_location(name: Optional[str], location: Optional[str]) -> None:
    if not name or not location:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Name and location are required"
        )


@router.get("/items", response_model=List[schemas.ItemWithCounts])
def read_items(db: Database = Depends(get_db)):
    return item_service.list_items(db)


@router.post("/items", response_model=schemas.ItemCreated, status_code=201)
def create_item(body: schemas.ItemCreate, db: Database = Depends(get_db)):
    _require_name_and_location(body.name, body.location)
    result = item_service.create_item(
        db,
        name=body.name,
        location=body.location,
        information=body.information,
        quantity=body.quantity or 0,
    )
    return {"item": result.item, "inventory_codes": result.codes}


@router.get("/items/{item_id}", response_model=schemas.ItemRead)
def read_item(item_id: str, db: Database = Depends(get_db)):
    return item_service.get_item(db, item_id)


@router.put("/items/{item_id}", response_model=schemas.ItemRead)
def update_item(item_id: str, body: schemas.ItemUpdate, db: Database = Depends(get_db)):
    _require_name_and_location(body.name, body.location)
    return item_service.update_item(
        db, item_id, name=body.name, location=body.location, information=body.information
    )


@router.delete("/items/{item_id}", response_model=schemas.DeleteResult)
def delete_item(item_id: str, db: Database = Depends(get_db)):
    item_service.delete_item(db, item_id)
    return {"success": True, "id": item_id}


@router.get("/items/{item_id}/serial-numbers", response_model=List[schemas.SerialNumberRead])
def read_item_serial_numbers(item_id: str, db: Database = Depends(get_db)):
    return [
        {
            "id": row["id"],
            "serialNumber": row["kode_inventaris"] or "",
            "specs": row["spesifikasi"] or "",
            "status": row["status"],
        }
        for row in item_service.list_item_codes(db, item_id)
    ]


@router.get("/inventory-count/by-location", response_model=schemas.LocationCount)
def count_by_location(location: Optional[str] = None, db: Database = Depends(get_db)):
    if not location:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="location query parameter is required"
        )
    return {"location": location, "total": item_service.count_codes_at_location(db, location)}
