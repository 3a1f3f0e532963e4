from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app import schemas
from app.db import Database, get_db
from app.services import serial_numbers as code_service

router = APIRouter(prefix="/serial-numbers", tags=["serial-numbers"])


@router.get("", response_model=List[schemas.InventoryCodeWithItem])
def read_serial_numbers(db: Database = Depends(get_db)):
    return code_service.list_codes(db)


@router.get("/{code_id}", response_model=schemas.InventoryCodeWithItem)
def read_serial_number(code_id: str, db: Database = Depends(get_db)):
    return code_service.get_code(db, code_id)


@router.post("", response_model=schemas.InventoryCodeRead, status_code=201)
def create_serial_number(body: schemas.InventoryCodeCreate, db: Database = Depends(get_db)):
    if not body.item_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="itemId is required")
    return code_service.create_code(
        db,
        item_id=body.item_id,
        serial_number=body.serial_number,
        specs=body.specs,
        status=body.status,
        date_added=body.date_added,
    )


@router.put("/{code_id}", response_model=schemas.InventoryCodeRead)
def update_serial_number(code_id: str, body: schemas.InventoryCodeUpdate, db: Database = Depends(get_db)):
    return code_service.update_code(
        db,
        code_id,
        serial_number=body.serial_number,
        specs=body.specs,
        status=body.status,
        date_added=body.date_added,
    )


@router.delete("/{code_id}", response_model=schemas.DeleteResult)
def delete_serial_number(code_id: str, db: Database = Depends(get_db)):
    code_service.delete_code(db, code_id)
    return {"success": True, "id": code_id}
