from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app import schemas
from app.db import Database, get_db
from app.services import rooms as room_service

router = APIRouter(prefix="/rooms", tags=["rooms"])


@router.get("", response_model=List[schemas.RoomRead])
def read_rooms(db: Database = Depends(get_db)):
    return room_service.list_rooms(db)


@router.get("/{room_id}", response_model=schemas.RoomRead)
def read_room(room_id: str, db: Database = Depends(get_db)):
    return room_service.get_room(db, room_id)


@router.post("", response_model=schemas.RoomRead, status_code=201)
def create_room(body: schemas.RoomCreate, db: Database = Depends(get_db)):
    if not body.name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Room name is required")
    return room_service.create_room(
        db,
        name=body.name,
        description=body.description,
        hidden=body.hidden,
        replaces_default=body.replaces_default,
        icon=body.icon,
    )


@router.put("/{room_id}", response_model=schemas.RoomRead)
def update_room(room_id: str, body: schemas.RoomUpdate, db: Database = Depends(get_db)):
    # an explicit empty name would leave the room unnamed
    if body.name is not None and not body.name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Room name cannot be empty")
    return room_service.update_room(db, room_id, **body.model_dump(exclude_unset=True))


@router.delete("/{room_id}", response_model=schemas.RoomDeleteResult)
def delete_room(room_id: str, db: Database = Depends(get_db)):
    deleted = room_service.delete_room(db, room_id)
    return {"success": True, "id": room_id, "deleted_items": deleted}
