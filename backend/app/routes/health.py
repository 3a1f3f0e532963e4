from fastapi import APIRouter, Depends

from app import schemas
from app.db import Database, get_db
from app.utils import utcnow

router = APIRouter(tags=["health"])


@router.get("/health", response_model=schemas.HealthStatus)
def health(db: Database = Depends(get_db)):
    return {"status": "OK", "database": db.dialect, "timestamp": utcnow()}
