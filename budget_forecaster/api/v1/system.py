"""GET /api/system/health - database connectivity and process uptime"""

import time
from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from budget_forecaster.api.v1.schemas import SystemHealthResponse, DatabaseHealth, SystemInfo
from budget_forecaster.api.dependencies import get_now
from budget_forecaster.infrastructure.database.models import Base
from budget_forecaster.infrastructure.database.session import get_db, check_connection

PROCESS_STARTED_AT = time.monotonic()

router = APIRouter()


@router.get("/system/health", response_model=SystemHealthResponse)
def get_system_health(db: Session = Depends(get_db), now: datetime = Depends(get_now)):
    connected = check_connection(db)
    return SystemHealthResponse(
        status="healthy" if connected else "degraded",
        timestamp=now,
        database=DatabaseHealth(connected=connected, collections=len(Base.metadata.tables)),
        system=SystemInfo(uptime=round(time.monotonic() - PROCESS_STARTED_AT, 3)),
    )
