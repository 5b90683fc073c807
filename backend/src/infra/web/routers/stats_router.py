from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request, status

from infra.config.config import get_config

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get(
    "/health",
    response_model=dict[str, Any],
    status_code=status.HTTP_200_OK,
    summary="Get application health status",
)
async def get_health(request: Request):
    config = get_config()
    scheduler = getattr(request.app.state, "scheduler", None)

    return {
        "status": "UP",
        "appName": config.APP_NAME,
        "version": config.VERSION,
        "jobs": scheduler.get_all_jobs() if scheduler is not None else [],
        "timestamp": datetime.now(timezone.utc),
    }
