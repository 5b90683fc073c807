from fastapi import APIRouter, Query, status

from core.domain.log_entity import LogEntity
from core.domain.log_severity_level import LogSeverityLevel
from infra.adapter.log_repository_factory import get_primary_log_repository
from infra.web.routers.schemas.log import LogResponseDTO
from use_cases.logs.get_logs_use_case import GetLogsUseCase

router = APIRouter(prefix="/logs", tags=["Logs"])


@router.get(
    "",
    response_model=list[LogResponseDTO],
    status_code=status.HTTP_200_OK,
)
async def get_logs(level: LogSeverityLevel = Query(default=LogSeverityLevel.LOW)) -> list[LogEntity]:
    use_case = GetLogsUseCase(get_primary_log_repository())

    return await use_case.execute(level)
