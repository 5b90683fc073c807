from datetime import datetime

from core.domain.log_severity_level import LogSeverityLevel
from infra.web.routers.schemas import CamelModel


class LogResponseDTO(CamelModel):
    message: str
    level: LogSeverityLevel
    origin: str
    created_at: datetime
