from core.domain.log_entity import LogEntity
from core.domain.log_severity_level import LogSeverityLevel
from core.port.log_repository import LogRepository


class GetLogsUseCase:
    def __init__(self, log_repository: LogRepository) -> None:
        self.log_repository = log_repository

    async def execute(self, severity_level: LogSeverityLevel) -> list[LogEntity]:
        return await self.log_repository.get_logs(severity_level)
