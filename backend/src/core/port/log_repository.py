from abc import ABC, abstractmethod

from core.domain.log_entity import LogEntity
from core.domain.log_severity_level import LogSeverityLevel


class LogRepository(ABC):
    @abstractmethod
    async def save_log(self, log: LogEntity) -> None:
        raise NotImplementedError

    @abstractmethod
    async def get_logs(self, severity_level: LogSeverityLevel) -> list[LogEntity]:
        raise NotImplementedError
