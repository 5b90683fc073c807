from dataclasses import dataclass
from typing import Optional

from core.domain.log_entity import LogEntity
from core.exceptions.log_repository_error import LogRepositoryError


@dataclass(frozen=True)
class CheckResult:
    url: str
    ok: bool
    log: LogEntity

    status_code: Optional[int] = None
    error: Optional[str] = None

    storage_errors: tuple[LogRepositoryError, ...] = ()

    def __bool__(self) -> bool:
        return self.ok
