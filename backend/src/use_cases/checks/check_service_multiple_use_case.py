from collections.abc import Sequence
from typing import Optional

import httpx
import structlog

from core.domain.check_result import CheckResult
from core.domain.clock import Clock, utc_now
from core.domain.log_entity import LogEntity
from core.exceptions.log_repository_error import LogRepositoryError
from core.port.log_repository import LogRepository
from use_cases.checks.check_outcome import (
    CHECK_LOG_ORIGIN,
    FailureCallback,
    SuccessCallback,
    build_check_log,
    fetch_status,
)

logger = structlog.stdlib.get_logger(__name__)


class CheckServiceMultipleUseCase:
    ORIGIN = CHECK_LOG_ORIGIN

    def __init__(
        self,
        log_repositories: Sequence[LogRepository],
        http_client: httpx.AsyncClient,
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None,
        clock: Clock = utc_now,
    ) -> None:
        self.log_repositories = list(log_repositories)
        self.http_client = http_client
        self.on_success = on_success
        self.on_failure = on_failure
        self.clock = clock

    async def execute(self, url: str) -> CheckResult:
        status_code, reason = await fetch_status(self.http_client, url)
        log, error = build_check_log(url, reason, self.clock)

        storage_errors = await self._save_to_all(log)

        if error is None:
            logger.info(f"Check succeeded for {url}", status_code=status_code)

            if self.on_success:
                self.on_success()
        else:
            logger.warning(f"Check failed for {url}", status_code=status_code, reason=reason)

            if self.on_failure:
                self.on_failure(error)

        return CheckResult(
            url=url,
            ok=error is None,
            log=log,
            status_code=status_code,
            error=error,
            storage_errors=storage_errors,
        )

    async def _save_to_all(self, log: LogEntity) -> tuple[LogRepositoryError, ...]:
        errors: list[LogRepositoryError] = []

        for repository in self.log_repositories:
            try:
                await repository.save_log(log)
            except Exception as e:
                logger.error(f"Failed to save log in {type(repository).__name__}: {e}")
                errors.append(LogRepositoryError(repository, e))

        return tuple(errors)
