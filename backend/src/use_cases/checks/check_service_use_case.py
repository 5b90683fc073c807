from typing import Optional

import httpx
import structlog

from core.domain.check_result import CheckResult
from core.domain.clock import Clock, utc_now
from core.port.log_repository import LogRepository
from use_cases.checks.check_outcome import (
    CHECK_LOG_ORIGIN,
    FailureCallback,
    SuccessCallback,
    build_check_log,
    fetch_status,
)

logger = structlog.stdlib.get_logger(__name__)


class CheckServiceUseCase:
    ORIGIN = CHECK_LOG_ORIGIN

    def __init__(
        self,
        log_repository: LogRepository,
        http_client: httpx.AsyncClient,
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None,
        clock: Clock = utc_now,
    ) -> None:
        self.log_repository = log_repository
        self.http_client = http_client
        self.on_success = on_success
        self.on_failure = on_failure
        self.clock = clock

    async def execute(self, url: str) -> CheckResult:
        status_code, reason = await fetch_status(self.http_client, url)
        log, error = build_check_log(url, reason, self.clock)

        await self.log_repository.save_log(log)

        if error is None:
            logger.info(f"Check succeeded for {url}", status_code=status_code)

            if self.on_success:
                self.on_success()

            return CheckResult(url=url, ok=True, log=log, status_code=status_code)

        logger.warning(f"Check failed for {url}", status_code=status_code, reason=reason)

        if self.on_failure:
            self.on_failure(error)

        return CheckResult(url=url, ok=False, log=log, status_code=status_code, error=error)
