from typing import Callable, Optional

import httpx

from core.domain.clock import Clock
from core.domain.log_entity import LogEntity
from core.domain.log_severity_level import LogSeverityLevel

# shared by the single and multi repository checks
CHECK_LOG_ORIGIN = "check_service_use_case.py"

SuccessCallback = Callable[[], None]
FailureCallback = Callable[[str], None]


async def fetch_status(http_client: httpx.AsyncClient, url: str) -> tuple[Optional[int], Optional[str]]:
    """Issue one GET against ``url``.

    Returns the status code (``None`` when the request never completed) and
    a failure reason, which is ``None`` only for a 2xx response.
    """
    try:
        response = await http_client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        return None, str(e) or type(e).__name__

    if not response.is_success:
        return response.status_code, f"Error on check service {url}: status {response.status_code}"

    return response.status_code, None


def build_check_log(url: str, reason: Optional[str], clock: Clock) -> tuple[LogEntity, Optional[str]]:
    """Log entry for one fetch_status outcome, plus the error text when it failed."""
    if reason is None:
        log = LogEntity(
            message=f"Service {url} working",
            level=LogSeverityLevel.LOW,
            origin=CHECK_LOG_ORIGIN,
            created_at=clock(),
        )
        return log, None

    error = f"{url} is not ok. {reason}"
    log = LogEntity(
        message=error,
        level=LogSeverityLevel.HIGH,
        origin=CHECK_LOG_ORIGIN,
        created_at=clock(),
    )

    return log, error
