from datetime import datetime, timezone

import httpx
import pytest

from core.domain.log_entity import LogEntity
from core.domain.log_severity_level import LogSeverityLevel
from tests.support.fakes import FailingLogRepository, FakeLogRepository, FixedClock
from use_cases.checks.check_service_use_case import CheckServiceUseCase


class CallbackRecorder:
    def __init__(self) -> None:
        self.successes = 0
        self.failures: list[str] = []

    def on_success(self) -> None:
        self.successes += 1

    def on_failure(self, error: str) -> None:
        self.failures.append(error)


def _status_handler(status_code: int):
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(status_code)

    handler.requested = requested
    return handler


def _raising_handler(message: str):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError(message, request=request)

    return handler


@pytest.fixture
def callbacks() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture
def use_case_factory(http_client_factory, callbacks: CallbackRecorder):
    def _factory(handler, repository=None, **kwargs) -> tuple[CheckServiceUseCase, FakeLogRepository]:
        repository = repository if repository is not None else FakeLogRepository()
        use_case = CheckServiceUseCase(
            repository,
            http_client_factory(handler),
            on_success=callbacks.on_success,
            on_failure=callbacks.on_failure,
            **kwargs,
        )
        return use_case, repository

    return _factory


@pytest.mark.asyncio
async def test_available_service_returns_ok_and_fires_success_callback(use_case_factory, callbacks) -> None:
    handler = _status_handler(200)
    use_case, _ = use_case_factory(handler)

    result = await use_case.execute("https://google.com")

    assert result.ok is True
    assert bool(result) is True
    assert result.status_code == 200
    assert callbacks.successes == 1
    assert callbacks.failures == []
    assert handler.requested == ["https://google.com"]


@pytest.mark.asyncio
async def test_success_log_has_low_level_and_fixed_origin(use_case_factory) -> None:
    clock = FixedClock()
    use_case, repository = use_case_factory(_status_handler(200), clock=clock)

    result = await use_case.execute("https://good.example")

    assert repository.logs == [
        LogEntity(
            message="Service https://good.example working",
            level=LogSeverityLevel.LOW,
            origin="check_service_use_case.py",
            created_at=datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc),
        )
    ]
    assert result.log == repository.logs[0]


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [400, 401, 403, 404, 500, 503])
async def test_non_ok_status_logs_high_entry_and_fires_failure_callback(
    use_case_factory,
    callbacks,
    status_code: int,
) -> None:
    use_case, repository = use_case_factory(_status_handler(status_code))

    result = await use_case.execute("https://bad.example")

    assert result.ok is False
    assert result.status_code == status_code
    assert callbacks.successes == 0
    assert len(callbacks.failures) == 1
    assert "https://bad.example" in callbacks.failures[0]

    assert len(repository.logs) == 1
    assert repository.logs[0].level is LogSeverityLevel.HIGH
    assert "https://bad.example" in repository.logs[0].message
    assert repository.logs[0].origin == "check_service_use_case.py"


@pytest.mark.asyncio
async def test_transport_error_is_reported_as_failure(use_case_factory, callbacks) -> None:
    use_case, repository = use_case_factory(_raising_handler("Network error: fetch failed"))

    result = await use_case.execute("https://nonexistent-domain-12345.com")

    assert result.ok is False
    assert result.status_code is None
    assert "https://nonexistent-domain-12345.com" in result.error
    assert "Network error: fetch failed" in repository.logs[0].message
    assert callbacks.failures == [result.error]


@pytest.mark.asyncio
async def test_timeout_is_reported_as_failure(http_client_factory) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    repository = FakeLogRepository()
    use_case = CheckServiceUseCase(repository, http_client_factory(handler))

    result = await use_case.execute("https://slow.example")

    assert result.ok is False
    assert repository.logs[0].level is LogSeverityLevel.HIGH


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["", "not-a-url", "http://", "https://", "ftp://invalid"])
async def test_malformed_urls_fail_without_raising(use_case_factory, callbacks, url: str) -> None:
    use_case, repository = use_case_factory(_raising_handler("Invalid URL"))

    result = await use_case.execute(url)

    assert result.ok is False
    assert len(callbacks.failures) == 1
    assert len(repository.logs) == 1


@pytest.mark.asyncio
async def test_missing_callbacks_do_not_raise(http_client_factory) -> None:
    repository = FakeLogRepository()
    use_case = CheckServiceUseCase(repository, http_client_factory(_status_handler(200)))

    assert (await use_case.execute("https://test.com")).ok is True

    use_case = CheckServiceUseCase(repository, http_client_factory(_status_handler(500)))

    assert (await use_case.execute("https://test.com")).ok is False
    assert len(repository.logs) == 2


@pytest.mark.asyncio
async def test_saves_exactly_once_and_never_reads_logs(use_case_factory) -> None:
    use_case, repository = use_case_factory(_status_handler(204))

    await use_case.execute("https://test.com")

    assert len(repository.logs) == 1
    assert repository.get_logs_calls == []


@pytest.mark.asyncio
async def test_repository_error_propagates_and_skips_callback(use_case_factory, callbacks) -> None:
    repository = FailingLogRepository(RuntimeError("disk full"))
    use_case, _ = use_case_factory(_status_handler(200), repository=repository)

    with pytest.raises(RuntimeError, match="disk full"):
        await use_case.execute("https://test.com")

    assert repository.save_calls == 1
    assert callbacks.successes == 0
    assert callbacks.failures == []
