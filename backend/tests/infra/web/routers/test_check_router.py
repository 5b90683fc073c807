import httpx
import pytest
from fastapi import FastAPI

import infra.web.routers.check_router as check_router_module
from infra.config.config import MonitorConfig
from infra.services.monitor_service import MonitorService
from tests.support.fakes import FakeLogRepository, FakeScheduler


def _handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(500 if request.url.host == "bad.example" else 200)


@pytest.fixture
def repository() -> FakeLogRepository:
    return FakeLogRepository()


@pytest.fixture
def check_app(http_client_factory, repository: FakeLogRepository) -> FastAPI:
    app = FastAPI()
    app.include_router(check_router_module.router)
    app.state.monitor_service = MonitorService(
        monitor_config=MonitorConfig(),
        scheduler=FakeScheduler(),
        http_client=http_client_factory(_handler),
        log_repositories=[repository],
    )
    return app


@pytest.mark.asyncio
async def test_run_check_for_available_service(check_app: FastAPI, repository, async_client_factory) -> None:
    client = await async_client_factory(check_app)
    response = await client.post("/checks", json={"url": "https://good.example"})

    assert response.status_code == 200
    assert response.json() == {"url": "https://good.example", "ok": True, "statusCode": 200, "error": None}
    assert repository.logs[0].message == "Service https://good.example working"


@pytest.mark.asyncio
async def test_run_check_for_failing_service(check_app: FastAPI, repository, async_client_factory) -> None:
    client = await async_client_factory(check_app)
    response = await client.post("/checks", json={"url": "https://bad.example"})

    payload = response.json()
    assert response.status_code == 200
    assert payload["ok"] is False
    assert payload["statusCode"] == 500
    assert "https://bad.example" in payload["error"]
    assert len(repository.logs) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["not-a-url", "ftp://files.example.com"])
async def test_run_check_rejects_invalid_url(check_app: FastAPI, repository, async_client_factory, url: str) -> None:
    client = await async_client_factory(check_app)
    response = await client.post("/checks", json={"url": url})

    assert response.status_code == 422
    assert repository.logs == []


@pytest.mark.asyncio
async def test_run_check_without_monitor_service(async_client_factory) -> None:
    app = FastAPI()
    app.include_router(check_router_module.router)

    client = await async_client_factory(app)
    response = await client.post("/checks", json={"url": "https://good.example"})

    assert response.status_code == 503
