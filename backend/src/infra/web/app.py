from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from infra.adapter.local_scheduler import get_local_scheduler
from infra.adapter.log_repository_factory import get_log_repositories
from infra.adapter.smtp_email_sender import get_smtp_email_sender
from infra.config.config import get_config
from infra.db.session import close_engine, create_database_schema
from infra.logging.config import configure_logging
from infra.services.monitor_service import MonitorService
from infra.web.routers.check_router import router as check_router
from infra.web.routers.email_router import router as email_router
from infra.web.routers.log_router import router as log_router
from infra.web.routers.stats_router import router as stats_router


def create_app() -> FastAPI:
    config = get_config()

    configure_logging(
        log_level=config.LOGGING_CONFIG.LEVEL,
        json_logs=config.LOGGING_CONFIG.JSON_FORMAT,
        service_name=config.APP_NAME,
        environment=config.ENVIRONMENT,
        library_log_levels=config.LOGGING_CONFIG.LIBRARY_LOG_LEVELS,
    )

    uses_database = "database" in config.LOG_STORAGE_CONFIG.REPOSITORIES

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if uses_database and config.ENVIRONMENT in ("loc", "dev"):
            await create_database_schema()

        scheduler = get_local_scheduler()
        email_sender = get_smtp_email_sender() if config.MAILER_CONFIG is not None else None

        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.MONITOR_CONFIG.REQUEST_TIMEOUT_SECONDS),
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
            follow_redirects=True,
        )

        monitor_service = MonitorService(
            monitor_config=config.MONITOR_CONFIG,
            scheduler=scheduler,
            http_client=http_client,
            log_repositories=get_log_repositories(),
            email_sender=email_sender,
        )

        app.state.scheduler = scheduler
        app.state.email_sender = email_sender
        app.state.monitor_service = monitor_service

        scheduler.start()
        await monitor_service.start()

        yield

        scheduler.stop()
        await http_client.aclose()

        if uses_database:
            await close_engine()

    app = FastAPI(
        title=config.APP_NAME,
        version=config.VERSION,
        root_path=config.ROOT_PATH,
        docs_url="/apidocs",
        lifespan=lifespan,
    )

    app.state.host = config.HOST
    app.state.port = config.PORT

    app.include_router(stats_router)
    app.include_router(log_router)
    app.include_router(check_router)
    app.include_router(email_router)

    return app
