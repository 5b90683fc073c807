from core.port.log_repository import LogRepository
from infra.adapter.file_system_log_repository import get_file_system_log_repository
from infra.adapter.sql_log_repository import get_sql_log_repository
from infra.config.config import get_config


def get_log_repositories() -> list[LogRepository]:
    """Repositories enabled in LOG_STORAGE_CONFIG, in configured order."""
    factories = {
        "file": get_file_system_log_repository,
        "database": get_sql_log_repository,
    }

    return [factories[name]() for name in get_config().LOG_STORAGE_CONFIG.REPOSITORIES]


def get_primary_log_repository() -> LogRepository:
    return get_log_repositories()[0]
