from infra.db.models import Base, LogModel
from infra.db.session import (
    close_engine,
    create_database_schema,
    get_engine,
    get_session_factory,
)

__all__ = [
    "Base",
    "LogModel",
    "close_engine",
    "create_database_schema",
    "get_engine",
    "get_session_factory",
]
