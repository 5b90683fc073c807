from functools import lru_cache

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.log_entity import LogEntity
from core.domain.log_severity_level import LogSeverityLevel
from core.port.log_repository import LogRepository
from infra.db.models import LogModel
from infra.db.session import get_session_factory


class SqlLogRepository(LogRepository):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._session_factory = session_factory

    async def save_log(self, log: LogEntity) -> None:
        async with self._session_factory() as session:
            model = LogModel(
                message=log.message,
                level=log.level,
                origin=log.origin,
                created_at=log.created_at,
            )

            session.add(model)

            await session.commit()

    async def get_logs(self, severity_level: LogSeverityLevel) -> list[LogEntity]:
        async with self._session_factory() as session:
            statement = (
                select(LogModel)
                .where(LogModel.level == severity_level)
                .order_by(LogModel.created_at.desc(), LogModel.id.desc())
            )
            models = (await session.execute(statement)).scalars().all()

            return [self._to_domain(model) for model in models]

    def _to_domain(self, model: LogModel) -> LogEntity:
        # sqlite drops the offset on the way back, LogEntity reads naive values as UTC
        return LogEntity(
            message=model.message,
            level=model.level,
            origin=model.origin,
            created_at=model.created_at,
        )


@lru_cache
def get_sql_log_repository() -> LogRepository:
    session_factory = get_session_factory()

    return SqlLogRepository(session_factory=session_factory)
