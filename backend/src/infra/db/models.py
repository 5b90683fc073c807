from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, MappedAsDataclass, mapped_column

from core.domain.log_severity_level import LogSeverityLevel


class Base(MappedAsDataclass, DeclarativeBase):
    pass


class LogModel(Base):
    __tablename__ = "logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, init=False)

    message: Mapped[str] = mapped_column(Text)
    level: Mapped[LogSeverityLevel] = mapped_column(
        Enum(
            LogSeverityLevel,
            native_enum=False,
            name="log_severity_level",
            values_callable=lambda levels: [level.value for level in levels],
        ),
        index=True,
    )
    origin: Mapped[str] = mapped_column(String(255))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        index=True,
    )
