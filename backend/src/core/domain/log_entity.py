import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from core.domain.clock import utc_now
from core.domain.log_severity_level import LogSeverityLevel
from core.exceptions.log_decode_error import LogDecodeError


@dataclass(frozen=True)
class LogEntity:
    message: str
    level: LogSeverityLevel
    origin: str
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        # frozen dataclass, so coercion goes through object.__setattr__
        object.__setattr__(self, "level", LogSeverityLevel(self.level))
        object.__setattr__(self, "created_at", _parse_timestamp(self.created_at))

    def to_dict(self) -> dict[str, str]:
        return {
            "message": self.message,
            "level": self.level.value,
            "origin": self.origin,
            "createdAt": self.created_at.isoformat(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["LogEntity"]:
        if not data:
            return None

        missing = [key for key in ("message", "level", "origin") if data.get(key) is None]
        if missing:
            raise LogDecodeError(f"missing fields: {', '.join(missing)}")

        try:
            level = LogSeverityLevel(data["level"])
        except ValueError:
            raise LogDecodeError(f"unknown level '{data['level']}'")

        raw_created_at = data.get("createdAt", data.get("created_at"))

        if raw_created_at is None:
            return cls(message=str(data["message"]), level=level, origin=str(data["origin"]))

        return cls(
            message=str(data["message"]),
            level=level,
            origin=str(data["origin"]),
            created_at=_parse_timestamp(raw_created_at),
        )

    @classmethod
    def from_json(cls, raw: Optional[str]) -> Optional["LogEntity"]:
        if raw is None or not raw.strip():
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise LogDecodeError(f"malformed JSON ({e.msg})")

        if not isinstance(data, dict):
            raise LogDecodeError("expected a JSON object")

        return cls.from_dict(data)


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise LogDecodeError(f"invalid createdAt '{value}'")
    else:
        raise LogDecodeError(f"invalid createdAt '{value}'")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed
