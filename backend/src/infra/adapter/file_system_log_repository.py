import asyncio
from functools import lru_cache
from pathlib import Path
from typing import Optional

import structlog

from core.domain.log_entity import LogEntity
from core.domain.log_severity_level import LogSeverityLevel
from core.exceptions.log_decode_error import LogDecodeError
from core.port.log_repository import LogRepository
from infra.config.config import get_config

logger = structlog.stdlib.get_logger(__name__)

ALL_LOGS_FILENAME = "logs-all.log"
MEDIUM_LOGS_FILENAME = "logs-medium.log"
HIGH_LOGS_FILENAME = "logs-high.log"


class FileSystemLogRepository(LogRepository):
    """Append-only JSON-lines storage split by severity.

    Every entry lands in ``logs-all.log``; medium and high entries are also
    copied to their own file so operators can tail failures only. Reads
    return entries of exactly the requested level.
    """

    def __init__(self, logs_dir: str | Path) -> None:
        self.logs_dir = Path(logs_dir)
        self.all_logs_path = self.logs_dir / ALL_LOGS_FILENAME
        self.medium_logs_path = self.logs_dir / MEDIUM_LOGS_FILENAME
        self.high_logs_path = self.logs_dir / HIGH_LOGS_FILENAME

        self._lock: Optional[asyncio.Lock] = None
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None
        self._create_log_files()

    def _create_log_files(self) -> None:
        self.logs_dir.mkdir(parents=True, exist_ok=True)

        for path in (self.all_logs_path, self.medium_logs_path, self.high_logs_path):
            path.touch(exist_ok=True)

    def _get_lock(self) -> asyncio.Lock:
        # the repository is a process-wide singleton, a lock is only valid in one loop
        loop = asyncio.get_running_loop()

        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop

        return self._lock

    def _path_for(self, severity_level: LogSeverityLevel) -> Path:
        mapping = {
            LogSeverityLevel.LOW: self.all_logs_path,
            LogSeverityLevel.MEDIUM: self.medium_logs_path,
            LogSeverityLevel.HIGH: self.high_logs_path,
        }

        return mapping[severity_level]

    async def save_log(self, log: LogEntity) -> None:
        line = f"{log.to_json()}\n"
        targets = [self.all_logs_path]

        if log.level is not LogSeverityLevel.LOW:
            targets.append(self._path_for(log.level))

        loop = asyncio.get_running_loop()

        async with self._get_lock():
            await loop.run_in_executor(None, self._append, targets, line)

    async def get_logs(self, severity_level: LogSeverityLevel) -> list[LogEntity]:
        path = self._path_for(severity_level)
        loop = asyncio.get_running_loop()

        async with self._get_lock():
            content = await loop.run_in_executor(None, self._read, path)

        logs = [self._decode(path, line) for line in content.splitlines() if line.strip()]

        return [log for log in logs if log is not None and log.level is severity_level]

    @staticmethod
    def _decode(path: Path, line: str) -> Optional[LogEntity]:
        try:
            return LogEntity.from_json(line)
        except LogDecodeError as e:
            logger.warning(f"Skipping unreadable line in {path.name}: {e}")
            return None

    @staticmethod
    def _append(paths: list[Path], line: str) -> None:
        for path in paths:
            with path.open("a", encoding="utf-8") as file:
                file.write(line)

    @staticmethod
    def _read(path: Path) -> str:
        if not path.is_file():
            return ""

        return path.read_text(encoding="utf-8")


@lru_cache
def get_file_system_log_repository() -> LogRepository:
    return FileSystemLogRepository(get_config().LOG_STORAGE_CONFIG.LOGS_DIR)
