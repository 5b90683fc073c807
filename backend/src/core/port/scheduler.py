from abc import ABC, abstractmethod
from typing import Any, Callable, Optional


class Scheduler(ABC):
    """Runs recurring jobs keyed by a caller-chosen name.

    A job is scheduled either every ``interval_seconds`` or by a five-field
    ``cron`` expression, never both. Adding a job under an existing key
    replaces the previous one.
    """

    @abstractmethod
    def start(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_job(
        self,
        job_key: str,
        func: Callable[..., Any],
        interval_seconds: Optional[int] = None,
        cron: Optional[str] = None,
        args: tuple = (),
        kwargs: Optional[dict] = None,
        job_name: Optional[str] = None,
    ) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_job(self, job_key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def has_job(self, job_key: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_all_jobs(self) -> list[str]:
        raise NotImplementedError
