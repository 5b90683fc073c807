from functools import lru_cache
from typing import Any, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.base import BaseTrigger
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from core.port.scheduler import Scheduler


def build_trigger(interval_seconds: Optional[int] = None, cron: Optional[str] = None) -> BaseTrigger:
    if (interval_seconds is None) == (cron is None):
        raise ValueError("Exactly one of interval_seconds or cron must be given")

    if cron is not None:
        return CronTrigger.from_crontab(cron)

    return IntervalTrigger(seconds=interval_seconds)


class LocalScheduler(Scheduler):
    def __init__(self, scheduler: BaseScheduler) -> None:
        self.scheduler = scheduler
        self._jobs: dict[str, str] = {}

    def start(self) -> None:
        self.scheduler.start()

    def stop(self) -> None:
        self.scheduler.shutdown(wait=True)

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
        trigger = build_trigger(interval_seconds=interval_seconds, cron=cron)

        if job_key in self._jobs:
            self.remove_job(job_key)

        job = self.scheduler.add_job(
            func=func,
            trigger=trigger,
            args=args,
            kwargs=kwargs or {},
            id=job_key,
            name=job_name or job_key,
            replace_existing=True,
            max_instances=1,
        )

        self._jobs[job_key] = job.id

    def remove_job(self, job_key: str) -> bool:
        if job_key not in self._jobs:
            return False

        job_id = self._jobs.pop(job_key)

        try:
            self.scheduler.remove_job(job_id)
            return True
        except Exception:
            return False

    def has_job(self, job_key: str) -> bool:
        return job_key in self._jobs

    def get_all_jobs(self) -> list[str]:
        return list(self._jobs.keys())


@lru_cache
def get_local_scheduler() -> Scheduler:
    return LocalScheduler(AsyncIOScheduler())
