from collections.abc import Sequence
from typing import Optional

import httpx
import structlog

from core.domain.check_result import CheckResult
from core.port.email_sender import EmailSender
from core.port.log_repository import LogRepository
from core.port.scheduler import Scheduler
from infra.config.config import MonitorConfig
from use_cases.checks.check_service_multiple_use_case import CheckServiceMultipleUseCase
from use_cases.email.send_email_logs_use_case import SendEmailLogsUseCase

logger = structlog.stdlib.get_logger(__name__)

EMAIL_REPORT_JOB_KEY = "send_logs_email"


class MonitorService:
    def __init__(
        self,
        monitor_config: MonitorConfig,
        scheduler: Scheduler,
        http_client: httpx.AsyncClient,
        log_repositories: Sequence[LogRepository],
        email_sender: Optional[EmailSender] = None,
    ):
        self.monitor_config = monitor_config
        self.scheduler = scheduler
        self.http_client = http_client
        self.log_repositories = list(log_repositories)
        self.email_sender = email_sender

        self.check_use_case = CheckServiceMultipleUseCase(
            log_repositories=self.log_repositories,
            http_client=self.http_client,
        )

    async def start(self):
        logger.info(f"Monitor service started with {len(self.monitor_config.TARGETS)} targets")

        for index, target in enumerate(self.monitor_config.TARGETS):
            self.scheduler.add_job(
                job_key=f"check_target_{index}",
                func=self._run_check,
                interval_seconds=target.INTERVAL_SECONDS,
                cron=target.CRON,
                args=(target.URL,),
                job_name=f"Check: {target.URL}",
            )

            schedule = f"every {target.INTERVAL_SECONDS}s" if target.CRON is None else f"cron '{target.CRON}'"
            logger.info(f"Scheduled check for {target.URL} ({schedule})")

        self._schedule_email_report()

    def _schedule_email_report(self) -> None:
        cron = self.monitor_config.EMAIL_REPORT_CRON
        recipients = self.monitor_config.EMAIL_RECIPIENTS

        if cron is None or not recipients:
            return

        if self.email_sender is None:
            logger.warning("EMAIL_REPORT_CRON is set but no mailer is configured, skipping email report")
            return

        self.scheduler.add_job(
            job_key=EMAIL_REPORT_JOB_KEY,
            func=self._run_email_report,
            cron=cron,
            job_name="Send logs email",
        )

        logger.info(f"Scheduled logs email to {len(recipients)} recipients (cron '{cron}')")

    async def _run_check(self, url: str) -> None:
        try:
            result = await self.check_use_case.execute(url)

            if result.storage_errors:
                logger.warning(f"Check for {url} stored with {len(result.storage_errors)} repository failures")
        except Exception as e:
            logger.exception(f"Unexpected error checking {url}: {e}")

    async def _run_email_report(self) -> None:
        try:
            sent = await SendEmailLogsUseCase(self.email_sender, self.log_repositories[0]).execute(
                self.monitor_config.EMAIL_RECIPIENTS
            )
            logger.info(f"Logs email {'sent' if sent else 'not sent'}")
        except Exception as e:
            logger.exception(f"Unexpected error sending logs email: {e}")

    async def trigger_immediate_check(self, url: str) -> CheckResult:
        return await self.check_use_case.execute(url)
