import structlog

from core.domain.clock import Clock, utc_now
from core.domain.log_entity import LogEntity
from core.domain.log_severity_level import LogSeverityLevel
from core.exceptions.email_delivery_error import describe_error
from core.port.email_sender import EmailSender, Recipients
from core.port.log_repository import LogRepository

logger = structlog.stdlib.get_logger(__name__)


class SendEmailLogsUseCase:
    ORIGIN = "send_email_logs_use_case.py"

    def __init__(
        self,
        email_sender: EmailSender,
        log_repository: LogRepository,
        clock: Clock = utc_now,
    ) -> None:
        self.email_sender = email_sender
        self.log_repository = log_repository
        self.clock = clock

    async def execute(self, to: Recipients) -> bool:
        try:
            sent = await self.email_sender.send_email_with_file_system_logs(to)
        except Exception as e:
            await self._log_failure(describe_error(e))
            return False

        if not sent:
            await self._log_failure("Error: Failed to send email")
            return False

        return True

    async def _log_failure(self, message: str) -> None:
        logger.error(f"Logs email not delivered: {message}")

        log = LogEntity(
            message=message,
            level=LogSeverityLevel.HIGH,
            origin=self.ORIGIN,
            created_at=self.clock(),
        )

        await self.log_repository.save_log(log)
