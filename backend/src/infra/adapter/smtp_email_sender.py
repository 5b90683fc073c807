import asyncio
import smtplib
from email.message import EmailMessage
from functools import lru_cache
from pathlib import Path

import structlog

from core.exceptions.email_delivery_error import EmailDeliveryError
from core.port.email_sender import Attachment, EmailSender, Recipients, SendMailOptions
from infra.adapter.file_system_log_repository import (
    ALL_LOGS_FILENAME,
    HIGH_LOGS_FILENAME,
    MEDIUM_LOGS_FILENAME,
)
from infra.config.config import MailerConfig, get_config

logger = structlog.stdlib.get_logger(__name__)

LOGS_EMAIL_SUBJECT = "Server logs"
LOGS_EMAIL_BODY = """
<h3>System logs - NOC</h3>
<p>The monitoring service log files are attached to this email.</p>
<p>See attachments: {filenames}</p>
"""


class SmtpEmailSender(EmailSender):
    def __init__(self, mailer_config: MailerConfig, logs_dir: str | Path) -> None:
        self.mailer_config = mailer_config
        self.logs_dir = Path(logs_dir)

    async def send_email(self, options: SendMailOptions) -> bool:
        try:
            await self._deliver(options)
            return True
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP authentication failed for {self.mailer_config.EMAIL}: {e}")
            return False
        except Exception as e:
            logger.error(f"Email error: {e}")
            return False

    async def send_email_with_file_system_logs(self, to: Recipients) -> bool:
        attachments = [
            Attachment(filename=filename, path=self.logs_dir / filename, complete_lines_only=True)
            for filename in (ALL_LOGS_FILENAME, HIGH_LOGS_FILENAME, MEDIUM_LOGS_FILENAME)
        ]

        options = SendMailOptions(
            to=to,
            subject=LOGS_EMAIL_SUBJECT,
            html_body=LOGS_EMAIL_BODY.format(
                filenames=", ".join(attachment.filename for attachment in attachments)
            ),
            attachments=attachments,
        )

        try:
            await self._deliver(options)
        except (smtplib.SMTPException, OSError) as e:
            raise EmailDeliveryError(str(e) or type(e).__name__) from e

        return True

    async def _deliver(self, options: SendMailOptions) -> None:
        loop = asyncio.get_running_loop()

        # attachments are read from disk, so the whole message is built off the loop
        await loop.run_in_executor(None, self._build_and_send, options)

        logger.info(f"Email sent to {options.to}: {options.subject}")

    def _build_and_send(self, options: SendMailOptions) -> None:
        self._send(self._build_message(options))

    def _build_message(self, options: SendMailOptions) -> EmailMessage:
        recipients = [options.to] if isinstance(options.to, str) else list(options.to)

        message = EmailMessage()
        message["Subject"] = options.subject
        message["From"] = self.mailer_config.EMAIL
        message["To"] = ", ".join(recipients)

        message.set_content("This email requires an HTML capable client.")
        message.add_alternative(options.html_body, subtype="html")

        for attachment in options.attachments:
            content = attachment.path.read_bytes()

            if attachment.complete_lines_only:
                content = content[: content.rfind(b"\n") + 1]

            message.add_attachment(
                content,
                maintype="text",
                subtype="plain",
                filename=attachment.filename,
            )

        return message

    def _send(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.mailer_config.HOST, self.mailer_config.PORT) as server:
            server.ehlo()

            if self.mailer_config.USE_TLS:
                server.starttls()
                server.ehlo()

            server.login(self.mailer_config.EMAIL, self.mailer_config.SECRET_KEY)
            server.send_message(message)


@lru_cache
def get_smtp_email_sender() -> EmailSender:
    config = get_config()

    if config.MAILER_CONFIG is None:
        raise RuntimeError("MAILER_CONFIG is not set")

    return SmtpEmailSender(config.MAILER_CONFIG, config.LOG_STORAGE_CONFIG.LOGS_DIR)
