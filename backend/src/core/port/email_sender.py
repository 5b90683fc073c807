from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

Recipients = str | list[str]


@dataclass(frozen=True)
class Attachment:
    filename: str
    path: Path
    # drop a trailing line that is still being appended
    complete_lines_only: bool = False


@dataclass
class SendMailOptions:
    to: Recipients
    subject: str
    html_body: str
    attachments: list[Attachment] = field(default_factory=list)


class EmailSender(ABC):
    @abstractmethod
    async def send_email(self, options: SendMailOptions) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def send_email_with_file_system_logs(self, to: Recipients) -> bool:
        raise NotImplementedError
