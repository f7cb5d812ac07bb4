"""Email notifier for local runs and tests: writes mails to the log instead of sending"""

from datetime import datetime, timezone
from typing import List

from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.dto.email_message import EmailMessage
from src.service.consultation.app.interface.i_email_notifier import IEmailNotifier


class ConsoleEmailNotifier(IEmailNotifier):
    def __init__(self) -> None:
        self.sent_emails: List[EmailMessage] = []  # Store sent emails for testing
        self.sent_at: List[datetime] = []

    async def send(self, *, message: EmailMessage) -> None:
        self.sent_emails.append(message)
        self.sent_at.append(datetime.now(timezone.utc))
        Logger.base.info(f'📧 [MAIL] {message.kind} | subject: {message.subject}')
