"""
Best-effort email dispatch.

Runs after the owning transaction committed; its outcome only ever becomes
the `notified` flag of a response.
"""

import anyio

from src.platform.exception.exceptions import NotificationFailedError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.consultation_metrics import metrics
from src.service.consultation.app.dto.email_message import EmailMessage
from src.service.consultation.app.interface.i_email_notifier import IEmailNotifier


class NotificationDispatcher:
    def __init__(self, *, email_notifier: IEmailNotifier, timeout_seconds: float) -> None:
        self.email_notifier = email_notifier
        self.timeout_seconds = timeout_seconds

    async def _send_one(self, message: EmailMessage, delivered: list[EmailMessage]) -> None:
        try:
            await self.email_notifier.send(message=message)
        except NotificationFailedError as e:
            Logger.base.warning(f'📭 [NOTIFY] {message.kind} not sent: {e.message}')
        except Exception as e:
            Logger.base.exception(f'📭 [NOTIFY] {message.kind} crashed: {type(e).__name__}: {e}')
        else:
            delivered.append(message)

    @Logger.io(truncate_content=True)
    async def dispatch(self, *messages: EmailMessage) -> bool:
        """
        Send all messages concurrently within the timeout.

        Returns True only if every message was delivered; a timeout counts as
        not sent. Never raises.
        """
        if not messages:
            return True

        delivered: list[EmailMessage] = []
        with anyio.move_on_after(self.timeout_seconds) as scope:
            async with anyio.create_task_group() as tg:
                for message in messages:
                    tg.start_soon(self._send_one, message, delivered)

        if scope.cancelled_caught:
            Logger.base.warning(
                f'⏱️ [NOTIFY] timed out after {self.timeout_seconds}s, '
                f'{len(delivered)}/{len(messages)} delivered'
            )

        for message in messages:
            metrics.record_notification(kind=message.kind, sent=message in delivered)
        return len(delivered) == len(messages)
