from abc import ABC, abstractmethod

from src.service.consultation.app.dto.email_message import EmailMessage


class IEmailNotifier(ABC):
    """Outbound email port"""

    @abstractmethod
    async def send(self, *, message: EmailMessage) -> None:
        """
        Deliver one message.

        Raises:
            NotificationFailedError: provider rejected or could not be reached
        """
        pass
