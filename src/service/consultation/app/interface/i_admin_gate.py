from abc import ABC, abstractmethod
from typing import Optional

from pydantic import SecretStr


class IAdminGate(ABC):
    """Single shared-secret check in front of every privileged operation"""

    @abstractmethod
    def authorize(self, *, supplied_secret: Optional[SecretStr], action: str) -> bool:
        """Constant-time comparison; failed attempts are logged under `action`"""
        pass
