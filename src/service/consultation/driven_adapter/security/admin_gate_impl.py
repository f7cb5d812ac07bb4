import hmac
from typing import Optional

from pydantic import SecretStr

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.consultation_metrics import metrics
from src.service.consultation.app.interface.i_admin_gate import IAdminGate


class SharedSecretAdminGate(IAdminGate):
    """Compares the supplied credential with the configured ADMIN_SECRET"""

    def __init__(self, *, admin_secret: SecretStr) -> None:
        self._admin_secret = admin_secret.get_secret_value().encode('utf-8')

    @Logger.io
    def authorize(self, *, supplied_secret: Optional[SecretStr], action: str) -> bool:
        supplied = supplied_secret.get_secret_value() if supplied_secret is not None else ''
        # An unset ADMIN_SECRET authorizes nobody, including an empty credential
        authorized = bool(self._admin_secret) and hmac.compare_digest(
            supplied.encode('utf-8'), self._admin_secret
        )
        if not authorized:
            metrics.record_admin_auth_failure(action=action)
            reason = 'no admin secret configured' if not self._admin_secret else 'bad credential'
            Logger.base.warning(f'🔒 [ADMIN] denied {action}: {reason}')
        return authorized
