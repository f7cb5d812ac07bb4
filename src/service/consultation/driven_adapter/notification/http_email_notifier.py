"""
Transactional email over an HTTP API (Resend-compatible payload).

POST {EMAIL_API_URL}
Authorization: Bearer {EMAIL_API_KEY}
{"from": ..., "to": [...], "subject": ..., "html": ...}
"""

import httpx
import orjson
from pydantic import SecretStr

from src.platform.exception.exceptions import NotificationFailedError
from src.platform.logging.loguru_io import Logger
from src.service.consultation.app.dto.email_message import EmailMessage
from src.service.consultation.app.interface.i_email_notifier import IEmailNotifier


class HttpEmailNotifier(IEmailNotifier):
    def __init__(
        self,
        *,
        api_url: str,
        api_key: SecretStr,
        sender: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_url = api_url
        self._api_key = api_key
        self._sender = sender
        self._timeout = timeout_seconds
        self._transport = transport

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            body = orjson.loads(resp.content)
        except orjson.JSONDecodeError:
            return resp.text[:200]
        if isinstance(body, dict):
            return str(body.get('message') or body.get('error') or body)[:200]
        return str(body)[:200]

    async def send(self, *, message: EmailMessage) -> None:
        if not self._api_key.get_secret_value():
            raise NotificationFailedError('EMAIL_API_KEY is not configured')

        payload = {
            'from': self._sender,
            'to': [message.to],
            'subject': message.subject,
            'html': message.html,
        }
        headers = {'Authorization': f'Bearer {self._api_key.get_secret_value()}'}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(self._api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise NotificationFailedError(f'email provider unreachable: {type(e).__name__}') from e

        if resp.status_code >= 400:
            error_message = self._error_message(resp)
            Logger.base.error(
                f'📭 [MAIL] provider rejected {message.kind}: '
                f'status={resp.status_code} error={error_message}'
            )
            raise NotificationFailedError(f'email provider returned {resp.status_code}')

        Logger.base.info(f'📧 [MAIL] {message.kind} accepted by provider')
