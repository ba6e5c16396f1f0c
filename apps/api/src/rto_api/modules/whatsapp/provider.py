"""
Messaging Provider

Thin adapter over the Twilio SDK. The service layer builds a fully validated
MessagePayload and hands it to a MessagingProvider together with decrypted
credentials; the provider performs the outbound call and returns the
message SID.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from requests.exceptions import RequestException
from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from rto_api.modules.twilio_settings.schemas import TwilioCredentials

logger = logging.getLogger(__name__)


class MessagingProviderError(Exception):
    """Raised when the provider rejects or fails a send."""


@dataclass
class MessagePayload:
    """Provider message-create parameters. Addresses are already canonical."""

    to: str
    from_: str | None = None
    messaging_service_sid: str | None = None
    body: str | None = None
    media_url: list[str] = field(default_factory=list)
    content_sid: str | None = None
    content_variables: str | None = None

    def to_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``client.messages.create``, omitting unset fields."""
        kwargs: dict[str, Any] = {"to": self.to}
        if self.messaging_service_sid:
            kwargs["messaging_service_sid"] = self.messaging_service_sid
        elif self.from_:
            kwargs["from_"] = self.from_
        if self.content_sid:
            kwargs["content_sid"] = self.content_sid
            if self.content_variables:
                kwargs["content_variables"] = self.content_variables
        else:
            if self.body:
                kwargs["body"] = self.body
            if self.media_url:
                kwargs["media_url"] = self.media_url
        return kwargs


class MessagingProvider(Protocol):
    async def send(self, credentials: TwilioCredentials, payload: MessagePayload) -> str: ...


class TwilioMessagingProvider:
    """Sends messages with the official Twilio SDK in a worker thread."""

    def _send_sync(self, credentials: TwilioCredentials, payload: MessagePayload) -> str:
        client = Client(credentials.account_sid, credentials.auth_token)
        message = client.messages.create(**payload.to_kwargs())
        return message.sid

    async def send(self, credentials: TwilioCredentials, payload: MessagePayload) -> str:
        try:
            return await asyncio.to_thread(self._send_sync, credentials, payload)
        except TwilioException as e:
            logger.warning(f"Twilio rejected message create: {type(e).__name__}")
            raise MessagingProviderError(str(e)) from e
        except RequestException as e:
            logger.warning(f"Twilio request failed in transport: {type(e).__name__}")
            raise MessagingProviderError(f"Messaging provider unreachable: {type(e).__name__}") from e


_provider = TwilioMessagingProvider()


def get_messaging_provider() -> MessagingProvider:
    """FastAPI dependency returning the messaging provider."""
    return _provider
