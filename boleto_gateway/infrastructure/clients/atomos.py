"""Atomos chat API client for outbound WhatsApp messages"""

import httpx
from typing import Any, Dict, Optional
from boleto_gateway.config import settings
from boleto_gateway.domain.exceptions import MessagingAPIError
from boleto_gateway.domain.normalization import normalize_phone
from boleto_gateway.infrastructure.observability.metrics import messaging_latency_histogram


class AtomosClient:
    """Client for sending text and media messages through a tenant's Atomos channel"""

    def __init__(
        self,
        chat_token: str,
        channel_token: str,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.chat_token = chat_token
        self.channel_token = channel_token
        self.base_url = (base_url or settings.atomos_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def send_message(self, to: str, text: str, file_url: Optional[str] = None) -> None:
        """
        Send one message, with an attached file when file_url is given.

        A single attempt is made; callers decide what a failure means.

        Raises:
            MessagingAPIError: On timeout, transport or HTTP errors
        """
        body: Dict[str, Any] = {"text": text}
        if file_url:
            body["fileUrl"] = file_url

        payload = {
            "body": body,
            "from": self.channel_token,
            "to": normalize_phone(to),
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with messaging_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/message/send",
                        json=payload,
                        headers={
                            "Accept": "application/json",
                            "Authorization": f"Bearer {self.chat_token}",
                        },
                    )
                    response.raise_for_status()

            except httpx.TimeoutException as e:
                raise MessagingAPIError(f"Atomos API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise MessagingAPIError(f"Atomos send message failed: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise MessagingAPIError(f"Atomos API unreachable: {e}") from e
