"""Fire-and-forget notification dispatch (payment code, payment link, inspection video)"""

import asyncio
import logging
from typing import Awaitable, Callable, Set
from boleto_gateway.config import settings
from boleto_gateway.domain.interfaces import MessagingClient
from boleto_gateway.domain.normalization import normalize_phone
from boleto_gateway.infrastructure.observability.metrics import record_dispatch

logger = logging.getLogger(__name__)

KIND_PAYMENT_CODE = "payment_code"
KIND_PAYMENT_LINK = "payment_link"
KIND_INSPECTION_VIDEO = "inspection_video"


class DispatchScheduler:
    """
    Owns in-flight notification tasks.

    Each notification is attempted once and never retried. submit() never raises
    because of the notification and never waits for it; a failure is logged
    and counted, nothing else.
    """

    def __init__(self) -> None:
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(self, kind: str, send: Callable[[], Awaitable[None]]) -> asyncio.Task:
        async def run() -> None:
            await send()

        task = asyncio.get_running_loop().create_task(run())
        task.set_name(f"dispatch:{kind}")
        self._tasks.add(task)
        task.add_done_callback(lambda done: self._discard(kind, done))
        return task

    def _discard(self, kind: str, task: asyncio.Task) -> None:
        self._tasks.discard(task)

        if task.cancelled():
            logger.warning("Notification cancelled", extra={"kind": kind})
            record_dispatch(kind, succeeded=False)
            return

        error = task.exception()
        if error is not None:
            logger.warning(f"Notification failed: {error}", extra={"kind": kind})
            record_dispatch(kind, succeeded=False)
            return

        record_dispatch(kind, succeeded=True)

    async def drain(self) -> None:
        """Wait for in-flight notifications (shutdown and tests)"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


class MediaDispatcher:
    """Sends a tenant's customer notifications without blocking the resolution"""

    def __init__(
        self,
        messaging_client: MessagingClient,
        scheduler: DispatchScheduler,
        payment_link_caption: str | None = None,
        inspection_video_caption: str | None = None,
    ):
        self.messaging_client = messaging_client
        self.scheduler = scheduler
        self.payment_link_caption = payment_link_caption or settings.payment_link_caption
        self.inspection_video_caption = inspection_video_caption or settings.inspection_video_caption

    def send_payment_code(self, phone: str, payment_code: str) -> None:
        """PIX copy-and-paste (or digitable line) as plain text"""
        self.scheduler.submit(
            KIND_PAYMENT_CODE,
            lambda: self.messaging_client.send_message(normalize_phone(phone), payment_code),
        )

    def send_payment_link(self, phone: str, link: str) -> None:
        """Boleto PDF as an attached file"""
        self.scheduler.submit(
            KIND_PAYMENT_LINK,
            lambda: self.messaging_client.send_message(normalize_phone(phone), self.payment_link_caption, link),
        )

    def send_inspection_video(self, phone: str, video_url: str) -> None:
        self.scheduler.submit(
            KIND_INSPECTION_VIDEO,
            lambda: self.messaging_client.send_message(
                normalize_phone(phone), self.inspection_video_caption, video_url
            ),
        )
