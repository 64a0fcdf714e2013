"""
In-process live push for notifications.

A consumer (one WebSocket connection) subscribes on its own event loop and
iterates the handle; request handlers publish committed notifications from any
thread. Delivery is best-effort: nothing is queued for recipients that are not
subscribed at publish time, so reconnecting clients reconcile via the list API.
Each subscription buffers at most NOTIFICATION_QUEUE_SIZE records; a consumer
that falls further behind loses the overflow.
"""
import asyncio
import logging
import threading
from typing import Dict, Optional, Set

from api.notifications.notifications_schema import NotificationRead
from config.settings import settings

logger = logging.getLogger(__name__)

_CLOSED = object()


class Subscription:
    """Cancellable handle yielding NotificationRead records for one recipient."""

    def __init__(
        self,
        hub: "NotificationHub",
        recipient_id: int,
        loop: asyncio.AbstractEventLoop,
        queue_size: int = 0,
    ):
        self.recipient_id = recipient_id
        self._hub = hub
        self._loop = loop
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=queue_size)
        self._closed = False

    @property
    def active(self) -> bool:
        return not self._closed

    def _deliver(self, record: NotificationRead) -> bool:
        if self._closed:
            return False
        try:
            self._loop.call_soon_threadsafe(self._offer, record)
        except RuntimeError:
            # consumer loop is gone; drop the subscription instead of leaking it
            logger.warning("dropping subscription for %s: event loop closed", self.recipient_id)
            self.cancel()
            return False
        return True

    def _offer(self, item) -> None:
        # runs on the consumer loop
        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull:
            if item is not _CLOSED:
                logger.warning(
                    "notification queue full for %s, dropping notification %s", self.recipient_id, item.id
                )

    def cancel(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._hub._remove(self)
        try:
            self._loop.call_soon_threadsafe(self._offer, _CLOSED)
        except RuntimeError:
            pass

    def __aiter__(self):
        return self

    async def __anext__(self) -> NotificationRead:
        # records delivered before cancel() are still handed out, then the sentinel ends iteration
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.cancel()


class NotificationHub:
    def __init__(self, queue_size: Optional[int] = None):
        self.queue_size = queue_size if queue_size is not None else settings.NOTIFICATION_QUEUE_SIZE
        self._subscriptions: Dict[int, Set[Subscription]] = {}
        self._lock = threading.Lock()

    def subscribe(self, recipient_id: int) -> Subscription:
        """Must be called from the consumer's running event loop."""
        subscription = Subscription(self, recipient_id, asyncio.get_running_loop(), self.queue_size)
        with self._lock:
            self._subscriptions.setdefault(recipient_id, set()).add(subscription)
        logger.debug("subscribed to notifications for %s", recipient_id)
        return subscription

    def publish(self, record: NotificationRead) -> int:
        """Deliver to every active subscription of the recipient; returns how many were reached."""
        with self._lock:
            targets = list(self._subscriptions.get(record.user_id, ()))
        return sum(1 for subscription in targets if subscription._deliver(record))

    def subscriber_count(self, recipient_id: int) -> int:
        with self._lock:
            return len(self._subscriptions.get(recipient_id, ()))

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            subs = self._subscriptions.get(subscription.recipient_id)
            if subs is None:
                return
            subs.discard(subscription)
            if not subs:
                del self._subscriptions[subscription.recipient_id]


notification_hub = NotificationHub()
