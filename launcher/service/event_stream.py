"""Broadcast channel fanning launch results out to any number of subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from launcher.domain import LaunchResult

logger = logging.getLogger(__name__)

_STREAM_CLOSED = object()


class LaunchEventSubscription:
    """One subscriber's view of the stream, consumable with `async for`.

    Each subscription owns an unbounded queue, so publishing never waits on a
    slow consumer.
    """

    def __init__(self, stream: LaunchEventStream):
        self._stream = stream
        self._queue: asyncio.Queue[object] = asyncio.Queue()
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> LaunchEventSubscription:
        return self

    async def __anext__(self) -> LaunchResult:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _STREAM_CLOSED:
            self._closed = True
            raise StopAsyncIteration
        return item  # type: ignore[return-value]

    def subscription_pending(self) -> list[LaunchResult]:
        """Drain and return already-delivered events without waiting.

        Returns:
            list[LaunchResult]: Events in publish order.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        pending_events: list[LaunchResult] = []
        while True:
            try:
                item = self._queue.get_nowait()
            except asyncio.QueueEmpty:
                return pending_events
            if item is _STREAM_CLOSED:
                self._closed = True
                return pending_events
            pending_events.append(item)  # type: ignore[arg-type]

    def subscription_cancel(self) -> None:
        """Stop receiving events; already-queued events remain readable."""

        self._stream.stream_unsubscribe(self)
        self._subscription_deliver_close()

    def _subscription_deliver(self, result: LaunchResult) -> None:
        if not self._closed:
            self._queue.put_nowait(result)

    def _subscription_deliver_close(self) -> None:
        if not self._closed:
            self._queue.put_nowait(_STREAM_CLOSED)


class LaunchEventStream:
    """Multi-subscriber broadcast of launch results.

    Results are delivered in publish order to every subscription and listener
    registered at publish time. After `stream_close` nothing more is delivered.
    """

    def __init__(self):
        self._subscriptions: list[LaunchEventSubscription] = []
        self._listeners: list[Callable[[LaunchResult], None]] = []
        self._closed = False

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions) + len(self._listeners)

    def stream_subscribe(self) -> LaunchEventSubscription:
        """Register a new queue-backed subscription.

        Returns:
            LaunchEventSubscription: Subscription that is already closed when the stream is closed.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        subscription = LaunchEventSubscription(self)
        if self._closed:
            subscription._subscription_deliver_close()
            return subscription
        self._subscriptions.append(subscription)
        return subscription

    def stream_unsubscribe(self, subscription: LaunchEventSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def stream_listen(self, listener: Callable[[LaunchResult], None]) -> Callable[[], None]:
        """Register a synchronous callback invoked for every published result.

        Args:
            listener: Callback receiving each result; exceptions are logged and ignored.

        Returns:
            Callable[[], None]: Function removing the listener.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        if not self._closed:
            self._listeners.append(listener)

        def _remove_listener() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove_listener

    def stream_publish(self, result: LaunchResult) -> bool:
        """Deliver one result to every current subscriber without blocking.

        Args:
            result: Launch result to broadcast.

        Returns:
            bool: False when the stream is closed and the result was dropped.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        if self._closed:
            logger.debug("Dropping launch event for %s on closed stream", result.application_id)
            return False

        for subscription in list(self._subscriptions):
            subscription._subscription_deliver(result)
        for listener in list(self._listeners):
            try:
                listener(result)
            except Exception:  # pylint: disable=broad-except
                logger.exception("Launch event listener failed for %s", result.application_id)
        return True

    def stream_close(self) -> None:
        """Close the stream and end every subscription; idempotent."""

        if self._closed:
            return
        self._closed = True
        for subscription in self._subscriptions:
            subscription._subscription_deliver_close()
        self._subscriptions.clear()
        self._listeners.clear()
