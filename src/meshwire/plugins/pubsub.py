"""In-process publish/subscribe

Used as the gateway's pub/sub when no backend is configured. Events are
multiplexed by a pyee emitter; each subscription request receives its own
buffered async iterator.
"""
from __future__ import annotations

import asyncio
import logging
import typing

from meshwire.exceptions import PubSubCapacityError
from meshwire.utils import maybe_await
from pyee.asyncio import AsyncIOEventEmitter

__all__ = ["PubSub", "PubSubAsyncIterator", "FilteredAsyncIterator", "with_filter"]

logger = logging.getLogger(__name__)

Handler = typing.Callable[[typing.Any], typing.Any]

_DONE = object()


class PubSub:
    """Topic based pub/sub over an event emitter

    **Parameters**

    * **max_subscribers**: _Optional[int]_ = Total subscribers allowed across all topics, unbounded when None
    * **emitter**: _AsyncIOEventEmitter_ = Emitter to multiplex events on, a new one by default
    """

    def __init__(self, max_subscribers: typing.Optional[int] = None, emitter: typing.Optional[AsyncIOEventEmitter] = None):
        self.max_subscribers = max_subscribers
        self._emitter = emitter if emitter is not None else AsyncIOEventEmitter()
        # Listener failures are reported here instead of propagating into publish
        self._emitter.on("error", self._on_error)
        self._subscriber_count = 0

    @property
    def subscriber_count(self) -> int:
        return self._subscriber_count

    def publish(self, topic: str, payload: typing.Any) -> bool:
        """Deliver *payload* to every subscriber of *topic*, returns whether anyone was listening"""
        return self._emitter.emit(topic, payload)

    def subscribe(self, topic: str, handler: Handler) -> Handler:
        if self.max_subscribers is not None and self._subscriber_count >= self.max_subscribers:
            raise PubSubCapacityError(f"Subscriber limit of {self.max_subscribers} reached, unable to subscribe to {topic}")
        self._emitter.on(topic, handler)
        self._subscriber_count += 1
        return handler

    def unsubscribe(self, topic: str, handler: Handler) -> None:
        try:
            self._emitter.remove_listener(topic, handler)
        except KeyError:
            return
        self._subscriber_count -= 1

    def async_iterator(self, topic: str) -> PubSubAsyncIterator:
        return PubSubAsyncIterator(self, topic)

    @staticmethod
    def _on_error(error: Exception) -> None:
        logger.error("Pub/sub listener failed: %s", error, exc_info=error)


class PubSubAsyncIterator:
    """Buffers events published on *topic* until they are consumed

    Subscribes on creation and unsubscribes on ``aclose``.
    """

    def __init__(self, pubsub: PubSub, topic: str):
        self.pubsub = pubsub
        self.topic = topic
        self._queue: asyncio.Queue = asyncio.Queue()
        self._listening = True
        pubsub.subscribe(topic, self._push)

    def _push(self, payload: typing.Any) -> None:
        self._queue.put_nowait(payload)

    def __aiter__(self) -> PubSubAsyncIterator:
        return self

    async def __anext__(self) -> typing.Any:
        if not self._listening and self._queue.empty():
            raise StopAsyncIteration
        payload = await self._queue.get()
        if payload is _DONE:
            raise StopAsyncIteration
        return payload

    async def aclose(self) -> None:
        if self._listening:
            self._listening = False
            self.pubsub.unsubscribe(self.topic, self._push)
            self._queue.put_nowait(_DONE)


class FilteredAsyncIterator:
    """Yields only the events of *iterator* for which *predicate* holds"""

    def __init__(self, iterator: typing.AsyncIterator[typing.Any], predicate: typing.Callable[[typing.Any], typing.Any]):
        self.iterator = iterator
        self.predicate = predicate

    def __aiter__(self) -> FilteredAsyncIterator:
        return self

    async def __anext__(self) -> typing.Any:
        while True:
            payload = await self.iterator.__anext__()
            if await maybe_await(self.predicate(payload)):
                return payload

    async def aclose(self) -> None:
        aclose = getattr(self.iterator, "aclose", None)
        if aclose is not None:
            await aclose()


def with_filter(
    iterator_fn: typing.Callable[..., typing.Any],
    filter_fn: typing.Callable[..., typing.Any],
) -> typing.Callable[..., typing.Awaitable[FilteredAsyncIterator]]:
    """Wrap a graphql-core subscribe function so only events passing *filter_fn* are yielded

    Both functions receive the resolver signature, filter_fn gets the event
    payload in place of the root value: filter_fn(payload, info, **args)

    The source iterator is created as soon as the subscription is requested,
    so events published before the first read are buffered rather than lost.
    """

    async def subscribe(root, info, **args) -> FilteredAsyncIterator:
        iterator = await maybe_await(iterator_fn(root, info, **args))
        return FilteredAsyncIterator(iterator, lambda payload: filter_fn(payload, info, **args))

    return subscribe
