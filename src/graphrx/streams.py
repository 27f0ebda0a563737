"""Synchronous observables used to expose graph events as streams.

Delivery is depth-first on the caller's stack: a value pushed into a
:class:`Subject` reaches every subscriber before ``on_next`` returns, and a
subscriber that pushes more values from inside its callback has them delivered
before control returns to it. An exception raised by a subscriber callback is
logged and swallowed at that subscriber, so the remaining subscribers (and
whoever pushed the value) are unaffected. An error with no ``on_error``
handler is logged the same way.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

T = TypeVar("T")
R = TypeVar("R")

Teardown = Union["Subscription", Callable[[], None], None]
OnNext = Optional[Callable[[Any], None]]
OnError = Optional[Callable[[BaseException], None]]
OnCompleted = Optional[Callable[[], None]]

logger = logging.getLogger(__name__)


class Subscription:
    """Handle returned by :meth:`Observable.subscribe`."""

    def __init__(self) -> None:
        self.closed = False
        self._teardowns: List[Callable[[], None]] = []

    def add(self, teardown: Teardown) -> None:
        """Run ``teardown`` on unsubscribe, or right away if already closed."""
        if teardown is None:
            return
        if isinstance(teardown, Subscription):
            teardown = teardown.unsubscribe
        if self.closed:
            teardown()
        else:
            self._teardowns.append(teardown)

    def unsubscribe(self) -> None:
        if self.closed:
            return
        self.closed = True
        teardowns, self._teardowns = self._teardowns, []
        for teardown in teardowns:
            teardown()


class Subscriber:
    """Wraps consumer callbacks and stops delivery after a terminal notification."""

    def __init__(
        self,
        on_next: OnNext = None,
        on_error: OnError = None,
        on_completed: OnCompleted = None,
    ) -> None:
        self._on_next = on_next
        self._on_error = on_error
        self._on_completed = on_completed
        self.subscription = Subscription()
        self._stopped = False

    @property
    def closed(self) -> bool:
        return self._stopped or self.subscription.closed

    def on_next(self, value: Any) -> None:
        if self.closed or self._on_next is None:
            return
        try:
            self._on_next(value)
        except Exception:
            logger.exception("Stream subscriber failed while handling %r", value)

    def on_error(self, error: BaseException) -> None:
        if self.closed:
            return
        self._stopped = True
        try:
            if self._on_error is None:
                logger.error("Unhandled stream error", exc_info=error)
            else:
                self._on_error(error)
        except Exception:
            logger.exception("Stream subscriber failed while handling an error")
        finally:
            self.subscription.unsubscribe()

    def on_completed(self) -> None:
        if self.closed:
            return
        self._stopped = True
        try:
            if self._on_completed is not None:
                self._on_completed()
        except Exception:
            logger.exception("Stream subscriber failed on completion")
        finally:
            self.subscription.unsubscribe()


class Observable(Generic[T]):
    """A lazy push-based stream.

    ``subscribe_fn`` runs once per subscription with the :class:`Subscriber`
    to feed, and may return a teardown callable or :class:`Subscription`.
    """

    def __init__(self, subscribe_fn: Callable[[Subscriber], Teardown]) -> None:
        self._subscribe_fn = subscribe_fn

    def subscribe(
        self,
        on_next: OnNext = None,
        on_error: OnError = None,
        on_completed: OnCompleted = None,
    ) -> Subscription:
        subscriber = Subscriber(on_next, on_error, on_completed)
        try:
            teardown = self._subscribe_fn(subscriber)
        except BaseException:
            # release whatever was attached before the failure
            subscriber.subscription.unsubscribe()
            raise
        subscriber.subscription.add(teardown)
        return subscriber.subscription

    def _forward(self, subscriber: Subscriber, on_next: Callable[[Any], None]) -> Subscription:
        return self.subscribe(on_next, subscriber.on_error, subscriber.on_completed)

    def filter(self, predicate: Callable[[T], bool]) -> "Observable[T]":
        def subscribe(subscriber: Subscriber) -> Teardown:
            def on_next(value: T) -> None:
                if predicate(value):
                    subscriber.on_next(value)

            return self._forward(subscriber, on_next)

        return Observable(subscribe)

    def map(self, mapper: Callable[[T], R]) -> "Observable[R]":
        def subscribe(subscriber: Subscriber) -> Teardown:
            return self._forward(subscriber, lambda value: subscriber.on_next(mapper(value)))

        return Observable(subscribe)

    def start_with(self, *values: T) -> "Observable[T]":
        """Emit ``values`` synchronously on subscription, then the source."""

        def subscribe(subscriber: Subscriber) -> Teardown:
            for value in values:
                if subscriber.closed:
                    return None
                subscriber.on_next(value)
            if subscriber.closed:
                return None
            return self._forward(subscriber, subscriber.on_next)

        return Observable(subscribe)

    def take(self, count: int) -> "Observable[T]":
        """Emit at most ``count`` values, then complete."""

        def subscribe(subscriber: Subscriber) -> Teardown:
            if count <= 0:
                subscriber.on_completed()
                return None
            seen = 0

            def on_next(value: T) -> None:
                nonlocal seen
                if seen >= count:
                    return
                seen += 1
                subscriber.on_next(value)
                if seen >= count:
                    subscriber.on_completed()

            return self._forward(subscriber, on_next)

        return Observable(subscribe)

    def take_until(self, notifier: "Observable[Any]") -> "Observable[T]":
        """Mirror the source until ``notifier`` emits, then complete.

        A notifier that completes without emitting has no effect.
        """

        def subscribe(subscriber: Subscriber) -> Teardown:
            subscriber.subscription.add(
                notifier.subscribe(lambda _: subscriber.on_completed(), subscriber.on_error)
            )
            if subscriber.closed:
                return None
            return self._forward(subscriber, subscriber.on_next)

        return Observable(subscribe)

    def finalize(self, callback: Callable[[], None]) -> "Observable[T]":
        """Call ``callback`` once the subscription ends for any reason."""

        def subscribe(subscriber: Subscriber) -> Teardown:
            subscriber.subscription.add(callback)
            return self._forward(subscriber, subscriber.on_next)

        return Observable(subscribe)


def merge(*sources: Observable[Any]) -> Observable[Any]:
    """Interleave ``sources``; complete once all of them have completed."""

    def subscribe(subscriber: Subscriber) -> Teardown:
        remaining = len(sources)
        if remaining == 0:
            subscriber.on_completed()
            return None

        def on_completed() -> None:
            nonlocal remaining
            remaining -= 1
            if remaining == 0:
                subscriber.on_completed()

        for source in sources:
            if subscriber.closed:
                break
            subscriber.subscription.add(
                source.subscribe(subscriber.on_next, subscriber.on_error, on_completed)
            )
        return None

    return Observable(subscribe)


class Subject(Observable[T]):
    """A multicast stream without replay.

    Values pushed with :meth:`on_next` go to the current subscribers only.
    After :meth:`on_completed` or :meth:`on_error` the subject is stopped:
    further notifications are ignored and late subscribers are told right
    away that it finished.
    """

    def __init__(self) -> None:
        super().__init__(self._subscribe_core)
        self._subscribers: List[Subscriber] = []
        self.is_stopped = False
        self._error: Optional[BaseException] = None

    @property
    def observer_count(self) -> int:
        return len(self._subscribers)

    def _subscribe_core(self, subscriber: Subscriber) -> Teardown:
        if self.is_stopped:
            if self._error is not None:
                subscriber.on_error(self._error)
            else:
                subscriber.on_completed()
            return None
        self._subscribers.append(subscriber)

        def teardown() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return teardown

    def on_next(self, value: T) -> None:
        if self.is_stopped:
            return
        for subscriber in list(self._subscribers):
            subscriber.on_next(value)

    def on_error(self, error: BaseException) -> None:
        if self.is_stopped:
            return
        self.is_stopped = True
        self._error = error
        subscribers, self._subscribers = self._subscribers, []
        for subscriber in subscribers:
            subscriber.on_error(error)

    def on_completed(self) -> None:
        if self.is_stopped:
            return
        self.is_stopped = True
        subscribers, self._subscribers = self._subscribers, []
        for subscriber in subscribers:
            subscriber.on_completed()

    def as_observable(self) -> Observable[T]:
        """Return a view of this subject that cannot push values."""
        return Observable(self._subscribe_fn)


class BehaviorSubject(Subject[T]):
    """A :class:`Subject` that replays its latest value to new subscribers."""

    def __init__(self, value: T) -> None:
        super().__init__()
        self.value = value

    def _subscribe_core(self, subscriber: Subscriber) -> Teardown:
        teardown = super()._subscribe_core(subscriber)
        if not self.is_stopped:
            subscriber.on_next(self.value)
        return teardown

    def on_next(self, value: T) -> None:
        if self.is_stopped:
            return
        self.value = value
        super().on_next(value)
