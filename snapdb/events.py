"""Synchronous, per-instance observer lists keyed by event name."""

from __future__ import annotations

from typing import Any, Callable, Literal

EventName = Literal["ready", "set", "delete", "clear", "error"]
EVENTS: tuple[str, ...] = ("ready", "set", "delete", "clear", "error")

Listener = Callable[..., Any]


class EventBus:
    """
    Listeners run in subscription order, inside the emit() call.

    Exceptions raised by a listener propagate to whoever triggered the event.
    Emitting an event nobody listens to is a no-op (including "error").
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {name: [] for name in EVENTS}

    def _bucket(self, event: str) -> list[Listener]:
        try:
            return self._listeners[event]
        except KeyError:
            raise ValueError(f"Unknown event {event!r}; expected one of {', '.join(EVENTS)}") from None

    def on(self, event: EventName, listener: Listener) -> Listener:
        self._bucket(event).append(listener)
        return listener

    def once(self, event: EventName, listener: Listener) -> Listener:
        def _wrapper(*args: Any) -> Any:
            self.off(event, _wrapper)
            return listener(*args)

        self._bucket(event).append(_wrapper)
        return _wrapper

    def off(self, event: EventName, listener: Listener) -> bool:
        bucket = self._bucket(event)
        try:
            bucket.remove(listener)
        except ValueError:
            return False
        return True

    def listeners(self, event: EventName) -> list[Listener]:
        return list(self._bucket(event))

    def emit(self, event: EventName, *args: Any) -> bool:
        # snapshot so listeners may unsubscribe while being called
        bucket = list(self._bucket(event))
        for listener in bucket:
            listener(*args)
        return bool(bucket)
