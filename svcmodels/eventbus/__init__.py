"""In-process event bus for descriptor resolution events.

Handlers run synchronously on the emitting thread, outside the bus lock,
so a handler may call back into the registry or providers. Two kinds of
subscription exist:

  - ``subscribe(name, handler)``: handler(payload) for one event name
  - ``subscribe_all(handler)``: handler(name, payload) for every event

A failing handler is counted in ``handler_exceptions_total{event}`` and
never reaches the emitter. Each dispatch is timed into the
``event_dispatch_ms{event}`` histogram.
"""
from __future__ import annotations

from threading import RLock
from time import perf_counter, time
from typing import Any, Callable, Dict, List

from svcmodels import metrics

Handler = Callable[[Dict[str, Any]], None]
AnyHandler = Callable[[str, Dict[str, Any]], None]
Unsubscribe = Callable[[], None]


def _remover(lock: RLock, handlers: List[Any], handler: Any) -> Unsubscribe:
    def _unsub() -> None:
        with lock:
            if handler in handlers:
                handlers.remove(handler)
    return _unsub


class EventBus:
    def __init__(self) -> None:
        self._named: Dict[str, List[Handler]] = {}
        self._any: List[AnyHandler] = []
        self._lock = RLock()

    def subscribe(self, event: str, handler: Handler) -> Unsubscribe:
        with self._lock:
            handlers = self._named.setdefault(event, [])
            handlers.append(handler)
        return _remover(self._lock, handlers, handler)

    def subscribe_all(self, handler: AnyHandler) -> Unsubscribe:
        with self._lock:
            self._any.append(handler)
        return _remover(self._lock, self._any, handler)

    def emit(self, event: str, payload: Dict[str, Any]) -> None:
        payload.setdefault("ts", time())
        with self._lock:
            named = list(self._named.get(event, ()))
            wildcard = list(self._any)
        metrics.inc("events_emitted_total", {"event": event})
        started = perf_counter()
        for h in named:
            self._call(event, h, dict(payload))
        for h in wildcard:
            self._call(event, h, event, dict(payload))
        metrics.observe(
            "event_dispatch_ms",
            (perf_counter() - started) * 1000,
            {"event": event},
        )

    @staticmethod
    def _call(event: str, handler: Callable[..., None], *args: Any) -> None:
        try:
            handler(*args)
        except Exception:  # noqa: BLE001
            metrics.inc("handler_exceptions_total", {"event": event})

    def reset_for_tests(self) -> None:  # pragma: no cover
        with self._lock:
            self._named.clear()
            self._any.clear()


_BUS = EventBus()


def subscribe(event: str, handler: Handler) -> Unsubscribe:
    return _BUS.subscribe(event, handler)


def subscribe_all(handler: AnyHandler) -> Unsubscribe:
    return _BUS.subscribe_all(handler)


def emit(event: str, payload: Dict[str, Any]) -> None:
    _BUS.emit(event, payload)


def reset_for_tests() -> None:  # pragma: no cover
    _BUS.reset_for_tests()


__all__ = [
    "EventBus",
    "emit",
    "subscribe",
    "subscribe_all",
    "reset_for_tests",
]
