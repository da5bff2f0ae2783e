"""Typed resolution events.

Each dataclass is published on `svcmodels.eventbus` under its class name.
`subscribe(handler)` registers handler(name, payload) for every event; a
built-in collector, itself a bus subscriber, turns events into metrics.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from time import time
from typing import Any, Callable, Dict, Protocol

from svcmodels import metrics as _metrics
from svcmodels.eventbus import emit as _emit_bus
from svcmodels.eventbus import reset_for_tests as _reset_bus
from svcmodels.eventbus import subscribe_all as _subscribe_all

EventHandler = Callable[[str, Dict[str, Any]], None]


class SupportsEvent(Protocol):  # pragma: no cover
    def to_event(self) -> Dict[str, Any]:  # noqa: D401
        ...


@dataclass(slots=True)
class BaseEvent:
    def to_event(self) -> Dict[str, Any]:  # noqa: D401
        data = asdict(self)
        data["ts"] = data.get("ts") or time()
        return data


@dataclass(slots=True)
class ManifestLoaded(BaseEvent):
    path: str
    services: int


@dataclass(slots=True)
class DescriptorLoaded(BaseEvent):
    doc_type: str
    service: str
    version: str
    format: str  # msgpack|json
    path: str
    load_ms: float


@dataclass(slots=True)
class DescriptorParseFailed(BaseEvent):
    """Candidate file present but undecodable.

    error_type: taxonomy code (always parse-error today).
    """
    doc_type: str
    service: str
    version: str
    path: str
    error_type: str
    message: str | None = None


@dataclass(slots=True)
class LatestVersionResolved(BaseEvent):
    """Directory scan picked a concrete version for "latest".

    candidates: number of matching api files seen by the scan.
    """
    service: str
    version: str
    candidates: int
    base_dir: str


@dataclass(slots=True)
class DescriptorUnresolved(BaseEvent):
    doc_type: str
    service: str
    version: str
    error_type: str = "unresolved-descriptor"


def _metrics_collector(
    name: str, payload: Dict[str, Any]
) -> None:  # noqa: D401
    if name == "DescriptorLoaded":
        _metrics.inc(
            "descriptor_load_total",
            {"type": payload.get("doc_type"), "format": payload.get("format")},
        )
        _metrics.observe(
            "descriptor_load_ms",
            payload.get("load_ms", 0),
            {"format": payload.get("format", "unknown")},
        )
    elif name == "DescriptorParseFailed":
        _metrics.inc(
            "descriptor_parse_errors_total",
            {"type": payload.get("doc_type", "unknown")},
        )
    elif name == "LatestVersionResolved":
        _metrics.inc("latest_scan_total", {"result": "hit"})
    elif name == "ManifestLoaded":
        _metrics.inc("manifest_load_total")
    elif name == "DescriptorUnresolved":
        _metrics.inc(
            "descriptor_unresolved_total",
            {"type": payload.get("doc_type", "unknown")},
        )


_subscribe_all(_metrics_collector)


def emit(ev: BaseEvent | SupportsEvent) -> None:
    """Publish a typed event under its class name."""
    _emit_bus(ev.__class__.__name__, ev.to_event())


def subscribe(handler: EventHandler) -> Callable[[], None]:
    return _subscribe_all(handler)


on = subscribe


def reset_listeners_for_tests() -> None:  # pragma: no cover
    """Drop every subscription, keeping only the metrics collector."""
    _reset_bus()
    _subscribe_all(_metrics_collector)


__all__ = [
    "emit",
    "on",
    "subscribe",
    "BaseEvent",
    "ManifestLoaded",
    "DescriptorLoaded",
    "DescriptorParseFailed",
    "LatestVersionResolved",
    "DescriptorUnresolved",
    "reset_listeners_for_tests",
]
