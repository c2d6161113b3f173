"""Filtering and naming of threat-intelligence trace events."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .objcache import ObjectCache

__all__ = [
    "EventRecord",
    "EtwTiHandler",
    "ti_event_name",
    "kernel_process_event_name",
]

log = logging.getLogger(__name__)

_UNKNOWN = "???"

_TI_EVENT_NAMES = {
    1: "ALLOCVM_REMOTE",
    2: "PROTECTVM_REMOTE",
    3: "MAPVIEW_REMOTE",
    4: "QUEUEUSERAPC_REMOTE",
    5: "SETTHREADCONTEXT_REMOTE",
    6: "ALLOCVM_LOCAL",
    7: "PROTECTVM_LOCAL",
    8: "MAPVIEW_LOCAL",
    9: _UNKNOWN,
    10: _UNKNOWN,
    11: "READVM_LOCAL",
    12: "WRITEVM_LOCAL",
    13: "READVM_REMOTE",
    14: "WRITEVM_REMOTE",
    15: "SUSPEND_THREAD",
    16: "RESUME_THREAD",
    17: "SUSPEND_PROCESS",
    18: "RESUME_PROCESS",
    19: "FREEZE_PROCESS",
    20: "THAW_PROCESS",
    21: "ALLOCVM_REMOTE_KERNEL_CALLER",
    22: "PROTECTVM_REMOTE_KERNEL_CALLER",
    23: "MAPVIEW_REMOTE_KERNEL_CALLER",
    24: "QUEUEUSERAPC_REMOTE_KERNEL_CALLER",
    25: "SETTHREADCONTEXT_REMOTE_KERNEL_CALLER",
    26: "ALLOCVM_LOCAL_KERNEL_CALLER",
    27: "PROTECTVM_LOCAL_KERNEL_CALLER",
    28: "MAPVIEW_LOCAL_KERNEL_CALLER",
    29: "DRIVER_OBJECT_LOAD",
    30: "DRIVER_OBJECT_UNLOAD",
    31: "DEVICE_OBJECT_LOAD",
    32: "DEVICE_OBJECT_UNLOAD",
}

_KERNEL_PROCESS_EVENT_NAMES = {
    1: "StartProcess",
    3: "StartThread",
}

Emit = Callable[[str, "EventRecord"], Any]


@dataclass
class EventRecord:
    """A trace event: its id, the process it came from and its properties."""

    event_id: int
    process_id: int
    properties: dict[str, Any] = field(default_factory=dict)


def ti_event_name(event_id: int) -> str:
    """Name of a threat-intelligence event id; "???" when unknown."""
    return _TI_EVENT_NAMES.get(event_id, _UNKNOWN)


def kernel_process_event_name(event_id: int) -> Optional[str]:
    """Name of a forwarded kernel-process event id, or None to drop it."""
    return _KERNEL_PROCESS_EVENT_NAMES.get(event_id)


class EtwTiHandler:
    """Forwards events of observed processes to an emitter.

    Nothing is forwarded until the handler is enabled. The emitter is
    called with the event name and the record.
    """

    def __init__(self, cache: ObjectCache, emit: Emit) -> None:
        self._cache = cache
        self._emit = emit
        self._enabled = False
        self.seen_event = False

    @property
    def enabled(self) -> bool:
        """Whether events are being forwarded."""
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        log.info("Consumer: Enable: %d", int(bool(value)))
        self._enabled = bool(value)

    def _observed(self, record: EventRecord) -> bool:
        return self._cache.get(record.process_id).observe

    def handle_ti(self, record: Optional[EventRecord]) -> Optional[str]:
        """Forward a threat-intelligence event; return its name if emitted."""
        if record is None or not self._enabled:
            return None
        if not self._observed(record):
            return None
        name = ti_event_name(record.event_id)
        self._emit(name, record)
        return name

    def handle_kernel_process(self, record: Optional[EventRecord]) -> Optional[str]:
        """Forward a process or thread start event; return its name if emitted."""
        if record is None or not self._enabled:
            return None
        if not self.seen_event:
            self.seen_event = True
            log.info("Consumer: Got a ETW-TI message, all is working")
        if not self._observed(record):
            return None
        name = kernel_process_event_name(record.event_id)
        if name is None:
            return None
        self._emit(name, record)
        return name