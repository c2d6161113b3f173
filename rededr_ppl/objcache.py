"""Cache of process ids and whether each process is being observed."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

import psutil

__all__ = ["CacheEntry", "ObjectCache", "process_path"]

log = logging.getLogger(__name__)

PathLookup = Callable[[int], Optional[str]]


@dataclass
class CacheEntry:
    """A process id and whether its events are to be forwarded."""

    pid: int
    observe: bool


def process_path(pid: int) -> Optional[str]:
    """Executable path of a running process, or None if it cannot be read."""
    try:
        return psutil.Process(pid).exe() or None
    except (psutil.Error, OSError, ValueError):
        return None


class ObjectCache:
    """Thread-safe map from process id to observation decision.

    A process is observed when the target name is set and occurs in the
    path of its executable. The decision is made once, on first lookup.
    """

    def __init__(self, path_lookup: PathLookup = process_path) -> None:
        self._path_lookup = path_lookup
        self._entries: dict[int, CacheEntry] = {}
        self._lock = threading.Lock()
        self._target_name: Optional[str] = None

    @property
    def target_name(self) -> Optional[str]:
        """Substring of the executable path that marks a process as observed."""
        return self._target_name

    @target_name.setter
    def target_name(self, name: Optional[str]) -> None:
        self._target_name = name

    def get(self, pid: int) -> CacheEntry:
        """Entry for a process, deciding and caching it when first seen."""
        entry = self.find(pid)
        if entry is not None:
            return entry

        observe = False
        target = self._target_name
        if target is not None:
            path = self._path_lookup(pid)
            if path is not None and target in path:
                log.info("Objcache: observe process %d executable path: %s", pid, path)
                observe = True
        return self.add(pid, observe)

    def add(self, pid: int, observe: bool) -> CacheEntry:
        """Store an entry for a process and return it."""
        entry = CacheEntry(pid, bool(observe))
        with self._lock:
            self._entries[pid] = entry
        return entry

    def find(self, pid: int) -> Optional[CacheEntry]:
        """Cached entry for a process, or None when it has not been seen."""
        with self._lock:
            return self._entries.get(pid)

    def clear(self) -> None:
        """Forget every cached process."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)