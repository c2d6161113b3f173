"""Handling of control commands sent by the collector."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Iterable, Optional

from .events import EtwTiHandler
from .objcache import ObjectCache

__all__ = ["Command", "ControlHandler", "parse_command"]

log = logging.getLogger(__name__)


class Command(enum.Enum):
    """Commands understood on the control channel."""

    START = "start"
    STOP = "stop"
    SHUTDOWN = "shutdown"
    UNKNOWN = "unknown"


def parse_command(text: str) -> tuple[Command, Optional[str]]:
    """Split a control message into its command and argument.

    Any message containing "start:" is a start command whose argument is
    the second non-empty colon-separated field, or None if there is none.
    "stop" and "shutdown" must match exactly.
    """
    text = text.rstrip("\x00")
    if "start:" in text:
        fields = [part for part in text.split(":") if part]
        return Command.START, fields[1] if len(fields) >= 2 else None
    if text == "stop":
        return Command.STOP, None
    if text == "shutdown":
        return Command.SHUTDOWN, None
    return Command.UNKNOWN, None


class ControlHandler:
    """Applies control commands to the cache, event handler and emitter pipe."""

    def __init__(
        self,
        cache: ObjectCache,
        handler: EtwTiHandler,
        connect: Callable[[], object],
        disconnect: Callable[[], object],
        shutdown: Callable[[], object],
    ) -> None:
        self._cache = cache
        self._handler = handler
        self._connect = connect
        self._disconnect = disconnect
        self._shutdown = shutdown
        self.running = True

    def handle(self, text: str) -> Command:
        """Carry out one control message and return the command it held."""
        command, argument = parse_command(text)
        if command is Command.START:
            log.info("Control: Received command: start")
            if argument is not None:
                log.info("Control: Target: %s", argument)
                self._cache.target_name = argument
                self._connect()
                self._handler.enabled = True
        elif command is Command.STOP:
            log.info("Control: Received command: stop")
            self._handler.enabled = False
            self._disconnect()
        elif command is Command.SHUTDOWN:
            log.info("Control: Received command: shutdown")
            self.running = False
            self._shutdown()
        else:
            log.info("Control: Unknown command: %s", text)
        return command

    def run(self, messages: Iterable[str]) -> list[Command]:
        """Handle messages in order until they run out or shutdown arrives."""
        handled: list[Command] = []
        for message in messages:
            if not self.running:
                break
            handled.append(self.handle(message))
        log.info("Control: Finished")
        return handled