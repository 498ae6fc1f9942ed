"""Conversion log sink: levels, entries, and an append-only buffer"""

import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from pydantic import BaseModel, Field


logger = logging.getLogger("mddocx")
logger.addHandler(logging.NullHandler())


class LogLevel(str, Enum):
    info = "info"
    success = "success"
    warning = "warning"
    error = "error"


# success has no stdlib counterpart; it is reported as INFO.
STDLIB_LEVELS: dict[LogLevel, int] = {
    LogLevel.info:    logging.INFO,
    LogLevel.success: logging.INFO,
    LogLevel.warning: logging.WARNING,
    LogLevel.error:   logging.ERROR,
}


Sink = Callable[[str, LogLevel], None]


class ProcessingLog(BaseModel):
    """One chronological entry emitted during a conversion."""
    timestamp: datetime = Field(default_factory=datetime.now)
    level: LogLevel
    message: str


class LogBuffer:
    """Append-only sink that records entries and mirrors them to stdlib logging.

    An optional `forward` sink receives each entry right after it is recorded,
    so callers can render the log incrementally.
    """

    def __init__(self, forward: Sink = None):
        self._entries: list[ProcessingLog] = []
        self._forward = forward

    def __call__(self, message: str, level: LogLevel = LogLevel.info) -> None:
        level = LogLevel(level)
        self._entries.append(ProcessingLog(level=level, message=message))
        logger.log(STDLIB_LEVELS[level], message)
        if self._forward is not None:
            self._forward(message, level)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[ProcessingLog, ...]:
        return tuple(self._entries)

    def messages(self, level: LogLevel = None) -> list[str]:
        """Return messages in call order, optionally only those at `level`."""
        return [e.message for e in self._entries if level is None or e.level == level]
