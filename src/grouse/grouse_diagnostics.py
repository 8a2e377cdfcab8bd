"""
Diagnostic sinks for the GROUSE front end.

The parser never raises on malformed input. Instead it hands one formatted message
per detected error to a sink passed in at construction time, and keeps going.

Classes:
    DiagnosticSink (Protocol): Anything with a `report(message)` method.
    Diagnostics: Records messages in order and forwards each one to the
        `compiler.Parser` logger at ERROR level.

Example:
    >>> sink = Diagnostics()
    >>> tree = Parser(Lexer.from_source("main {"), sink).parse()
    >>> sink.has_errors
    True
"""

import logging
from collections.abc import Iterator
from typing import Protocol

LOGGER_NAME = "compiler.Parser"

logging.getLogger("compiler").addHandler(logging.NullHandler())


class DiagnosticSink(Protocol):  # pragma: no cover
    """Protocol for diagnostic receivers. `report` must not raise."""

    def report(self, message: str) -> None: ...  # pragma: no cover


class Diagnostics:
    """Collecting diagnostic sink.

    Attributes:
        messages (list[str]): Every reported message, in report order.
        logger (logging.Logger): Logger each message is forwarded to.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.messages: list[str] = []
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def report(self, message: str) -> None:
        self.messages.append(message)
        self.logger.error(message)

    @property
    def has_errors(self) -> bool:
        return bool(self.messages)

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[str]:
        return iter(self.messages)

    def clear(self) -> None:
        self.messages.clear()


__all__ = ["DiagnosticSink", "Diagnostics", "LOGGER_NAME"]
