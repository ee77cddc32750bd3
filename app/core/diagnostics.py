"""Diagnostic channel for operational messages.

Services never call ``print`` or a bare module logger for their operational
messages; they hold a ``DiagnosticSink``. The default sink forwards to the
standard ``logging`` package with structured ``extra`` fields, and tests pass
their own recording sink to assert on what was emitted.
"""

import logging
from typing import Any, Optional, Protocol


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class DiagnosticSink(Protocol):
    """Fire-and-forget sink for operational diagnostics."""

    def info(self, message: str, **fields: Any) -> None:
        ...

    def error(self, message: str, error: Optional[BaseException] = None, **fields: Any) -> None:
        ...


class LoggingDiagnosticSink:
    """``DiagnosticSink`` backed by a standard library logger."""

    def __init__(self, name: str, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(name)

    def info(self, message: str, **fields: Any) -> None:
        self.logger.info(message, extra=fields)

    def error(self, message: str, error: Optional[BaseException] = None, **fields: Any) -> None:
        if error is not None:
            fields.setdefault("error_type", type(error).__name__)
            fields.setdefault("error", str(error))
        self.logger.error(message, extra=fields, exc_info=error)


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; repeated calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(level.upper())
