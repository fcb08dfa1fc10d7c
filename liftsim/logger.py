"""Severity levels and the abstract logger interface."""

from __future__ import annotations

import abc
import time
from enum import IntEnum


class Severity(IntEnum):
    """Log message severity, from least to most severe."""

    TRACE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    CRITICAL = 5


_NAME_BY_SEVERITY = {
    Severity.TRACE: "TRACE",
    Severity.DEBUG: "DEBUG",
    Severity.INFORMATION: "INFORMATION",
    Severity.WARNING: "WARNING",
    Severity.ERROR: "ERROR",
    Severity.CRITICAL: "CRITICAL",
}

_SEVERITY_BY_TEXT = {
    "trace": Severity.TRACE,
    "debug": Severity.DEBUG,
    "information": Severity.INFORMATION,
    "warning": Severity.WARNING,
    "error": Severity.ERROR,
    "critical": Severity.CRITICAL,
}


def severity_to_string(severity: Severity) -> str:
    """Return the upper-case label used in formatted log lines."""
    try:
        return _NAME_BY_SEVERITY[severity]
    except KeyError:
        raise ValueError(f"Invalid severity value: {severity!r}") from None


def string_to_severity(text: str) -> Severity:
    """Parse a lower-case severity name such as ``"warning"``."""
    try:
        return _SEVERITY_BY_TEXT[text]
    except (KeyError, TypeError):
        raise ValueError(f"invalid severity string value: {text!r}") from None


def current_datetime_to_string() -> str:
    """Return the current local time as ``dd.mm.YYYY HH:MM:SS``."""
    return time.strftime("%d.%m.%Y %H:%M:%S", time.localtime())


class Logger(abc.ABC):
    """A sink for messages tagged with a severity."""

    @abc.abstractmethod
    def log(self, message: str, severity: Severity) -> Logger:
        """Record ``message`` at ``severity`` and return this logger."""

    def trace(self, message: str) -> Logger:
        return self.log(message, Severity.TRACE)

    def debug(self, message: str) -> Logger:
        return self.log(message, Severity.DEBUG)

    def information(self, message: str) -> Logger:
        return self.log(message, Severity.INFORMATION)

    def warning(self, message: str) -> Logger:
        return self.log(message, Severity.WARNING)

    def error(self, message: str) -> Logger:
        return self.log(message, Severity.ERROR)

    def critical(self, message: str) -> Logger:
        return self.log(message, Severity.CRITICAL)