"""Mixin that logs through an optional logger."""

from __future__ import annotations

import abc

from liftsim.logger import Logger, Severity


class LoggerGuardant(abc.ABC):
    """Logs through ``get_logger()`` and silently skips when it is ``None``."""

    @abc.abstractmethod
    def get_logger(self) -> Logger | None:
        """Return the logger to use, or ``None`` to disable logging."""

    def log_with_guard(self, message: str, severity: Severity) -> LoggerGuardant:
        target = self.get_logger()
        if target is not None:
            target.log(message, severity)
        return self

    def trace_with_guard(self, message: str) -> LoggerGuardant:
        return self.log_with_guard(message, Severity.TRACE)

    def debug_with_guard(self, message: str) -> LoggerGuardant:
        return self.log_with_guard(message, Severity.DEBUG)

    def information_with_guard(self, message: str) -> LoggerGuardant:
        return self.log_with_guard(message, Severity.INFORMATION)

    def warning_with_guard(self, message: str) -> LoggerGuardant:
        return self.log_with_guard(message, Severity.WARNING)

    def error_with_guard(self, message: str) -> LoggerGuardant:
        return self.log_with_guard(message, Severity.ERROR)

    def critical_with_guard(self, message: str) -> LoggerGuardant:
        return self.log_with_guard(message, Severity.CRITICAL)