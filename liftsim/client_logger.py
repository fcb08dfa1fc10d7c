"""Logger writing formatted lines to files and the console."""

from __future__ import annotations

import sys
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import ClassVar, TextIO

from liftsim.logger import Logger, Severity, severity_to_string

CONSOLE = ""


@dataclass
class _SharedStream:
    handle: TextIO | None  # None stands for the console
    refcount: int


class ClientLogger(Logger):
    """Writes messages to per-severity streams; an empty path means stdout.

    Files are shared between loggers by path and closed when the last
    logger using them is closed.
    """

    _all_streams: ClassVar[dict[str, _SharedStream]] = {}

    def __init__(
        self, streams: Mapping[Severity, Iterable[str]], log_format: str = "%m"
    ) -> None:
        self._log_format = log_format
        self._streams: dict[Severity, list[str]] = {}
        registered: set[str] = set()
        try:
            for severity, paths in streams.items():
                targets = self._streams.setdefault(severity, [])
                for path in sorted(set(paths)):
                    shared = self._all_streams.get(path)
                    if shared is None:
                        handle = (
                            None
                            if path == CONSOLE
                            else open(path, "w", encoding="utf-8")
                        )
                        self._all_streams[path] = _SharedStream(handle, 1)
                        registered.add(path)
                    elif path not in registered:
                        shared.refcount += 1
                        registered.add(path)
                    targets.append(path)
        except BaseException:
            self.close()
            raise

    def log(self, message: str, severity: Severity) -> ClientLogger:
        paths = self._streams.get(severity)
        if not paths:
            return self
        line = self.format_log(message, severity, time.time()) + "\n"
        for path in paths:
            shared = self._all_streams.get(path)
            if shared is None:
                continue
            handle = shared.handle if shared.handle is not None else sys.stdout
            handle.write(line)
            handle.flush()
        return self

    def format_log(self, message: str, severity: Severity, timestamp: float) -> str:
        """Expand ``%d``, ``%t``, ``%s`` and ``%m`` using UTC ``timestamp``."""
        moment = time.gmtime(timestamp)
        result = self._log_format
        result = result.replace("%d", time.strftime("%Y-%m-%d", moment))
        result = result.replace("%t", time.strftime("%H:%M:%S", moment))
        result = result.replace("%s", severity_to_string(severity))
        return result.replace("%m", message)

    def close(self) -> None:
        """Release this logger's streams; later messages are dropped."""
        released: set[str] = set()
        for paths in self._streams.values():
            for path in paths:
                if path in released:
                    continue
                released.add(path)
                shared = self._all_streams.get(path)
                if shared is None:
                    continue
                shared.refcount -= 1
                if shared.refcount == 0:
                    if shared.handle is not None:
                        shared.handle.flush()
                        shared.handle.close()
                    del self._all_streams[path]
        self._streams = {}

    def __enter__(self) -> ClientLogger:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()