"""Builder assembling a ClientLogger from calls or a JSON configuration."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any

from liftsim.client_logger import CONSOLE, ClientLogger
from liftsim.logger import Severity, string_to_severity

_VALID_PLACEHOLDERS = frozenset("dtsm")
_INVALID_PATH_CHARS = frozenset('"*<>?|')
_LEADING_DIGITS = re.compile(r"\d+")


def _absolute(path: str) -> str:
    return str(Path(path).absolute())


def _member(node: Any, key: str) -> Any:
    if not isinstance(node, dict):
        raise TypeError(f"cannot look up key {key!r} in a non-object value")
    if key not in node:
        raise KeyError(key)
    return node[key]


def _descend(node: Any, part: str) -> Any:
    if part[:1].isascii() and part[:1].isdigit():
        index = int(_LEADING_DIGITS.match(part).group())
        if not isinstance(node, list):
            raise TypeError(f"cannot use index {index} on a non-array value")
        if index >= len(node):
            raise IndexError(f"array index {index} is out of range")
        return node[index]
    return _member(node, part)


def _path_parts(configuration_path: str) -> list[str]:
    parts = configuration_path.split(":")
    if parts[-1] == "":
        parts.pop()
    return parts


class ClientLoggerBuilder:
    """Collects streams and a format, then builds a ClientLogger."""

    def __init__(self) -> None:
        self._streams_info: dict[Severity, set[str]] = {
            severity: set() for severity in Severity
        }
        self._log_format = "%m"

    def set_log_format(self, log_format: str) -> ClientLoggerBuilder:
        """Set the line format; only %d, %t, %s and %m are allowed."""
        chars = iter(log_format)
        for char in chars:
            if char != "%":
                continue
            placeholder = next(chars, None)
            if placeholder is None:
                raise ValueError("Incomplete placeholder at end of format string")
            if placeholder not in _VALID_PLACEHOLDERS:
                raise ValueError(f"Invalid placeholder %{placeholder}")
        self._log_format = log_format
        return self

    def add_file_stream(
        self, path: str | os.PathLike[str], severity: Severity
    ) -> ClientLoggerBuilder:
        text = os.fspath(path)
        if not text:
            raise ValueError("File path cannot be empty")
        if _INVALID_PATH_CHARS.intersection(text):
            raise ValueError("File path contains invalid characters")
        self._streams_info[severity].add(_absolute(text))
        return self

    def add_console_stream(self, severity: Severity) -> ClientLoggerBuilder:
        self._streams_info[severity].add(CONSOLE)
        return self

    def transform_with_configuration(
        self, configuration_file_path: str | os.PathLike[str], configuration_path: str
    ) -> ClientLoggerBuilder:
        """Load format and streams from a JSON file.

        ``configuration_path`` is a ``:``-separated route to the section;
        parts starting with a digit index arrays.
        """
        with open(configuration_file_path, encoding="utf-8") as config_file:
            section = json.load(config_file)

        for part in _path_parts(configuration_path):
            section = _descend(section, part)

        self.set_log_format(_member(section, "format"))

        streams = _member(section, "streams")
        if not isinstance(streams, list):
            raise TypeError("'streams' must be an array")
        for stream in streams:
            path = _member(stream, "path")
            target = _absolute(path) if path != "" else CONSOLE
            for name in _member(stream, "severities"):
                self._streams_info[string_to_severity(name)].add(target)
        return self

    def clear(self) -> ClientLoggerBuilder:
        self._streams_info = {severity: set() for severity in Severity}
        self._log_format = "%m"
        return self

    def build(self) -> ClientLogger:
        return ClientLogger(
            {severity: set(paths) for severity, paths in self._streams_info.items()},
            self._log_format,
        )