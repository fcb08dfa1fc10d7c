"""Command-line entry point: read elevators and passengers, run the model."""

from __future__ import annotations

import math
import os
import re
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path

from liftsim.client_logger_builder import ClientLoggerBuilder
from liftsim.elevator import Elevator
from liftsim.elevator_system import ElevatorSystem
from liftsim.logger import Severity

_PROG = "liftsim"
_RUNTIME_LOG = "files/runtime.log"
_UNSIGNED = re.compile(r"\+?\d+")


def _next_count(tokens: Iterator[str]) -> int | None:
    token = next(tokens, None)
    if token is None or not _UNSIGNED.fullmatch(token):
        return None
    return int(token)


def _next_number(tokens: Iterator[str]) -> float | None:
    token = next(tokens, None)
    if token is None:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_elevators_file(path: str | os.PathLike[str]) -> tuple[list[Elevator], int]:
    """Read ``floors elevators load1 .. loadK`` and build the elevators."""
    try:
        with open(path, "rb") as source:
            data = source.read()
    except OSError as error:
        raise OSError(f"Failed to open configuration file: {path}") from error

    if not data:
        raise ValueError(f"Configuration file is empty: {path}")

    tokens = iter(data.decode("utf-8").split())
    floors = _next_count(tokens)
    count = _next_count(tokens) if floors is not None else None
    if floors is None or count is None:
        raise ValueError("Failed to read number of floors and elevators")
    if floors == 0:
        raise ValueError("Number of floors (n) must be positive")
    if count == 0:
        raise ValueError("Number of elevators (k) must be positive")

    max_loads = []
    for number in range(1, count + 1):
        load = _next_number(tokens)
        if load is None:
            raise ValueError(
                f"Failed to read max_load for elevator {number}. Expected {count} values"
            )
        if load <= 0:
            raise ValueError(
                f"Invalid max_load for elevator {number}: must be positive (got {load:f})"
            )
        max_loads.append(load)

    extra = next(tokens, None)
    if extra is not None:
        raise ValueError(
            "Unexpected data in configuration file after elevator specifications: "
            f"'{extra}'"
        )

    elevators = [
        Elevator(number, 1, load, floors) for number, load in enumerate(max_loads, start=1)
    ]
    return elevators, floors


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 4:
        print(
            "Not enough command line arguments.\n"
            f"Usage: {_PROG} <input_elevators_file> <input_passengers_file> "
            "<output_passengers_file> <output_elevators_file>",
            file=sys.stderr,
        )
        return 1

    elevators_file, passengers_file, passengers_out, elevators_out = args[:4]
    try:
        Path(_RUNTIME_LOG).parent.mkdir(parents=True, exist_ok=True)
        builder = (
            ClientLoggerBuilder()
            .add_file_stream(_RUNTIME_LOG, Severity.INFORMATION)
            .add_console_stream(Severity.INFORMATION)
        )
        with builder.build() as log:
            elevators, floors_count = parse_elevators_file(elevators_file)
            log.information(
                f"Parsed elevators file. Results: {len(elevators)} elevators, "
                f"{floors_count} floors"
            )
            ElevatorSystem(elevators, floors_count, log).model(passengers_file).print_results(
                passengers_out, elevators_out
            )
    except (OSError, ValueError) as error:
        print(f"Runtime error occurred during the execution: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())