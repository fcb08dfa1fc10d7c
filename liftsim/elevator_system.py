"""Discrete-time simulation of a group of elevators serving passengers."""

from __future__ import annotations

import math
import os
import re
from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType

from liftsim.elevator import Elevator, ElevatorState
from liftsim.logger import Logger
from liftsim.logger_guardant import LoggerGuardant
from liftsim.passenger import Passenger

_UNSIGNED = re.compile(r"\+?\d+")
_UNSIGNED_PREFIX = re.compile(r"\s*\+?(\d+)")
_MINUTES_PER_HOUR = 60


def _parse_unsigned(text: str) -> int | None:
    return int(text) if _UNSIGNED.fullmatch(text) else None


def _parse_weight(text: str) -> float | None:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _clock(minutes: int) -> str:
    hours, rest = divmod(minutes, _MINUTES_PER_HOUR)
    return f"{hours:02d}:{rest:02d}"


def _direction(from_floor: int, to_floor: int) -> ElevatorState:
    return ElevatorState.MOVING_UP if from_floor < to_floor else ElevatorState.MOVING_DOWN


def _first_pressed_above(buttons: Sequence[bool], floor: int) -> int | None:
    return next((f for f, pressed in enumerate(buttons) if pressed and f > floor), None)


def _first_pressed_below(buttons: Sequence[bool], floor: int) -> int | None:
    return next((f for f in reversed(range(min(floor, len(buttons)))) if buttons[f]), None)


class ElevatorSystem(LoggerGuardant):
    """Runs elevators minute by minute until every passenger has arrived."""

    def __init__(
        self, elevators: Iterable[Elevator], floors_count: int, log: Logger | None = None
    ) -> None:
        self._elevators = list(elevators)
        if not self._elevators:
            raise ValueError("At least one elevator is required")
        self._floors_count = floors_count
        self._log = log
        self._passengers: dict[int, Passenger] = {}
        self._waiting_by_floor: list[list[Passenger]] = [
            [] for _ in range(floors_count + 1)
        ]
        self._time_index: dict[int, list[Passenger]] = defaultdict(list)
        self._floors_called: set[int] = set()
        self._remaining = 0
        self.appeared_count = 0
        self.delivered_count = 0
        self.time = 0

    def get_logger(self) -> Logger | None:
        return self._log

    @property
    def elevators(self) -> tuple[Elevator, ...]:
        return tuple(self._elevators)

    @property
    def floors_count(self) -> int:
        return self._floors_count

    @property
    def passengers(self) -> Mapping[int, Passenger]:
        return MappingProxyType(self._passengers)

    @property
    def remaining_passengers(self) -> int:
        return self._remaining

    def parse_passengers_file(self, path: str | os.PathLike[str]) -> None:
        """Read ``id weight floor hh:mm target`` records; parsing stops at a bad one."""
        try:
            source = open(path, encoding="utf-8")
        except OSError:
            self.error_with_guard(f"Failed to open configuration file: {path}")
            raise
        with source:
            try:
                text = source.read()
            except (OSError, UnicodeDecodeError):
                self.error_with_guard(f"Failed to read from file: {path}")
                raise

        for passenger_id, weight, floor, time_text, target in self._records(text.split()):
            appear_time = self.time_to_numerical(time_text)
            if not (1 <= floor <= self._floors_count and 1 <= target <= self._floors_count):
                message = (
                    f"Invalid floor number for passenger {passenger_id}: "
                    f"current_floor={floor}, target_floor={target} "
                    f"(building has only {self._floors_count} floors)"
                )
                self.error_with_guard(message)
                raise ValueError(message)

            if passenger_id in self._passengers:
                continue
            passenger = Passenger(passenger_id, appear_time, floor, target, weight)
            self._passengers[passenger_id] = passenger
            self._remaining += 1
            self.information_with_guard(
                f"Passenger #{passenger_id} | {weight:f} kg | {time_text} | "
                f"floor {floor} → floor {target}"
            )
            self._time_index[appear_time].append(passenger)

    @staticmethod
    def _records(tokens: list[str]) -> Iterator[tuple[int, float, int, str, int]]:
        stream = iter(tokens)
        for id_text, weight_text, floor_text, time_text, target_text in zip(
            stream, stream, stream, stream, stream
        ):
            passenger_id = _parse_unsigned(id_text)
            weight = _parse_weight(weight_text)
            floor = _parse_unsigned(floor_text)
            target = _parse_unsigned(target_text)
            if passenger_id is None or weight is None or floor is None or target is None:
                return
            yield passenger_id, weight, floor, time_text, target

    def time_to_numerical(self, time: str) -> int:
        """Convert ``hh:mm`` into minutes since midnight."""
        hours_text, separator, minutes_text = time.partition(":")
        format_error = f"Invalid time format for '{time}'. Expected 'hh:mm'"
        if not separator:
            self.error_with_guard(format_error)
            raise ValueError(format_error)

        hours_match = _UNSIGNED_PREFIX.match(hours_text)
        minutes_match = _UNSIGNED_PREFIX.match(minutes_text)
        if hours_match is None or minutes_match is None:
            self.error_with_guard(format_error)
            raise ValueError(format_error)

        hours = int(hours_match.group(1))
        minutes = int(minutes_match.group(1))
        if minutes >= _MINUTES_PER_HOUR:
            message = f"Invalid minutes value {minutes_text} in '{time}'. Must be < 60"
            self.error_with_guard(message)
            raise ValueError(message)

        numerical = hours * _MINUTES_PER_HOUR + minutes
        self.information_with_guard(f"Parsed time {time} to numerical: {numerical}")
        return numerical

    def model(self, input_file: str | os.PathLike[str]) -> ElevatorSystem:
        """Load passengers and simulate until all of them are delivered."""
        self.parse_passengers_file(input_file)
        self.information_with_guard(
            "Modeling starts!\n-----------------------------------------------------------"
        )
        while self._remaining > 0:
            self._arrive_passengers(self.time)
            self._dispatch_calls()
            self._advance_elevators()
            self.time += 1
        return self

    def print_results(
        self,
        passengers_file_path: str | os.PathLike[str],
        elevators_file_path: str | os.PathLike[str],
    ) -> ElevatorSystem:
        """Write one report line per passenger and one per elevator."""
        passenger_lines = [
            self._passenger_report(passenger)
            for _, passenger in sorted(self._passengers.items())
        ]
        elevator_lines = [self._elevator_report(elevator) for elevator in self._elevators]
        for path, lines in (
            (passengers_file_path, passenger_lines),
            (elevators_file_path, elevator_lines),
        ):
            try:
                with open(path, "w", encoding="utf-8") as report:
                    report.writelines(f"{line}\n" for line in lines)
            except OSError:
                self.error_with_guard(f"Failed to write results file: {path}")
                raise
        self.information_with_guard(
            f"Results written to {passengers_file_path} and {elevators_file_path}"
        )
        return self

    @staticmethod
    def _passenger_report(passenger: Passenger) -> str:
        met = " ".join(f"#{other.id}" for other in sorted(passenger.met_passengers, key=lambda p: p.id))
        return (
            f"Passenger #{passenger.id}: appeared {_clock(passenger.appear_time)} "
            f"on floor {passenger.boarding_floor}, arrived {_clock(passenger.deboarding_time)} "
            f"on floor {passenger.target_floor}, weight {passenger.weight:f} kg, "
            f"overloaded lift: {'yes' if passenger.has_overload_lift else 'no'}, "
            f"met: {met or 'none'}"
        )

    @staticmethod
    def _elevator_report(elevator: Elevator) -> str:
        return (
            f"Elevator #{elevator.id}: idle time {elevator.idle_time}, "
            f"moving time {elevator.moving_time}, floors passed {elevator.floors_passed}, "
            f"total cargo {elevator.total_cargo:f} kg, "
            f"max load reached {elevator.max_load_reached:f} kg, "
            f"overloads {elevator.overloads_count}"
        )

    def _arrive_passengers(self, current_time: int) -> None:
        for passenger in self._time_index.get(current_time, ()):
            self._waiting_by_floor[passenger.boarding_floor].append(passenger)
            self.appeared_count += 1
            self.information_with_guard(
                f"[{self.time}] Passenger #{passenger.id} waiting elevator at floor "
                f"{passenger.boarding_floor}, Target floor: {passenger.target_floor}"
            )

    def _dispatch_calls(self) -> None:
        for floor, waiting in enumerate(self._waiting_by_floor[1:], start=1):
            if not waiting or floor in self._floors_called:
                continue
            elevator = self._most_suitable_elevator(floor)
            if elevator is None:
                continue
            self._floors_called.add(floor)
            if elevator.current_floor == floor:
                self._process_floor_arrival(floor, elevator)
            else:
                self._interrupt_elevator(elevator, floor)

    def _advance_elevators(self) -> None:
        for elevator in self._elevators:
            if self.time >= elevator.time_travel_ends and elevator.target_floor > 0:
                elevator.current_floor = elevator.target_floor
                elevator.target_floor = 0
                self._process_floor_arrival(elevator.current_floor, elevator)

    def _process_floor_arrival(self, floor: int, elevator: Elevator) -> None:
        elevator.set_state(ElevatorState.IDLE_OPEN, self.time)
        elevator.pressed_buttons[floor] = False
        elevator.current_floor = elevator.target_floor
        elevator.target_floor = 0
        self._floors_called.discard(floor)
        self.information_with_guard(
            f"[{self.time}] Elevator #{elevator.id} arrived at floor {floor}"
        )

        self._deboard_passengers(floor, elevator)
        self._board_passengers(floor, elevator)
        elevator.set_state(ElevatorState.IDLE_CLOSED, self.time)
        elevator.calculate_moving_time(self.time)

        self._choose_next_target(floor, elevator)

    def _deboard_passengers(self, floor: int, elevator: Elevator) -> None:
        leaving = [p for p in elevator.passengers if p.target_floor == floor]
        for passenger in leaving:
            passenger.deboarding_time = self.time
            elevator.move_passenger_out(passenger)
            self.information_with_guard(
                f"[{self.time}] Passenger #{passenger.id} arrived at floor {floor} "
                f"via elevator #{elevator.id}"
            )
            self._remaining -= 1
            self.delivered_count += 1

    def _board_passengers(self, floor: int, elevator: Elevator) -> None:
        waiting = self._waiting_by_floor[floor]
        left_behind = []
        for passenger in waiting:
            if elevator.try_move_passenger_in(passenger):
                elevator.pressed_buttons[passenger.target_floor] = True
                self.information_with_guard(
                    f"[{self.time}] Passenger #{passenger.id} entered elevator on floor {floor}"
                )
            else:
                left_behind.append(passenger)
        waiting[:] = left_behind

    def _head_to(self, elevator: Elevator, state: ElevatorState, floor: int) -> None:
        elevator.set_state(state, self.time)
        elevator.target_floor = floor

    def _choose_next_target(self, floor: int, elevator: Elevator) -> None:
        buttons = elevator.pressed_buttons
        prefix = f"[{self.time}] Elevator #{elevator.id}"

        if elevator.state in (ElevatorState.MOVING_UP, ElevatorState.IDLE_CLOSED):
            above = _first_pressed_above(buttons, floor)
            if above is not None:
                self.information_with_guard(
                    f"{prefix} continues MovingUp - next target floor {above}, "
                    f"will arrive at [{elevator.time_travel_ends}]"
                )
                self._head_to(elevator, ElevatorState.MOVING_UP, above)
                return
            below = _first_pressed_below(buttons, floor)
            if below is not None:
                self.information_with_guard(
                    f"{prefix} changes direction to MovingDown - next target floor {below}, "
                    f"will arrive at [{elevator.time_travel_ends}]"
                )
                self._head_to(elevator, ElevatorState.MOVING_DOWN, below)
                return
        elif elevator.state is ElevatorState.MOVING_DOWN:
            arrival = self.time + elevator.time_travel_ends
            below = _first_pressed_below(buttons, floor)
            if below is not None:
                self.information_with_guard(
                    f"{prefix} continues MovingDown - next target floor {below}, "
                    f"will arrive at [{arrival}]"
                )
                self._head_to(elevator, ElevatorState.MOVING_DOWN, below)
                return
            above = _first_pressed_above(buttons, floor)
            if above is not None:
                self.information_with_guard(
                    f"{prefix} changes direction to MovingUp - next target floor {above}, "
                    f"will arrive at [{arrival}]"
                )
                self._head_to(elevator, ElevatorState.MOVING_UP, above)
                return

        self.information_with_guard(f"{prefix} started idleing (no buttons pressed)")
        elevator.set_state(ElevatorState.IDLE_CLOSED, self.time)

    def _most_suitable_elevator(self, floor: int) -> Elevator | None:
        def distance(elevator: Elevator) -> int:
            return abs(elevator.current_floor - floor)

        idle = [e for e in self._elevators if not e.state.is_moving]
        if idle:
            return min(idle, key=distance)
        heading = [
            e for e in self._elevators if e.state is _direction(e.current_floor, floor)
        ]
        return min(heading, key=distance, default=None)

    def _interrupt_elevator(self, elevator: Elevator, target_floor: int) -> None:
        elevator.pressed_buttons[target_floor] = True
        elevator.target_floor = target_floor
        elevator.set_state(_direction(elevator.current_floor, target_floor), self.time)
        elevator.calculate_moving_time(self.time)
        self.information_with_guard(
            f"[{self.time}] Elevator #{elevator.id} interrupted to floor {target_floor}"
        )