"""A single elevator car: its load, buttons and running statistics."""

from __future__ import annotations

import math
from enum import Enum

from liftsim.passenger import Passenger

_BASE_TRAVEL_TIME = 3
_LOAD_TRAVEL_FACTOR = 5


class ElevatorState(Enum):
    IDLE_CLOSED = "idle_closed"
    IDLE_OPEN = "idle_open"
    MOVING_UP = "moving_up"
    MOVING_DOWN = "moving_down"

    @property
    def is_moving(self) -> bool:
        return self in (ElevatorState.MOVING_UP, ElevatorState.MOVING_DOWN)


class Elevator:
    """An elevator car serving floors ``1..total_floors``."""

    def __init__(
        self,
        elevator_id: int = 0,
        starting_floor: int = 1,
        max_load: float = 1000.0,
        total_floors: int = 10,
        initial_state: ElevatorState = ElevatorState.IDLE_CLOSED,
    ) -> None:
        if starting_floor < 1:
            raise ValueError("Starting floor must be positive")
        if max_load <= 0:
            raise ValueError("Max load must be positive")
        if total_floors <= 0:
            raise ValueError("Total floors must be positive")

        self.id = elevator_id
        self.current_floor = starting_floor
        self.target_floor = 0
        self._state = initial_state
        self._max_load = max_load
        self.current_load = 0.0
        self.pressed_buttons: list[bool] = [False] * (total_floors + 1)
        self.passengers: list[Passenger] = []

        self._last_state_change = 0
        self.time_travel_ends = 0
        self._accumulated_moving_time = 0

        self.idle_time = 0
        self.floors_passed = 0
        self.total_cargo = 0.0
        self.max_load_reached = 0.0
        self.overloads_count = 0

    @property
    def state(self) -> ElevatorState:
        return self._state

    @property
    def max_load(self) -> float:
        return self._max_load

    @property
    def moving_time(self) -> int:
        """Length of the current trip, from the last state change to arrival."""
        return self.time_travel_ends - self._last_state_change

    def try_move_passenger_in(self, passenger: Passenger) -> bool:
        """Board ``passenger`` unless that would exceed the maximum load."""
        if self.current_load + passenger.weight > self._max_load:
            passenger.has_overload_lift = True
            self.overloads_count += 1
            return False

        for aboard in self.passengers:
            passenger.add_met_passenger(aboard)
        self.passengers.append(passenger)
        self.pressed_buttons[passenger.target_floor] = True
        self.current_load += passenger.weight
        self.total_cargo += passenger.weight
        self.max_load_reached = max(self.current_load, self.max_load_reached)
        return True

    def move_passenger_out(self, passenger: Passenger) -> None:
        """Let ``passenger`` leave; raises ValueError if they are not aboard."""
        self.passengers.remove(passenger)
        self.current_load -= passenger.weight
        self.pressed_buttons[passenger.target_floor] = False

    def set_state(self, state: ElevatorState, current_time: int) -> None:
        """Switch to ``state``, crediting the time spent in the previous one."""
        elapsed = current_time - self._last_state_change
        if self._state.is_moving:
            self._accumulated_moving_time += elapsed
            self.calculate_moving_time(current_time)
        else:
            self.idle_time += elapsed
        self._last_state_change = current_time
        self._state = state

    def calculate_moving_time(self, current_time: int) -> None:
        """Set when a trip starting at ``current_time`` ends, given the load."""
        duration = _BASE_TRAVEL_TIME + math.floor(
            _LOAD_TRAVEL_FACTOR * (self.current_load / self._max_load)
        )
        self.time_travel_ends = current_time + duration