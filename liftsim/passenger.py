"""A passenger travelling between two floors."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(eq=False)
class Passenger:
    """One passenger and what happened to them during the simulation.

    Passengers compare and hash by identity, so two people with the same
    details stay distinct inside sets.
    """

    id: int
    appear_time: int
    boarding_floor: int
    target_floor: int
    weight: float
    boarding_time: int = 0
    deboarding_time: int = 0
    has_overload_lift: bool = False
    met_passengers: set[Passenger] = field(default_factory=set, repr=False)

    def add_met_passenger(self, passenger: Passenger) -> None:
        """Remember that ``passenger`` was already aboard when this one entered."""
        self.met_passengers.add(passenger)

    def has_met_passenger(self, passenger: Passenger) -> bool:
        return passenger in self.met_passengers