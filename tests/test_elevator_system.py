import re

import pytest

from liftsim.elevator import Elevator
from liftsim.elevator_system import ElevatorSystem
from liftsim.logger import Logger, Severity


class RecordingLogger(Logger):
    def __init__(self):
        self.records = []

    def log(self, message, severity):
        self.records.append((severity, message))
        return self

    @property
    def messages(self):
        return [message for _, message in self.records]


def make_system(elevator_loads=(1000.0,), floors=5, log=None):
    elevators = [Elevator(i, 1, load, floors) for i, load in enumerate(elevator_loads, start=1)]
    return ElevatorSystem(elevators, floors, log)


def write(tmp_path, text, name="passengers.txt"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


TWO_TRIPS = "1 70 1 00:00 3\n2 80 4 00:01 2\n"


def test_midnight_is_zero():
    assert make_system().time_to_numerical("00:00") == 0


def test_minute_rolls_over_into_hour():
    system = make_system()
    assert system.time_to_numerical("00:59") + 1 == system.time_to_numerical("01:00")


@pytest.mark.parametrize("earlier,later", [("00:01", "00:02"), ("09:59", "10:00"), ("01:30", "12:00")])
def test_time_is_monotonic(earlier, later):
    system = make_system()
    assert system.time_to_numerical(earlier) < system.time_to_numerical(later)


def test_time_without_colon_is_rejected():
    log = RecordingLogger()
    with pytest.raises(ValueError, match="Expected 'hh:mm'"):
        make_system(log=log).time_to_numerical("1230")
    assert log.records[-1][0] is Severity.ERROR


def test_minutes_must_be_below_sixty():
    with pytest.raises(ValueError, match="Must be < 60"):
        make_system().time_to_numerical("10:60")


def test_non_numeric_time_is_rejected():
    with pytest.raises(ValueError):
        make_system().time_to_numerical("ab:10")


def test_parsed_time_is_logged():
    log = RecordingLogger()
    make_system(log=log).time_to_numerical("01:00")
    assert any(m.startswith("Parsed time 01:00 to numerical: ") for m in log.messages)


def test_parse_reads_records(tmp_path):
    system = make_system()
    system.parse_passengers_file(write(tmp_path, TWO_TRIPS))
    assert sorted(system.passengers) == [1, 2]
    assert system.passengers[2].boarding_floor == 4
    assert system.passengers[2].target_floor == 2
    assert system.passengers[1].weight == 70.0
    assert system.remaining_passengers == 2


def test_duplicate_ids_are_ignored(tmp_path):
    system = make_system()
    system.parse_passengers_file(write(tmp_path, "1 70 1 00:00 3\n1 90 2 00:05 4\n"))
    assert list(system.passengers) == [1]
    assert system.passengers[1].weight == 70.0
    assert system.remaining_passengers == 1


def test_parsing_stops_at_malformed_record(tmp_path):
    system = make_system()
    system.parse_passengers_file(write(tmp_path, "1 70 1 00:00 3\nx y z w v\n2 80 2 00:00 3\n"))
    assert list(system.passengers) == [1]


def test_floor_beyond_building_is_rejected(tmp_path):
    log = RecordingLogger()
    system = make_system(floors=5, log=log)
    with pytest.raises(ValueError, match="Invalid floor number for passenger 7"):
        system.parse_passengers_file(write(tmp_path, "7 70 1 00:00 9\n"))
    assert (Severity.ERROR, log.messages[-1]) == log.records[-1]
    assert "building has only 5 floors" in log.messages[-1]


def test_missing_file_is_reported(tmp_path):
    log = RecordingLogger()
    missing = tmp_path / "absent.txt"
    with pytest.raises(FileNotFoundError):
        make_system(log=log).parse_passengers_file(missing)
    assert log.records[-1] == (Severity.ERROR, f"Failed to open configuration file: {missing}")


def test_model_delivers_everyone(tmp_path):
    log = RecordingLogger()
    system = make_system(log=log)
    assert system.model(write(tmp_path, TWO_TRIPS)) is system
    assert system.remaining_passengers == 0
    assert system.delivered_count == system.appeared_count == len(system.passengers)
    for passenger in system.passengers.values():
        assert passenger.deboarding_time >= passenger.appear_time
    elevator = system.elevators[0]
    assert elevator.passengers == []
    assert elevator.current_load == 0.0
    assert not any(elevator.pressed_buttons)


def test_model_logs_journey(tmp_path):
    log = RecordingLogger()
    make_system(log=log).model(write(tmp_path, TWO_TRIPS))
    text = "\n".join(log.messages)
    assert "Modeling starts!" in text
    assert "Passenger #1 arrived at floor 3 via elevator #1" in text
    assert "Passenger #2 arrived at floor 2 via elevator #1" in text
    assert "Elevator #1 interrupted to floor 4" in text


def test_shared_ride_records_meeting(tmp_path):
    system = make_system()
    system.model(write(tmp_path, TWO_TRIPS))
    first, second = system.passengers[1], system.passengers[2]
    assert second.has_met_passenger(first)
    assert not first.has_met_passenger(second)


def test_later_passenger_arrives_after_appearing(tmp_path):
    system = make_system()
    system.model(write(tmp_path, "1 70 2 00:02 5\n"))
    passenger = system.passengers[1]
    assert passenger.deboarding_time > passenger.appear_time
    assert system.time > passenger.deboarding_time


def test_overload_sends_second_elevator(tmp_path):
    system = make_system(elevator_loads=(100.0, 100.0))
    system.model(write(tmp_path, "1 60 1 00:00 3\n2 60 1 00:00 3\n"))
    assert system.remaining_passengers == 0
    assert system.passengers[2].has_overload_lift
    assert not system.passengers[1].has_overload_lift
    overloaded = sum(p.has_overload_lift for p in system.passengers.values())
    assert sum(e.overloads_count for e in system.elevators) >= overloaded
    assert all(e.total_cargo == 60.0 for e in system.elevators)


def test_model_without_logger(tmp_path):
    system = make_system(log=None)
    system.model(write(tmp_path, TWO_TRIPS))
    assert system.get_logger() is None
    assert system.delivered_count == 2


def test_no_elevators_rejected():
    with pytest.raises(ValueError):
        ElevatorSystem([], 5, None)


def test_print_results_writes_reports(tmp_path):
    system = make_system(elevator_loads=(1000.0, 800.0))
    system.model(write(tmp_path, TWO_TRIPS))
    passengers_out = tmp_path / "passengers_out.txt"
    elevators_out = tmp_path / "elevators_out.txt"
    assert system.print_results(passengers_out, elevators_out) is system

    passenger_lines = passengers_out.read_text(encoding="utf-8").splitlines()
    elevator_lines = elevators_out.read_text(encoding="utf-8").splitlines()
    assert [line.split(":")[0] for line in passenger_lines] == ["Passenger #1", "Passenger #2"]
    assert [line.split(":")[0] for line in elevator_lines] == ["Elevator #1", "Elevator #2"]

    for line in passenger_lines:
        number = int(re.match(r"Passenger #(\d+)", line).group(1))
        passenger = system.passengers[number]
        appeared = re.search(r"appeared (\d\d:\d\d)", line).group(1)
        arrived = re.search(r"arrived (\d\d:\d\d)", line).group(1)
        assert system.time_to_numerical(appeared) == passenger.appear_time
        assert system.time_to_numerical(arrived) == passenger.deboarding_time