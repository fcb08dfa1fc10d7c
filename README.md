# liftsim

`liftsim` simulates a building that is served by several elevators. Time moves
forward in whole minutes. Passengers appear on their boarding floors at set
times and call an elevator. The system sends the most suitable elevator. It
prefers the nearest idle elevator. If none is idle, it picks the nearest
elevator already moving toward the calling floor. Passengers board as long as
the load limit allows, and the elevator carries them to their target floors.
The run ends when every passenger has arrived. Every event is logged.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running a simulation

```
liftsim ELEVATORS_FILE PASSENGERS_FILE PASSENGERS_REPORT ELEVATORS_REPORT
```

All four arguments are required. If fewer are given, the command prints a
usage message to standard error and exits with status 1. If an input file
cannot be read or is invalid, the command prints
`Runtime error occurred during the execution: ...` to standard error and exits
with status 1. On success it exits with status 0.

Log lines at the information level go to standard output and to
`files/runtime.log`, relative to the working directory. The `files` directory
is created if it does not exist, and the log file is overwritten on each run.

### Elevators file

The file holds whitespace-separated numbers. The first is the number of
floors, the second is the number of elevators, and then comes one maximum load
in kilograms for each elevator:

```
10 2
400 630
```

The command reports an error in these cases:

- the file is empty;
- either count is missing or not a whole number;
- either count is zero;
- a load is missing, not a number, or not positive;
- anything follows the last load.

Every elevator starts idle and closed on floor 1. Elevators are numbered from 1
in the order their loads are listed.

### Passengers file

The file lists whitespace-separated records of five fields each:

1. id
2. weight in kilograms
3. boarding floor
4. appearance time as `hh:mm`
5. target floor

```
1 75.5 1 08:00 7
2 82 5 08:02 1
3 60 3 08:02 9
```

The command reports an error in these cases:

- a time has no colon, or its hours or minutes are not numbers;
- the minutes are 60 or more;
- a floor is below 1 or above the building's floor count.

Reading stops quietly at the first record whose id, weight or floors cannot be
parsed. When two records share an id, only the first one counts. The
simulation clock starts at minute 0, and `hh:mm` is counted in minutes since
midnight.

### Reports

After the simulation, two report files are written.

The passengers report has one line per passenger, ordered by id. Each line
gives:

- the appearance time and boarding floor;
- the arrival time and target floor;
- the weight;
- whether the passenger was ever turned away by a full elevator;
- the ids of the passengers already aboard when they entered.

The elevators report has one line per elevator. Each line gives its idle time,
moving time, floors passed, total cargo carried, maximum load reached, and the
number of times a passenger was refused because of overload.

## Using the library

The simulation can also be run from Python:

```python
from liftsim.cli import parse_elevators_file
from liftsim.client_logger_builder import ClientLoggerBuilder
from liftsim.elevator_system import ElevatorSystem
from liftsim.logger import Severity

builder = (
    ClientLoggerBuilder()
    .set_log_format("[%d %t] %s: %m")
    .add_console_stream(Severity.INFORMATION)
)

with builder.build() as log:
    elevators, floors = parse_elevators_file("elevators.txt")
    system = ElevatorSystem(elevators, floors, log).model("passengers.txt")
    system.print_results("passengers_report.txt", "elevators_report.txt")
    print(system.delivered_count, "passengers delivered by minute", system.time)
```

The logger passed to `ElevatorSystem` may be `None`, which turns logging off.
`ElevatorSystem` needs at least one elevator. After `model` returns, you can
inspect the run through these members:

- `passengers`: a read-only mapping from id to `Passenger`;
- `elevators`;
- `time`;
- `appeared_count`;
- `delivered_count`;
- `remaining_passengers`.

The building blocks live in these modules:

- `liftsim.passenger`: the `Passenger` dataclass.
- `liftsim.elevator`: `Elevator` and `ElevatorState`. An elevator's travel time
  is 3 minutes plus `floor(5 * load / max_load)`.
- `liftsim.logger`: `Severity`, the abstract `Logger`, and the helpers
  `severity_to_string` and `string_to_severity`.
- `liftsim.logger_guardant`: the `LoggerGuardant` mixin, which logs only when a
  logger is present.
- `liftsim.client_logger`: `ClientLogger`.
- `liftsim.client_logger_builder`: `ClientLoggerBuilder`.

### Logging

Use `ClientLoggerBuilder` to set up a logger:

- `add_console_stream(severity)` sends messages of that severity to standard
  output.
- `add_file_stream(path, severity)` sends them to a file. The path is made
  absolute. A path that is empty, or that contains any of `"*<>?|`, raises
  `ValueError`.

A `ClientLogger` writes each message only to the streams registered for its
exact severity. Loggers that use the same file share one handle, which is
closed when the last of them is closed. You can close a logger with `close()`
or by using it as a context manager.

`set_log_format` accepts these placeholders:

| Placeholder | Replaced by                     |
|-------------|---------------------------------|
| `%d`        | UTC date, `YYYY-MM-DD`          |
| `%t`        | UTC time, `HH:MM:SS`            |
| `%s`        | severity name, e.g. `WARNING`   |
| `%m`        | the message                     |

Any other `%` sequence, or a `%` at the end of the format, raises `ValueError`.
The default format is `%m`.

A logger can also be configured from a JSON file with
`transform_with_configuration(path, "section:subsection")`. The colon-separated
route leads to an object in the file. A route part that starts with a digit
indexes an array. The object must have:

- a `format` string;
- a `streams` list. Each entry in it has a `path`, where an empty string means
  the console, and a list of lower-case `severities` such as `"information"`.

`clear()` resets the builder to its defaults.

## What it does not do

The simulation runs to completion in one pass. It has no live display and no
real-time clock. Its results are only the log and the two plain-text reports.