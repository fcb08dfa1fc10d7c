import pytest

from liftsim.cli import main, parse_elevators_file


def write(tmp_path, text, name="elevators.txt"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_valid_file(tmp_path):
    elevators, floors = parse_elevators_file(write(tmp_path, "5 2\n800 1000\n"))
    assert floors == 5
    assert [e.id for e in elevators] == [1, 2]
    assert [e.max_load for e in elevators] == [800.0, 1000.0]
    assert all(e.current_floor == 1 for e in elevators)
    assert all(len(e.pressed_buttons) == floors + 1 for e in elevators)


def test_missing_file(tmp_path):
    with pytest.raises(OSError, match="Failed to open configuration file"):
        parse_elevators_file(tmp_path / "absent.txt")


def test_empty_file(tmp_path):
    with pytest.raises(ValueError, match="Configuration file is empty"):
        parse_elevators_file(write(tmp_path, ""))


@pytest.mark.parametrize(
    "text,message",
    [
        ("abc", "Failed to read number of floors and elevators"),
        ("   \n", "Failed to read number of floors and elevators"),
        ("0 2 100 100", r"Number of floors \(n\) must be positive"),
        ("5 0", r"Number of elevators \(k\) must be positive"),
        ("5 2 100", "Failed to read max_load for elevator 2. Expected 2 values"),
        ("5 1 -5", "Invalid max_load for elevator 1: must be positive"),
        ("5 1 100 extra", "Unexpected data in configuration file after elevator specifications: 'extra'"),
    ],
)
def test_invalid_configurations(tmp_path, text, message):
    with pytest.raises(ValueError, match=message):
        parse_elevators_file(write(tmp_path, text))


def test_main_needs_four_arguments(capsys):
    assert main(["only", "three", "args"]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_main_runs_simulation(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    elevators = write(tmp_path, "5 1\n1000\n")
    passengers = write(tmp_path, "1 70 1 00:00 3\n2 80 4 00:01 2\n", "passengers.txt")
    passengers_out = tmp_path / "passengers_out.txt"
    elevators_out = tmp_path / "elevators_out.txt"

    code = main([str(elevators), str(passengers), str(passengers_out), str(elevators_out)])

    assert code == 0
    expected = "Parsed elevators file. Results: 1 elevators, 5 floors"
    assert expected in capsys.readouterr().out
    runtime_log = (tmp_path / "files" / "runtime.log").read_text(encoding="utf-8")
    assert expected in runtime_log
    assert "Modeling starts!" in runtime_log
    assert len(passengers_out.read_text(encoding="utf-8").splitlines()) == 2
    assert elevators_out.read_text(encoding="utf-8").startswith("Elevator #1:")


def test_main_reports_bad_configuration(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    elevators = write(tmp_path, "5 0\n")
    passengers = write(tmp_path, "1 70 1 00:00 3\n", "passengers.txt")
    code = main([str(elevators), str(passengers), "p.txt", "e.txt"])
    assert code == 1
    err = capsys.readouterr().err
    assert "Runtime error occurred during the execution" in err
    assert "Number of elevators (k) must be positive" in err


def test_main_reports_bad_passengers(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    elevators = write(tmp_path, "3 1\n500\n")
    passengers = write(tmp_path, "1 70 1 00:00 9\n", "passengers.txt")
    code = main([str(elevators), str(passengers), "p.txt", "e.txt"])
    assert code == 1
    assert "Invalid floor number for passenger 1" in capsys.readouterr().err