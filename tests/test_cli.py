import io
from pathlib import Path

import pytest
from rich.console import Console

from scheduler_sim.cli import main
from scheduler_sim.config import MAX_TIME_ENV, max_time_from_env


def _console():
    return Console(file=io.StringIO(), width=200, color_system=None)


def _workload(tmp_path: Path, body: str) -> str:
    p = tmp_path / "w.json"
    p.write_text(body)
    return str(p)


def test_run_prints_results(tmp_path: Path):
    path = _workload(tmp_path, '[{"pid":"A","arrival":0,"burst":5},{"pid":"B","arrival":2,"burst":2}]')
    console = _console()
    assert main(["run", "-a", "srtf", "-w", path], console=console) == 0
    out = console.file.getvalue()
    assert "SRTF" in out
    assert "Avg waiting" in out
    assert "1.00" in out


def test_compare_all_algorithms(tmp_path: Path):
    path = _workload(tmp_path, '[{"pid":"A","arrival":0,"burst":5},{"pid":"B","arrival":2,"burst":2}]')
    console = _console()
    assert main(["compare", "-w", path], console=console) == 0
    out = console.file.getvalue()
    assert "FCFS" in out
    assert "SJF (non-preemptive)" in out
    assert "SRTF" in out


def test_validate_reports_error(tmp_path: Path):
    path = _workload(tmp_path, '[{"pid":"A","arrival":0,"burst":1},{"pid":"A","arrival":1,"burst":1}]')
    console = _console()
    assert main(["validate", "-w", path], console=console) == 2
    assert "Process A: Duplicate PID." in console.file.getvalue()


def test_unknown_algorithm_exit_code(tmp_path: Path):
    path = _workload(tmp_path, '[{"pid":"A","arrival":0,"burst":1}]')
    console = _console()
    assert main(["run", "-a", "mlfq", "-w", path], console=console) == 2
    assert "Unknown algorithm" in console.file.getvalue()


def test_missing_file_exit_code(tmp_path: Path):
    console = _console()
    assert main(["validate", "-w", str(tmp_path / "nope.json")], console=console) == 2


def test_max_time_from_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv(MAX_TIME_ENV, "10")
    path = _workload(tmp_path, '[{"pid":"A","arrival":20,"burst":1}]')
    console = _console()
    assert main(["validate", "-w", path], console=console) == 2
    assert "Times must be <= 10" in console.file.getvalue()

    console = _console()
    assert main(["validate", "-w", path, "--max-time", "50"], console=console) == 0


def test_bad_env_value_falls_back(monkeypatch):
    monkeypatch.setenv(MAX_TIME_ENV, "lots")
    assert max_time_from_env() == 500
    monkeypatch.delenv(MAX_TIME_ENV)
    assert max_time_from_env(default=7) == 7


def test_non_utf8_workload_exit_code(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_bytes(b"pid,arrival,burst\n\xff\xfe,0,3\n")
    console = _console()
    assert main(["validate", "-w", str(p)], console=console) == 2
    assert "not valid UTF-8" in console.file.getvalue()


def test_bom_csv_validates(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_bytes("pid,arrival,burst\nA,0,3\n".encode("utf-8-sig"))
    console = _console()
    assert main(["validate", "-w", str(p)], console=console) == 0
    assert "OK: 1 processes" in console.file.getvalue()


@pytest.mark.parametrize("value", ["0", "-5"])
def test_max_time_must_be_positive(tmp_path: Path, value):
    path = _workload(tmp_path, '[{"pid":"A","arrival":0,"burst":1}]')
    with pytest.raises(SystemExit) as excinfo:
        main(["validate", "-w", path, "--max-time", value], console=_console())
    assert excinfo.value.code == 2


def test_step_replays_every_unit(tmp_path: Path):
    path = _workload(tmp_path, '[{"pid":"A","arrival":0,"burst":5},{"pid":"B","arrival":2,"burst":2}]')
    console = _console()
    assert main(["run", "-a", "srtf", "-w", path, "--step", "--step-delay", "0"], console=console) == 0
    out = console.file.getvalue()
    assert "duration 7 time units" in out
    assert "t= 2: B" in out
    assert "t= 6: A ███" in out
