from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List

from .config import MAX_TIME_UNIT
from .errors import WorkloadFormatError
from .models import Process
from .validation import validate_processes


def load_workload(path: str | Path, max_time: int = MAX_TIME_UNIT) -> List[Process]:
    """
    Load a workload from a JSON or CSV file and validate it into Process objects.
    """
    return validate_processes(read_entries(path), max_time=max_time)


def read_entries(path: str | Path) -> List[Dict[str, Any]]:
    """
    Read the raw, unvalidated rows of a workload file.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise WorkloadFormatError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Dict[str, Any]]:
    try:
        with path.open("r", encoding="utf-8-sig") as f:
            raw = json.load(f)
    except UnicodeDecodeError as exc:
        raise WorkloadFormatError(f"{path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise WorkloadFormatError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadFormatError("JSON workload must be a list of process objects")

    return raw


def _load_csv(path: Path) -> List[Dict[str, Any]]:
    # utf-8-sig drops the BOM spreadsheet exports put in front of the header
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        try:
            return [dict(row) for row in reader]
        except UnicodeDecodeError as exc:
            raise WorkloadFormatError(f"{path} is not valid UTF-8: {exc}") from exc
