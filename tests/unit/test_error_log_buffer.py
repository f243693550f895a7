from __future__ import annotations
import json
from pathlib import Path

from bulk_import.logging.error_log import ErrorLogBuffer
from bulk_import.models.error_record import ErrorRecord, ErrorType, ValidationError

KEYS = {"timestamp", "file", "entity", "row", "field", "error_type", "message"}


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create(
        file="designations.csv",
        entity="designation",
        row=4,
        field="name",
        error_type="DUPLICATE_IN_FILE",
        message='Duplicate designation "QA" found in CSV',
    )
    data = json.loads(rec.to_json_line())
    assert data["file"] == "designations.csv"
    assert data["row"] == 4
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == KEYS


def test_error_record_from_validation_error():
    err = ValidationError(3, "name", "", "Name is required", ErrorType.MISSING_REQUIRED_FIELD)
    rec = ErrorRecord.from_validation_error("d.csv", "designation", err)
    assert rec.error_type == "MISSING_REQUIRED_FIELD"
    assert (rec.row, rec.field, rec.message) == (3, "name", "Name is required")


def test_json_line_keeps_non_ascii():
    rec = ErrorRecord.create("d.csv", "degree", 2, "name", "INVALID_FORMAT", "Café")
    assert "Café" in rec.to_json_line()


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    buf.append(ErrorRecord.create("f1.csv", "degree", 2, "name", "MISSING_REQUIRED_FIELD", "Name is required"))
    buf.extend_validation_errors("f1.csv", "degree", [
        ValidationError(3, "name", "BSc", 'Duplicate degree "BSc" found in CSV', ErrorType.DUPLICATE_IN_FILE),
    ])
    assert len(buf) == 2
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == temp_workdir / "logs"
    assert path.name.startswith("errors-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == KEYS
    assert len(buf) == 0
    assert buf.written == 2


def test_error_log_buffer_multiple_flushes_append(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    buf.append(ErrorRecord.create("f.csv", "degree", 2, "name", "X", "one"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("f.csv", "degree", 3, "name", "X", "two"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_empty_flush_creates_nothing(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "nested" / "logs")
    assert buf.flush() is None
    assert not (temp_workdir / "nested").exists()


def test_directory_created_on_demand(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "nested" / "logs")
    buf.append(ErrorRecord.create("f.csv", "degree", -1, "", "PARSE_ERROR", "bad"))
    assert buf.flush().exists()
