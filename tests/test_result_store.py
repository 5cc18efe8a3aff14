import json

import pytest

from multiping.errors import PersistenceWarning
from multiping.models.probe import ProbeResult, ProbeStatus
from multiping.services.result_store import load_snapshot, save_snapshot


def _results():
    return {
        "a.example": ProbeResult(host="a.example", status=ProbeStatus.SUCCEEDED, latency_ms=10.0),
        "b.example": ProbeResult(
            host="b.example", status=ProbeStatus.FAILED, latency_ms=0.0, error="ping failed with return code 1"
        ),
        "c.example": ProbeResult(
            host="c.example", status=ProbeStatus.UNPARSEABLE, latency_ms=None, error="no summary"
        ),
    }


def test_load_snapshot_missing_file_returns_none(tmp_path):
    assert load_snapshot(tmp_path / "missing.state") is None


def test_load_snapshot_malformed_file_returns_none(tmp_path):
    path = tmp_path / "multiping.state"
    path.write_text("{not json")
    assert load_snapshot(path) is None


def test_load_snapshot_rejects_non_mapping(tmp_path):
    path = tmp_path / "multiping.state"
    path.write_text("[1, 2, 3]")
    assert load_snapshot(path) is None


def test_load_snapshot_rejects_non_numeric_values(tmp_path):
    path = tmp_path / "multiping.state"
    path.write_text(json.dumps({"a.example": "fast"}))
    assert load_snapshot(path) is None


def test_save_snapshot_writes_value_per_host(tmp_path):
    path = tmp_path / "multiping.state"

    assert save_snapshot(path, _results()) is True

    assert load_snapshot(path) == {"a.example": 10.0, "b.example": 0.0, "c.example": 0.0}


def test_save_snapshot_replaces_previous_content(tmp_path):
    path = tmp_path / "multiping.state"
    path.write_text(json.dumps({"old.example": 99.0, "a.example": 1.0}))

    save_snapshot(path, {"a.example": _results()["a.example"]})

    assert json.loads(path.read_text()) == {"a.example": 10.0}
    assert [p.name for p in tmp_path.iterdir()] == ["multiping.state"]


def test_save_snapshot_creates_state_directory(tmp_path):
    path = tmp_path / "plugin-state" / "multiping.state"

    assert save_snapshot(path, _results()) is True
    assert path.exists()


def test_save_snapshot_failure_warns_instead_of_raising(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    path = blocker / "multiping.state"

    with pytest.warns(PersistenceWarning, match="Could not write snapshot"):
        assert save_snapshot(path, _results()) is False
