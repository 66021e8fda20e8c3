"""
Tests for the per-event player log.
"""

import pytest

from conftest import make_event
from vilma import attendee_log
from vilma.errors import StorageError


def test_writes_one_address_per_line(tmp_path, sample_event):
    path = attendee_log.record(tmp_path, sample_event, ["a@x", "c@x"])

    assert path == tmp_path / "2024-05-08T18:00:00+02:00.txt"
    assert path.read_text(encoding="utf-8") == "a@x\nc@x"


def test_last_write_wins(tmp_path, sample_event):
    attendee_log.record(tmp_path, sample_event, ["a@x", "b@x", "c@x"])
    path = attendee_log.record(tmp_path, sample_event, ["z@x"])

    assert path.read_text(encoding="utf-8") == "z@x"
    assert len(list(tmp_path.iterdir())) == 1


def test_events_do_not_collide(tmp_path):
    first = make_event([], start="2024-05-08T18:00:00+02:00")
    second = make_event([], start="2024-05-15T18:00:00+02:00")

    attendee_log.record(tmp_path, first, ["a@x"])
    attendee_log.record(tmp_path, second, ["b@x"])

    assert len(list(tmp_path.iterdir())) == 2


def test_creates_missing_directory(tmp_path, sample_event):
    path = attendee_log.record(tmp_path / "logs" / "2024", sample_event, ["a@x"])
    assert path.exists()


def test_unwritable_location(tmp_path, sample_event):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")

    with pytest.raises(StorageError):
        attendee_log.record(blocker, sample_event, ["a@x"])
