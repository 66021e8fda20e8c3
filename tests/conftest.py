"""
Shared fixtures for vilma tests.
"""

from unittest.mock import MagicMock

import pytest

from vilma.config import Settings
from vilma.models.Event import Event


def make_event(attendees=None, start="2024-05-08T18:00:00+02:00", end="2024-05-08T20:00:00+02:00"):
    """Build an event the way the Calendar API returns it."""
    item = {
        "id": "evt123",
        "summary": "Röpi",
        "start": {"dateTime": start, "timeZone": "Europe/Budapest"},
        "end": {"dateTime": end, "timeZone": "Europe/Budapest"},
    }
    if attendees is not None:
        item["attendees"] = [
            {"email": email, "responseStatus": status} for email, status in attendees
        ]
    return Event.from_api(item)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        quorum=2,
        organizers="sport@example.org",
        admin="admin@example.org",
        notify_to="players@example.org",
        player_logs=tmp_path / "player-logs",
        print_events=True,
    )


@pytest.fixture
def sample_event():
    return make_event(
        [
            ("a@x", "accepted"),
            ("b@x", "declined"),
            ("c@x", "accepted"),
        ]
    )


@pytest.fixture
def mock_gcal(sample_event):
    gcal = MagicMock()
    gcal.get_event_by_id.return_value = sample_event
    gcal.get_event_for_day.return_value = sample_event
    return gcal


@pytest.fixture
def mock_gmail():
    gmail = MagicMock()
    gmail.send.return_value = "msg1"
    return gmail
