"""
Tests for rendering and encoding the notification emails.
"""

import base64
from email import message_from_bytes
from email.policy import default as default_policy

import pytest

from vilma.composer import Composer
from vilma.errors import TemplateError
from vilma.models.Event import Event
from vilma.models.Plan import (
    CancelPlan,
    CancelPlayersPlan,
    ConfirmPlan,
    PlayerReportPlan,
    ReminderPlan,
)


def decode(raw):
    return message_from_bytes(base64.urlsafe_b64decode(raw), policy=default_policy)


@pytest.fixture
def composer():
    return Composer(locale="hu-HU")


def test_confirm(composer, sample_event):
    msg = composer.compose(ConfirmPlan(send_to="players@example.org"), sample_event)

    assert msg.to == "players@example.org"
    assert msg.bcc is None
    assert "2024-05-08" in msg.subject
    assert "szerda" in msg.subject
    assert "18:00-20:00" in msg.body


def test_cancel_has_bcc(composer, sample_event):
    plan = CancelPlan(send_to="sport@example.org", send_bcc="admin@example.org")
    msg = composer.compose(plan, sample_event)

    assert msg.to == "sport@example.org"
    assert msg.bcc == "admin@example.org"


def test_cancel_players(composer, sample_event):
    plan = CancelPlayersPlan(send_to="players@example.org", send_bcc="admin@example.org")
    msg = composer.compose(plan, sample_event)

    assert msg.to == "players@example.org"
    assert msg.bcc == "admin@example.org"


def test_player_report_lists_players(composer, sample_event):
    plan = PlayerReportPlan(send_to="admin@example.org", players=("a@x", "c@x"))
    msg = composer.compose(plan, sample_event)

    assert "- a@x\n- c@x" in msg.body
    assert "2 játékos" in msg.body


def test_reminder_vote_end(composer, sample_event):
    msg = composer.compose(ReminderPlan(send_to="players@example.org", vote_end="16:00"), sample_event)
    assert "16:00-ig" in msg.body


def test_raw_is_a_decodable_message(composer, sample_event):
    plan = CancelPlan(send_to="sport@example.org", send_bcc="admin@example.org")
    msg = composer.compose(plan, sample_event)

    parsed = decode(msg.raw)
    assert parsed["To"] == "sport@example.org"
    assert parsed["Bcc"] == "admin@example.org"
    assert "2024-05-08" in parsed["Subject"]
    assert parsed.get_content().strip() == msg.body.strip()


def test_missing_template(tmp_path, sample_event):
    composer = Composer(template_dir=tmp_path)
    with pytest.raises(TemplateError):
        composer.compose(ConfirmPlan(send_to="players@example.org"), sample_event)


def test_undefined_variable(tmp_path, sample_event):
    (tmp_path / "confirm.j2").write_text("To: {{ send_to }}\nSubject: x\n\n{{ players }}\n")
    composer = Composer(template_dir=tmp_path)

    with pytest.raises(TemplateError):
        composer.compose(ConfirmPlan(send_to="players@example.org"), sample_event)


def test_template_without_recipient(tmp_path, sample_event):
    (tmp_path / "confirm.j2").write_text("Subject: x\n\nhello\n")
    composer = Composer(template_dir=tmp_path)

    with pytest.raises(TemplateError):
        composer.compose(ConfirmPlan(send_to="players@example.org"), sample_event)


def test_all_day_event(composer):
    event = Event.from_api(
        {
            "id": "evt1",
            "start": {"date": "2024-05-08"},
            "end": {"date": "2024-05-09"},
        }
    )
    with pytest.raises(TemplateError):
        composer.compose(ConfirmPlan(send_to="players@example.org"), event)


def test_other_locale(sample_event):
    msg = Composer(locale="de-DE").compose(ConfirmPlan(send_to="players@example.org"), sample_event)
    assert "Mittwoch" in msg.subject
