"""Decide which emails an event needs and whether it should be cancelled."""

from vilma.config import Settings
from vilma.formatter import to_hour_minute
from vilma.models.Event import Event
from vilma.models.Plan import (
    CancelPlan,
    CancelPlayersPlan,
    ConfirmPlan,
    EvaluationResult,
    PlayerReportPlan,
    ReminderPlan,
)


def evaluate(event: Event, settings: Settings, is_reminder_pass: bool = False) -> EvaluationResult:
    """Build the plans for one run over an event.

    A reminder pass only ever sends the vote reminder. Otherwise the event is
    cancelled when fewer than `settings.quorum` players accepted, and confirmed
    (with a player report to the admin) when the quorum is reached. The admin
    facing email always comes first.
    """
    if is_reminder_pass:
        return reminder(event, settings)

    accepted = event.accepted_emails()
    if len(accepted) < settings.quorum:
        return EvaluationResult(
            plans=(
                CancelPlan(send_to=settings.organizers, send_bcc=settings.admin),
                CancelPlayersPlan(send_to=settings.notify_to, send_bcc=settings.admin),
            ),
            delete_event=True,
        )
    return EvaluationResult(
        plans=(
            PlayerReportPlan(send_to=settings.admin, players=tuple(accepted)),
            ConfirmPlan(send_to=settings.notify_to),
        ),
        logged_attendees=tuple(accepted),
    )


def reminder(event: Event, settings: Settings) -> EvaluationResult:
    start = event.start
    if settings.vote_end_lead and start.date_time is not None:
        start = start.model_copy(update={"date_time": start.date_time - settings.vote_end_lead})
    return EvaluationResult(
        plans=(ReminderPlan(send_to=settings.notify_to, vote_end=to_hour_minute(start)),),
    )
