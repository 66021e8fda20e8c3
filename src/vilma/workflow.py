"""Run one pass over an event: evaluate it, then send, log and delete."""

from pydantic import BaseModel, Field

from vilma import attendee_log
from vilma.composer import Composer
from vilma.config import Settings
from vilma.errors import DeleteError, FetchError, FormatError, SendError, StorageError, TemplateError
from vilma.evaluator import evaluate
from vilma.models.Event import Event
from vilma.models.Plan import EvaluationResult, TemplateKind


class RunReport(BaseModel):
    event_id: str = ""
    sent: list[TemplateKind] = Field(default_factory=list)
    failures: list[str] = Field(default_factory=list)
    logged: bool = False
    deleted: bool = False

    @property
    def ok(self) -> bool:
        return not self.failures


class WorkflowRunner:
    def __init__(self, settings: Settings, gcal, gmail, composer: Composer = None) -> None:
        self.settings = settings
        self.gcal = gcal
        self.gmail = gmail
        self.composer = composer or Composer(settings.templates, settings.locale)

    def log(self, msg: str) -> None:
        if self.settings.print_events:
            print(f"...{msg}")

    @staticmethod
    def error(report: RunReport, msg: str) -> None:
        print(f">>>ERROR: {msg}")
        report.failures.append(msg)

    def run_by_id(self, event_id: str, is_reminder_pass: bool = False) -> RunReport:
        try:
            event = self.gcal.get_event_by_id(event_id)
        except FetchError as e:
            return self.aborted(event_id, e)
        return self.run(event, is_reminder_pass)

    def run_for_day(self, days_ahead: int = None, is_reminder_pass: bool = False) -> RunReport:
        days_ahead = self.settings.days_ahead if days_ahead is None else days_ahead
        try:
            event = self.gcal.get_event_for_day(days_ahead)
        except FetchError as e:
            return self.aborted("", e)
        return self.run(event, is_reminder_pass)

    def aborted(self, event_id: str, e: Exception) -> RunReport:
        report = RunReport(event_id=event_id)
        self.error(report, f"{e}, exiting")
        return report

    def run(self, event: Event, is_reminder_pass: bool = False) -> RunReport:
        report = RunReport(event_id=event.id)
        self.log(f"event found: {event.summary}")
        try:
            result = evaluate(event, self.settings, is_reminder_pass)
        except FormatError as e:
            self.error(report, f"could not evaluate event '{event.id}': {e}")
            return report
        if not is_reminder_pass:
            self.log(f"number of accepted attendees: {len(event.accepted_emails())}")
        self.execute(result, event, report)
        return report

    def execute(self, result: EvaluationResult, event: Event, report: RunReport) -> None:
        """Send every plan in order, then write the log and delete the event."""
        dry_run = self.settings.dry_run
        for plan in result.plans:
            self.log(f"sending {plan.kind.value} email to {plan.send_to}")
            try:
                message = self.composer.compose(plan, event)
            except TemplateError as e:
                self.error(report, f"{plan.kind.value}: {e}")
                continue
            if dry_run:
                self.log(f"dry_run: {plan.kind.value} to {message.to} '{message.subject}'")
                continue
            try:
                self.gmail.send(message.raw)
            except SendError as e:
                self.error(report, f"{plan.kind.value}: {e}")
                continue
            report.sent.append(plan.kind)
            self.log(f"{plan.kind.value} email sent")

        if result.logged_attendees:
            self.log("logging emails of players who accepted the invitation")
            if dry_run:
                self.log(f"dry_run: would log {len(result.logged_attendees)} players")
            else:
                try:
                    path = attendee_log.record(self.settings.player_logs, event, result.logged_attendees)
                    report.logged = True
                    self.log(f"players logged to {path}")
                except StorageError as e:
                    self.error(report, str(e))

        if result.delete_event:
            self.log(f"deleting event '{event.id}'")
            if dry_run:
                self.log("dry_run: event not deleted")
                return
            try:
                self.gcal.delete_event(event.id)
                report.deleted = True
            except DeleteError as e:
                self.error(
                    report, f"{e}; cancel emails were sent but the event is still on the calendar"
                )
