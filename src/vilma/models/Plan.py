from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class TemplateKind(str, Enum):
    CONFIRM = "confirm"
    CANCEL = "cancel"
    CANCEL_PLAYERS = "cancelPlayers"
    PLAYER_REPORT = "playerReport"
    REMINDER = "reminder"


TEMPLATE_FILES = {
    TemplateKind.CONFIRM: "confirm.j2",
    TemplateKind.CANCEL: "cancel.j2",
    TemplateKind.CANCEL_PLAYERS: "cancel-players.j2",
    TemplateKind.PLAYER_REPORT: "player-report.j2",
    TemplateKind.REMINDER: "reminder.j2",
}


class _Plan(BaseModel):
    model_config = ConfigDict(frozen=True)

    send_to: str

    def template_vars(self) -> dict:
        """Plan fields handed to the template, without the kind tag."""
        return self.model_dump(exclude={"kind"})


class ConfirmPlan(_Plan):
    kind: Literal[TemplateKind.CONFIRM] = TemplateKind.CONFIRM


class CancelPlan(_Plan):
    kind: Literal[TemplateKind.CANCEL] = TemplateKind.CANCEL
    send_bcc: str


class CancelPlayersPlan(_Plan):
    kind: Literal[TemplateKind.CANCEL_PLAYERS] = TemplateKind.CANCEL_PLAYERS
    send_bcc: str


class PlayerReportPlan(_Plan):
    kind: Literal[TemplateKind.PLAYER_REPORT] = TemplateKind.PLAYER_REPORT
    players: tuple[str, ...]


class ReminderPlan(_Plan):
    kind: Literal[TemplateKind.REMINDER] = TemplateKind.REMINDER
    vote_end: str


NotificationPlan = Annotated[
    Union[ConfirmPlan, CancelPlan, CancelPlayersPlan, PlayerReportPlan, ReminderPlan],
    Field(discriminator="kind"),
]


class EvaluationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    plans: tuple[NotificationPlan, ...] = ()
    delete_event: bool = False
    logged_attendees: tuple[str, ...] = ()

    def kinds(self) -> list[TemplateKind]:
        return [i.kind for i in self.plans]
