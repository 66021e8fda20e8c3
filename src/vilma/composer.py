import base64
from email.message import EmailMessage
from email.parser import HeaderParser
from email.policy import default as default_policy
from pathlib import Path
from typing import Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError as JinjaTemplateError,
    TemplateNotFound,
)
from pydantic import BaseModel, ConfigDict

from vilma.errors import FormatError, TemplateError
from vilma.formatter import to_display_date, to_hour_minute, to_weekday_name
from vilma.models.Event import Event
from vilma.models.Plan import TEMPLATE_FILES, NotificationPlan

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class ComposedMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    to: str
    bcc: Optional[str] = None
    subject: str = ""
    body: str
    raw: str


class Composer:
    def __init__(self, template_dir=None, locale: str = "hu-HU") -> None:
        self.template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
        self.locale = locale
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            autoescape=False,
        )

    def event_vars(self, event: Event) -> dict:
        """Date and time values shared by every template."""
        return {
            "summary": event.summary,
            "date": to_display_date(event.start),
            "from_hour": to_hour_minute(event.start),
            "to_hour": to_hour_minute(event.end),
            "day_of_week": to_weekday_name(event.start, self.locale),
        }

    def render(self, plan: NotificationPlan, event: Event) -> str:
        template_name = TEMPLATE_FILES[plan.kind]
        try:
            variables = {**self.event_vars(event), **plan.template_vars()}
            return self.env.get_template(template_name).render(**variables)
        except TemplateNotFound:
            raise TemplateError(
                f"template '{template_name}' not found in {self.template_dir}"
            ) from None
        except (JinjaTemplateError, FormatError) as e:
            raise TemplateError(f"could not render '{template_name}': {e}") from e

    def compose(self, plan: NotificationPlan, event: Event) -> ComposedMessage:
        """Render the plan's template and encode it for the Gmail API."""
        text = self.render(plan, event)
        head, _, body = text.lstrip("\n").partition("\n\n")
        headers = HeaderParser(policy=default_policy).parsestr(head)
        if not headers.get("To"):
            raise TemplateError(f"template for '{plan.kind.value}' renders no 'To' header")

        msg = EmailMessage()
        msg["To"] = str(headers["To"])
        if headers.get("Bcc"):
            msg["Bcc"] = str(headers["Bcc"])
        msg["Subject"] = str(headers.get("Subject", ""))
        msg.set_content(body)
        raw = base64.urlsafe_b64encode(msg.as_bytes()).decode()
        return ComposedMessage(
            to=str(headers["To"]),
            bcc=str(headers["Bcc"]) if headers.get("Bcc") else None,
            subject=str(headers.get("Subject", "")),
            body=body,
            raw=raw,
        )
