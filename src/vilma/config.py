import os
import re
from datetime import timedelta
from pathlib import Path
from typing import Optional

import pytz
import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from vilma.errors import ConfigError

DEFAULT_CONFIG_PATH = "~/.config/vilma/config.yml"
UNITS = {"s": "seconds", "m": "minutes", "h": "hours", "d": "days", "w": "weeks"}


def convert_to_seconds(s) -> int:
    """Convert a duration string like '1h30m' or '2d' to seconds."""
    matches = list(
        re.finditer(r"(?P<val>\d+(\.\d+)?)(?P<unit>[smhdw]?)", str(s), flags=re.I)
    )
    if not matches:
        raise ConfigError(f"invalid duration '{s}', expected something like '2h' or '90m'")
    return int(
        timedelta(
            **{UNITS.get(m.group("unit").lower(), "seconds"): float(m.group("val")) for m in matches}
        ).total_seconds()
    )


class Config:
    def __init__(self):
        self.config = None

    def read_config(self, file_path) -> dict:
        """Read config file."""
        path = Path(file_path).expanduser()
        try:
            with open(path, "r") as stream:
                self.config = yaml.safe_load(stream) or {}
        except FileNotFoundError:
            raise ConfigError(
                f"config file not found, please create one at {path}"
            ) from None
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid config file {path}: {e}") from e
        if not isinstance(self.config, dict):
            raise ConfigError(f"config file {path} must hold a mapping")
        return self.config

    def cnf_value(self, path: str, sub_dict=None, default=None):
        """Get value of dot-delimited config path."""
        if not path:
            return default
        [path, remaining] = path.split(".", 1) if path.count(".") else [path, None]
        working_dict = sub_dict if sub_dict is not None else self.config
        if not isinstance(working_dict, dict):
            return default
        sub_dict = working_dict.get(path)
        if remaining:
            return self.cnf_value(remaining, sub_dict if sub_dict is not None else {}, default)
        return default if sub_dict is None else sub_dict

    def cnf_list(self, path: str, delim=",") -> list:
        value = self.cnf_value(path, default=[])
        if isinstance(value, str):
            return [i.strip() for i in value.split(delim) if i.strip()]
        return list(value)


class Settings(BaseModel):
    """Everything a run needs, read once from the config file."""

    model_config = ConfigDict(frozen=True)

    timezone: str = "Europe/Budapest"
    locale: str = "hu-HU"

    quorum: int
    days_ahead: int = 2
    vote_end_lead: timedelta = timedelta(0)

    organizers: str
    admin: str
    notify_to: str

    calendar_id: str = "primary"
    scopes: tuple[str, ...] = (
        "https://www.googleapis.com/auth/calendar",
        "https://www.googleapis.com/auth/gmail.send",
    )
    token_path: Path = Path("~/.config/vilma/auth/token.json")
    creds_path: Path = Path("~/.config/vilma/auth/credentials.json")

    player_logs: Path = Path("~/.config/vilma/player-logs")
    templates: Optional[Path] = None

    print_events: bool = True
    dry_run: bool = False

    @field_validator("quorum")
    @classmethod
    def quorum_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("quorum must not be negative")
        return v

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, v: str) -> str:
        if v not in pytz.all_timezones_set:
            raise ValueError(f"unknown timezone '{v}'")
        return v

    @field_validator("token_path", "creds_path", "player_logs", "templates")
    @classmethod
    def expand_user(cls, v):
        return v.expanduser() if v is not None else v

    @classmethod
    def from_config(cls, cnf: Config) -> "Settings":
        raw = {
            "timezone": cnf.cnf_value("timezone"),
            "locale": cnf.cnf_value("locale"),
            "quorum": cnf.cnf_value("event.quorum"),
            "days_ahead": cnf.cnf_value("event.days_ahead"),
            "organizers": cnf.cnf_value("email.organizers"),
            "admin": cnf.cnf_value("email.admin"),
            "notify_to": cnf.cnf_value("email.notify_to"),
            "calendar_id": cnf.cnf_value("calendar.calendar_id"),
            "token_path": cnf.cnf_value("calendar.token_path"),
            "creds_path": cnf.cnf_value("calendar.creds_path"),
            "player_logs": cnf.cnf_value("paths.player_logs"),
            "templates": cnf.cnf_value("paths.templates"),
            "print_events": cnf.cnf_value("flag.print_events"),
            "dry_run": cnf.cnf_value("flag.dry_run"),
        }
        if cnf.cnf_value("calendar.scopes"):
            raw["scopes"] = tuple(cnf.cnf_list("calendar.scopes"))
        lead = cnf.cnf_value("event.vote_end_lead")
        if lead:
            raw["vote_end_lead"] = timedelta(seconds=convert_to_seconds(lead))
        try:
            return cls(**{k: v for k, v in raw.items() if v is not None})
        except ValidationError as e:
            raise ConfigError(f"invalid config: {e}") from e


def load_settings(file_path=None) -> Settings:
    """Read the config file and build the run settings."""
    file_path = file_path or os.environ.get("VILMA_CONFIG") or DEFAULT_CONFIG_PATH
    cnf = Config()
    cnf.read_config(file_path)
    return Settings.from_config(cnf)
