"""
Check the upcoming volleyball session and send the matching emails.

t-1 runs the quorum pass (confirm or cancel), t-2 sends the vote reminder.
"""

import sys

import click

from vilma.auth import authorize, load_credentials
from vilma.config import load_settings
from vilma.errors import VilmaError
from vilma.gcal import GCal
from vilma.gmail import GMail
from vilma.workflow import WorkflowRunner


def build_runner(settings) -> WorkflowRunner:
    creds = load_credentials(settings)
    gcal = GCal(settings)
    gcal.authenticate_service(creds)
    gmail = GMail()
    gmail.authenticate_service(creds)
    return WorkflowRunner(settings, gcal, gmail)


def finish(report) -> None:
    if not report.ok:
        sys.exit(1)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file, defaults to $VILMA_CONFIG or ~/.config/vilma/config.yml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path) -> None:
    """Volleyball session coordinator for a Google calendar."""
    ctx.ensure_object(dict)
    try:
        ctx.obj["settings"] = load_settings(config_path)
    except VilmaError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.pass_context
def auth(ctx: click.Context) -> None:
    """Get credential tokens (run this first and only once)."""
    try:
        if authorize(ctx.obj["settings"]):
            click.echo("Credentials saved.")
        else:
            click.echo("Credentials already exist. You can test them with 'vilma test'.")
    except VilmaError as e:
        raise click.ClickException(str(e))


@cli.command()
@click.pass_context
def test(ctx: click.Context) -> None:
    """Test the credentials by listing the next events."""
    settings = ctx.obj["settings"]
    try:
        gcal = GCal(settings)
        gcal.authenticate_service(load_credentials(settings))
        gcal.get_upcoming_events()
    except VilmaError as e:
        raise click.ClickException(str(e))
    click.echo("Access OK. Calendar events retrieved.")


@cli.command("t-1")
@click.option("--days-ahead", type=int, default=None, help="Override event.days_ahead.")
@click.pass_context
def t1(ctx: click.Context, days_ahead) -> None:
    """Confirm or cancel the upcoming session."""
    try:
        runner = build_runner(ctx.obj["settings"])
    except VilmaError as e:
        raise click.ClickException(str(e))
    finish(runner.run_for_day(days_ahead, is_reminder_pass=False))


@cli.command("t-2")
@click.option("--days-ahead", type=int, default=None, help="Override event.days_ahead.")
@click.pass_context
def t2(ctx: click.Context, days_ahead) -> None:
    """Send the vote reminder for the upcoming session."""
    try:
        runner = build_runner(ctx.obj["settings"])
    except VilmaError as e:
        raise click.ClickException(str(e))
    finish(runner.run_for_day(days_ahead, is_reminder_pass=True))


@cli.command()
@click.argument("event_id")
@click.option("--reminder", is_flag=True, help="Send the reminder instead of confirm/cancel.")
@click.pass_context
def event(ctx: click.Context, event_id, reminder) -> None:
    """Run a pass on the event with EVENT_ID."""
    try:
        runner = build_runner(ctx.obj["settings"])
    except VilmaError as e:
        raise click.ClickException(str(e))
    finish(runner.run_by_id(event_id, is_reminder_pass=reminder))


def main():
    cli()


if __name__ == "__main__":
    main()
