"""Flask CLI commands seeding the demo account and the question pool."""

from __future__ import annotations

import logging
import os

import click
from flask import current_app
from flask.cli import with_appcontext

from journal_api.core.config import ENV_VAR
from journal_api.core.extensions import db
from journal_api.seeds import seed_data

LOGGER = logging.getLogger(__name__)

SEEDERS = {
    "users": seed_data.seed_users,
    "questions": seed_data.seed_questions,
}


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Print one ``created / existing`` line per table."""
    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        click.echo(
            f"  {table.ljust(width)}  created={counters.get('created', 0):>2}"
            f"  existing={counters.get('existing', 0):>2}"
        )


def _ensure_non_production() -> None:
    """Refuse destructive commands outside development and testing."""
    app_env = os.getenv(ENV_VAR, "development").strip().lower()
    if app_env == "production" and not current_app.config.get("TESTING"):
        raise click.UsageError("'flask seed fresh' is disabled when APP_ENV=production.")


def _run(only: str | None, verbose: bool) -> dict[str, dict[str, int]]:
    if only is None:
        return seed_data.run_all(db, verbose=verbose)
    return SEEDERS[only](db, verbose=verbose)


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log every seeding step.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Database seeding commands."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.getLogger(seed_data.__name__).setLevel(logging.DEBUG if verbose else logging.INFO)


@seed_cli.command("run")
@click.option(
    "--only",
    type=click.Choice(sorted(SEEDERS)),
    default=None,
    help="Seed a single table group instead of everything.",
)
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context, only: str | None) -> None:
    """Insert the demo user and default questions; existing rows are kept."""
    try:
        summary = _run(only, bool(ctx.obj.get("verbose", False)))
    except Exception as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool) -> None:
    """Drop and recreate every table, then seed."""
    _ensure_non_production()
    if not yes:
        click.confirm("This drops every table, including issued refresh tokens. Continue?", abort=True)
    LOGGER.info("seed.fresh.drop_all")
    db.session.remove()
    db.drop_all()
    db.create_all()
    try:
        summary = seed_data.run_all(db, verbose=bool(ctx.obj.get("verbose", False)))
    except Exception as exc:  # pragma: no cover - CLI safeguard
        db.session.rollback()
        raise click.ClickException(f"Fresh seed failed: {exc}") from exc
    _echo_summary(summary)
