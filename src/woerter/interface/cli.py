"""woerter CLI — review, due-set and migration commands."""

import json
import logging
import sys
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from woerter.application.config import resolve_config
from woerter.application.scheduling.formatting import format_next_review
from woerter.domain.exceptions import WoerterError
from woerter.interface._common import _open_service, state_to_dict

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="woerter: spaced-repetition review scheduler for vocabulary.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage woerter configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _fail(error: Exception) -> NoReturn:
    typer.secho(f"Error: {error}", fg="red")
    raise typer.Exit(1)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    state_file: Annotated[
        Path | None, typer.Option(help="Review-state file. Defaults to config.")
    ] = None,
    backend: Annotated[str | None, typer.Option(help="Store backend: json, memory.")] = None,
    at: Annotated[
        datetime | None,
        typer.Option(help="Pretend the current time is this timestamp (UTC if naive)."),
    ] = None,
):
    """Global settings for woerter."""
    logging.getLogger().setLevel(_LOG_LEVELS.get(verbose, logging.DEBUG))
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["state_file"] = state_file
    ctx.obj["backend"] = backend
    ctx.obj["at"] = at


# ---------------------------------------------------------------------------
# Review commands
# ---------------------------------------------------------------------------


@app.command()
def review(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item key (canonical word form).")],
    quality: Annotated[
        int, typer.Argument(help="Recall quality 0-5 (out-of-range values are clamped).")
    ],
    incorrect: Annotated[
        bool,
        typer.Option("--incorrect", help="The graded answer was wrong; caps quality at 2."),
    ] = False,
):
    """[bold green]Record[/bold green] a review and schedule the next one."""
    _, _, service = _open_service(ctx)
    try:
        state = service.record_review(
            item, quality, answered_correctly=False if incorrect else None
        )
    except WoerterError as e:
        _fail(e)

    label = format_next_review(state.next_review_at, service.clock.now())
    typer.echo(
        f"{item}: next review {label} "
        f"(interval {state.interval}d, reps {state.repetitions}, "
        f"easiness {state.easiness:.2f})"
    )


@app.command()
def skip(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item key to skip.")],
):
    """Skip a scheduled item (counts as a poor recall)."""
    _, _, service = _open_service(ctx)
    try:
        state = service.skip(item)
    except WoerterError as e:
        _fail(e)

    label = format_next_review(state.next_review_at, service.clock.now())
    typer.echo(f"{item}: skipped, next review {label}")


@app.command()
def show(
    ctx: typer.Context,
    item: Annotated[str, typer.Argument(help="Item key to inspect.")],
):
    """Print the stored review state of an item as JSON."""
    _, _, service = _open_service(ctx)
    try:
        state = service.require_state(item)
    except WoerterError as e:
        _fail(e)

    typer.echo(json.dumps(state_to_dict(state), indent=2, ensure_ascii=False))


# ---------------------------------------------------------------------------
# Due-set commands
# ---------------------------------------------------------------------------


@app.command()
def due(
    ctx: typer.Context,
    limit: Annotated[int | None, typer.Option(min=1, help="Show at most this many items.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List items due now, most overdue first."""
    config, _, service = _open_service(ctx)
    try:
        items = service.due_items(limit=limit if limit is not None else config.due_limit)
    except WoerterError as e:
        _fail(e)

    if json_output:
        typer.echo(
            json.dumps([state_to_dict(s) for s in items], indent=2, ensure_ascii=False)
        )
        return

    if not items:
        typer.secho("Nothing is due.", fg="green")
        return

    now = service.clock.now()
    for state in items:
        overdue_days = (now - state.next_review_at).days
        typer.echo(f"  {state.item_key}  (overdue {overdue_days}d)")
    typer.echo(f"Due: {len(items)}")


@app.command()
def upcoming(
    ctx: typer.Context,
    days: Annotated[int | None, typer.Option(help="Look-ahead window in days.")] = None,
):
    """Count items scheduled between now and now + DAYS."""
    config, _, service = _open_service(ctx)
    window = days if days is not None else config.upcoming_days
    try:
        count = service.upcoming_count(window)
    except WoerterError as e:
        _fail(e)
    typer.echo(f"Due within {window} days: {count}")


@app.command()
def stats(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show learning / young / mature bucket counts."""
    _, _, service = _open_service(ctx)
    try:
        result = service.stats()
    except WoerterError as e:
        _fail(e)

    if json_output:
        typer.echo(json.dumps(asdict(result), indent=2))
        return

    typer.echo(
        f"Total: {result.total}  Due today: {result.due_today}"
        f"  Due this week: {result.due_this_week}"
    )
    typer.echo(
        f"Learning: {result.learning}  Young: {result.young}  Mature: {result.mature}"
    )


# ---------------------------------------------------------------------------
# Migration
# ---------------------------------------------------------------------------


def _migration_blocker(store, learned: list[str]) -> str | None:
    if store.is_migrated():
        return "Migration already completed."
    if store.exists_any():
        return "Review state already exists; nothing to migrate."
    if not learned:
        return "No learned items to migrate."
    return None


@app.command()
def migrate(
    ctx: typer.Context,
    learned_file: Annotated[
        Path | None,
        typer.Option(help="YAML/JSON/plain-text list of already learned items to import."),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Report what would happen without writing.")
    ] = False,
):
    """Convert the legacy learned list into review state (runs once)."""
    from woerter.application.utils.learned_list import parse_learned_list

    _, store, service = _open_service(ctx)

    imported: list[str] = []
    if learned_file is not None:
        if not learned_file.exists():
            typer.secho(f"File not found: {learned_file}", fg="red")
            raise typer.Exit(1)
        imported = parse_learned_list(learned_file.read_text(encoding="utf-8"))

    try:
        learned = list(dict.fromkeys(store.get_learned_keys() + imported))
        blocker = _migration_blocker(store, learned)
        if blocker:
            typer.secho(blocker, fg="yellow")
            return

        if dry_run:
            typer.echo(f"[DRY RUN] Would migrate {len(learned)} items")
            return

        if imported:
            added = store.import_learned_items(imported)
            typer.echo(f"Imported {added} learned items")
        count = service.bootstrap(store)
    except WoerterError as e:
        _fail(e)

    typer.secho(f"Migrated {count} items; first reviews are due tomorrow.", fg="green")


# ---------------------------------------------------------------------------
# Config / server
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


@app.command()
def serve(
    port: Annotated[int, typer.Option(help="Port to bind the server to.")] = 8778,
    host: Annotated[str, typer.Option(help="Host to bind the server to.")] = "127.0.0.1",
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """Run the HTTP review daemon."""
    import uvicorn

    uvicorn.run("woerter.server:app", host=host, port=port, reload=reload)
