"""CLI for content maintenance and migration runs."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from schoerke.config import SchoerkeConfig, load_config, merge_cli_overrides
from schoerke.content.models import Collection
from schoerke.content.store import ContentBackend, ContentStore
from schoerke.errors import MaintenanceReport, OutcomeStatus
from schoerke.i18n.locale import DEFAULT_LOCALE_CONFIG, LocaleConfig, resolve_locale
from schoerke.integrations.payload import PayloadAPIClient
from schoerke.maintenance import cleanup_records_without_slug, populate_slugs, validate_media
from schoerke.migrations.wordpress import (
    migrate_artists,
    migrate_posts,
    parse_wordpress_export,
)

app = typer.Typer(
    name="schoerke",
    help="Maintenance and migration tools for the Schörke website content.",
)

console = Console()

_STATUS_STYLES = {
    OutcomeStatus.SUCCEEDED: "green",
    OutcomeStatus.SKIPPED: "yellow",
    OutcomeStatus.FAILED: "red",
}


class _State:
    config: SchoerkeConfig = SchoerkeConfig()
    locale_config: LocaleConfig = DEFAULT_LOCALE_CONFIG


state = _State()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from schoerke import __version__

        console.print(f"schoerke {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-V", help="Log progress for every record.")
    ] = False,
    config_path: Annotated[
        Optional[Path], typer.Option("--config", "-c", help="Path to a .schoerke.toml file.")
    ] = None,
    store_dir: Annotated[
        Optional[Path], typer.Option("--store", help="Local content store directory.")
    ] = None,
    default_locale: Annotated[
        Optional[str],
        typer.Option("--default-locale", help="Override [site].default_locale."),
    ] = None,
    payload_url: Annotated[
        Optional[str], typer.Option("--payload-url", help="Payload CMS base URL.")
    ] = None,
    payload_key: Annotated[
        Optional[str], typer.Option("--payload-key", help="Payload CMS API key.")
    ] = None,
) -> None:
    """Schörke content tools."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = load_config(config_path)
    state.config = merge_cli_overrides(
        config,
        store_directory=str(store_dir) if store_dir else None,
        default_locale=default_locale,
        payload_url=payload_url,
        payload_key=payload_key,
    )
    try:
        state.locale_config = state.config.to_locale_config()
    except ValidationError as exc:
        reason = "; ".join(error["msg"] for error in exc.errors())
        raise typer.BadParameter(
            f"invalid locale settings ({reason})", param_hint="[site] config"
        ) from exc


def _backend() -> ContentBackend:
    """CMS client when configured, otherwise the local JSON store."""
    payload = state.config.to_payload_config()
    if payload.is_configured:
        console.print(f"[dim]Using CMS at {payload.url}[/dim]")
        return PayloadAPIClient(payload)
    directory = Path(state.config.store.directory)
    console.print(f"[dim]Using local store in {directory}[/dim]")
    return ContentStore(directory)


def _render(report: MaintenanceReport) -> None:
    """Print the per-record table and totals, exit 1 on failures."""
    table = Table(title=report.operation, show_lines=False)
    table.add_column("ID", justify="right")
    table.add_column("Record")
    table.add_column("Status")
    table.add_column("Details")
    for outcome in report.outcomes:
        style = _STATUS_STYLES[outcome.status]
        table.add_row(
            str(outcome.record_id if outcome.record_id is not None else "-"),
            outcome.label,
            f"[{style}]{outcome.status.value}[/{style}]",
            outcome.message,
        )
    if report.outcomes:
        console.print(table)

    counts = report.counts
    console.print("=" * 60)
    if report.dry_run:
        console.print("[bold]Dry run, nothing was written.[/bold]")
    console.print(f"Succeeded: {counts['succeeded']}")
    console.print(f"Skipped:   {counts['skipped']}")
    console.print(f"Failed:    {counts['failed']}")
    console.print("=" * 60)

    if not report.ok:
        raise typer.Exit(1)


@app.command("populate-slugs")
def populate_slugs_cmd(
    collection: Annotated[
        Collection, typer.Option("--collection", help="Collection to backfill.")
    ] = Collection.ARTISTS,
    field: Annotated[
        str, typer.Option("--field", help="Field holding the display name.")
    ] = "name",
    locale: Annotated[
        Optional[str],
        typer.Option("--locale", "-l", help="Locale to read localized names in."),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Report slugs without writing them.")
    ] = False,
) -> None:
    """Derive slugs for records that do not have one yet."""
    report = populate_slugs(
        _backend(),
        collection.value,
        field,
        locale=locale,
        locale_config=state.locale_config,
        dry_run=dry_run,
    )
    _render(report)


@app.command("cleanup-posts")
def cleanup_posts_cmd(
    collection: Annotated[
        Collection, typer.Option("--collection", help="Collection to clean up.")
    ] = Collection.POSTS,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="List records without deleting them.")
    ] = False,
) -> None:
    """Delete records that were created without a slug."""
    report = cleanup_records_without_slug(_backend(), collection.value, dry_run=dry_run)
    _render(report)


@app.command("validate-media")
def validate_media_cmd(
    collection: Annotated[
        Collection, typer.Option("--collection", help="Media collection to check.")
    ] = Collection.IMAGES,
) -> None:
    """Check that every media record is either an image or a document."""
    report = validate_media(_backend(), collection.value)
    _render(report)


@app.command("migrate-wordpress")
def migrate_wordpress_cmd(
    export: Annotated[
        Path, typer.Argument(help="WordPress export XML (Tools > Export).")
    ],
    item_type: Annotated[
        str, typer.Option("--type", "-t", help="What to migrate: 'post' or 'artist'.")
    ] = "post",
    locale: Annotated[
        Optional[str], typer.Option("--locale", "-l", help="Language of the export.")
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Report without creating records.")
    ] = False,
) -> None:
    """Import published posts or artists from a WordPress export."""
    migrations = {"post": migrate_posts, "artist": migrate_artists}
    if item_type not in migrations:
        console.print(f"[red]Unknown type {item_type!r}; use 'post' or 'artist'.[/red]")
        raise typer.Exit(2)

    items = parse_wordpress_export(export)
    report = migrations[item_type](
        _backend(),
        items,
        locale=locale,
        locale_config=state.locale_config,
        dry_run=dry_run,
    )
    _render(report)


@app.command("resolve-locale")
def resolve_locale_cmd(
    value: Annotated[str, typer.Argument(help="Raw locale segment, e.g. from a URL.")],
) -> None:
    """Print the locale a request for VALUE would be rendered in."""
    console.print(resolve_locale(value, state.locale_config))


if __name__ == "__main__":
    app()
