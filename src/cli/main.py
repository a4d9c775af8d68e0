"""CLI principal (Typer).

Por qué la CLI es delgada:
- Toda la lógica (polling, búsqueda por nombre, protección) vive en
  `adapters/` y `core/`; aquí solo se parsean argumentos y se pinta con Rich.
- Cualquier `ArpioError` se muestra en rojo y termina con exit code 1.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.arpio_client import ArpioClient
from adapters.json_exporter import dump_models, export_models_json
from cli import doctor
from cli.ui_components import (
    build_app_panel,
    build_apps_table,
    build_recovery_points_table,
    build_staged_resources_table,
)
from core.config import ArpioSettings
from core.domain.models import RecoveryPoint
from core.domain.sync import SyncPair
from core.errors import ArpioError

app = typer.Typer(no_args_is_help=True, help="Arpio disaster-recovery client.")
apps_app = typer.Typer(no_args_is_help=True, help="Manage Arpio applications.")
recovery_points_app = typer.Typer(no_args_is_help=True, help="Inspect and protect recovery points.")

app.add_typer(apps_app, name="apps")
app.add_typer(recovery_points_app, name="recovery-points")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    resolved_level = getattr(logging, level.upper(), logging.WARNING)
    root = logging.getLogger()
    root.handlers = [h for h in root.handlers if not getattr(h, "_arpio_handler", False)]

    handler = RichHandler(console=_err_console, show_path=False)
    handler._arpio_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(resolved_level)

    # httpx loguea cada request en INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_client() -> ArpioClient:
    return ArpioClient.from_settings(ArpioSettings())


@contextmanager
def _client_session() -> Iterator[ArpioClient]:
    try:
        with build_client() as client:
            yield client
    except ArpioError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _parse_timestamp(value: str | None, option: str) -> datetime | None:
    if value is None:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise typer.BadParameter(f"{option} must be an RFC 3339 timestamp, got {value!r}") from exc


def _resolve_recovery_point(client: ArpioClient, app_name: str, recovery_point_id: str) -> tuple[SyncPair, RecoveryPoint]:
    sync_pair = client.apps.must_get_by_name(app_name).sync_pair()
    rp = client.recovery_points.get(sync_pair, recovery_point_id)
    if rp is None:
        raise ArpioError(f'recovery point "{recovery_point_id}" does not exist for application "{app_name}"')
    return sync_pair, rp


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level (DEBUG, INFO, WARNING...)."),
) -> None:
    _configure_logging(log_level)


@apps_app.command("list")
def apps_list(
    as_json: bool = typer.Option(False, "--json", help="Print the wire-format JSON."),
) -> None:
    """List all applications in the configured account."""

    with _client_session() as client:
        apps = client.apps.list()

    if as_json:
        _console.print_json(data=dump_models(apps))
        return
    _console.print(build_apps_table(apps))


@apps_app.command("show")
def apps_show(
    name: str = typer.Argument(..., help="Application name."),
    wait: float = typer.Option(0.0, "--wait", min=0, help="Seconds to wait for the app to exist."),
    as_json: bool = typer.Option(False, "--json", help="Print the wire-format JSON."),
) -> None:
    """Show the one application with NAME."""

    with _client_session() as client:
        found = client.apps.must_get_by_name(name, timeout=wait)

    if as_json:
        _console.print_json(data=dump_models(found))
        return
    _console.print(build_app_panel(found))


@apps_app.command("delete")
def apps_delete(
    app_id: str = typer.Argument(..., help="Application ID."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
) -> None:
    """Delete an application (succeeds if it is already gone)."""

    if not yes:
        typer.confirm(f"Delete application {app_id}?", abort=True)

    with _client_session() as client:
        client.apps.delete(app_id)

    _console.print(f"[green]Deleted[/green] {app_id}")


@recovery_points_app.command("latest")
def recovery_points_latest(
    app_name: str = typer.Argument(..., help="Application name."),
    timestamp_min: Optional[str] = typer.Option(None, "--min", help="Oldest acceptable timestamp (RFC 3339)."),
    timestamp_max: Optional[str] = typer.Option(None, "--max", help="Newest acceptable timestamp (RFC 3339)."),
    wait: float = typer.Option(0.0, "--wait", min=0, help="Seconds to wait for a matching recovery point."),
    as_json: bool = typer.Option(False, "--json", help="Print the wire-format JSON."),
) -> None:
    """Show the most recent recovery point of APP_NAME within the window."""

    ts_min = _parse_timestamp(timestamp_min, "--min")
    ts_max = _parse_timestamp(timestamp_max, "--max")

    with _client_session() as client:
        sync_pair = client.apps.must_get_by_name(app_name).sync_pair()
        rp = client.recovery_points.must_find_latest(sync_pair, ts_min, ts_max, timeout=wait)

    if as_json:
        _console.print_json(data=dump_models(rp))
        return
    _console.print(build_recovery_points_table([rp]))


@recovery_points_app.command("protect")
def recovery_points_protect(
    app_name: str = typer.Argument(..., help="Application name."),
    recovery_point_id: str = typer.Argument(..., help="Recovery point ID."),
) -> None:
    """Protect a recovery point from retention cleanup."""

    with _client_session() as client:
        sync_pair, rp = _resolve_recovery_point(client, app_name, recovery_point_id)
        protected = client.recovery_points.protect(sync_pair, rp)

    _console.print(build_recovery_points_table([protected]))


@recovery_points_app.command("resources")
def recovery_points_resources(
    app_name: str = typer.Argument(..., help="Application name."),
    recovery_point_id: str = typer.Argument(..., help="Recovery point ID."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also export the resources as JSON."),
) -> None:
    """List the staged resources of a recovery point."""

    with _client_session() as client:
        sync_pair, rp = _resolve_recovery_point(client, app_name, recovery_point_id)
        resources = client.recovery_points.list_resources(sync_pair, rp)

    _console.print(build_staged_resources_table(resources))
    if output is not None:
        path = export_models_json(models=resources, output_path=output)
        _console.print(f"[green]Exported[/green] {len(resources)} resource(s) to {path}")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
