"""CLI principal.

Comandos:
- `pipeline-groups list`: lista grupos (tabla, `--json` o `--output`).
- `version`: versión del servidor.
- `doctor ...`: diagnóstico y configuración (ver `cli.doctor`).
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console

from gocd_client import __version__
from gocd_client.adapters.json_exporter import dump_pipeline_groups, export_pipeline_groups_json
from gocd_client.cli import doctor
from gocd_client.cli.ui_components import (
    build_pipeline_groups_table,
    build_server_version_panel,
    format_error,
)
from gocd_client.core.config import LogLevel, load_settings
from gocd_client.core.errors import ConfigurationError, GoCDError
from gocd_client.core.logging_setup import setup_logging
from gocd_client.core.services.client import GoCDClient

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Typed client for the GoCD REST API.")
groups_app = typer.Typer(no_args_is_help=True, help="Pipeline group operations.")
app.add_typer(groups_app, name="pipeline-groups")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    log_level: Optional[LogLevel] = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Override GOCD_LOG_LEVEL.",
    ),
) -> None:
    try:
        configured = load_settings().log_level
    except ConfigurationError:
        # Cada comando reporta el error; `doctor configure` debe poder arreglarlo.
        configured = LogLevel.WARNING
    setup_logging(log_level or configured)


def _run(operation: Callable[[GoCDClient], Awaitable[T]]) -> T:
    """Ejecuta una operación async con un cliente nuevo y mapea errores a exit 1."""

    async def _call() -> T:
        async with GoCDClient.from_settings(settings) as client:
            return await operation(client)

    try:
        settings = load_settings()
        return asyncio.run(_call())
    except GoCDError as exc:
        _err_console.print(format_error(exc))
        raise typer.Exit(code=1) from exc


@groups_app.command("list")
def list_groups(
    name: str = typer.Option("", "--name", "-n", help="Only the group(s) matching this name."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write JSON to this file."),
) -> None:
    """List pipeline groups in server order."""

    async def _op(client: GoCDClient) -> Any:
        groups, _ = await client.pipeline_groups.list(client.new_context(), name)
        return groups

    groups = _run(_op)

    if output is not None:
        path = export_pipeline_groups_json(groups=groups, output_path=output)
        _err_console.print(f"[green]Saved:[/green] {path}")

    if as_json:
        typer.echo(dump_pipeline_groups(groups), nl=False)
    else:
        _console.print(build_pipeline_groups_table(groups))


@app.command("version")
def server_version() -> None:
    """Show the GoCD server version."""

    async def _op(client: GoCDClient) -> Any:
        server, _ = await client.server_version.get(client.new_context())
        return server

    _console.print(build_server_version_panel(_run(_op)))
    _console.print(f"[dim]gocd-client {__version__}[/dim]")


def run() -> None:
    app()
