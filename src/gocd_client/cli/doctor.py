"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gocd_client.cli.ui_components import format_error
from gocd_client.core.config import (
    ClientSettings,
    get_user_env_file,
    load_settings,
    write_user_env_vars,
)
from gocd_client.core.errors import ConfigurationError, GoCDError
from gocd_client.core.services.client import GoCDClient

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_server(settings: ClientSettings) -> tuple[bool, str]:
    try:
        async with GoCDClient.from_settings(settings) as client:
            server, response = await client.server_version.get(client.new_context())
        return True, f"GoCD {server.version} (HTTP {response.status_code})"
    except GoCDError as exc:
        return False, str(exc)


async def _check_pipeline_groups(settings: ClientSettings) -> tuple[bool, str]:
    try:
        async with GoCDClient.from_settings(settings) as client:
            groups, _ = await client.pipeline_groups.list(client.new_context())
        return True, f"{len(groups)} group(s)"
    except GoCDError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _console.print(format_error(exc))
        _console.print("[yellow]Note:[/yellow] Run `gocd-client doctor configure` to fix the configuration.")
        raise typer.Exit(code=1) from exc

    table = Table(title="gocd-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Server URL", "OK", settings.api_base_url)
    if settings.has_credentials:
        table.add_row("Credentials", "OK", f"Basic auth as {settings.username}")
    else:
        table.add_row("Credentials", "OPTIONAL", "No credentials -> anonymous requests")
    if not settings.verify_tls:
        table.add_row("TLS", "WARN", "Certificate verification disabled")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "MISSING", str(get_user_env_file()))

    ok_server, detail_server = asyncio.run(_check_server(settings))
    table.add_row("API version", "OK" if ok_server else "FAIL", escape(detail_server))

    if ok_server:
        ok_groups, detail_groups = asyncio.run(_check_pipeline_groups(settings))
        table.add_row("Pipeline groups", "OK" if ok_groups else "FAIL", escape(detail_groups))

    _console.print(table)

    if not ok_server:
        _console.print(
            "\n[yellow]Note:[/yellow] Run `gocd-client doctor configure` to set the server URL and credentials."
        )
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    default_url = ClientSettings.model_fields["server_url"].default
    default_user = ""
    try:
        current = load_settings()
        default_url, default_user = current.server_url, current.username or ""
    except ConfigurationError as exc:
        _console.print(format_error(exc))

    server_url = typer.prompt("GoCD server URL", default=default_url, show_default=True).strip()
    username = typer.prompt("Username (empty for none)", default=default_user, show_default=True).strip()
    password = ""
    if username:
        password = typer.prompt("Password or token", hide_input=True, confirmation_prompt=False).strip()

    if not server_url.startswith(("http://", "https://")):
        raise typer.BadParameter("server URL must start with http:// or https://")

    values: dict[str, str | None] = {"GOCD_SERVER_URL": server_url.rstrip("/")}
    if username:
        values["GOCD_USERNAME"] = username
        values["GOCD_PASSWORD"] = password

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
