"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gocd_client.core.domain.models import PipelineGroups, ServerVersion
from gocd_client.core.errors import GoCDError, HTTPStatusError


def build_pipeline_groups_table(groups: PipelineGroups) -> Table:
    """Una fila por grupo, en el orden del servidor."""

    table = Table(title="Pipeline Groups")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Group", style="cyan", no_wrap=True)
    table.add_column("Pipelines", style="white")
    for index, group in enumerate(groups, start=1):
        names = ", ".join(p.name or "?" for p in group.pipelines) or "-"
        table.add_row(str(index), escape(group.name), escape(names))
    return table


def build_server_version_panel(server: ServerVersion) -> Panel:
    body = Text()
    body.append(f"Version: {server.version}\n", style="bold")
    if server.full_version:
        body.append(f"Full: {server.full_version}\n")
    if server.git_sha:
        body.append(f"Commit: {server.git_sha}", style="dim")
    return Panel(body, title=Text("GoCD Server", style="bold cyan"), border_style="cyan")


def format_error(exc: GoCDError) -> str:
    """Mensaje de error en markup Rich."""

    text = f"[red]{type(exc).__name__}:[/red] {escape(exc.message)}"
    if isinstance(exc, HTTPStatusError) and exc.body:
        snippet = exc.response.text().strip().replace("\n", " ")[:200]
        text += f"\n[dim]{escape(snippet)}[/dim]"
    return text
