"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from collections.abc import Iterable

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import App, RecoveryPoint, StagedResource
from core.domain.selection_rules import ArnRule, SelectionRule, TagRule
from core.utils import format_rfc3339


def _describe_rule(rule: SelectionRule) -> str:
    if isinstance(rule, ArnRule):
        return f"arn: {', '.join(rule.arns) or '-'}"
    if isinstance(rule, TagRule):
        return f"tag: {rule.name}={rule.value}" if rule.value else f"tag: {rule.name} (any value)"
    return rule.kind


def build_apps_table(apps: Iterable[App]) -> Table:
    table = Table(title="Arpio Applications")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("App ID", style="white")
    table.add_column("Type", style="magenta")
    table.add_column("Sync Pair", style="dim")
    table.add_column("RPO", justify="right")
    table.add_column("Phase", style="green")
    for app in apps:
        table.add_row(
            app.name,
            app.app_id or "-",
            app.app_type,
            str(app.sync_pair()),
            str(app.rpo),
            app.sync_phase or "-",
        )
    return table


def build_app_panel(app: App) -> Panel:
    """Panel con el detalle de una app (incluye reglas de selección)."""

    body = Text()
    body.append(f"App ID: {app.app_id or '-'}\n")
    body.append(f"Type: {app.app_type}\n")
    body.append(f"Source: {app.source_aws_account_id}/{app.source_region}\n")
    body.append(f"Target: {app.target_aws_account_id}/{app.target_region}\n")
    body.append(f"RPO: {app.rpo}\n")
    if app.created_at:
        body.append(f"Created: {format_rfc3339(app.created_at)}\n", style="dim")
    if app.notification_emails:
        body.append(f"Notify: {', '.join(app.notification_emails)}\n")

    body.append("\nSelection rules:\n", style="bold")
    if not app.selection_rules:
        body.append("- (none)\n", style="dim")
    for rule in app.selection_rules:
        body.append(f"- {_describe_rule(rule)}\n")

    return Panel(body, title=Text(app.name, style="bold cyan"), border_style="cyan")


def build_recovery_points_table(recovery_points: Iterable[RecoveryPoint]) -> Table:
    table = Table(title="Recovery Points")
    table.add_column("Recovery Point ID", style="cyan", no_wrap=True)
    table.add_column("Timestamp", style="white")
    table.add_column("Available At", style="dim")
    table.add_column("Protected", style="green")
    for rp in recovery_points:
        table.add_row(
            rp.recovery_point_id,
            format_rfc3339(rp.timestamp),
            format_rfc3339(rp.available_at) if rp.available_at else "-",
            "yes" if rp.protected else "no",
        )
    return table


def build_staged_resources_table(resources: Iterable[StagedResource]) -> Table:
    table = Table(title="Staged Resources")
    table.add_column("Type", style="magenta", no_wrap=True)
    table.add_column("ARN", style="white")
    table.add_column("Extras", style="dim")
    for resource in resources:
        extras = ", ".join(f"{e.kind}@{e.environment}" for e in resource.extras) or "-"
        table.add_row(resource.type, resource.arn, extras)
    return table
