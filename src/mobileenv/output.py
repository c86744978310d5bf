"""Rich output helpers for detection reports and signing combos.

Lets an embedding application print a quick overview of a detection
report and the resolved signing combinations. Every function takes an
optional ``Console`` so callers can capture or redirect output.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from mobileenv.detection.merge import ValueKind, classify
from mobileenv.signing.models import Combo

_RESERVED_KEYS = ("detectVersion", "issues")

console = Console()


def describe_value(value: Any) -> str:
    """Return a short description of a report payload."""
    kind = classify(value)
    if kind is ValueKind.ARRAY:
        return f"{len(value)} item(s)"
    if kind is ValueKind.OBJECT:
        return f"{len(value)} key(s)"
    if value is None:
        return "-"
    return str(value)


def print_report_summary(report: Mapping[str, Any], out: Console | None = None) -> None:
    """Print one row per subsystem key of a detection report.

    Args:
        report: A merged detection report.
        out: Console to print to. Defaults to the module console.
    """
    out = out or console
    table = Table(
        title=f"Detection Report (v{report.get('detectVersion', '?')})",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Subsystem", style="bold")
    table.add_column("Contents")

    for key, value in report.items():
        if key in _RESERVED_KEYS:
            continue
        table.add_row(key, describe_value(value))
    out.print(table)

    issues = report.get("issues") or []
    if issues:
        out.print(f"[yellow]{len(issues)} issue(s) reported[/yellow]")
        for issue in issues:
            message = issue.get("message", issue) if isinstance(issue, Mapping) else issue
            out.print(Text(f"  - {message}"))
    else:
        out.print("[green]No issues reported[/green]")


def print_combos(combos: Sequence[Combo], out: Console | None = None) -> None:
    """Print resolved signing combos as a table.

    Args:
        combos: Combos from ``find_valid_combos``.
        out: Console to print to. Defaults to the module console.
    """
    out = out or console
    if not combos:
        out.print("[dim]No valid signing combinations.[/dim]")
        return

    table = Table(title="Signing Combinations", show_header=True, header_style="bold")
    table.add_column("Provisioning Profile", style="dim")
    table.add_column("Certificate", style="bold")
    table.add_column("Device")
    for combo in combos:
        table.add_row(combo.profile_uuid, combo.cert_name, Text(combo.device_udid, style="cyan"))
    out.print(table)
    out.print(f"[bold]{len(combos)}[/bold] combination(s)")
