"""Report the reconciled service as workflow outputs and as a terminal summary."""

import json
import uuid
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from ecs_reconciler.core.reconcile import ReconcileOutcome, ReconcileResult


def service_json(service: dict[str, Any] | None) -> str:
    """Return the service record as compact JSON; datetimes become ISO strings."""
    return json.dumps(service or {}, default=_json_default, separators=(",", ":"))


def post_outputs(service: dict[str, Any] | None, output_path: str | Path | None) -> dict[str, str]:
    """Publish the ``service`` and ``arn`` outputs.

    The outputs are appended to ``output_path`` (the GitHub Actions output file)
    when one is given.

    Returns:
        The outputs keyed by name.
    """
    outputs = {
        "service": service_json(service),
        "arn": str((service or {}).get("serviceArn", "")),
    }
    if output_path:
        with Path(output_path).open("a", encoding="utf-8") as handle:
            for name, value in outputs.items():
                handle.write(_format_output(name, value))
    return outputs


def print_result(result: ReconcileResult, console: Console) -> None:
    """Print a summary table of the reconciled service."""
    service = result.service or {}
    table = Table(title="ECS service", show_header=True, header_style="bold cyan")
    table.add_column("Field", style="white", no_wrap=True)
    table.add_column("Value", style="bright_white")

    table.add_row("Outcome", style_outcome(result.outcome))
    table.add_row("Service", str(service.get("serviceName", "-")))
    table.add_row("ARN", str(service.get("serviceArn", "-")))
    table.add_row("Status", str(service.get("status", "-")))
    table.add_row(
        "Tasks",
        f"desired {service.get('desiredCount', '-')}, "
        f"running {service.get('runningCount', '-')}, "
        f"pending {service.get('pendingCount', '-')}",
    )
    console.print(table)


def style_outcome(outcome: ReconcileOutcome) -> str:
    """Return colourised outcome text for terminal output."""
    if outcome == ReconcileOutcome.UNCHANGED:
        return f"[green]{outcome}[/green]"
    if outcome == ReconcileOutcome.DELETED:
        return f"[red]{outcome}[/red]"
    return f"[yellow]{outcome}[/yellow]"


def _format_output(name: str, value: str) -> str:
    if "\n" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def _json_default(value: Any) -> str:
    if hasattr(value, "isoformat"):
        return str(value.isoformat())
    return str(value)
