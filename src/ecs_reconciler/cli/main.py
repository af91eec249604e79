"""CLI entrypoint for the ECS reconciler."""

import json
import logging
from collections.abc import Callable
from typing import Any

import click
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ecs_reconciler.action import load_request, post_outputs, print_result
from ecs_reconciler.cli.errors import report_error
from ecs_reconciler.core.aws_ecs import EcsServiceClient, create_session
from ecs_reconciler.core.errors import ReconcileError
from ecs_reconciler.core.models import Action, ActionRequest
from ecs_reconciler.core.reconcile import ReconcilePlan, plan, reconcile
from ecs_reconciler.core.settings import Settings, env_file, get_settings

console = Console()
logger = logging.getLogger(__name__)


def request_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options that describe one reconciliation request."""
    options = [
        click.option(
            "--action",
            type=click.Choice([item.value for item in Action], case_sensitive=False),
            envvar="ACTION",
            default=Action.CREATE.value,
            show_default=True,
            help="create and update both find-or-create; delete removes the service.",
        ),
        click.option("--spec-file", envvar="SPEC_FILE", help="Path to a JSON service spec."),
        click.option("--spec", envvar="SPEC", help="Inline JSON service spec."),
        click.option(
            "--force-new-deployment",
            is_flag=True,
            envvar="FORCE_NEW_DEPLOYMENT",
            help="Redeploy even when the service already matches the spec.",
        ),
        click.option(
            "--force-delete",
            is_flag=True,
            envvar="FORCE_DELETE",
            help="Delete without scaling the service down first.",
        ),
        click.option(
            "--wait-until-tasks-running",
            is_flag=True,
            envvar="WAIT_UNTIL_TASKS_RUNNING",
            help="Wait for the service to stabilise after the change.",
        ),
        click.option("--region", help="AWS region (defaults to AWS_REGION)."),
        click.option("--profile", help="AWS profile (defaults to AWS_PROFILE)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--log-level", default=None, help="Log level (defaults to ECS_RECONCILER_LOG_LEVEL).")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None) -> None:
    """Reconcile one Amazon ECS service against a declared spec.

    Args:
        ctx: Click context for the command invocation.
        log_level: Optional log level override.
    """
    load_dotenv(env_file())
    settings = get_settings()
    logging.basicConfig(level=(log_level or settings.reconciler.log_level).upper())
    logging.getLogger("botocore").setLevel(logging.WARNING)
    ctx.obj = settings


@cli.command("reconcile")
@request_options
@click.pass_obj
def reconcile_command(settings: Settings, **options: Any) -> None:
    """Create, update or delete the service so it matches the spec."""
    try:
        request = _build_request(options)
        client = _build_client(settings, options)
        result = reconcile(client, request)
    except (ReconcileError, BotoCoreError, ClientError) as exc:
        report_error(exc, console)
        raise SystemExit(1) from exc

    print_result(result, console)
    post_outputs(result.service, settings.reconciler.github_output)


@cli.command("plan")
@request_options
@click.pass_obj
def plan_command(settings: Settings, **options: Any) -> None:
    """Show what reconcile would change, without changing anything."""
    try:
        request = _build_request(options)
        client = _build_client(settings, options)
        result = plan(client, request)
    except (ReconcileError, BotoCoreError, ClientError) as exc:
        report_error(exc, console)
        raise SystemExit(1) from exc

    print_plan(result)
    if result.disallowed_fields:
        raise SystemExit(1)


def print_plan(result: ReconcilePlan) -> None:
    """Print the planned change-set next to the observed values."""
    console.print(f"Planned outcome: [bold]{result.outcome}[/bold]")
    observed = result.observed or {}
    table = Table(title="Change-set", show_header=True, header_style="bold cyan")
    table.add_column("Field", style="white", no_wrap=True)
    table.add_column("Observed", style="dim")
    table.add_column("Desired", style="bright_white")
    for key, value in result.change_set.items():
        name = f"[red]{key}[/red]" if key in result.disallowed_fields else key
        table.add_row(name, _render(observed.get(key)), _render(value))
    console.print(table)
    if result.disallowed_fields:
        console.print(
            "[red]Not updatable with this deployment controller: "
            f"{', '.join(result.disallowed_fields)}[/red]"
        )


def _build_request(options: dict[str, Any]) -> ActionRequest:
    return load_request(
        spec_file=options.get("spec_file"),
        spec=options.get("spec"),
        action=options.get("action"),
        force_new_deployment=bool(options.get("force_new_deployment")),
        force_delete=bool(options.get("force_delete")),
        wait_until_tasks_running=bool(options.get("wait_until_tasks_running")),
    )


def _build_client(settings: Settings, options: dict[str, Any]) -> EcsServiceClient:
    overrides = {
        key: options[key] for key in ("region", "profile") if options.get(key) is not None
    }
    aws = settings.aws.model_copy(update=overrides)
    logger.info(f"Using AWS region {aws.region}")
    return EcsServiceClient.from_session(create_session(aws), settings.reconciler)


def _render(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def main() -> None:
    """Run the CLI."""
    cli()
