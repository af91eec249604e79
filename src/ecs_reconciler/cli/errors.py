"""Render reconciliation failures with actionable guidance."""

from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    ProfileNotFound,
)
from rich.console import Console

from ecs_reconciler.core.errors import (
    DrainingException,
    GenericFailure,
    InvalidUpdateShape,
    NotFoundException,
    SpecError,
)


def report_error(exc: Exception, console: Console) -> None:
    """Print an error raised while reconciling.

    Args:
        exc: Raised exception.
        console: Console to print to.
    """
    if is_aws_auth_error(exc):
        console.print(f"[red]AWS rejected the credentials used to call ECS: {exc}[/red]")
        console.print(
            "[dim]In a workflow, check the role assumed before this step and its "
            "ecs:*Service permissions. Locally, pass --profile or refresh "
            "AWS_SESSION_TOKEN.[/dim]"
        )
        return

    if is_aws_endpoint_error(exc):
        console.print("[red]Could not reach the ECS endpoint.[/red]")
        console.print("[dim]Check network access and the --region / AWS_REGION value.[/dim]")
        return

    if isinstance(exc, SpecError):
        console.print(f"[red]{exc}[/red]")
        return

    if isinstance(exc, InvalidUpdateShape):
        console.print(f"[red]{exc}[/red]")
        console.print(
            "[dim]Remove these fields from the spec, or recreate the service "
            f"to change them: {', '.join(exc.disallowed_fields)}[/dim]"
        )
        return

    if isinstance(exc, DrainingException):
        console.print(f"[yellow]{exc}[/yellow]")
        return

    if isinstance(exc, NotFoundException):
        console.print(f"[red]{exc}[/red]")
        return

    if isinstance(exc, GenericFailure):
        console.print(f"[red]ECS rejected the request: {exc}[/red]")
        return

    console.print(f"[red]Reconciliation failed: {exc}[/red]")


def is_aws_auth_error(exc: Exception) -> bool:
    """Return true when an exception chain indicates AWS auth issues.

    Args:
        exc: Raised exception.

    Returns:
        True when the chain contains an auth-related error.
    """
    auth_codes = {
        "ExpiredToken",
        "ExpiredTokenException",
        # spellchecker:ignore-next-line
        "UnrecognizedClientException",
        "InvalidClientTokenId",
        "InvalidSignatureException",
        "AccessDenied",
        "AccessDeniedException",
    }
    for item in exception_chain(exc):
        if isinstance(item, (NoCredentialsError, ProfileNotFound)):
            return True
        if isinstance(item, ClientError):
            code = str(item.response.get("Error", {}).get("Code", ""))
            if code in auth_codes:
                return True
        if isinstance(item, GenericFailure) and item.reason in auth_codes:
            return True
    return False


def is_aws_endpoint_error(exc: Exception) -> bool:
    """Return true when an exception chain indicates endpoint/network errors."""
    return any(isinstance(item, EndpointConnectionError) for item in exception_chain(exc))


def exception_chain(exc: BaseException) -> list[BaseException]:
    """Return exceptions in cause/context chain, root first."""
    chain: list[BaseException] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        chain.append(current)
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return chain
