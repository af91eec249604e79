"""Build an ActionRequest from a spec file path or an inline JSON spec."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ecs_reconciler.core.errors import SpecError
from ecs_reconciler.core.models import Action, ActionRequest, ServiceSpec


def load_request(
    spec_file: str | None = None,
    spec: str | None = None,
    action: str | None = None,
    force_new_deployment: bool = False,
    force_delete: bool = False,
    wait_until_tasks_running: bool = False,
) -> ActionRequest:
    """Load the request for one invocation.

    ``spec_file`` wins over ``spec`` when both are given. Blank values count as
    not supplied.

    Raises:
        SpecError: The spec cannot be read, is not valid JSON, or is not a
            valid service spec.
    """
    if spec_file and spec_file.strip():
        raw = _read_spec_file(spec_file.strip())
        source = "spec-file"
    elif spec and spec.strip():
        raw = spec
        source = "spec"
    else:
        raise SpecError("Either spec-file or spec must be supplied.")

    try:
        request_action = Action((action or "").strip().lower() or Action.CREATE)
    except ValueError as exc:
        choices = ", ".join(item.value for item in Action)
        raise SpecError(f"Invalid action {action!r}. Use one of: {choices}.") from exc

    return ActionRequest(
        spec=parse_spec(raw, source),
        action=request_action,
        force_new_deployment=force_new_deployment,
        force_delete=force_delete,
        wait_until_tasks_running=wait_until_tasks_running,
    )


def parse_spec(raw: str, source: str = "spec") -> ServiceSpec:
    """Parse a JSON document into a ServiceSpec."""
    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SpecError(f"Invalid JSON for {source}: {exc}: {raw}") from exc

    if not isinstance(data, dict):
        raise SpecError(f"The {source} must contain a JSON object.")

    try:
        return ServiceSpec.model_validate(data)
    except ValidationError as exc:
        raise SpecError(f"Invalid service spec in {source}: {exc}") from exc


def _read_spec_file(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise SpecError(f"Unable to open spec-file: {exc}") from exc
