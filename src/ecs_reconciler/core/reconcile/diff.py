"""Compute the minimal UpdateService change-set between observed and desired state."""

from collections.abc import Mapping
from typing import Any

from ecs_reconciler.core.models import ActionRequest
from ecs_reconciler.core.reconcile.normalize import ADDRESSING_FIELDS, update_input_from_spec


def compute_change_set(observed: Mapping[str, Any], request: ActionRequest) -> dict[str, Any]:
    """Return the fields of the request's spec that differ from ``observed``.

    Only fields the spec declares are compared; fields that exist only on the
    observed record are never a difference. Values compare with deep equality,
    lists element by element and in order. The addressing fields are always
    present, and ``forceNewDeployment`` is present whenever the request sets it.
    """
    desired = update_input_from_spec(request.spec, request.force_new_deployment)

    change_set: dict[str, Any] = {}
    for key, value in desired.items():
        if key in ADDRESSING_FIELDS or key == "forceNewDeployment":
            change_set[key] = value
        elif observed.get(key) != value:
            change_set[key] = value
    return change_set


def update_needed(
    observed: Mapping[str, Any],
    request: ActionRequest,
) -> tuple[bool, dict[str, Any]]:
    """Return whether an update is required, and the change-set to apply."""
    change_set = compute_change_set(observed, request)
    return any(key not in ADDRESSING_FIELDS for key in change_set), change_set
