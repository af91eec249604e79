"""Reconciliation engine for a single ECS service."""

from ecs_reconciler.core.reconcile.classify import (
    ClassifiedOutcome,
    Draining,
    Failed,
    Found,
    NotFound,
    classify,
    find_service_in_response,
)
from ecs_reconciler.core.reconcile.diff import compute_change_set, update_needed
from ecs_reconciler.core.reconcile.engine import (
    ReconcileOutcome,
    ReconcilePlan,
    ReconcileResult,
    create_service,
    delete_service,
    describe_service,
    find_or_create_service,
    plan,
    reconcile,
    update_service,
)
from ecs_reconciler.core.reconcile.normalize import (
    create_input,
    delete_input,
    describe_input,
    omit_none,
    update_input,
    update_input_from_spec,
)
from ecs_reconciler.core.reconcile.validate import (
    ALLOWED_UPDATE_FIELDS,
    deployment_controller_type,
    ensure_update_shape,
    validate_update_shape,
)

__all__ = [
    "ALLOWED_UPDATE_FIELDS",
    "ClassifiedOutcome",
    "Draining",
    "Failed",
    "Found",
    "NotFound",
    "ReconcileOutcome",
    "ReconcilePlan",
    "ReconcileResult",
    "classify",
    "compute_change_set",
    "create_input",
    "create_service",
    "delete_input",
    "delete_service",
    "deployment_controller_type",
    "describe_input",
    "describe_service",
    "ensure_update_shape",
    "find_or_create_service",
    "find_service_in_response",
    "omit_none",
    "plan",
    "reconcile",
    "update_input",
    "update_input_from_spec",
    "update_needed",
    "update_service",
    "validate_update_shape",
]
