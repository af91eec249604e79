"""ECS Reconciler - find, create, update or delete one Amazon ECS service."""

from ecs_reconciler.core import (
    Action,
    ActionRequest,
    DrainingException,
    GenericFailure,
    InvalidUpdateShape,
    NotFoundException,
    ReconcileError,
    ServiceSpec,
    SpecError,
)
from ecs_reconciler.core.aws_ecs import EcsServiceClient
from ecs_reconciler.core.reconcile import ReconcileOutcome, ReconcileResult, reconcile

__all__ = [
    "Action",
    "ActionRequest",
    "DrainingException",
    "EcsServiceClient",
    "GenericFailure",
    "InvalidUpdateShape",
    "NotFoundException",
    "ReconcileError",
    "ReconcileOutcome",
    "ReconcileResult",
    "ServiceSpec",
    "SpecError",
    "reconcile",
]
