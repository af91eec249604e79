"""ECS reconciler core modules."""

from ecs_reconciler.core.errors import (
    DrainingException,
    GenericFailure,
    InvalidUpdateShape,
    NotFoundException,
    ReconcileError,
    SpecError,
)
from ecs_reconciler.core.models import Action, ActionRequest, ServiceSpec
from ecs_reconciler.core.settings import Settings, get_settings

__all__ = [
    "Action",
    "ActionRequest",
    "DrainingException",
    "GenericFailure",
    "InvalidUpdateShape",
    "NotFoundException",
    "ReconcileError",
    "ServiceSpec",
    "Settings",
    "SpecError",
    "get_settings",
]
