"""AWS ECS client helpers."""

from ecs_reconciler.core.aws_ecs.client import EcsServiceClient
from ecs_reconciler.core.aws_ecs.session import create_session

__all__ = [
    "EcsServiceClient",
    "create_session",
]
