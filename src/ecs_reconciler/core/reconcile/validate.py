"""Check a change-set against what the service's deployment controller can update."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from ecs_reconciler.core.errors import GenericFailure, InvalidUpdateShape
from ecs_reconciler.core.models import DeploymentControllerType

_ALWAYS_ALLOWED = frozenset({"cluster", "service", "desiredCount", "forceNewDeployment"})

ALLOWED_UPDATE_FIELDS: Mapping[DeploymentControllerType, frozenset[str]] = MappingProxyType(
    {
        DeploymentControllerType.ECS: _ALWAYS_ALLOWED
        | {
            "capacityProviderStrategy",
            "deploymentConfiguration",
            "enableExecuteCommand",
            "networkConfiguration",
            "placementConstraints",
            "placementStrategy",
            "platformVersion",
            "taskDefinition",
        },
        DeploymentControllerType.CODE_DEPLOY: _ALWAYS_ALLOWED
        | {
            "deploymentConfiguration",
            "enableExecuteCommand",
            "healthCheckGracePeriodSeconds",
            "networkConfiguration",
            "platformVersion",
        },
        DeploymentControllerType.EXTERNAL: _ALWAYS_ALLOWED | {"healthCheckGracePeriodSeconds"},
    }
)


def deployment_controller_type(observed: Mapping[str, Any]) -> DeploymentControllerType:
    """Return the deployment controller of an observed service.

    ECS reports ``{"type": "ECS"}``; a bare string is accepted too. Services
    without a controller use ``ECS``.
    """
    controller = observed.get("deploymentController")
    if isinstance(controller, Mapping):
        controller = controller.get("type")
    if not controller:
        return DeploymentControllerType.ECS
    try:
        return DeploymentControllerType(controller)
    except ValueError as exc:
        raise GenericFailure(f"unknown deployment controller {controller!r}") from exc


def validate_update_shape(
    observed: Mapping[str, Any],
    change_set: Mapping[str, Any],
) -> tuple[bool, list[str]]:
    """Return whether every key of ``change_set`` is updatable, and the offending keys."""
    allowed = ALLOWED_UPDATE_FIELDS[deployment_controller_type(observed)]
    disallowed = [key for key in change_set if key not in allowed]
    return not disallowed, disallowed


def ensure_update_shape(observed: Mapping[str, Any], change_set: Mapping[str, Any]) -> None:
    """Raise ``InvalidUpdateShape`` when the change-set touches non-updatable fields."""
    ok, disallowed = validate_update_shape(observed, change_set)
    if not ok:
        raise InvalidUpdateShape(
            cluster=change_set.get("cluster"),
            service_name=change_set.get("service"),
            mode=deployment_controller_type(observed).value,
            disallowed_fields=disallowed,
        )
