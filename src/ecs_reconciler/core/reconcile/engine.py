"""Sequence describe, create, update and delete calls for one ECS service."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ecs_reconciler.core.aws_ecs.client import EcsServiceClient
from ecs_reconciler.core.errors import DrainingException
from ecs_reconciler.core.models import Action, ActionRequest
from ecs_reconciler.core.reconcile.classify import (
    Draining,
    Found,
    NotFound,
    classify,
    find_service_in_response,
    unwrap,
)
from ecs_reconciler.core.reconcile.diff import update_needed
from ecs_reconciler.core.reconcile.normalize import (
    create_input,
    delete_input,
    describe_input,
    update_input,
)
from ecs_reconciler.core.reconcile.validate import ensure_update_shape, validate_update_shape

logger = logging.getLogger(__name__)


class ReconcileOutcome(StrEnum):
    """Terminal state of a successful reconciliation."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class ReconcileResult:
    """The outcome and the last service record seen."""

    outcome: ReconcileOutcome
    service: dict[str, Any] | None


@dataclass(frozen=True)
class ReconcilePlan:
    """What ``reconcile`` would do, computed without mutating the service."""

    outcome: ReconcileOutcome
    observed: dict[str, Any] | None
    change_set: dict[str, Any] = field(default_factory=dict)
    disallowed_fields: list[str] = field(default_factory=list)


def plan(client: EcsServiceClient, request: ActionRequest) -> ReconcilePlan:
    """Describe the service and report the change ``reconcile`` would make.

    Only DescribeServices is called. An update the deployment controller would
    reject is reported through ``disallowed_fields`` instead of raising.
    """
    spec = request.spec
    logger.info(f"Planning {request.action} for {spec.service_name} in cluster {spec.cluster}")
    outcome = classify(client.describe(describe_input(spec)), spec.service_name)
    if isinstance(outcome, Draining):
        raise DrainingException(spec.cluster, spec.service_name)

    if request.action == Action.DELETE:
        if isinstance(outcome, NotFound):
            return ReconcilePlan(ReconcileOutcome.UNCHANGED, outcome.service)
        observed = unwrap(outcome, spec.cluster, spec.service_name)
        return ReconcilePlan(
            ReconcileOutcome.DELETED,
            observed,
            delete_input(spec, request.force_delete),
        )

    if isinstance(outcome, NotFound):
        return ReconcilePlan(ReconcileOutcome.CREATED, outcome.service, create_input(spec))

    observed = unwrap(outcome, spec.cluster, spec.service_name)
    needed, change_set = update_needed(observed, request)
    if not needed:
        return ReconcilePlan(ReconcileOutcome.UNCHANGED, observed, change_set)
    _, disallowed = validate_update_shape(observed, change_set)
    return ReconcilePlan(ReconcileOutcome.UPDATED, observed, change_set, disallowed)


def reconcile(client: EcsServiceClient, request: ActionRequest) -> ReconcileResult:
    """Bring the ECS service in line with the request.

    ``create`` and ``update`` both find-or-create; ``delete`` removes the service.
    """
    if request.action == Action.DELETE:
        return delete_service(client, request)
    return find_or_create_service(client, request)


def describe_service(client: EcsServiceClient, request: ActionRequest) -> dict[str, Any]:
    """Return the ACTIVE service, raising when it is missing, INACTIVE or DRAINING."""
    spec = request.spec
    logger.info(f"Describing service {spec.service_name} in cluster {spec.cluster}")
    response = client.describe(describe_input(spec))
    return find_service_in_response(response, spec.service_name, spec.cluster)


def create_service(client: EcsServiceClient, request: ActionRequest) -> dict[str, Any]:
    """Create the service from the full spec."""
    spec = request.spec
    logger.info(f"Creating service {spec.service_name} in cluster {spec.cluster}")
    response = client.create(create_input(spec))
    service = find_service_in_response(response, spec.service_name, spec.cluster)
    _maybe_wait_until_running(client, request)
    return service


def update_service(
    client: EcsServiceClient,
    request: ActionRequest,
    change_set: dict[str, Any],
) -> dict[str, Any]:
    """Apply a change-set that has already passed ``ensure_update_shape``."""
    spec = request.spec
    fields = ", ".join(sorted(key for key in change_set if key not in ("cluster", "service")))
    logger.info(f"Updating service {spec.service_name} in cluster {spec.cluster}: {fields}")
    response = client.update(update_input(change_set))
    service = find_service_in_response(response, spec.service_name, spec.cluster)
    _maybe_wait_until_running(client, request)
    return service


def find_or_create_service(client: EcsServiceClient, request: ActionRequest) -> ReconcileResult:
    """Create the service when missing, update it when it drifted, else leave it."""
    spec = request.spec
    logger.info(f"Describing service {spec.service_name} in cluster {spec.cluster}")
    outcome = classify(client.describe(describe_input(spec)), spec.service_name)

    if isinstance(outcome, NotFound):
        return ReconcileResult(ReconcileOutcome.CREATED, create_service(client, request))
    if isinstance(outcome, Draining):
        raise DrainingException(spec.cluster, spec.service_name)

    observed = unwrap(outcome, spec.cluster, spec.service_name)
    needed, change_set = update_needed(observed, request)
    if not needed:
        logger.info(f"Service {spec.service_name} already matches the spec")
        return ReconcileResult(ReconcileOutcome.UNCHANGED, observed)

    ensure_update_shape(observed, change_set)
    return ReconcileResult(ReconcileOutcome.UPDATED, update_service(client, request, change_set))


def delete_service(client: EcsServiceClient, request: ActionRequest) -> ReconcileResult:
    """Delete the service.

    Without force-delete an ACTIVE service is scaled to zero and drained of
    running tasks first. A missing or INACTIVE service is left untouched.
    """
    spec = request.spec
    if request.force_delete:
        return ReconcileResult(ReconcileOutcome.DELETED, _delete(client, request))

    logger.info(f"Describing service {spec.service_name} in cluster {spec.cluster}")
    outcome = classify(client.describe(describe_input(spec)), spec.service_name)
    if isinstance(outcome, NotFound):
        logger.info(f"Service {spec.service_name} is already gone: {outcome.detail}")
        return ReconcileResult(ReconcileOutcome.UNCHANGED, outcome.service)
    if isinstance(outcome, Draining):
        raise DrainingException(spec.cluster, spec.service_name)
    unwrap(outcome, spec.cluster, spec.service_name)

    logger.info(f"Scaling service {spec.service_name} down to 0 before deleting")
    response = client.update(
        update_input({"cluster": spec.cluster, "service": spec.service_name, "desiredCount": 0})
    )
    find_service_in_response(response, spec.service_name, spec.cluster)
    client.wait_until_tasks_running(spec.cluster, spec.service_name)

    return ReconcileResult(ReconcileOutcome.DELETED, _delete(client, request))


def _delete(client: EcsServiceClient, request: ActionRequest) -> dict[str, Any]:
    spec = request.spec
    logger.info(f"Deleting service {spec.service_name} in cluster {spec.cluster}")
    response = client.delete(delete_input(spec, request.force_delete))
    outcome = classify(response, spec.service_name)
    # A deleted service reports DRAINING, then INACTIVE.
    if isinstance(outcome, Found | Draining):
        service = outcome.service
    elif isinstance(outcome, NotFound) and outcome.service is not None:
        service = outcome.service
    else:
        service = unwrap(outcome, spec.cluster, spec.service_name)

    if request.wait_until_tasks_running:
        client.wait_until_services_inactive(spec.cluster, spec.service_name)
    return service


def _maybe_wait_until_running(client: EcsServiceClient, request: ActionRequest) -> None:
    if request.wait_until_tasks_running:
        client.wait_until_tasks_running(request.spec.cluster, request.spec.service_name)
