"""Convert a service spec into the payloads of the ECS service calls."""

from collections.abc import Mapping
from typing import Any

from ecs_reconciler.core.models import ServiceSpec

# Accepted by CreateService but never echoed back by DescribeServices.
WRITE_ONLY_FIELDS = frozenset({"clientToken", "role"})

ADDRESSING_FIELDS = ("cluster", "service")


def omit_none(mapping: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``mapping`` without keys whose value is ``None``."""
    return {key: value for key, value in mapping.items() if value is not None}


def describe_input(spec: ServiceSpec) -> dict[str, Any]:
    """Return the DescribeServices request for the spec's service."""
    return {
        "cluster": spec.cluster,
        "services": [spec.service_name],
        "include": ["TAGS"],
    }


def create_input(spec: ServiceSpec) -> dict[str, Any]:
    """Return the CreateService request for the spec."""
    return spec.to_payload()


def update_input_from_spec(
    spec: ServiceSpec,
    force_new_deployment: bool = False,
) -> dict[str, Any]:
    """Return every field the spec declares in UpdateService vocabulary.

    The diff engine compares this against the observed service; it is not
    sent as-is.
    """
    payload = create_input(spec)
    payload["service"] = payload.pop("serviceName")
    for key in WRITE_ONLY_FIELDS:
        payload.pop(key, None)
    if force_new_deployment:
        payload["forceNewDeployment"] = True
    return payload


def update_input(change_set: Mapping[str, Any]) -> dict[str, Any]:
    """Return the UpdateService request for a change-set."""
    payload = omit_none(change_set)
    if "serviceName" in payload:
        payload.setdefault("service", payload.pop("serviceName"))
    return payload


def delete_input(spec: ServiceSpec, force_delete: bool = False) -> dict[str, Any]:
    """Return the DeleteService request for the spec's service."""
    payload: dict[str, Any] = {"cluster": spec.cluster, "service": spec.service_name}
    if force_delete:
        payload["force"] = True
    return payload
