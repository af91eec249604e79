"""Interpret the raw responses of the ECS service calls.

DescribeServices answers with a ``services`` list plus ``failures``; CreateService,
UpdateService and DeleteService answer with a single ``service``. Both shapes are
resolved here, once, into one of four outcomes.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ecs_reconciler.core.errors import DrainingException, GenericFailure, NotFoundException
from ecs_reconciler.core.models import ServiceStatus

MISSING_REASON = "MISSING"


@dataclass(frozen=True)
class Found:
    """The service exists and is ACTIVE."""

    service: dict[str, Any]


@dataclass(frozen=True)
class NotFound:
    """The service is missing, or INACTIVE (``service`` holds the inactive record)."""

    service: dict[str, Any] | None = None
    detail: str = ""


@dataclass(frozen=True)
class Draining:
    """The service is being torn down."""

    service: dict[str, Any]


@dataclass(frozen=True)
class Failed:
    """ECS rejected the call or answered with something unusable."""

    detail: str
    reason: str | None = None
    arn: str | None = None


ClassifiedOutcome = Found | NotFound | Draining | Failed


def classify(response: Mapping[str, Any] | None, service_name: str) -> ClassifiedOutcome:
    """Classify a raw ECS response for ``service_name``.

    An empty response is a failure, never evidence that the service is absent.
    """
    if not response:
        return Failed("empty response")

    failures = response.get("failures") or []
    if failures:
        return _classify_failure(failures[0])

    services = response.get("services")
    if services:
        service = _match_by_name(services, service_name)
        if service is None:
            return NotFound(detail=f"{service_name} not in response")
    elif response.get("service"):
        service = dict(response["service"])
    else:
        return Failed("malformed response")

    return _classify_status(service)


def _classify_failure(failure: Any) -> ClassifiedOutcome:
    if not isinstance(failure, Mapping):
        return Failed(f"failure: {failure}")
    reason = failure.get("reason")
    detail = str(failure.get("detail") or reason or "unknown failure")
    if reason == MISSING_REASON:
        return NotFound(detail=detail)
    return Failed(detail, reason=reason, arn=failure.get("arn"))


def _match_by_name(services: list[Any], service_name: str) -> dict[str, Any] | None:
    for service in services:
        if isinstance(service, Mapping) and service.get("serviceName") == service_name:
            return dict(service)
    return None


def _classify_status(service: dict[str, Any]) -> ClassifiedOutcome:
    status = service.get("status")
    if status == ServiceStatus.ACTIVE:
        return Found(service)
    if status == ServiceStatus.INACTIVE:
        return NotFound(service=service, detail="service is INACTIVE")
    if status == ServiceStatus.DRAINING:
        return Draining(service)
    return Failed(f"unexpected status {status!r}", arn=service.get("serviceArn"))


def unwrap(outcome: ClassifiedOutcome, cluster: str, service_name: str) -> dict[str, Any]:
    """Return the record of a ``Found`` outcome, or raise the matching exception."""
    if isinstance(outcome, Found):
        return outcome.service
    if isinstance(outcome, NotFound):
        raise NotFoundException(cluster, service_name, outcome.detail)
    if isinstance(outcome, Draining):
        raise DrainingException(cluster, service_name)
    if isinstance(outcome, Failed):
        raise GenericFailure(outcome.detail, reason=outcome.reason, arn=outcome.arn)
    raise TypeError(f"Unknown outcome {outcome!r}")


def find_service_in_response(
    response: Mapping[str, Any] | None,
    service_name: str,
    cluster: str = "",
) -> dict[str, Any]:
    """Return the ACTIVE service record from a response, or raise.

    Raises:
        NotFoundException: The service is missing or INACTIVE.
        DrainingException: The service is DRAINING.
        GenericFailure: Any other failure, including malformed responses.
    """
    return unwrap(classify(response, service_name), cluster, service_name)
