"""Thin wrapper over the boto3 ECS client for the service calls the engine needs."""

import logging
import math
from typing import Any

from boto3.session import Session
from botocore.exceptions import ClientError, WaiterError

from ecs_reconciler.core.errors import GenericFailure, NotFoundException
from ecs_reconciler.core.settings import ReconcilerSettings

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"ServiceNotFoundException", "ServiceNotActiveException"}


class EcsServiceClient:
    """Issue ECS service calls and long-poll for stability.

    Responses are returned raw; interpreting them is the classifier's job.
    ``ClientError`` is translated into the reconciler's error taxonomy.
    """

    def __init__(
        self,
        ecs: Any,
        waiter_delay_seconds: int = 15,
        waiter_timeout_seconds: int = 600,
    ) -> None:
        self._ecs = ecs
        self.waiter_delay_seconds = waiter_delay_seconds
        self.waiter_timeout_seconds = waiter_timeout_seconds

    @classmethod
    def from_session(cls, session: Session, settings: ReconcilerSettings) -> "EcsServiceClient":
        """Build a client from a boto3 session and reconciler settings."""
        return cls(
            session.client("ecs"),
            waiter_delay_seconds=settings.waiter_delay_seconds,
            waiter_timeout_seconds=settings.waiter_timeout_seconds,
        )

    def describe(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Call DescribeServices."""
        return self._call("describe_services", payload)

    def create(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Call CreateService."""
        return self._call("create_service", payload)

    def update(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Call UpdateService."""
        return self._call("update_service", payload)

    def delete(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Call DeleteService."""
        return self._call("delete_service", payload)

    def wait_until_tasks_running(self, cluster: str, service_name: str) -> None:
        """Wait until the running task count matches the desired count.

        After a scale-down to zero this is also the wait for zero running tasks.
        """
        self._wait("services_stable", cluster, service_name)

    def wait_until_services_inactive(self, cluster: str, service_name: str) -> None:
        """Wait until the service reports INACTIVE."""
        self._wait("services_inactive", cluster, service_name)

    def waiter_config(self) -> dict[str, int]:
        """Return the botocore waiter configuration for the configured timeout."""
        attempts = max(1, math.ceil(self.waiter_timeout_seconds / self.waiter_delay_seconds))
        return {"Delay": self.waiter_delay_seconds, "MaxAttempts": attempts}

    def _call(self, operation: str, payload: dict[str, Any]) -> dict[str, Any]:
        cluster = payload.get("cluster")
        service_name = payload.get("service") or payload.get("serviceName")
        try:
            response = getattr(self._ecs, operation)(**payload)
        except ClientError as exc:
            error = exc.response.get("Error", {})
            code = str(error.get("Code", ""))
            message = str(error.get("Message", exc))
            if code in NOT_FOUND_CODES:
                raise NotFoundException(cluster, service_name, message) from exc
            raise GenericFailure(f"{operation} failed: {message}", reason=code) from exc
        return dict(response)

    def _wait(self, waiter_name: str, cluster: str, service_name: str) -> None:
        config = self.waiter_config()
        logger.info(
            f"Waiting for {service_name} in {cluster} ({waiter_name}, "
            f"up to {config['Delay'] * config['MaxAttempts']}s)"
        )
        waiter = self._ecs.get_waiter(waiter_name)
        try:
            waiter.wait(cluster=cluster, services=[service_name], WaiterConfig=config)
        except WaiterError as exc:
            raise GenericFailure(
                f"Service {service_name} in cluster {cluster} did not reach the "
                f"expected state ({waiter_name}): {exc}",
                reason="WaiterError",
            ) from exc
