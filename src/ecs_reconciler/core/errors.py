"""Errors raised while reconciling an ECS service."""

from collections.abc import Sequence


class ReconcileError(RuntimeError):
    """Base class for reconciliation errors."""


class SpecError(ReconcileError):
    """The supplied service spec could not be loaded or parsed."""


class NotFoundException(ReconcileError):
    """The service does not exist or is INACTIVE."""

    def __init__(self, cluster: str | None, service_name: str | None, detail: str = "") -> None:
        self.cluster = cluster
        self.service_name = service_name
        self.detail = detail
        message = f"Service {service_name} not found in cluster {cluster}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DrainingException(ReconcileError):
    """The service is DRAINING and must not be mutated until it settles."""

    def __init__(self, cluster: str | None, service_name: str | None) -> None:
        self.cluster = cluster
        self.service_name = service_name
        super().__init__(
            f"Service {service_name} in cluster {cluster} is DRAINING. Retry once it is INACTIVE."
        )


class InvalidUpdateShape(ReconcileError):
    """The change-set touches fields the deployment controller cannot update."""

    def __init__(
        self,
        cluster: str | None,
        service_name: str | None,
        mode: str,
        disallowed_fields: Sequence[str],
    ) -> None:
        self.cluster = cluster
        self.service_name = service_name
        self.mode = mode
        self.disallowed_fields = list(disallowed_fields)
        super().__init__(
            f"Cannot update service {service_name} in cluster {cluster}: "
            f"fields {', '.join(self.disallowed_fields)} are not updatable "
            f"with the {mode} deployment controller."
        )


class GenericFailure(ReconcileError):
    """Any other rejection from ECS, including empty or malformed responses."""

    def __init__(self, detail: str, reason: str | None = None, arn: str | None = None) -> None:
        self.detail = detail
        self.reason = reason
        self.arn = arn
        parts = [detail]
        if reason:
            parts.append(f"reason={reason}")
        if arn:
            parts.append(f"arn={arn}")
        super().__init__(" ".join(parts))
