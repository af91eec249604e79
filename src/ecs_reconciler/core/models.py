"""Data models for ECS service reconciliation.

Attribute names are snake_case; the ECS API names are camelCase and are used as
aliases. ``None`` means "absent": payloads are dumped with ``exclude_none`` so an
absent field never reaches the API.
"""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Action(StrEnum):
    """What the invocation should do with the service."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class DeploymentControllerType(StrEnum):
    """How ECS replaces the tasks of a service during an update."""

    ECS = "ECS"
    CODE_DEPLOY = "CODE_DEPLOY"
    EXTERNAL = "EXTERNAL"


class ServiceStatus(StrEnum):
    """Lifecycle status reported by ECS for a service."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DRAINING = "DRAINING"


class EcsModel(BaseModel):
    """Base for ECS payload shapes.

    Unknown ECS fields are kept verbatim so newer API parameters pass through.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_payload(self) -> dict[str, Any]:
        """Return the API payload with absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DeploymentCircuitBreaker(EcsModel):
    """Circuit breaker settings for rolling deployments."""

    enable: bool
    rollback: bool


class DeploymentConfiguration(EcsModel):
    """Rolling deployment limits."""

    deployment_circuit_breaker: DeploymentCircuitBreaker | None = None
    maximum_percent: int | None = None
    minimum_healthy_percent: int | None = None
    alarms: dict[str, Any] | None = None


class DeploymentController(EcsModel):
    """The deployment controller of a service."""

    type: DeploymentControllerType = DeploymentControllerType.ECS

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_type(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"type": data}
        return data


class AwsVpcConfiguration(EcsModel):
    """Task networking for the awsvpc network mode."""

    subnets: list[str] | None = None
    security_groups: list[str] | None = None
    assign_public_ip: str | None = None


class NetworkConfiguration(EcsModel):
    """Network configuration of a service."""

    awsvpc_configuration: AwsVpcConfiguration | None = None


class LoadBalancer(EcsModel):
    """A load balancer binding."""

    target_group_arn: str | None = None
    load_balancer_name: str | None = None
    container_name: str | None = None
    container_port: int | None = None


class ServiceRegistry(EcsModel):
    """A service discovery registry binding."""

    registry_arn: str | None = None
    port: int | None = None
    container_name: str | None = None
    container_port: int | None = None


class PlacementConstraint(EcsModel):
    """A task placement constraint."""

    type: str | None = None
    expression: str | None = None


class PlacementStrategy(EcsModel):
    """A task placement strategy."""

    type: str | None = None
    field: str | None = None


class CapacityProviderStrategyItem(EcsModel):
    """One entry of a capacity provider strategy."""

    capacity_provider: str
    weight: int | None = None
    base: int | None = None


class Tag(EcsModel):
    """A resource tag."""

    key: str
    value: str | None = None


class ServiceSpec(EcsModel):
    """Desired state of an ECS service, shaped like a CreateService request."""

    cluster: str = Field(description="Cluster name or ARN")
    service_name: str = Field(description="Name of the service")
    task_definition: str | None = None
    desired_count: int | None = None
    deployment_configuration: DeploymentConfiguration | None = None
    deployment_controller: DeploymentController | None = None
    network_configuration: NetworkConfiguration | None = None
    load_balancers: list[LoadBalancer] | None = None
    service_registries: list[ServiceRegistry] | None = None
    placement_constraints: list[PlacementConstraint] | None = None
    placement_strategy: list[PlacementStrategy] | None = None
    scheduling_strategy: str | None = None
    tags: list[Tag] | None = None
    launch_type: str | None = None
    capacity_provider_strategy: list[CapacityProviderStrategyItem] | None = None
    platform_version: str | None = None
    enable_execute_command: bool | None = None
    enable_ecs_managed_tags: bool | None = Field(default=None, alias="enableECSManagedTags")
    propagate_tags: str | None = None
    health_check_grace_period_seconds: int | None = None
    role: str | None = None
    client_token: str | None = None


class ActionRequest(BaseModel):
    """One reconciliation request, built once per invocation."""

    model_config = ConfigDict(frozen=True)

    spec: ServiceSpec
    action: Action = Action.CREATE
    force_new_deployment: bool = False
    force_delete: bool = False
    wait_until_tasks_running: bool = False
