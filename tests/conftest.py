"""Shared fixtures: a service spec and the records ECS returns for it."""

import copy
from datetime import UTC, datetime
from typing import Any
from unittest.mock import MagicMock

import pytest

from ecs_reconciler.core.aws_ecs import EcsServiceClient
from ecs_reconciler.core.models import ActionRequest, ServiceSpec

SPEC_DATA: dict[str, Any] = {
    "cluster": "my-cluster",
    "deploymentConfiguration": {
        "deploymentCircuitBreaker": {"enable": True, "rollback": False},
        "maximumPercent": 200,
        "minimumHealthyPercent": 32,
    },
    "deploymentController": "ECS",
    "desiredCount": 2,
    "enableECSManagedTags": True,
    "launchType": "EC2",
    "loadBalancers": [],
    "networkConfiguration": {
        "awsvpcConfiguration": {
            "subnets": ["subnet-abc123", "subnet-def567"],
            "securityGroups": ["sg-abc123", "sg-def567"],
            "assignPublicIp": "DISABLED",
        }
    },
    "placementConstraints": [],
    "placementStrategy": [],
    "schedulingStrategy": "REPLICA",
    "serviceName": "my-service",
    "serviceRegistries": [
        {
            "registryArn": "arn:aws:servicediscovery:us-east-1:1234567890:service/srv-my-service",
            "port": 8080,
        }
    ],
    "tags": [{"key": "my-key", "value": "my-value"}],
    "taskDefinition": "task-definition-family:123",
}

SERVICE_ARN = "arn:aws:ecs:us-east-1:1234567890:service/my-cluster/my-service"


def create_payload() -> dict[str, Any]:
    """The CreateService request expected for SPEC_DATA."""
    payload = copy.deepcopy(SPEC_DATA)
    payload["deploymentController"] = {"type": "ECS"}
    return payload


def observed_service(**overrides: Any) -> dict[str, Any]:
    """An ACTIVE service record matching SPEC_DATA, as DescribeServices returns it."""
    service = create_payload()
    del service["cluster"]
    service.update(
        {
            "clusterArn": "arn:aws:ecs:us-east-1:1234567890:cluster/my-cluster",
            "createdAt": datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
            "createdBy": "arn:aws:iam::1234567890:role/my-role",
            "deployments": [],
            "events": [],
            "pendingCount": 0,
            "roleArn": "arn:aws:iam::1234567890:role/someother-role",
            "runningCount": 2,
            "serviceArn": SERVICE_ARN,
            "status": "ACTIVE",
            "taskSets": [],
        }
    )
    service.update(overrides)
    return service


def describe_response(*services: dict[str, Any]) -> dict[str, Any]:
    """A DescribeServices response listing ``services``."""
    return {"failures": [], "services": list(services)}


MISSING_RESPONSE: dict[str, Any] = {
    "failures": [
        {
            "arn": SERVICE_ARN,
            "detail": "Service not found",
            "reason": "MISSING",
        }
    ],
    "services": [],
}

GENERIC_FAILURE_RESPONSE: dict[str, Any] = {
    "failures": [
        {
            "arn": SERVICE_ARN,
            "detail": "Generic Failure for testing purposes only",
            "reason": "GENERIC",
        }
    ],
    "services": [],
}


@pytest.fixture
def spec() -> ServiceSpec:
    return ServiceSpec.model_validate(copy.deepcopy(SPEC_DATA))


@pytest.fixture
def action_request(spec: ServiceSpec) -> ActionRequest:
    return ActionRequest(spec=spec)


@pytest.fixture
def client() -> MagicMock:
    """An EcsServiceClient stand-in whose calls succeed with the ACTIVE record."""
    mock = MagicMock(spec=EcsServiceClient)
    mock.describe.return_value = describe_response(observed_service())
    mock.create.return_value = {"service": observed_service()}
    mock.update.return_value = {"service": observed_service()}
    mock.delete.return_value = {"service": observed_service(status="DRAINING")}
    return mock
