"""Tests for interpreting ECS service responses."""

import pytest

from ecs_reconciler.core.errors import DrainingException, GenericFailure, NotFoundException
from ecs_reconciler.core.reconcile.classify import (
    Draining,
    Failed,
    Found,
    NotFound,
    classify,
    find_service_in_response,
)
from tests.conftest import (
    GENERIC_FAILURE_RESPONSE,
    MISSING_RESPONSE,
    describe_response,
    observed_service,
)


class TestClassify:
    def test_active_service_in_list_is_found(self) -> None:
        service = observed_service()

        assert classify(describe_response(service), "my-service") == Found(service)

    def test_list_is_matched_by_name(self) -> None:
        other = observed_service(serviceName="not-my-service")
        mine = observed_service(desiredCount=5)

        outcome = classify(describe_response(other, mine), "my-service")

        assert isinstance(outcome, Found)
        assert outcome.service["desiredCount"] == 5

    def test_name_absent_from_list_is_not_found(self) -> None:
        outcome = classify(
            describe_response({"serviceName": "not-my-service", "status": "ACTIVE"}), "my-service"
        )

        assert isinstance(outcome, NotFound)
        assert outcome.service is None

    def test_missing_failure_is_not_found(self) -> None:
        assert classify(MISSING_RESPONSE, "my-service") == NotFound(detail="Service not found")

    def test_inactive_service_is_not_found_with_record(self) -> None:
        inactive = observed_service(status="INACTIVE")

        outcome = classify(describe_response(inactive), "my-service")

        assert outcome == NotFound(service=inactive, detail="service is INACTIVE")

    def test_draining_service(self) -> None:
        draining = observed_service(status="DRAINING")

        assert classify(describe_response(draining), "my-service") == Draining(draining)

    def test_singular_service_shape(self) -> None:
        response = {"service": {"serviceName": "my-service", "status": "ACTIVE"}}

        assert classify(response, "my-service") == Found(
            {"serviceName": "my-service", "status": "ACTIVE"}
        )

    def test_other_failure_reason_is_failed(self) -> None:
        outcome = classify(GENERIC_FAILURE_RESPONSE, "my-service")

        assert isinstance(outcome, Failed)
        assert outcome.reason == "GENERIC"
        assert outcome.detail == "Generic Failure for testing purposes only"

    @pytest.mark.parametrize("response", [None, {}])
    def test_empty_response_is_failed_not_missing(self, response: dict | None) -> None:
        assert isinstance(classify(response, "my-service"), Failed)

    def test_response_without_service_is_malformed(self) -> None:
        outcome = classify({"failures": [], "services": []}, "my-service")

        assert outcome == Failed("malformed response")

    def test_unexpected_status_is_failed(self) -> None:
        outcome = classify({"service": {"status": "banana"}}, "my-service")

        assert isinstance(outcome, Failed)
        assert "banana" in outcome.detail

    def test_non_mapping_failure_is_failed(self) -> None:
        assert isinstance(classify({"failures": [1]}, "my-service"), Failed)


class TestFindServiceInResponse:
    def test_returns_active_service(self) -> None:
        response = {"services": [{"serviceName": "my-service", "status": "ACTIVE"}]}

        assert find_service_in_response(response, "my-service") == {
            "serviceName": "my-service",
            "status": "ACTIVE",
        }

    @pytest.mark.parametrize(
        "response",
        [
            {"services": [{"serviceName": "not-my-service", "status": "ACTIVE"}]},
            {"services": [{"serviceName": "my-service", "status": "INACTIVE"}]},
            {"service": {"serviceName": "my-service", "status": "INACTIVE"}},
            MISSING_RESPONSE,
        ],
    )
    def test_raises_not_found(self, response: dict) -> None:
        with pytest.raises(NotFoundException) as exc_info:
            find_service_in_response(response, "my-service", "my-cluster")

        assert exc_info.value.cluster == "my-cluster"
        assert exc_info.value.service_name == "my-service"

    @pytest.mark.parametrize(
        "response",
        [
            {"services": [{"serviceName": "my-service", "status": "DRAINING"}]},
            {"service": {"serviceName": "my-service", "status": "DRAINING"}},
        ],
    )
    def test_raises_draining(self, response: dict) -> None:
        with pytest.raises(DrainingException):
            find_service_in_response(response, "my-service")

    @pytest.mark.parametrize(
        "response",
        [
            {"failures": [1]},
            None,
            {},
            {"service": {"status": "banana"}},
            GENERIC_FAILURE_RESPONSE,
        ],
    )
    def test_raises_generic_failure(self, response: dict | None) -> None:
        with pytest.raises(GenericFailure):
            find_service_in_response(response, "my-service")

    def test_generic_failure_keeps_failure_detail(self) -> None:
        with pytest.raises(GenericFailure) as exc_info:
            find_service_in_response(GENERIC_FAILURE_RESPONSE, "my-service")

        assert exc_info.value.reason == "GENERIC"
        assert exc_info.value.detail == "Generic Failure for testing purposes only"
        assert exc_info.value.arn is not None
