"""Tests for the click entrypoint."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

from ecs_reconciler.cli import main as cli_main
from tests.conftest import (
    GENERIC_FAILURE_RESPONSE,
    MISSING_RESPONSE,
    SERVICE_ARN,
    SPEC_DATA,
    describe_response,
    observed_service,
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def output_file(tmp_path: Path) -> Path:
    return tmp_path / "github_output"


@pytest.fixture
def env(output_file: Path) -> dict[str, str | None]:
    return {
        "GITHUB_OUTPUT": str(output_file),
        "ACTION": None,
        "SPEC_FILE": None,
        "SPEC": json.dumps(SPEC_DATA),
    }


@pytest.fixture(autouse=True)
def patched_client(monkeypatch: pytest.MonkeyPatch, client: MagicMock) -> MagicMock:
    monkeypatch.setattr(cli_main, "_build_client", lambda settings, options: client)
    return client


def test_reconcile_creates_missing_service(
    runner: CliRunner,
    env: dict[str, str | None],
    patched_client: MagicMock,
    output_file: Path,
) -> None:
    patched_client.describe.return_value = MISSING_RESPONSE

    result = runner.invoke(cli_main.cli, ["reconcile"], env=env)

    assert result.exit_code == 0, result.output
    assert "created" in result.output
    lines = output_file.read_text(encoding="utf-8").splitlines()
    assert json.loads(lines[0].removeprefix("service="))["serviceArn"] == SERVICE_ARN
    assert lines[1] == f"arn={SERVICE_ARN}"


def test_reconcile_reads_spec_file(
    runner: CliRunner,
    env: dict[str, str | None],
    patched_client: MagicMock,
    tmp_path: Path,
) -> None:
    spec_file = tmp_path / "service.json"
    spec_file.write_text(json.dumps({**SPEC_DATA, "desiredCount": 4}), encoding="utf-8")

    result = runner.invoke(
        cli_main.cli,
        ["reconcile", "--spec-file", str(spec_file)],
        env=env,
    )

    assert result.exit_code == 0, result.output
    assert patched_client.update.call_args.args[0]["desiredCount"] == 4


def test_reconcile_delete_with_flags(
    runner: CliRunner,
    env: dict[str, str | None],
    patched_client: MagicMock,
) -> None:
    result = runner.invoke(
        cli_main.cli,
        ["reconcile", "--action", "delete", "--force-delete"],
        env=env,
    )

    assert result.exit_code == 0, result.output
    assert "deleted" in result.output
    patched_client.describe.assert_not_called()
    patched_client.delete.assert_called_once_with(
        {"cluster": "my-cluster", "service": "my-service", "force": True}
    )


def test_reconcile_reads_action_from_environment(
    runner: CliRunner,
    env: dict[str, str | None],
    patched_client: MagicMock,
) -> None:
    patched_client.describe.return_value = MISSING_RESPONSE

    result = runner.invoke(cli_main.cli, ["reconcile"], env={**env, "ACTION": "delete"})

    assert result.exit_code == 0, result.output
    assert "unchanged" in result.output
    patched_client.delete.assert_not_called()


def test_reconcile_failure_exits_non_zero(
    runner: CliRunner,
    env: dict[str, str | None],
    patched_client: MagicMock,
    output_file: Path,
) -> None:
    patched_client.describe.return_value = GENERIC_FAILURE_RESPONSE

    result = runner.invoke(cli_main.cli, ["reconcile"], env=env)

    assert result.exit_code == 1
    assert "ECS rejected the request" in result.output
    assert not output_file.exists()


def test_reconcile_without_spec_exits_non_zero(
    runner: CliRunner,
    env: dict[str, str | None],
) -> None:
    result = runner.invoke(cli_main.cli, ["reconcile"], env={**env, "SPEC": None})

    assert result.exit_code == 1
    assert "Either spec-file or spec must be supplied" in result.output


def test_reconcile_reports_invalid_update(
    runner: CliRunner,
    env: dict[str, str | None],
    patched_client: MagicMock,
) -> None:
    patched_client.describe.return_value = describe_response(
        observed_service(deploymentController={"type": "EXTERNAL"}, desiredCount=1)
    )
    spec = {**SPEC_DATA, "deploymentController": "EXTERNAL", "taskDefinition": "family:9"}

    result = runner.invoke(cli_main.cli, ["reconcile", "--spec", json.dumps(spec)], env=env)

    assert result.exit_code == 1
    assert "taskDefinition" in result.output
    patched_client.update.assert_not_called()


def test_plan_only_describes(
    runner: CliRunner,
    env: dict[str, str | None],
    patched_client: MagicMock,
) -> None:
    patched_client.describe.return_value = describe_response(observed_service(desiredCount=1))

    result = runner.invoke(cli_main.cli, ["plan"], env=env)

    assert result.exit_code == 0, result.output
    assert "updated" in result.output
    assert "desiredCount" in result.output
    patched_client.update.assert_not_called()


def test_plan_with_disallowed_fields_exits_non_zero(
    runner: CliRunner,
    env: dict[str, str | None],
    patched_client: MagicMock,
) -> None:
    patched_client.describe.return_value = describe_response(
        observed_service(launchType="FARGATE")
    )

    result = runner.invoke(cli_main.cli, ["plan"], env=env)

    assert result.exit_code == 1
    assert "launchType" in result.output
