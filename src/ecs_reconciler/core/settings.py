"""Runtime settings for the ECS reconciler."""

from pathlib import Path

from platformdirs import user_config_dir
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "ecs-reconciler"


def env_file() -> Path:
    """Return the per-user env file shared by the settings and the CLI."""
    return Path(user_config_dir(APP_NAME)) / ".env"


ENV_FILE_PATH = str(env_file())


class AWSSettings(BaseSettings):
    """AWS configuration for the ECS client."""

    model_config = SettingsConfigDict(env_prefix="AWS_", env_file=ENV_FILE_PATH, extra="ignore")

    region: str = Field(default="us-east-1", description="AWS region")
    profile: str | None = Field(default=None, description="Named AWS profile")


class ReconcilerSettings(BaseSettings):
    """Waiter and output configuration."""

    model_config = SettingsConfigDict(
        env_prefix="ECS_RECONCILER_",
        env_file=ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    waiter_delay_seconds: int = Field(default=15, ge=1, description="Seconds between polls")
    waiter_timeout_seconds: int = Field(
        default=600,
        ge=1,
        description="Maximum seconds to wait for a service to stabilise",
    )
    log_level: str = Field(default="INFO", description="Root log level")
    github_output: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_OUTPUT", "ECS_RECONCILER_GITHUB_OUTPUT"),
        description="Path of the GitHub Actions output file",
    )


class Settings(BaseSettings):
    """Main reconciler configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    aws: AWSSettings
    reconciler: ReconcilerSettings


def get_settings() -> Settings:
    """Load and return the reconciler configuration.

    The sub-configs are populated from the environment and the user env file
    thanks to pydantic-settings.
    """
    return Settings(aws=AWSSettings(), reconciler=ReconcilerSettings())
