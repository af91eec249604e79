"""AWS session helpers."""

from typing import Any

import boto3

from ecs_reconciler.core.settings import AWSSettings


def create_session(settings: AWSSettings) -> boto3.session.Session:
    """Create a boto3 session for the configured region.

    A named profile is only passed when one is set, so the default credential
    chain (environment, instance role, OIDC) applies otherwise.
    """
    options: dict[str, Any] = {"region_name": settings.region}
    if settings.profile:
        options["profile_name"] = settings.profile
    return boto3.session.Session(**options)
