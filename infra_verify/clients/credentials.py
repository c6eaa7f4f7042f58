# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""
Explicit AWS credential resolution.

Instead of relying on the SDK's implicit global lookup, callers describe the
resolution order in an ``AWSConfig`` and ``build_session`` walks it, returning
a session for the first source that yields credentials.
"""

import logging
import os
from enum import Enum
from typing import Mapping, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ProfileNotFound
from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import CredentialsResolutionError

logger = logging.getLogger(__name__)


class CredentialSource(str, Enum):
    """Places credentials can be resolved from, in no particular order."""

    EXPLICIT = "explicit"
    ENVIRONMENT = "environment"
    PROFILE = "profile"
    DEFAULT_CHAIN = "default_chain"


DEFAULT_CREDENTIAL_SOURCES = [
    CredentialSource.EXPLICIT,
    CredentialSource.ENVIRONMENT,
    CredentialSource.PROFILE,
    CredentialSource.DEFAULT_CHAIN,
]


class AWSConfig(BaseModel):
    """Everything needed to construct AWS clients, passed in explicitly."""

    model_config = ConfigDict(frozen=True)

    region: str = Field("us-east-1", description="AWS region for regional services")
    profile: Optional[str] = Field(None, description="Named profile from the shared config files")
    access_key_id: Optional[str] = Field(None, description="Static access key ID")
    secret_access_key: Optional[str] = Field(None, description="Static secret access key")
    session_token: Optional[str] = Field(None, description="Session token for temporary credentials")
    credential_sources: list[CredentialSource] = Field(
        default_factory=lambda: list(DEFAULT_CREDENTIAL_SOURCES),
        description="Credential sources to try, in order",
    )
    connect_timeout: Optional[float] = Field(None, description="Connect timeout in seconds")
    read_timeout: Optional[float] = Field(None, description="Read timeout in seconds")

    def botocore_config(self) -> Config:
        """
        Build the botocore configuration shared by every client.

        Every query is attempted exactly once; the infrastructure under test is
        assumed to be in its final state.
        """
        kwargs = {
            "region_name": self.region,
            "retries": {"total_max_attempts": 1, "mode": "standard"},
        }
        if self.connect_timeout is not None:
            kwargs["connect_timeout"] = self.connect_timeout
        if self.read_timeout is not None:
            kwargs["read_timeout"] = self.read_timeout
        return Config(**kwargs)


def build_session(
    config: AWSConfig, environ: Mapping[str, str] | None = None
) -> boto3.Session:
    """
    Create a boto3 session from the first credential source that resolves.

    Args:
        config: Explicit AWS configuration
        environ: Environment mapping for the environment source (default: os.environ)

    Returns:
        boto3 Session bound to the resolved credentials

    Raises:
        CredentialsResolutionError: If no configured source yields credentials
    """
    environ = os.environ if environ is None else environ

    for source in config.credential_sources:
        session = _session_for_source(source, config, environ)
        if session is not None:
            logger.info(f"Resolved AWS credentials from {source.value} source")
            return session
        logger.debug(f"No AWS credentials from {source.value} source")

    tried = ", ".join(source.value for source in config.credential_sources) or "none"
    raise CredentialsResolutionError(f"Unable to resolve AWS credentials (tried: {tried})")


def _session_for_source(
    source: CredentialSource, config: AWSConfig, environ: Mapping[str, str]
) -> boto3.Session | None:
    if source is CredentialSource.EXPLICIT:
        if not (config.access_key_id and config.secret_access_key):
            return None
        return boto3.Session(
            aws_access_key_id=config.access_key_id,
            aws_secret_access_key=config.secret_access_key,
            aws_session_token=config.session_token,
            region_name=config.region,
        )

    if source is CredentialSource.ENVIRONMENT:
        access_key = environ.get("AWS_ACCESS_KEY_ID")
        secret_key = environ.get("AWS_SECRET_ACCESS_KEY")
        if not (access_key and secret_key):
            return None
        return boto3.Session(
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            aws_session_token=environ.get("AWS_SESSION_TOKEN"),
            region_name=config.region,
        )

    if source is CredentialSource.PROFILE:
        if not config.profile:
            return None
        try:
            session = boto3.Session(profile_name=config.profile, region_name=config.region)
            credentials = session.get_credentials()
        except ProfileNotFound:
            logger.warning(f"AWS profile '{config.profile}' not found")
            return None
        return session if credentials is not None else None

    session = boto3.Session(region_name=config.region)
    return session if session.get_credentials() is not None else None
