"""Configuration management for infrastructure verification.

This module handles loading and validating configuration from environment
variables with sensible defaults.
"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .clients.credentials import DEFAULT_CREDENTIAL_SOURCES, AWSConfig, CredentialSource
from .clients.terraform_outputs import TerraformOutputs
from .exceptions import TerraformOutputError


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.

    All settings have sensible defaults for running against a local
    Terraform working directory. In CI, these should be set via
    environment variables or a .env file.
    """

    # AWS Configuration
    aws_region: str = Field(
        default="us-east-1",
        description="AWS region of the deployment",
        validation_alias=AliasChoices("AWS_REGION", "AWS_DEFAULT_REGION")
    )
    aws_profile: Optional[str] = Field(
        default=None,
        description="Named profile used by the profile credential source",
        validation_alias="AWS_PROFILE"
    )
    aws_access_key_id: Optional[str] = Field(
        default=None,
        description="Access key for the explicit credential source",
        validation_alias="INFRA_VERIFY_AWS_ACCESS_KEY_ID"
    )
    aws_secret_access_key: Optional[str] = Field(
        default=None,
        description="Secret key for the explicit credential source",
        validation_alias="INFRA_VERIFY_AWS_SECRET_ACCESS_KEY"
    )
    aws_session_token: Optional[str] = Field(
        default=None,
        description="Session token for the explicit credential source",
        validation_alias="INFRA_VERIFY_AWS_SESSION_TOKEN"
    )
    aws_partition: str = Field(
        default="aws",
        description="AWS partition expected in ARNs (aws, aws-cn, aws-us-gov)",
        validation_alias="AWS_PARTITION"
    )
    credential_sources: str = Field(
        default=",".join(source.value for source in DEFAULT_CREDENTIAL_SOURCES),
        description="Comma-separated credential sources, tried in order",
        validation_alias="CREDENTIAL_SOURCES"
    )
    connect_timeout: Optional[float] = Field(
        default=None,
        description="Connect timeout for AWS calls in seconds",
        validation_alias="AWS_CONNECT_TIMEOUT"
    )
    read_timeout: Optional[float] = Field(
        default=None,
        description="Read timeout for AWS calls in seconds",
        validation_alias="AWS_READ_TIMEOUT"
    )

    # Terraform Configuration
    terraform_dir: Optional[str] = Field(
        default=None,
        description="Terraform working directory to read outputs from",
        validation_alias=AliasChoices("TERRAFORM_DIR", "TF_DIR")
    )
    terraform_binary: str = Field(
        default="terraform",
        description="Terraform executable",
        validation_alias="TERRAFORM_BINARY"
    )
    outputs_file: Optional[str] = Field(
        default=None,
        description="Saved `terraform output -json` file (takes precedence over TERRAFORM_DIR)",
        validation_alias="TERRAFORM_OUTPUTS_FILE"
    )

    # Verification Configuration
    identity_message_substring: str = Field(
        default="Hello",
        description="Substring the identity module's message output must contain",
        validation_alias="IDENTITY_MESSAGE_SUBSTRING"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        validation_alias="LOG_LEVEL"
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("credential_sources")
    @classmethod
    def validate_credential_sources(cls, v: str) -> str:
        """Reject unknown credential source names early."""
        for name in v.split(","):
            name = name.strip()
            if name:
                CredentialSource(name.lower())
        return v

    @property
    def credential_source_order(self) -> list[CredentialSource]:
        """Credential sources parsed from the comma-separated setting."""
        return [
            CredentialSource(name.strip().lower())
            for name in self.credential_sources.split(",")
            if name.strip()
        ]

    def to_aws_config(self) -> AWSConfig:
        """Build the explicit AWS configuration passed to client constructors."""
        return AWSConfig(
            region=self.aws_region,
            profile=self.aws_profile,
            access_key_id=self.aws_access_key_id,
            secret_access_key=self.aws_secret_access_key,
            session_token=self.aws_session_token,
            credential_sources=self.credential_source_order,
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
        )

    def load_outputs(self) -> TerraformOutputs:
        """
        Load Terraform outputs from the configured file or working directory.

        Raises:
            TerraformOutputError: If neither source is configured or reading fails
        """
        if self.outputs_file:
            return TerraformOutputs.from_file(self.outputs_file)
        if self.terraform_dir:
            return TerraformOutputs.from_terraform(self.terraform_dir, binary=self.terraform_binary)
        raise TerraformOutputError(
            "No Terraform outputs configured: set TERRAFORM_OUTPUTS_FILE or TERRAFORM_DIR"
        )


def get_settings() -> Settings:
    """
    Get settings.

    Loads settings from environment variables and .env file.

    Returns:
        Settings instance with all configuration values
    """
    return Settings()

