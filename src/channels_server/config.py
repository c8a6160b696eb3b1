"""Configuration management for channels-server."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validation import CHANNEL_NAME_MAX_LENGTH, MAX_BATCH_SIZE, ValidationRules

DEFAULT_HOST = "api.pusherapp.com"


class ChannelsConfig(BaseSettings):
    """
    Configuration for the channels client.

    Values are loaded from (in order of precedence):
    1. Constructor arguments
    2. Environment variables (prefixed with CHANNELS_)
    3. .env file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="CHANNELS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Required settings
    app_id: str = Field(..., description="Application ID")
    app_key: str = Field(..., description="Application key")
    app_secret: SecretStr = Field(..., description="Application secret")

    # HTTP API endpoint
    host: str = Field(default=DEFAULT_HOST, description="API hostname, without scheme")
    cluster: Optional[str] = Field(default=None, description="Cluster, e.g. 'eu'")
    encrypted: bool = Field(default=False, description="Use HTTPS")
    port: Optional[int] = Field(default=None, description="API port (None=scheme default)")

    # Validation limits
    batch_event_data_size_limit: Optional[int] = Field(
        default=None, gt=0, description="Max bytes of data per batch event (None=unchecked)"
    )
    channel_name_max_length: int = Field(
        default=CHANNEL_NAME_MAX_LENGTH, gt=0, description="Max channel name length"
    )
    max_batch_size: int = Field(default=MAX_BATCH_SIZE, gt=0, description="Max events per batch")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("host")
    @classmethod
    def host_has_no_scheme(cls, value: str) -> str:
        if "://" in value:
            raise ValueError(f"host must not include a scheme: {value!r}")
        return value

    @model_validator(mode="after")
    def apply_cluster(self) -> ChannelsConfig:
        # An explicit host wins over the cluster
        if "host" in self.model_fields_set:
            self.cluster = None
        elif self.cluster:
            self.host = f"api-{self.cluster}.pusher.com"
        return self

    @property
    def scheme(self) -> str:
        return "https" if self.encrypted else "http"

    @property
    def effective_port(self) -> int:
        """Configured port, or the default for the scheme."""
        if self.port is not None:
            return self.port
        return 443 if self.encrypted else 80

    def build_base_url(self) -> str:
        """Construct the HTTP API base URL."""
        base = f"{self.scheme}://{self.host}"
        if self.port is not None:
            base = f"{base}:{self.port}"
        return base

    def validation_rules(self) -> ValidationRules:
        """Immutable validation limits derived from this configuration."""
        return ValidationRules(
            channel_name_max_length=self.channel_name_max_length,
            max_batch_size=self.max_batch_size,
            batch_event_data_size_limit=self.batch_event_data_size_limit,
        )
