"""Main application configuration schema."""
from typing import Any, Dict

from pydantic import BaseModel, Field

from .client_schema import ClientConfig
from .logging_schema import LoggingConfig
from .provisioning_schema import ProvisioningConfig


class AppConfig(BaseModel):
    """Application configuration."""

    version: str = Field("1.0.0", description="Configuration version")
    client: ClientConfig
    logging: LoggingConfig = Field(default_factory=lambda: LoggingConfig())
    provisioning: ProvisioningConfig = Field(default_factory=lambda: ProvisioningConfig())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create configuration from a dictionary."""
        return cls.model_validate(data)
