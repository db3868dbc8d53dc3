"""Catalog client configuration schema."""
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator


class ClientConfig(BaseModel):
    """Connection settings for the Morpheus API."""
    model_config = ConfigDict(extra="forbid")

    url: str = Field(..., description="Base URL of the Morpheus appliance")
    access_token: Optional[str] = Field(None, description="Bearer access token")
    username: Optional[str] = Field(None, description="Username for the password grant")
    password: Optional[str] = Field(None, description="Password for the password grant")
    tenant_subdomain: Optional[str] = Field(None, description="Tenant subdomain prefixed to the username")
    client_id: str = Field("morph-api", description="OAuth client id used for the password grant")
    insecure: bool = Field(False, description="Disable TLS certificate verification")
    timeout_seconds: float = Field(30.0, description="Per-request timeout in seconds")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate the appliance URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"URL must start with http:// or https://: {v}")
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_credentials(self) -> "ClientConfig":
        """Require either an access token or a username and password."""
        if not self.access_token and not (self.username and self.password):
            raise ValueError("Either access_token or username and password must be configured")
        return self

    @property
    def login_username(self) -> Optional[str]:
        """Username as sent to the password grant, qualified by tenant when set."""
        if self.username and self.tenant_subdomain:
            return f"{self.tenant_subdomain}\\{self.username}"
        return self.username
