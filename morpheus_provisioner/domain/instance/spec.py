"""User-supplied instance configuration."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from morpheus_provisioner.domain.core.exceptions import ValidationError


class VolumeSpec(BaseModel):
    """A volume as written by the user; ``datastore`` is a name to resolve."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    root: Optional[bool] = None
    name: Optional[str] = None
    size: Optional[int] = None
    size_id: Optional[int] = None
    storage_type: Optional[int] = None
    datastore: Optional[str] = None
    datastore_id: Optional[int] = None


class InterfaceSpec(BaseModel):
    """A network interface; ``network`` is a name, id or structural reference."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    network: Optional[str] = None
    network_id: Optional[str] = None
    ip_address: Optional[str] = None
    ip_mode: Optional[str] = None
    network_interface_type_id: Optional[int] = None


class MetadataEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    value: str


class EnvironmentVariable(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    value: str
    export: Optional[bool] = None
    masked: Optional[bool] = None


class InstanceSpec(BaseModel):
    """
    Raw configuration for one instance.

    Group, cloud, type, layout and plan are kept optional here so that a
    missing token surfaces as a ConfigurationError from the resolution chain
    rather than as a schema error.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    description: Optional[str] = None
    group: Optional[str] = None
    cloud: Optional[str] = None
    type: Optional[str] = None
    version: Optional[str] = None
    layout: Optional[str] = None
    plan: Optional[str] = None
    resource_pool: Optional[str] = None
    environment: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)
    config: Dict[str, Any] = Field(default_factory=dict)
    create_user: Optional[bool] = None
    user_group: Optional[str] = None
    metadata: List[MetadataEntry] = Field(default_factory=list)
    evars: List[EnvironmentVariable] = Field(default_factory=list)
    volumes: List[VolumeSpec] = Field(default_factory=list)
    interfaces: List[InterfaceSpec] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Instance name is required")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InstanceSpec":
        """Validate raw input, reporting failures as a domain ValidationError."""
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
            raise ValidationError(
                f"Invalid instance configuration: {', '.join(fields)}",
                e.errors(),
            ) from e

    def datastore_tokens(self) -> List[str]:
        """Datastore names referenced by volumes, in order and without duplicates."""
        tokens: List[str] = []
        for volume in self.volumes:
            if volume.datastore and volume.datastore not in tokens:
                tokens.append(volume.datastore)
        return tokens

    def network_tokens(self) -> List[str]:
        tokens: List[str] = []
        for interface in self.interfaces:
            if interface.network and interface.network not in tokens:
                tokens.append(interface.network)
        return tokens
