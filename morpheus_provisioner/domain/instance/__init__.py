"""Instance configuration and provisioning request models."""

from morpheus_provisioner.domain.instance.request import ProvisionRequest
from morpheus_provisioner.domain.instance.spec import (
    EnvironmentVariable,
    InstanceSpec,
    InterfaceSpec,
    MetadataEntry,
    VolumeSpec,
)

__all__ = [
    "EnvironmentVariable",
    "InstanceSpec",
    "InterfaceSpec",
    "MetadataEntry",
    "ProvisionRequest",
    "VolumeSpec",
]
