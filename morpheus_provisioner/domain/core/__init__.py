"""Core domain primitives shared across the provisioner."""

from morpheus_provisioner.domain.core.exceptions import (
    AmbiguityError,
    ConfigurationError,
    DomainException,
    NotFoundError,
    ProvisioningTimeoutError,
    ResolutionError,
    UnexpectedStatusError,
    ValidationError,
)

__all__ = [
    "AmbiguityError",
    "ConfigurationError",
    "DomainException",
    "NotFoundError",
    "ProvisioningTimeoutError",
    "ResolutionError",
    "UnexpectedStatusError",
    "ValidationError",
]
