"""Configuration schemas package."""

from .app_schema import AppConfig
from .client_schema import ClientConfig
from .logging_schema import LoggingConfig
from .provisioning_schema import ProvisioningConfig

__all__ = [
    "AppConfig",
    "ClientConfig",
    "LoggingConfig",
    "ProvisioningConfig",
]
