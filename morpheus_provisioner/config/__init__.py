"""Configuration package."""

from .manager import ConfigurationManager
from .schemas import AppConfig, ClientConfig, LoggingConfig, ProvisioningConfig

__all__ = [
    "AppConfig",
    "ClientConfig",
    "ConfigurationManager",
    "LoggingConfig",
    "ProvisioningConfig",
]
