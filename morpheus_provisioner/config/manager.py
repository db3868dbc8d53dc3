"""Unified configuration management for the provisioner."""
from __future__ import annotations
import json
import os
import threading
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from morpheus_provisioner.config.schemas import (
    AppConfig,
    ClientConfig,
    LoggingConfig,
    ProvisioningConfig,
)
from morpheus_provisioner.config.utils.env_expansion import expand_config_env_vars
from morpheus_provisioner.domain.core.exceptions import ConfigurationError

T = TypeVar('T')


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _as_insecure(value: str) -> bool:
    # MORPHEUS_API_SECURE=false turns certificate verification off
    return value.strip().lower() in ("0", "false", "no", "off")


# environment variable -> (section, key, converter)
ENVIRONMENT_OVERRIDES: Dict[str, Tuple[str, str, Callable[[str], Any]]] = {
    "MORPHEUS_API_URL": ("client", "url", str),
    "MORPHEUS_API_TOKEN": ("client", "access_token", str),
    "MORPHEUS_API_USERNAME": ("client", "username", str),
    "MORPHEUS_API_PASSWORD": ("client", "password", str),
    "MORPHEUS_TENANT_SUBDOMAIN": ("client", "tenant_subdomain", str),
    "MORPHEUS_API_SECURE": ("client", "insecure", _as_insecure),
    "MORPHEUS_API_TIMEOUT": ("client", "timeout_seconds", float),
    "MORPHEUS_API_HTTPTRACE": ("logging", "http_trace", _as_bool),
    "LOG_LEVEL": ("logging", "level", str),
    "LOG_DESTINATION": ("logging", "destination", str),
    "USE_FORCE": ("provisioning", "force_delete", _as_bool),
}


class ConfigurationManager:
    """
    Single source of truth for configuration.

    Sources, lowest precedence first:
    - JSON configuration file (optional)
    - environment variable references inside that file (``${VAR:default}``)
    - well-known environment variables (see ENVIRONMENT_OVERRIDES)

    The merged result is validated through AppConfig. Loading is lazy.
    """

    _TYPE_MAPPING = {
        ClientConfig: "client",
        LoggingConfig: "logging",
        ProvisioningConfig: "provisioning",
    }

    def __init__(self, config_file: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self._config_file = config_file
        self._environ = os.environ if environ is None else environ
        self._lock = threading.RLock()
        self._app_config: Optional[AppConfig] = None

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        config_data = self._load_file() if self._config_file else {}
        config_data = expand_config_env_vars(config_data)
        config_data = self.apply_environment_overrides(config_data)
        try:
            return AppConfig.from_dict(config_data)
        except PydanticValidationError as e:
            missing = [
                ".".join(str(p) for p in err["loc"])
                for err in e.errors() if err["type"] == "missing"
            ]
            raise ConfigurationError(f"Invalid configuration: {e}", missing_fields=missing) from e

    def _load_file(self) -> Dict[str, Any]:
        if not os.path.exists(self._config_file):
            raise ConfigurationError(f"Configuration file not found: {self._config_file}")
        try:
            with open(self._config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {self._config_file}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration root must be an object: {self._config_file}")
        return data

    def apply_environment_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Overlay well-known environment variables onto configuration data."""
        result = {key: dict(value) if isinstance(value, dict) else value
                  for key, value in config_data.items()}
        for env_name, (section, key, convert) in ENVIRONMENT_OVERRIDES.items():
            raw = self._environ.get(env_name)
            if raw is None or raw == "":
                continue
            try:
                value = convert(raw)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {env_name}: {raw}") from e
            result.setdefault(section, {})[key] = value
        return result

    def get_typed(self, config_type: Type[T]) -> T:
        """Get a typed configuration section."""
        attr_name = self._TYPE_MAPPING.get(config_type)
        if attr_name is None:
            raise ValueError(f"Unknown configuration type: {config_type.__name__}")
        return getattr(self.app_config, attr_name)

    def reload(self) -> None:
        """Drop the cached configuration so the next access reloads it."""
        with self._lock:
            self._app_config = None
