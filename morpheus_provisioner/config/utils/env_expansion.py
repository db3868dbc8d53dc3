"""Environment variable expansion for configuration values."""
import os
import re
from typing import Any, Dict

# ${NAME:default}; plain $NAME and ${NAME} are left to os.path.expandvars
_DEFAULT_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*):([^}]*)\}")


def _expand_string(value: str) -> str:
    def replace(match: "re.Match[str]") -> str:
        return os.environ.get(match.group(1), match.group(2))

    return os.path.expandvars(_DEFAULT_PATTERN.sub(replace, value))


def expand_env_vars(value: Any) -> Any:
    """
    Expand environment variables in strings, recursing into dicts and lists.

    Unset variables without a default are left as written.
    """
    if isinstance(value, str):
        return _expand_string(value)
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def expand_config_env_vars(config: Dict[str, Any]) -> Dict[str, Any]:
    """Expand environment variables throughout a configuration dictionary."""
    return expand_env_vars(config)
