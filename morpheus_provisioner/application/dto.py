"""Data Transfer Objects handed back to the plugin host."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class BaseDTO(BaseModel):
    """
    Base class for DTOs with a stable to_dict()/from_dict() API.

    Keys stay snake_case; the API's camelCase is handled where payloads are
    built, not here.
    """
    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseDTO':
        return cls.model_validate(data)


def _nested(data: Dict[str, Any], key: str, field: str = "id") -> Optional[Any]:
    value = data.get(key)
    if isinstance(value, dict):
        return value.get(field)
    return None


class InstanceState(BaseDTO):
    """State persisted by the host for one provisioned instance."""

    id: str
    name: str
    description: Optional[str] = None
    status: Optional[str] = None
    group_id: Optional[str] = None
    cloud_id: Optional[str] = None
    instance_type_code: Optional[str] = None
    layout_id: Optional[str] = None
    plan_id: Optional[str] = None
    config: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_api(cls, instance: Dict[str, Any]) -> 'InstanceState':
        """
        Create state from an API instance object.

        Args:
            instance: The ``instance`` object of a get or create response

        Returns:
            InstanceState instance
        """
        def as_str(value: Any) -> Optional[str]:
            return None if value is None else str(value)

        return cls(
            id=str(instance["id"]),
            name=instance.get("name", ""),
            description=instance.get("description"),
            status=instance.get("status"),
            group_id=as_str(_nested(instance, "group")),
            cloud_id=as_str(_nested(instance, "cloud")),
            instance_type_code=_nested(instance, "instanceType", "code"),
            layout_id=as_str(_nested(instance, "layout")),
            plan_id=as_str(_nested(instance, "plan")),
            config=instance.get("config") or {},
        )
