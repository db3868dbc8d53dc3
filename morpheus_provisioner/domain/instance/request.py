# morpheus_provisioner/domain/instance/request.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from morpheus_provisioner.domain.core.exceptions import ValidationError


@dataclass(frozen=True)
class ProvisionRequest:
    """Body of the instance creation call, with every name already swapped for an id."""
    zone_id: Any
    instance: Dict[str, Any]
    plan: Dict[str, Any]
    config: Dict[str, Any] = field(default_factory=dict)
    volumes: Optional[List[Dict[str, Any]]] = None
    network_interfaces: Optional[List[Dict[str, Any]]] = None
    evars: Optional[List[Dict[str, Any]]] = None
    metadata: Optional[List[Dict[str, Any]]] = None
    labels: Optional[List[str]] = None

    def __post_init__(self):
        if self.zone_id is None:
            raise ValidationError("Provision request requires a zone id")
        if not self.instance.get("name"):
            raise ValidationError("Provision request requires an instance name")
        for key in ("site", "layout", "plan"):
            if not isinstance(self.instance.get(key), dict) or "id" not in self.instance[key]:
                raise ValidationError(f"Provision request instance.{key} requires an id")

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "zoneId": self.zone_id,
            "instance": self.instance,
            "plan": self.plan,
            "config": self.config,
        }
        # Optional sections are omitted rather than sent empty.
        if self.volumes is not None:
            payload["volumes"] = self.volumes
        if self.network_interfaces is not None:
            payload["networkInterfaces"] = self.network_interfaces
        if self.evars is not None:
            payload["evars"] = self.evars
        if self.metadata is not None:
            payload["metadata"] = self.metadata
        if self.labels is not None:
            payload["labels"] = self.labels
        return payload
