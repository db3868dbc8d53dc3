# morpheus_provisioner/domain/reference/value_objects.py
from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from morpheus_provisioner.domain.core.exceptions import ValidationError


class ReferenceKind(str, Enum):
    """Kinds of catalog objects the provisioning chain resolves."""
    GROUP = "Group"
    CLOUD = "Cloud"
    INSTANCE_TYPE = "InstanceType"
    LAYOUT = "Layout"
    PLAN = "Plan"
    RESOURCE_POOL = "ResourcePool"
    DATASTORE = "Datastore"
    NETWORK = "Network"


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class Candidate:
    """One row returned by the catalog for an option category."""
    id: Any
    name: str = ""
    code: str = ""
    external_id: Optional[str] = None
    value: Any = None
    version: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def id_str(self) -> str:
        return "" if self.id is None else str(self.id)

    @property
    def numeric_value(self) -> Optional[int]:
        """Return ``value`` truncated to an integer, or None when it is not numeric."""
        if isinstance(self.value, bool) or self.value is None:
            return None
        if isinstance(self.value, (int, float)):
            number = self.value
        elif isinstance(self.value, str):
            try:
                number = float(self.value)
            except ValueError:
                return None
        else:
            return None
        # "inf" and "nan" parse as floats but have no integer form
        if isinstance(number, float) and not math.isfinite(number):
            return None
        return int(number)

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> Candidate:
        """
        Build a candidate from a catalog row.

        Option rows frequently carry only ``name`` and ``value``; in that case
        the value doubles as the identifier.
        """
        if not isinstance(item, dict):
            raise ValidationError(f"Catalog row must be an object, got {type(item).__name__}")
        identifier = item.get("id")
        if identifier is None:
            identifier = item.get("value")
        return cls(
            id=identifier,
            name=item.get("name") or "",
            code=item.get("code") or "",
            external_id=_optional_str(item.get("externalId")),
            value=item.get("value"),
            version=_optional_str(item.get("version")),
            raw=dict(item),
        )


@dataclass(frozen=True)
class ResolvedReference:
    """The output of one resolution step."""
    kind: ReferenceKind
    id: Any
    code: str = ""
    name: str = ""

    def __post_init__(self):
        if not isinstance(self.kind, ReferenceKind):
            raise ValidationError(f"Invalid reference kind: {self.kind}")
        if self.id is None or self.id == "":
            raise ValidationError(f"{self.kind.value} reference requires an id")

    @property
    def id_str(self) -> str:
        return str(self.id)

    @classmethod
    def from_candidate(cls, kind: ReferenceKind, candidate: Candidate,
                       reference_id: Any = None) -> ResolvedReference:
        return cls(
            kind=kind,
            id=candidate.id if reference_id is None else reference_id,
            code=candidate.code,
            name=candidate.name,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "code": self.code, "name": self.name}
