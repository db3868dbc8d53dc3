"""Per-call accumulation of resolved references."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional

from morpheus_provisioner.domain.core.exceptions import ValidationError
from morpheus_provisioner.domain.reference.value_objects import ReferenceKind, ResolvedReference


def require_kind(reference: ResolvedReference, kind: ReferenceKind) -> ResolvedReference:
    """Reject a missing reference or one of the wrong kind."""
    if not isinstance(reference, ResolvedReference):
        raise ValidationError(f"{kind.value} reference is required, got {type(reference).__name__}")
    if reference.kind is not kind:
        raise ValidationError(f"Expected a {kind.value} reference, got {reference.kind.value}")
    return reference


def provisioning_scope(group: ResolvedReference,
                       cloud: ResolvedReference,
                       instance_type: ResolvedReference,
                       layout: ResolvedReference,
                       plan: ResolvedReference) -> Dict[str, str]:
    """
    Build the query shared by the pool, datastore and network option lookups.

    The catalog names the group ``site`` and the cloud ``zone`` on some
    endpoints, so both spellings are sent.
    """
    require_kind(group, ReferenceKind.GROUP)
    require_kind(cloud, ReferenceKind.CLOUD)
    require_kind(instance_type, ReferenceKind.INSTANCE_TYPE)
    require_kind(layout, ReferenceKind.LAYOUT)
    require_kind(plan, ReferenceKind.PLAN)
    return {
        "groupId": group.id_str,
        "siteId": group.id_str,
        "cloudId": cloud.id_str,
        "zoneId": cloud.id_str,
        "instanceTypeId": instance_type.id_str,
        "layoutId": layout.id_str,
        "planId": plan.id_str,
    }


@dataclass
class ResolutionContext:
    """
    References produced during a single provisioning call.

    Each slot is written once, in chain order. Datastores and networks are
    keyed by the token the user supplied so the payload can swap names for ids.
    """
    group: Optional[ResolvedReference] = None
    cloud: Optional[ResolvedReference] = None
    instance_type: Optional[ResolvedReference] = None
    layout: Optional[ResolvedReference] = None
    plan: Optional[ResolvedReference] = None
    resource_pool: Optional[ResolvedReference] = None
    datastores: Dict[str, ResolvedReference] = field(default_factory=dict)
    networks: Dict[str, ResolvedReference] = field(default_factory=dict)

    _SLOTS = {
        ReferenceKind.GROUP: "group",
        ReferenceKind.CLOUD: "cloud",
        ReferenceKind.INSTANCE_TYPE: "instance_type",
        ReferenceKind.LAYOUT: "layout",
        ReferenceKind.PLAN: "plan",
        ReferenceKind.RESOURCE_POOL: "resource_pool",
    }

    def record(self, reference: ResolvedReference, token: Optional[str] = None) -> ResolvedReference:
        """Store a reference in its slot; datastores and networks need the source token."""
        if reference.kind is ReferenceKind.DATASTORE:
            self.datastores[self._token(reference, token)] = reference
        elif reference.kind is ReferenceKind.NETWORK:
            self.networks[self._token(reference, token)] = reference
        else:
            slot = self._SLOTS[reference.kind]
            if getattr(self, slot) is not None:
                raise ValidationError(f"{reference.kind.value} has already been resolved")
            setattr(self, slot, reference)
        return reference

    @staticmethod
    def _token(reference: ResolvedReference, token: Optional[str]) -> str:
        if not token:
            raise ValidationError(f"{reference.kind.value} references must be recorded with their token")
        return token

    def require(self, kind: ReferenceKind) -> ResolvedReference:
        """Return a resolved single-slot reference or fail if the stage has not run."""
        reference = getattr(self, self._SLOTS[kind])
        if reference is None:
            raise ValidationError(f"{kind.value} has not been resolved")
        return reference

    def scope(self) -> Dict[str, str]:
        return provisioning_scope(
            self.require(ReferenceKind.GROUP),
            self.require(ReferenceKind.CLOUD),
            self.require(ReferenceKind.INSTANCE_TYPE),
            self.require(ReferenceKind.LAYOUT),
            self.require(ReferenceKind.PLAN),
        )

    def datastore_for(self, token: str) -> Optional[ResolvedReference]:
        return self.datastores.get(token)

    def network_for(self, token: str) -> Optional[ResolvedReference]:
        return self.networks.get(token)
