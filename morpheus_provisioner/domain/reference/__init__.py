"""Catalog candidates and the references resolved from them."""

from morpheus_provisioner.domain.reference.context import (
    ResolutionContext,
    provisioning_scope,
    require_kind,
)
from morpheus_provisioner.domain.reference.value_objects import (
    Candidate,
    ReferenceKind,
    ResolvedReference,
)

__all__ = [
    "Candidate",
    "ReferenceKind",
    "ResolutionContext",
    "ResolvedReference",
    "provisioning_scope",
    "require_kind",
]
