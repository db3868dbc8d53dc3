"""Resolution of user tokens into catalog references."""

from morpheus_provisioner.application.resolution.chain import (
    NETWORK_REFERENCE_PREFIXES,
    STAGES,
    DependencyChainResolver,
    Stage,
)
from morpheus_provisioner.application.resolution.matcher import (
    MATCH_TIERS,
    MatchField,
    NameOrIdResolver,
)

__all__ = [
    "DependencyChainResolver",
    "MATCH_TIERS",
    "MatchField",
    "NETWORK_REFERENCE_PREFIXES",
    "NameOrIdResolver",
    "STAGES",
    "Stage",
]
