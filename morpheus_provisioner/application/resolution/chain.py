"""Ordered resolution of the identifiers an instance creation request needs."""
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence

from morpheus_provisioner.application.resolution.matcher import MatchField, NameOrIdResolver
from morpheus_provisioner.domain.base.ports.catalog_port import CatalogPort
from morpheus_provisioner.domain.core.exceptions import ConfigurationError
from morpheus_provisioner.domain.instance.spec import InstanceSpec
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
from morpheus_provisioner.infrastructure.logging.logger import get_logger
from morpheus_provisioner.infrastructure.morpheus import endpoints

# network tokens already in the API's reference form skip the lookup
NETWORK_REFERENCE_PREFIXES = ("network-", "networkGroup-", "subnet-")


def _pool_reference_id(candidate: Candidate) -> Any:
    # pool options carry the id the API wants in a float-typed value
    numeric = candidate.numeric_value
    return candidate.id if numeric is None else numeric


@dataclass(frozen=True)
class Stage:
    """How one kind of reference is looked up."""
    kind: ReferenceKind
    category: str
    match_fields: FrozenSet[MatchField]
    reference_id: Optional[Callable[[Candidate], Any]] = None


STAGES: Dict[ReferenceKind, Stage] = {
    ReferenceKind.GROUP: Stage(
        ReferenceKind.GROUP, endpoints.GROUPS,
        frozenset({MatchField.ID, MatchField.NAME, MatchField.CODE, MatchField.VALUE}),
    ),
    ReferenceKind.CLOUD: Stage(
        ReferenceKind.CLOUD, endpoints.CLOUDS,
        frozenset({MatchField.ID, MatchField.NAME, MatchField.CODE, MatchField.VALUE}),
    ),
    ReferenceKind.INSTANCE_TYPE: Stage(
        ReferenceKind.INSTANCE_TYPE, endpoints.INSTANCE_TYPES,
        frozenset({MatchField.ID, MatchField.NAME, MatchField.CODE}),
    ),
    ReferenceKind.LAYOUT: Stage(
        ReferenceKind.LAYOUT, endpoints.LAYOUTS_FOR_CLOUD,
        frozenset({MatchField.ID, MatchField.NAME, MatchField.CODE}),
    ),
    ReferenceKind.PLAN: Stage(
        ReferenceKind.PLAN, endpoints.SERVICE_PLANS,
        frozenset({MatchField.ID, MatchField.NAME, MatchField.CODE}),
    ),
    ReferenceKind.RESOURCE_POOL: Stage(
        ReferenceKind.RESOURCE_POOL, endpoints.ZONE_POOLS,
        frozenset({MatchField.ID, MatchField.NAME, MatchField.EXTERNAL_ID, MatchField.VALUE}),
        reference_id=_pool_reference_id,
    ),
    ReferenceKind.DATASTORE: Stage(
        ReferenceKind.DATASTORE, endpoints.DATASTORES,
        frozenset({MatchField.ID, MatchField.NAME, MatchField.NAME_PREFIX}),
    ),
    ReferenceKind.NETWORK: Stage(
        ReferenceKind.NETWORK, endpoints.ZONE_NETWORK_OPTIONS,
        frozenset({MatchField.ID, MatchField.NAME, MatchField.NAME_PREFIX}),
    ),
}


class DependencyChainResolver:
    """
    Resolve group, cloud, instance type, layout, plan, resource pool,
    datastores and networks, in that order.

    Every stage method takes the upstream references it is scoped by as
    required arguments, so a stage cannot be asked for before its inputs
    exist. Errors from any stage propagate unchanged; nothing is retried.
    """

    def __init__(self, catalog: CatalogPort, matcher: Optional[NameOrIdResolver] = None):
        self._catalog = catalog
        self._matcher = matcher or NameOrIdResolver()
        self._logger = get_logger(__name__)

    # -- full chain ---------------------------------------------------------

    def resolve(self, spec: InstanceSpec) -> ResolutionContext:
        """Run every stage for ``spec`` and return the populated context."""
        self.check_required_tokens(spec)
        context = ResolutionContext()

        group = context.record(self.resolve_group(spec.group))
        cloud = context.record(self.resolve_cloud(spec.cloud, group))
        instance_type = context.record(self.resolve_instance_type(spec.type, group, cloud))
        layout = context.record(
            self.resolve_layout(spec.layout, group, cloud, instance_type, version=spec.version)
        )
        plan = context.record(self.resolve_plan(spec.plan, group, cloud, layout))
        scope = provisioning_scope(group, cloud, instance_type, layout, plan)

        if spec.resource_pool:
            context.record(self.resolve_resource_pool(spec.resource_pool, scope))

        for token, reference in self.resolve_datastores(spec.datastore_tokens(), scope).items():
            context.record(reference, token)

        networks = self.resolve_networks(spec.network_tokens(), scope, context.resource_pool)
        for token, reference in networks.items():
            context.record(reference, token)

        self._logger.info(
            "Resolved provisioning references",
            group=group.id, cloud=cloud.id, instance_type=instance_type.code,
            layout=layout.id, plan=plan.id,
            resource_pool=context.resource_pool.id if context.resource_pool else None,
            datastores=len(context.datastores), networks=len(context.networks),
        )
        return context

    @staticmethod
    def check_required_tokens(spec: InstanceSpec) -> None:
        """Fail before any catalog call when a mandatory token is missing."""
        required = (("group", spec.group), ("cloud", spec.cloud), ("type", spec.type),
                    ("layout", spec.layout), ("plan", spec.plan))
        for field_name, value in required:
            if value is None or not str(value).strip():
                raise ConfigurationError(
                    f"instance configuration requires '{field_name}'",
                    missing_fields=[field_name],
                )

    # -- individual stages --------------------------------------------------

    def resolve_group(self, token: str) -> ResolvedReference:
        return self._resolve_stage(ReferenceKind.GROUP, token, {})

    def resolve_cloud(self, token: str, group: ResolvedReference) -> ResolvedReference:
        require_kind(group, ReferenceKind.GROUP)
        return self._resolve_stage(ReferenceKind.CLOUD, token, {"groupId": group.id_str})

    def resolve_instance_type(self, token: str, group: ResolvedReference,
                              cloud: ResolvedReference) -> ResolvedReference:
        require_kind(group, ReferenceKind.GROUP)
        require_kind(cloud, ReferenceKind.CLOUD)
        return self._resolve_stage(
            ReferenceKind.INSTANCE_TYPE, token,
            {"groupId": group.id_str, "cloudId": cloud.id_str},
        )

    def resolve_layout(self, token: str, group: ResolvedReference, cloud: ResolvedReference,
                       instance_type: ResolvedReference,
                       version: Optional[str] = None) -> ResolvedReference:
        """
        Resolve a layout within the group, cloud and instance type.

        The version is not an upstream filter, so when one is given the
        candidate list is narrowed to that version before matching. A layout
        that exists only under another version is therefore not found.
        """
        require_kind(group, ReferenceKind.GROUP)
        require_kind(cloud, ReferenceKind.CLOUD)
        require_kind(instance_type, ReferenceKind.INSTANCE_TYPE)
        query = {
            "groupId": group.id_str,
            "cloudId": cloud.id_str,
            "instanceTypeId": instance_type.id_str,
        }
        if not version:
            return self._resolve_stage(ReferenceKind.LAYOUT, token, query,
                                       hint="You may need to specify version")

        def same_version(candidates: List[Candidate]) -> List[Candidate]:
            return [c for c in candidates if c.version == version]

        return self._resolve_stage(ReferenceKind.LAYOUT, token, query,
                                   candidates_filter=same_version,
                                   hint=f"Only layouts with version '{version}' were considered")

    def resolve_plan(self, token: str, group: ResolvedReference, cloud: ResolvedReference,
                     layout: ResolvedReference) -> ResolvedReference:
        require_kind(group, ReferenceKind.GROUP)
        require_kind(cloud, ReferenceKind.CLOUD)
        require_kind(layout, ReferenceKind.LAYOUT)
        return self._resolve_stage(
            ReferenceKind.PLAN, token,
            {"groupId": group.id_str, "siteId": group.id_str,
             "zoneId": cloud.id_str, "layoutId": layout.id_str},
        )

    def resolve_resource_pool(self, token: str, scope: Mapping[str, str]) -> ResolvedReference:
        """Resolve a resource pool; ``scope`` comes from ``provisioning_scope``."""
        return self._resolve_stage(ReferenceKind.RESOURCE_POOL, token, dict(scope))

    def resolve_datastores(self, tokens: Sequence[str],
                           scope: Mapping[str, str]) -> Dict[str, ResolvedReference]:
        """Resolve each datastore token independently against one option listing."""
        if not tokens:
            return {}
        stage = STAGES[ReferenceKind.DATASTORE]
        candidates = self._list(stage, dict(scope))
        return {token: self._match(stage, token, candidates) for token in tokens}

    def resolve_networks(self, tokens: Sequence[str], scope: Mapping[str, str],
                         resource_pool: Optional[ResolvedReference]) -> Dict[str, ResolvedReference]:
        """
        Resolve each network token independently.

        Tokens already in reference form (``network-12``, ``networkGroup-3``,
        ``subnet-7``) are used as they are.
        """
        resolved: Dict[str, ResolvedReference] = {}
        lookups: List[str] = []
        for token in tokens:
            if token.startswith(NETWORK_REFERENCE_PREFIXES):
                resolved[token] = ResolvedReference(ReferenceKind.NETWORK, id=token, name=token)
            else:
                lookups.append(token)
        if not lookups:
            return resolved

        query = dict(scope)
        if resource_pool is not None:
            require_kind(resource_pool, ReferenceKind.RESOURCE_POOL)
            query["poolId"] = resource_pool.id_str
        stage = STAGES[ReferenceKind.NETWORK]
        candidates = self._list(stage, query)
        for token in lookups:
            resolved[token] = self._match(stage, token, candidates)
        return resolved

    # -- helpers ------------------------------------------------------------

    def _resolve_stage(self, kind: ReferenceKind, token: str, query: Dict[str, str],
                       candidates_filter: Optional[Callable[[List[Candidate]], List[Candidate]]] = None,
                       hint: Optional[str] = None) -> ResolvedReference:
        stage = STAGES[kind]
        candidates = self._list(stage, query)
        if candidates_filter is not None:
            candidates = candidates_filter(candidates)
            self._logger.debug("Filtered candidates", stage=kind.value, remaining=len(candidates))
        return self._match(stage, token, candidates, hint)

    def _list(self, stage: Stage, query: Dict[str, str]) -> List[Candidate]:
        candidates = self._catalog.list_options(stage.category, query)
        self._logger.debug(
            "Fetched candidates",
            stage=stage.kind.value, category=stage.category, query=query, count=len(candidates),
        )
        return candidates

    def _match(self, stage: Stage, token: str, candidates: Sequence[Candidate],
               hint: Optional[str] = None) -> ResolvedReference:
        reference = self._matcher.resolve(
            token, candidates, stage.match_fields, stage.kind,
            reference_id=stage.reference_id, hint=hint,
        )
        self._logger.debug("Resolved", stage=stage.kind.value, token=token, id=reference.id)
        return reference
