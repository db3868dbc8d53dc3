"""Routing tables from catalog categories and object kinds to API endpoints."""
from dataclasses import dataclass
from typing import Dict, Tuple

# option categories used by the provisioning chain
GROUPS = "groups"
CLOUDS = "clouds"
INSTANCE_TYPES = "instanceTypes"
LAYOUTS_FOR_CLOUD = "layoutsForCloud"
SERVICE_PLANS = "servicePlans"
ZONE_POOLS = "zonePools"
DATASTORES = "datastores"
ZONE_NETWORK_OPTIONS = "zoneNetworkOptions"


@dataclass(frozen=True)
class OptionEndpoint:
    """Where a category is listed and the key path of its rows in the response."""
    path: str
    rows: Tuple[str, ...] = ("data",)


# categories not listed here are served by /api/options/{category}
OPTION_ENDPOINTS: Dict[str, OptionEndpoint] = {
    SERVICE_PLANS: OptionEndpoint("/api/instances/service-plans", ("plans",)),
    ZONE_NETWORK_OPTIONS: OptionEndpoint("/api/options/zoneNetworkOptions", ("data", "networks")),
}


@dataclass(frozen=True)
class ObjectEndpoint:
    """Collection path plus the envelope keys for one object and for a list."""
    path: str
    item_key: str
    list_key: str


OBJECT_ENDPOINTS: Dict[str, ObjectEndpoint] = {
    "instance": ObjectEndpoint("/api/instances", "instance", "instances"),
    "group": ObjectEndpoint("/api/groups", "group", "groups"),
    "cloud": ObjectEndpoint("/api/zones", "zone", "zones"),
    "plan": ObjectEndpoint("/api/service-plans", "servicePlan", "servicePlans"),
    "instanceType": ObjectEndpoint("/api/library/instance-types", "instanceType", "instanceTypes"),
    "layout": ObjectEndpoint("/api/library/layouts", "instanceTypeLayout", "instanceTypeLayouts"),
}


def option_endpoint(category: str) -> OptionEndpoint:
    return OPTION_ENDPOINTS.get(category, OptionEndpoint(f"/api/options/{category}"))


def object_endpoint(kind: str) -> ObjectEndpoint:
    try:
        return OBJECT_ENDPOINTS[kind]
    except KeyError:
        raise ValueError(f"Unsupported object kind: {kind}") from None
