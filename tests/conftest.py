from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import Mock

import pytest

from morpheus_provisioner.domain.base.ports.catalog_port import CatalogPort
from morpheus_provisioner.domain.instance.spec import InstanceSpec
from morpheus_provisioner.domain.reference.value_objects import Candidate


class FakeCatalog(CatalogPort):
    """In-memory catalog serving canned option rows and recording every call."""

    def __init__(self, options: Dict[str, List[Dict[str, Any]]]):
        self.options = options
        self.calls: List[Tuple[str, Dict[str, str]]] = []
        self.created: List[Dict[str, Any]] = []
        self.instances: Dict[Any, Dict[str, Any]] = {}

    def list_options(self, category: str, query: Optional[Dict[str, str]] = None) -> List[Candidate]:
        self.calls.append((category, dict(query or {})))
        return [Candidate.from_api(row) for row in self.options.get(category, [])]

    def get(self, kind: str, object_id: Any) -> Dict[str, Any]:
        return self.instances[object_id]

    def list_objects(self, kind: str, query: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
        return list(self.instances.values())

    def create_instance(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.created.append(payload)
        instance = {"id": 900 + len(self.created), "name": payload["instance"]["name"],
                    "status": "provisioning"}
        self.instances[instance["id"]] = instance
        return instance

    def update_instance(self, instance_id: Any, payload: Dict[str, Any]) -> Dict[str, Any]:
        self.instances[instance_id].update(payload["instance"])
        return self.instances[instance_id]

    def delete_instance(self, instance_id: Any, force: bool = False) -> None:
        self.instances.pop(instance_id)

    @property
    def categories(self) -> List[str]:
        return [category for category, _ in self.calls]


CATALOG_OPTIONS = {
    "groups": [
        {"name": "dev", "value": 1},
        {"name": "prod-apps", "value": 2},
    ],
    "clouds": [
        {"name": "vcenter-prod", "value": 3},
    ],
    "instanceTypes": [
        {"id": 10, "name": "Ubuntu", "code": "ubuntu"},
        {"id": 11, "name": "CentOS", "code": "centos"},
    ],
    "layoutsForCloud": [
        {"id": 100, "name": "VMware Ubuntu", "code": "vmware-ubuntu-20.04", "version": "20.04"},
        {"id": 101, "name": "VMware Ubuntu", "code": "vmware-ubuntu-22.04", "version": "22.04"},
    ],
    "servicePlans": [
        {"id": 300, "name": "1 CPU, 4GB Memory", "code": "vm-4096"},
        {"id": 301, "name": "2 CPU, 8GB Memory", "code": "vm-8192"},
    ],
    "zonePools": [
        {"name": "prod", "value": 205.0, "externalId": "resgroup-205"},
        {"name": "test", "value": 206.0, "externalId": "resgroup-206"},
    ],
    "datastores": [
        {"name": "Datastore-A - 1.2TB Free", "value": 51},
        {"name": "Datastore-A2 - 900GB Free", "value": 52},
    ],
    "zoneNetworkOptions": [
        {"id": "network-7", "name": "VM Network"},
        {"id": "network-8", "name": "Backup Network"},
    ],
}


@pytest.fixture
def catalog_options() -> Dict[str, List[Dict[str, Any]]]:
    return {category: [dict(row) for row in rows] for category, rows in CATALOG_OPTIONS.items()}


@pytest.fixture
def fake_catalog(catalog_options) -> FakeCatalog:
    return FakeCatalog(catalog_options)


@pytest.fixture
def mock_catalog() -> Mock:
    return Mock(spec=CatalogPort)


@pytest.fixture
def make_candidate():
    """Factory for Candidate objects built the way the client builds them."""
    def _make(**row: Any) -> Candidate:
        if "external_id" in row:
            row["externalId"] = row.pop("external_id")
        return Candidate.from_api(row)
    return _make


@pytest.fixture
def instance_config() -> Dict[str, Any]:
    return {
        "name": "web01",
        "description": "web server",
        "group": "dev",
        "cloud": "vcenter-prod",
        "type": "ubuntu",
        "version": "20.04",
        "layout": "VMware Ubuntu",
        "plan": "vm-4096",
        "resource_pool": "prod",
        "environment": "dev",
        "tags": ["web", "frontend"],
        "labels": ["blue"],
        "volumes": [
            {"root": True, "name": "root", "size": 20, "datastore": "Datastore-A"},
        ],
        "interfaces": [
            {"network": "VM Network", "ip_mode": "dhcp"},
        ],
    }


@pytest.fixture
def instance_spec(instance_config) -> InstanceSpec:
    return InstanceSpec.from_dict(instance_config)
