"""Unit tests for PayloadAssembler."""

import pytest

from morpheus_provisioner.application.provisioning.assembler import PayloadAssembler
from morpheus_provisioner.domain.core.exceptions import ConfigurationError
from morpheus_provisioner.domain.instance.spec import InstanceSpec
from morpheus_provisioner.domain.reference.context import ResolutionContext
from morpheus_provisioner.domain.reference.value_objects import ReferenceKind, ResolvedReference


def build_context(pool=True):
    context = ResolutionContext()
    context.record(ResolvedReference(ReferenceKind.GROUP, id=1, name="dev"))
    context.record(ResolvedReference(ReferenceKind.CLOUD, id=3, name="vcenter-prod"))
    context.record(ResolvedReference(ReferenceKind.INSTANCE_TYPE, id=10, code="ubuntu", name="Ubuntu"))
    context.record(ResolvedReference(ReferenceKind.LAYOUT, id=100, code="vmware-ubuntu-20.04",
                                     name="VMware Ubuntu"))
    context.record(ResolvedReference(ReferenceKind.PLAN, id=300, code="vm-4096", name="1 CPU, 4GB Memory"))
    if pool:
        context.record(ResolvedReference(ReferenceKind.RESOURCE_POOL, id=205, name="prod"))
    context.record(ResolvedReference(ReferenceKind.DATASTORE, id=51, name="Datastore-A - 1.2TB Free"),
                   "Datastore-A")
    context.record(ResolvedReference(ReferenceKind.NETWORK, id="network-7", name="VM Network"),
                   "VM Network")
    return context


@pytest.mark.unit
class TestPayloadAssembler:
    """Test cases for payload assembly."""

    def setup_method(self):
        """Set up test fixtures."""
        self.assembler = PayloadAssembler()
        self.context = build_context()

    def test_instance_section(self, instance_spec):
        payload = self.assembler.assemble(self.context, instance_spec).to_dict()

        assert payload["zoneId"] == 3
        instance = payload["instance"]
        assert instance["name"] == "web01"
        assert instance["description"] == "web server"
        assert instance["type"] == "ubuntu"
        assert instance["instanceType"] == {"code": "ubuntu"}
        assert instance["site"] == {"id": 1}
        assert instance["layout"] == {"id": 100, "code": "vmware-ubuntu-20.04", "name": "VMware Ubuntu"}
        assert instance["plan"]["id"] == 300
        assert instance["environment"] == "dev"
        assert payload["plan"] == {"id": 300, "code": "vm-4096", "name": "1 CPU, 4GB Memory"}

    def test_tags_joined_as_one_string(self, instance_spec):
        payload = self.assembler.assemble(self.context, instance_spec).to_dict()

        assert payload["instance"]["tags"] == "web, frontend"
        assert payload["labels"] == ["blue"]

    def test_resource_pool_written_to_both_keys(self, instance_spec):
        payload = self.assembler.assemble(self.context, instance_spec).to_dict()

        assert payload["config"]["resourcePoolId"] == "205"
        assert payload["config"]["resourcePool"] == "205"

    def test_datastore_name_swapped_for_id(self, instance_spec):
        payload = self.assembler.assemble(self.context, instance_spec).to_dict()

        assert payload["volumes"] == [
            {"rootVolume": True, "name": "root", "size": 20, "datastoreId": 51},
        ]

    def test_network_name_swapped_for_id(self, instance_spec):
        payload = self.assembler.assemble(self.context, instance_spec).to_dict()

        assert payload["networkInterfaces"] == [
            {"network": {"id": "network-7"}, "ipMode": "dhcp"},
        ]

    def test_user_config_passes_through(self, instance_config):
        instance_config["config"] = {"customOption": "x"}
        instance_config["create_user"] = True
        spec = InstanceSpec.from_dict(instance_config)

        config = self.assembler.assemble(self.context, spec).config

        assert config["customOption"] == "x"
        assert config["createUser"] is True

    def test_optional_sections_omitted(self, instance_config):
        for key in ("resource_pool", "volumes", "interfaces", "labels", "tags"):
            instance_config.pop(key)
        spec = InstanceSpec.from_dict(instance_config)

        payload = self.assembler.assemble(build_context(pool=False), spec).to_dict()

        assert set(payload) == {"zoneId", "instance", "plan", "config"}
        assert "tags" not in payload["instance"]
        assert payload["config"] == {}

    def test_evars_and_metadata(self, instance_config):
        instance_config["evars"] = [{"name": "APP_ENV", "value": "prod", "export": True}]
        instance_config["metadata"] = [{"name": "owner", "value": "ops"}]
        spec = InstanceSpec.from_dict(instance_config)

        payload = self.assembler.assemble(self.context, spec).to_dict()

        assert payload["evars"] == [{"name": "APP_ENV", "value": "prod", "export": True}]
        assert payload["metadata"] == [{"name": "owner", "value": "ops"}]

    def test_unresolved_datastore_rejected(self, instance_config):
        instance_config["volumes"] = [{"name": "data", "size": 100, "datastore": "Datastore-Z"}]
        spec = InstanceSpec.from_dict(instance_config)

        with pytest.raises(ConfigurationError, match="Datastore-Z"):
            self.assembler.assemble(self.context, spec)

    def test_unresolved_network_rejected(self, instance_config):
        instance_config["interfaces"] = [{"network": "DMZ"}]
        spec = InstanceSpec.from_dict(instance_config)

        with pytest.raises(ConfigurationError, match="DMZ"):
            self.assembler.assemble(self.context, spec)

    def test_unresolved_pool_rejected(self, instance_spec):
        with pytest.raises(ConfigurationError, match="prod"):
            self.assembler.assemble(build_context(pool=False), instance_spec)

    def test_explicit_ids_pass_through(self, instance_config):
        instance_config["volumes"] = [{"name": "data", "size": 100, "datastore_id": 77, "storage_type": 1}]
        instance_config["interfaces"] = [{"network_id": "network-99", "network_interface_type_id": 4}]
        spec = InstanceSpec.from_dict(instance_config)

        payload = self.assembler.assemble(self.context, spec).to_dict()

        assert payload["volumes"] == [{"name": "data", "size": 100, "storageType": 1, "datastoreId": 77}]
        assert payload["networkInterfaces"] == [
            {"network": {"id": "network-99"}, "networkInterfaceTypeId": 4},
        ]

    def test_update_payload(self, instance_spec):
        assert PayloadAssembler.update_payload(instance_spec) == {
            "instance": {
                "name": "web01",
                "description": "web server",
                "tags": "web, frontend",
                "labels": ["blue"],
            }
        }
