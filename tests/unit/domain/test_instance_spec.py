"""Tests for the instance configuration model and provision request."""

import pytest

from morpheus_provisioner.domain.core.exceptions import ValidationError
from morpheus_provisioner.domain.instance.request import ProvisionRequest
from morpheus_provisioner.domain.instance.spec import InstanceSpec


class TestInstanceSpec:
    """Test InstanceSpec validation."""

    def test_from_dict(self, instance_config):
        spec = InstanceSpec.from_dict(instance_config)

        assert spec.name == "web01"
        assert spec.volumes[0].datastore == "Datastore-A"
        assert spec.interfaces[0].ip_mode == "dhcp"

    def test_blank_name_rejected(self, instance_config):
        instance_config["name"] = "  "

        with pytest.raises(ValidationError, match="name"):
            InstanceSpec.from_dict(instance_config)

    def test_unknown_field_rejected(self, instance_config):
        instance_config["flavour"] = "large"

        with pytest.raises(ValidationError) as exc_info:
            InstanceSpec.from_dict(instance_config)

        assert "flavour" in str(exc_info.value)
        assert exc_info.value.details

    def test_tokens_are_deduplicated_in_order(self, instance_config):
        instance_config["volumes"] = [
            {"datastore": "B"}, {"datastore": "A"}, {"datastore": "B"}, {"size": 10},
        ]
        instance_config["interfaces"] = [
            {"network": "VM Network"}, {"network_id": "network-1"}, {"network": "VM Network"},
        ]
        spec = InstanceSpec.from_dict(instance_config)

        assert spec.datastore_tokens() == ["B", "A"]
        assert spec.network_tokens() == ["VM Network"]

    def test_optional_tokens_default_to_none(self):
        spec = InstanceSpec.from_dict({"name": "web01"})

        assert spec.group is None
        assert spec.tags == []
        assert spec.datastore_tokens() == []


class TestProvisionRequest:
    """Test ProvisionRequest validation and serialization."""

    def setup_method(self):
        """Set up test fixtures."""
        self.instance = {
            "name": "web01",
            "site": {"id": 1},
            "layout": {"id": 100},
            "plan": {"id": 300},
        }

    def test_to_dict_omits_empty_sections(self):
        request = ProvisionRequest(zone_id=3, instance=self.instance, plan={"id": 300})

        assert request.to_dict() == {
            "zoneId": 3,
            "instance": self.instance,
            "plan": {"id": 300},
            "config": {},
        }

    def test_to_dict_includes_sections(self):
        request = ProvisionRequest(
            zone_id=3, instance=self.instance, plan={"id": 300},
            volumes=[{"datastoreId": 51}], network_interfaces=[{"network": {"id": "network-7"}}],
            labels=["blue"],
        )

        payload = request.to_dict()

        assert payload["volumes"] == [{"datastoreId": 51}]
        assert payload["networkInterfaces"] == [{"network": {"id": "network-7"}}]
        assert payload["labels"] == ["blue"]
        assert "evars" not in payload

    def test_zone_required(self):
        with pytest.raises(ValidationError):
            ProvisionRequest(zone_id=None, instance=self.instance, plan={"id": 300})

    @pytest.mark.parametrize("key", ["site", "layout", "plan"])
    def test_instance_references_required(self, key):
        self.instance.pop(key)

        with pytest.raises(ValidationError, match=key):
            ProvisionRequest(zone_id=3, instance=self.instance, plan={"id": 300})
