"""Assembly of the instance creation payload from resolved references."""
from typing import Any, Dict, Optional

from morpheus_provisioner.domain.core.exceptions import ConfigurationError
from morpheus_provisioner.domain.instance.request import ProvisionRequest
from morpheus_provisioner.domain.instance.spec import InstanceSpec, InterfaceSpec, VolumeSpec
from morpheus_provisioner.domain.reference.context import ResolutionContext
from morpheus_provisioner.domain.reference.value_objects import ReferenceKind


def _drop_none(row: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in row.items() if value is not None}


class PayloadAssembler:
    """
    Fold resolved references and the user's configuration into a ProvisionRequest.

    Scalars pass through. Datastore and network names are replaced by the ids
    recorded in the context; a name without a recorded reference is rejected
    rather than sent to the API.
    """

    def assemble(self, context: ResolutionContext, spec: InstanceSpec) -> ProvisionRequest:
        group = context.require(ReferenceKind.GROUP)
        cloud = context.require(ReferenceKind.CLOUD)
        instance_type = context.require(ReferenceKind.INSTANCE_TYPE)
        layout = context.require(ReferenceKind.LAYOUT)
        plan = context.require(ReferenceKind.PLAN)

        instance: Dict[str, Any] = {
            "name": spec.name,
            "type": instance_type.code,
            "instanceType": {"code": instance_type.code},
            "site": {"id": group.id},
            "layout": layout.to_dict(),
            "plan": plan.to_dict(),
        }
        if spec.description is not None:
            instance["description"] = spec.description
        if spec.tags:
            # the API takes tags as one comma separated string
            instance["tags"] = ", ".join(spec.tags)
        if spec.user_group:
            instance["userGroup"] = {"id": spec.user_group}
        if spec.environment:
            instance["environment"] = spec.environment

        return ProvisionRequest(
            zone_id=cloud.id,
            instance=instance,
            plan=plan.to_dict(),
            config=self._config(context, spec),
            volumes=[self._volume(context, v) for v in spec.volumes] or None,
            network_interfaces=[self._interface(context, i) for i in spec.interfaces] or None,
            evars=[_drop_none(e.model_dump()) for e in spec.evars] or None,
            metadata=[m.model_dump() for m in spec.metadata] or None,
            labels=list(spec.labels) or None,
        )

    @staticmethod
    def _config(context: ResolutionContext, spec: InstanceSpec) -> Dict[str, Any]:
        config: Dict[str, Any] = dict(spec.config)
        if spec.create_user is not None:
            config["createUser"] = spec.create_user
        if spec.resource_pool:
            pool = context.resource_pool
            if pool is None:
                raise ConfigurationError(
                    f"Resource pool '{spec.resource_pool}' has not been resolved",
                    missing_fields=["resource_pool"],
                )
            # Some provisioning types read resourcePoolId and others resourcePool;
            # the API accepts either, so both are written.
            config["resourcePoolId"] = pool.id_str
            config["resourcePool"] = pool.id_str
        return config

    @staticmethod
    def _volume(context: ResolutionContext, volume: VolumeSpec) -> Dict[str, Any]:
        row = _drop_none({
            "rootVolume": volume.root,
            "name": volume.name,
            "size": volume.size,
            "sizeId": volume.size_id,
            "storageType": volume.storage_type,
            "datastoreId": volume.datastore_id,
        })
        if volume.datastore:
            datastore = context.datastore_for(volume.datastore)
            if datastore is None:
                raise ConfigurationError(
                    f"Datastore '{volume.datastore}' has not been resolved",
                    missing_fields=["datastore"],
                )
            row["datastoreId"] = datastore.id
        return row

    @staticmethod
    def _interface(context: ResolutionContext, interface: InterfaceSpec) -> Dict[str, Any]:
        network_id: Optional[Any] = interface.network_id
        if interface.network:
            network = context.network_for(interface.network)
            if network is None:
                raise ConfigurationError(
                    f"Network '{interface.network}' has not been resolved",
                    missing_fields=["network"],
                )
            network_id = network.id
        row: Dict[str, Any] = {}
        if network_id is not None:
            row["network"] = {"id": network_id}
        row.update(_drop_none({
            "ipAddress": interface.ip_address,
            "ipMode": interface.ip_mode,
            "networkInterfaceTypeId": interface.network_interface_type_id,
        }))
        return row

    @staticmethod
    def update_payload(spec: InstanceSpec) -> Dict[str, Any]:
        """Body for updating the mutable fields of an existing instance."""
        instance: Dict[str, Any] = {"name": spec.name}
        if spec.description is not None:
            instance["description"] = spec.description
        if spec.tags:
            instance["tags"] = ", ".join(spec.tags)
        if spec.labels:
            instance["labels"] = list(spec.labels)
        return {"instance": instance}
