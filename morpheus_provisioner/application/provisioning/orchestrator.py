"""Entry point for instance create, read, update and delete."""
import time
from typing import Any, Callable, Dict, Optional

from morpheus_provisioner.application.dto import InstanceState
from morpheus_provisioner.application.provisioning.assembler import PayloadAssembler
from morpheus_provisioner.application.resolution.chain import DependencyChainResolver
from morpheus_provisioner.config.schemas.provisioning_schema import ProvisioningConfig
from morpheus_provisioner.domain.base.ports.catalog_port import CatalogPort
from morpheus_provisioner.domain.core.exceptions import (
    AmbiguityError,
    ConfigurationError,
    DomainException,
    ProvisioningTimeoutError,
    UnexpectedStatusError,
)
from morpheus_provisioner.domain.instance.spec import InstanceSpec
from morpheus_provisioner.infrastructure.exceptions import (
    InfrastructureError,
    ResourceNotFoundError,
    ResponseDecodeError,
)
from morpheus_provisioner.infrastructure.logging.logger import get_logger


class ProvisionOrchestrator:
    """
    Drive the resolution chain, assemble the payload and submit it.

    A failure in any stage stops the call before the creation request is
    sent, and the error reaches the caller unchanged.
    """

    def __init__(self,
                 catalog: CatalogPort,
                 config: Optional[ProvisioningConfig] = None,
                 chain_resolver: Optional[DependencyChainResolver] = None,
                 assembler: Optional[PayloadAssembler] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        self._catalog = catalog
        self._config = config or ProvisioningConfig()
        self._chain = chain_resolver or DependencyChainResolver(catalog)
        self._assembler = assembler or PayloadAssembler()
        self._sleep = sleep
        self._clock = clock
        self._logger = get_logger(__name__)

    def create(self, spec: InstanceSpec) -> InstanceState:
        """Provision a new instance and return its state."""
        try:
            context = self._chain.resolve(spec)
            request = self._assembler.assemble(context, spec)
        except (DomainException, InfrastructureError) as e:
            self._logger.error("Instance resolution failed", instance=spec.name, error=str(e))
            raise

        payload = request.to_dict()
        self._logger.debug("Submitting instance creation", payload=payload)
        try:
            created = self._catalog.create_instance(payload)
        except InfrastructureError as e:
            self._logger.error("Instance creation failed", instance=spec.name, error=str(e))
            raise

        instance_id = created.get("id") if isinstance(created, dict) else None
        if instance_id is None:
            raise ResponseDecodeError(
                "Instance creation response did not include an id",
                method="POST", url="/api/instances", details=created,
            )
        self._logger.info("Instance created", instance=spec.name, instance_id=instance_id)

        try:
            if self._config.wait_for_status:
                return InstanceState.from_api(self.wait_for_status(instance_id))
            return InstanceState.from_api(self._catalog.get("instance", instance_id))
        except InfrastructureError as e:
            # the instance exists; hand back what the create call returned
            self._logger.warning("Could not read back created instance",
                                 instance_id=instance_id, error=str(e))
            return InstanceState.from_api(created)

    def wait_for_status(self, instance_id: Any) -> Dict[str, Any]:
        """
        Poll an instance until it leaves the pending statuses.

        Raises:
            ProvisioningTimeoutError: If the instance is still pending after
                ``status_timeout_seconds``
            UnexpectedStatusError: If the instance reports a status that is
                neither pending nor a target
        """
        deadline = self._clock() + self._config.status_timeout_seconds
        status: Optional[str] = None
        while True:
            instance = self._catalog.get("instance", instance_id)
            status = instance.get("status")
            self._logger.debug("Instance status", instance_id=instance_id, status=status)
            if status in self._config.target_statuses:
                return instance
            if status not in self._config.pending_statuses:
                self._logger.error("Unexpected instance status", instance_id=instance_id, status=status)
                raise UnexpectedStatusError(str(instance_id), status)
            if self._clock() >= deadline:
                raise ProvisioningTimeoutError(str(instance_id), status, self._config.status_timeout_seconds)
            self._sleep(self._config.status_poll_interval_seconds)

    def read(self, instance_id: Optional[Any] = None, name: Optional[str] = None) -> Optional[InstanceState]:
        """
        Read an instance by id, or by name when no id is known yet.

        Returns None when the instance no longer exists.
        """
        if instance_id:
            try:
                return InstanceState.from_api(self._catalog.get("instance", instance_id))
            except ResourceNotFoundError:
                self._logger.info("Instance not found", instance_id=instance_id)
                return None
        if name:
            instances = [i for i in self._catalog.list_objects("instance", {"name": name})
                         if i.get("name") == name]
            if not instances:
                self._logger.info("Instance not found", instance=name)
                return None
            if len(instances) > 1:
                raise AmbiguityError("Instance", name, len(instances))
            return InstanceState.from_api(instances[0])
        raise ConfigurationError("Instance cannot be read without name or id", missing_fields=["id", "name"])

    def update(self, instance_id: Any, spec: InstanceSpec) -> InstanceState:
        """Update the name, description, tags and labels of an instance."""
        payload = self._assembler.update_payload(spec)
        self._logger.debug("Submitting instance update", instance_id=instance_id, payload=payload)
        updated = self._catalog.update_instance(instance_id, payload)
        return InstanceState.from_api(updated)

    def delete(self, instance_id: Any, force: Optional[bool] = None) -> None:
        """Delete an instance; an instance that is already gone counts as deleted."""
        force = self._config.force_delete if force is None else force
        try:
            self._catalog.delete_instance(instance_id, force=force)
        except ResourceNotFoundError:
            self._logger.info("Instance already deleted", instance_id=instance_id)
            return
        self._logger.info("Instance deleted", instance_id=instance_id, force=force)
