"""Instance provisioning use cases."""

from morpheus_provisioner.application.provisioning.assembler import PayloadAssembler
from morpheus_provisioner.application.provisioning.orchestrator import ProvisionOrchestrator

__all__ = ["PayloadAssembler", "ProvisionOrchestrator"]
