"""Domain port for the remote catalog/management service."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from morpheus_provisioner.domain.reference.value_objects import Candidate


class CatalogPort(ABC):
    """Domain port for catalog lookups and instance lifecycle calls."""

    @abstractmethod
    def list_options(self, category: str, query: Optional[Mapping[str, str]] = None) -> List[Candidate]:
        """List the candidates of an option category, filtered by ``query``."""

    @abstractmethod
    def get(self, kind: str, object_id: Any) -> Dict[str, Any]:
        """Fetch one object of ``kind`` by id."""

    @abstractmethod
    def list_objects(self, kind: str, query: Optional[Mapping[str, str]] = None) -> List[Dict[str, Any]]:
        """List objects of ``kind`` filtered by ``query`` (e.g. ``{"name": ...}``)."""

    @abstractmethod
    def create_instance(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Submit an instance creation request and return the created instance."""

    @abstractmethod
    def update_instance(self, instance_id: Any, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Update an instance and return it."""

    @abstractmethod
    def delete_instance(self, instance_id: Any, force: bool = False) -> None:
        """Delete an instance."""
