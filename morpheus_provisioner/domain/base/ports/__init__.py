"""Domain ports implemented by infrastructure adapters."""

from morpheus_provisioner.domain.base.ports.catalog_port import CatalogPort

__all__ = ["CatalogPort"]
