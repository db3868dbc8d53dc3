"""Infrastructure layer: catalog adapter, logging and errors."""
