"""Command line interface for the provisioner."""
