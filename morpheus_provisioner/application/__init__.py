"""Application layer: resolution chain and provisioning use cases."""
