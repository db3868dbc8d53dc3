"""Package metadata and naming constants."""

PACKAGE_NAME = "morpheus-instance-provisioner"
PACKAGE_NAME_SHORT = "morpheus-provisioner"
__version__ = "0.1.0"
VERSION = __version__
DESCRIPTION = "Name-or-id resolution and instance provisioning for the Morpheus API"
