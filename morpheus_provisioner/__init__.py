"""Morpheus Instance Provisioner - Root Package.

Turns human-friendly names in an instance configuration into the numeric
ids and codes the Morpheus API expects, then provisions the instance.

Key Components:
    - application: name-or-id resolution, dependency chain and payload assembly
    - domain: reference and instance value objects, the catalog port
    - infrastructure: Morpheus HTTP client and logging
    - config: configuration schemas and manager
    - cli: command line entry point
"""

from ._package import PACKAGE_NAME, __version__

__package_name__ = PACKAGE_NAME
