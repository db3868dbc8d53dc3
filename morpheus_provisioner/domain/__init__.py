"""Domain layer: references, instance configuration and ports."""
