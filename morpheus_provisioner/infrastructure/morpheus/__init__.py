"""Morpheus API adapter."""

from .client import MorpheusClient

__all__ = ["MorpheusClient"]
