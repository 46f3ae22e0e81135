"""Operational helpers."""

from colorpredict.ops.logging import configure_logging

__all__ = ["configure_logging"]
