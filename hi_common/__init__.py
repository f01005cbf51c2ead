"""Shared helpers for the handover inventory."""

from hi_common.api import HandoverError, configure_logging

__all__ = ["configure_logging", "HandoverError"]
