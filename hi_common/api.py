"""Public API surface for hi_common."""

from hi_common.errors import (
    ArchiveError,
    ConfigurationError,
    DeliveryError,
    HandoverError,
    PrivilegeError,
    ProbeError,
    ReportError,
    error_to_payload,
    wrap_error,
)
from hi_common.logging import configure_logging

__all__ = [
    "ArchiveError",
    "ConfigurationError",
    "DeliveryError",
    "HandoverError",
    "PrivilegeError",
    "ProbeError",
    "ReportError",
    "configure_logging",
    "error_to_payload",
    "wrap_error",
]
