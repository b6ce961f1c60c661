"""Public API surface for lwm_common."""

from lwm_common.errors import (
    ConfigurationError,
    EnforcementUnavailableError,
    LWMError,
    MissingDependencyError,
    SensorUnavailableError,
    WorkloadError,
    error_to_payload,
    wrap_error,
)
from lwm_common.logging import configure_logging, resolve_level

__all__ = [
    "ConfigurationError",
    "EnforcementUnavailableError",
    "LWMError",
    "MissingDependencyError",
    "SensorUnavailableError",
    "WorkloadError",
    "configure_logging",
    "error_to_payload",
    "resolve_level",
    "wrap_error",
]
