"""Shared helpers for linux-workload-monitor."""

from lwm_common.api import LWMError, configure_logging

__all__ = ["LWMError", "configure_logging"]
