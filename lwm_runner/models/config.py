"""Monitor configuration (built once at startup, shared read-only)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from lwm_common.errors import ConfigurationError

DEFAULT_INTERVAL_SECONDS = 30.0
DEFAULT_OUTPUT_PATH = Path("monitor.log")


class StressNGConfig(BaseModel):
    """Default synthetic CPU stress workload."""

    model_config = ConfigDict(frozen=True)

    cpu_workers: int = Field(default=8, gt=0, description="Parallel CPU stressors")
    timeout: int = Field(default=60, gt=0, description="Timeout in seconds")

    def build_argv(self) -> list[str]:
        return ["stress-ng", "--cpu", str(self.cpu_workers), "--timeout", f"{self.timeout}s"]


class MonitorConfig(BaseModel):
    """Immutable configuration for a single monitoring run."""

    model_config = ConfigDict(frozen=True)

    interval_seconds: float = Field(
        default=DEFAULT_INTERVAL_SECONDS, ge=1, description="Sampling interval in whole seconds"
    )
    output_path: Path = Field(
        default=DEFAULT_OUTPUT_PATH, description="Run log written by the monitor"
    )
    command: Optional[str] = Field(
        default=None, description="Shell command to monitor; stress-ng when unset"
    )
    timeout_seconds: int = Field(
        default=0, ge=0, description="Kill the workload after N seconds (0 disables)"
    )
    verbose: bool = Field(default=False, description="Show informational messages")
    quiet: bool = Field(default=False, description="Hide informational messages")
    backend: Literal["cli", "psutil"] = Field(
        default="cli", description="Host metric backend"
    )
    default_workload: StressNGConfig = Field(default_factory=StressNGConfig)

    @field_validator("command")
    @classmethod
    def _blank_command_is_default(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value

    @field_validator("output_path")
    @classmethod
    def _parent_dir_exists(cls, value: Path) -> Path:
        parent = value.expanduser().parent
        if not parent.is_dir():
            raise ValueError(f"output directory does not exist: {parent}")
        return value.expanduser()


def load_config(**values: Any) -> MonitorConfig:
    """Build a MonitorConfig, mapping validation failures to ConfigurationError."""
    cleaned = {key: val for key, val in values.items() if val is not None}
    try:
        return MonitorConfig(**cleaned)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(
            f"Invalid monitor configuration: {problems}",
            context={"values": cleaned},
            cause=exc,
        ) from exc
