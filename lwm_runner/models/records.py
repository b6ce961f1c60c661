"""Run log records and their on-disk line format."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

UNAVAILABLE = "NA"
FIELD_SEPARATOR = ", "
SAMPLE_FIELDS = (
    "timestamp",
    "cpu_percent",
    "mem_used_mb",
    "gpu_util_percent",
    "vram_used_mb",
)
HEADER_LINE = FIELD_SEPARATOR.join(SAMPLE_FIELDS)
SUMMARY_PREFIX = "# "

_SUMMARY_RE = re.compile(
    r"^# exit_status=(?P<exit_status>-?\d+), "
    r"duration_s=(?P<duration>\d+), "
    r"duration_hms=(?P<hms>\d{2,}:\d{2}:\d{2})$"
)


def _format_float(value: Optional[float]) -> str:
    return UNAVAILABLE if value is None else f"{value:.1f}"


def _format_int(value: Optional[int]) -> str:
    return UNAVAILABLE if value is None else str(int(value))


def _parse_float(token: str) -> Optional[float]:
    return None if token == UNAVAILABLE else float(token)


def _parse_int(token: str) -> Optional[int]:
    return None if token == UNAVAILABLE else int(token)


def format_hms(seconds: int) -> str:
    """Format a duration as zero-padded HH:MM:SS (hours do not wrap)."""
    return f"{seconds // 3600:02d}:{seconds % 3600 // 60:02d}:{seconds % 60:02d}"


@dataclass(frozen=True)
class Sample:
    """One row of host resource usage. ``None`` marks an unavailable reading."""

    timestamp: int
    cpu_percent: Optional[float] = None
    mem_used_mb: Optional[int] = None
    gpu_util_percent: Optional[float] = None
    vram_used_mb: Optional[int] = None

    def to_line(self) -> str:
        return FIELD_SEPARATOR.join(
            (
                str(int(self.timestamp)),
                _format_float(self.cpu_percent),
                _format_int(self.mem_used_mb),
                _format_float(self.gpu_util_percent),
                _format_int(self.vram_used_mb),
            )
        )

    @classmethod
    def from_line(cls, line: str) -> "Sample":
        tokens = [token.strip() for token in line.strip().split(",")]
        if len(tokens) != len(SAMPLE_FIELDS):
            raise ValueError(f"expected {len(SAMPLE_FIELDS)} columns, got {len(tokens)}: {line!r}")
        timestamp, cpu, mem, gpu, vram = tokens
        return cls(
            timestamp=int(timestamp),
            cpu_percent=_parse_float(cpu),
            mem_used_mb=_parse_int(mem),
            gpu_util_percent=_parse_float(gpu),
            vram_used_mb=_parse_int(vram),
        )


@dataclass(frozen=True)
class RunSummary:
    """Closing record: how the workload ended and how long the run took."""

    exit_status: int
    duration_seconds: int
    duration_hms: str = field(default="")

    def __post_init__(self) -> None:
        if not self.duration_hms:
            object.__setattr__(self, "duration_hms", format_hms(self.duration_seconds))

    def to_line(self) -> str:
        return (
            f"{SUMMARY_PREFIX}exit_status={self.exit_status}, "
            f"duration_s={self.duration_seconds}, "
            f"duration_hms={self.duration_hms}"
        )

    @classmethod
    def from_line(cls, line: str) -> "RunSummary":
        match = _SUMMARY_RE.match(line.strip())
        if match is None:
            raise ValueError(f"not a summary line: {line!r}")
        return cls(
            exit_status=int(match["exit_status"]),
            duration_seconds=int(match["duration"]),
            duration_hms=match["hms"],
        )
