"""Append-only run log: header, one line per sample, closing summary."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Optional

import pandas as pd

from lwm_common.errors import ConfigurationError
from lwm_runner.models.records import (
    HEADER_LINE,
    SAMPLE_FIELDS,
    SUMMARY_PREFIX,
    RunSummary,
    Sample,
)


logger = logging.getLogger(__name__)


class RunLogger:
    """Single writer for a run log file.

    Every line is written and flushed on its own so an external ``tail -f``
    never sees a partial row.
    """

    def __init__(self) -> None:
        self.path: Optional[Path] = None
        self.created = False
        self._fh: Optional[IO[str]] = None

    def open(self, path: Path) -> "RunLogger":
        """Create ``path`` with a header, or continue appending to it."""
        path = Path(path)
        if not path.parent.is_dir():
            raise ConfigurationError(
                f"Output directory does not exist: {path.parent}",
                context={"path": path},
            )
        if self._fh is not None:
            self.close()
        self.path = path
        self.created = not path.exists()
        self._fh = path.open("a", encoding="utf-8")
        if self.created:
            self._write(HEADER_LINE)
            logger.info("Created new log file: %s", path)
        else:
            logger.info("Appending to existing log file: %s", path)
        return self

    def append_sample(self, sample: Sample) -> None:
        self._write(sample.to_line())

    def append_summary(self, summary: RunSummary) -> None:
        self._write(summary.to_line())

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None

    def _write(self, line: str) -> None:
        if self._fh is None:
            raise RuntimeError("RunLogger.open() must be called before writing")
        self._fh.write(line + "\n")
        self._fh.flush()

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, *_args) -> None:
        self.close()


def parse_sample_line(line: str) -> Sample:
    return Sample.from_line(line)


def parse_summary_line(line: str) -> RunSummary:
    return RunSummary.from_line(line)


def iter_run_log(path: Path) -> tuple[list[Sample], list[RunSummary]]:
    """Read every sample and summary row back from a run log.

    A log that was appended to across several runs holds several summaries.
    """
    samples: list[Sample] = []
    summaries: list[RunSummary] = []
    with Path(path).open(encoding="utf-8") as fh:
        for raw in fh:
            line = raw.rstrip("\n")
            if not line.strip() or line == HEADER_LINE:
                continue
            if line.startswith(SUMMARY_PREFIX):
                summaries.append(parse_summary_line(line))
            else:
                samples.append(parse_sample_line(line))
    return samples, summaries


def read_run_log(path: Path) -> pd.DataFrame:
    """
    Load the sample rows of a run log as a DataFrame indexed by timestamp.

    ``NA`` cells become missing values; summary rows are skipped.
    """
    samples, _ = iter_run_log(path)
    if not samples:
        return pd.DataFrame(columns=list(SAMPLE_FIELDS)).set_index("timestamp")
    df = pd.DataFrame(
        [{name: getattr(sample, name) for name in SAMPLE_FIELDS} for sample in samples]
    )
    df = df.astype(
        {
            "cpu_percent": "float64",
            "mem_used_mb": "Int64",
            "gpu_util_percent": "float64",
            "vram_used_mb": "Int64",
        }
    )
    df.set_index("timestamp", inplace=True)
    return df
