"""Tests for run log line formatting and parsing."""

import pytest

from lwm_runner.models.records import HEADER_LINE, RunSummary, Sample, format_hms

pytestmark = pytest.mark.unit_runner


def test_header_line_is_bit_exact():
    assert HEADER_LINE == "timestamp, cpu_percent, mem_used_mb, gpu_util_percent, vram_used_mb"


def test_sample_line_formats_one_decimal_and_na():
    sample = Sample(timestamp=1700000000, cpu_percent=37.25, mem_used_mb=2048)
    assert sample.to_line() == "1700000000, 37.2, 2048, NA, NA"


def test_sample_line_parses_back_by_position():
    sample = Sample(
        timestamp=1700000001,
        cpu_percent=99.5,
        mem_used_mb=15000,
        gpu_util_percent=42.0,
        vram_used_mb=812,
    )
    assert Sample.from_line(sample.to_line()) == sample


def test_unavailable_cpu_survives_parse():
    parsed = Sample.from_line("1700000002, NA, 1024, NA, NA")
    assert parsed.cpu_percent is None
    assert parsed.mem_used_mb == 1024
    assert parsed.gpu_util_percent is None


def test_sample_rejects_wrong_column_count():
    with pytest.raises(ValueError):
        Sample.from_line("1700000000, 1.0, 2")


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [(0, "00:00:00"), (3, "00:00:03"), (3725, "01:02:05"), (90000, "25:00:00")],
)
def test_format_hms(seconds, expected):
    assert format_hms(seconds) == expected


def test_summary_line_format_and_parse():
    summary = RunSummary(exit_status=0, duration_seconds=3)
    line = summary.to_line()
    assert line == "# exit_status=0, duration_s=3, duration_hms=00:00:03"
    assert RunSummary.from_line(line) == summary


def test_summary_parse_rejects_sample_rows():
    with pytest.raises(ValueError):
        RunSummary.from_line("1700000000, 1.0, 2, NA, NA")
