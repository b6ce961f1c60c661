"""Tests for the sampling loop cadence and termination behaviour."""

import pytest

from lwm_runner.engine.sampler import Sampler
from lwm_runner.engine.supervisor import WorkloadSupervisor
from lwm_runner.models.config import MonitorConfig
from lwm_runner.models.records import HEADER_LINE, Sample
from lwm_runner.services.run_log import RunLogger, iter_run_log
from tests.helpers.fakes import FakeSource

pytestmark = pytest.mark.unit_runner


class ScriptedHandle:
    """Handle that stays alive for a fixed number of liveness checks."""

    def __init__(self, alive_checks):
        self.remaining = alive_checks
        self.joins = []

    def is_alive(self):
        alive = self.remaining > 0
        self.remaining -= 1
        return alive

    def join(self, timeout):
        self.joins.append(timeout)
        return self.remaining <= 0


def test_one_sample_per_live_tick(tmp_path, fake_source):
    handle = ScriptedHandle(alive_checks=3)
    with RunLogger().open(tmp_path / "m.log") as run_log:
        count = Sampler(fake_source, run_log).run(handle, interval_seconds=1)
    assert count == 3
    samples, summaries = iter_run_log(tmp_path / "m.log")
    assert len(samples) == 3
    assert summaries == []
    assert len(handle.joins) == 3


def test_no_sample_after_termination_observed(tmp_path, fake_source):
    handle = ScriptedHandle(alive_checks=0)
    with RunLogger().open(tmp_path / "m.log") as run_log:
        count = Sampler(fake_source, run_log).run(handle, interval_seconds=1)
    assert count == 0
    assert fake_source.calls == 0
    assert (tmp_path / "m.log").read_text() == HEADER_LINE + "\n"


def test_wait_accounts_for_time_spent_sampling(tmp_path, fake_source):
    ticks = iter([100.0, 100.4, 101.0, 101.9])
    handle = ScriptedHandle(alive_checks=2)
    with RunLogger().open(tmp_path / "m.log") as run_log:
        sampler = Sampler(fake_source, run_log, monotonic=lambda: next(ticks))
        sampler.run(handle, interval_seconds=1.0)
    assert handle.joins[0] == pytest.approx(0.6)
    assert handle.joins[1] == pytest.approx(0.1)


def test_sample_uses_wall_clock_timestamp(tmp_path):
    source = FakeSource(cpu=None, mem=512, gpu=33.0, vram=900)
    with RunLogger().open(tmp_path / "m.log") as run_log:
        sample = Sampler(source, run_log, clock=lambda: 1700000000.9).take_sample()
    assert sample == Sample(
        timestamp=1700000000,
        cpu_percent=None,
        mem_used_mb=512,
        gpu_util_percent=33.0,
        vram_used_mb=900,
    )


@pytest.mark.slow
def test_sample_count_tracks_workload_duration(tmp_path, fake_source, require_sleep):
    supervisor = WorkloadSupervisor(MonitorConfig())
    handle = supervisor.start("sleep 5")
    with RunLogger().open(tmp_path / "m.log") as run_log:
        count = Sampler(fake_source, run_log).run(handle, interval_seconds=1)
    supervisor.wait(handle)
    assert 5 <= count <= 6


@pytest.mark.slow
def test_interval_longer_than_workload(tmp_path, fake_source, require_sleep):
    supervisor = WorkloadSupervisor(MonitorConfig())
    handle = supervisor.start("sleep 0.2")
    with RunLogger().open(tmp_path / "m.log") as run_log:
        count = Sampler(fake_source, run_log).run(handle, interval_seconds=30)
    assert count in (0, 1)
    assert not handle.is_alive()
