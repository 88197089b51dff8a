#!filepath: tests/observability/test_memory.py
from types import SimpleNamespace

import psutil

from progress_logger.observability import memory as memory_mod
from progress_logger.observability.memory import MemorySampler, MemoryUsage, NullMemorySampler


def test_sample_reads_psutil(monkeypatch):
    monkeypatch.setattr(memory_mod.psutil, "virtual_memory", lambda: SimpleNamespace(used=1234))
    monkeypatch.setattr(memory_mod.psutil, "swap_memory", lambda: SimpleNamespace(used=56))

    assert MemorySampler().sample() == MemoryUsage(used=1234, swap=56)


def test_sample_degrades_when_unsupported(monkeypatch):
    def boom():
        raise RuntimeError("swap not supported")

    monkeypatch.setattr(memory_mod.psutil, "swap_memory", boom)

    assert MemorySampler().sample() is None


def test_sample_degrades_on_psutil_error(monkeypatch):
    def boom():
        raise psutil.AccessDenied()

    monkeypatch.setattr(memory_mod.psutil, "virtual_memory", boom)

    assert MemorySampler().sample() is None


def test_real_sample_no_crash():
    usage = MemorySampler().sample()
    if usage is not None:
        assert usage.used >= 0
        assert usage.swap >= 0


def test_null_sampler():
    assert NullMemorySampler().sample() is None


def test_progress_line_without_memory(make_progress, clock, sink, monkeypatch):
    def boom():
        raise OSError("nope")

    monkeypatch.setattr(memory_mod.psutil, "virtual_memory", boom)
    pl = make_progress(memory=MemorySampler())
    clock.advance(1.0)
    pl.update(5)
    pl.stop()

    assert sink.lines == ["[mem n/a] 1.00s 5 updates (5.00 updates/s)"]
