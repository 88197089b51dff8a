# tests/conftest.py
from __future__ import annotations

from typing import List

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


class FakeClock:
    """可手动推进的时钟，替代 time.perf_counter"""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CaptureLogger:
    """只实现 ProgressLogger 用到的 info()"""

    def __init__(self):
        self.lines: List[str] = []

    def info(self, msg: str, *args, **kwargs):
        self.lines.append(msg)


class CountingClock(FakeClock):
    """记录被读取的次数，用来验证 update_light 的检查频率"""

    def __init__(self, start: float = 1000.0):
        super().__init__(start)
        self.reads = 0

    def __call__(self) -> float:
        self.reads += 1
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> CaptureLogger:
    return CaptureLogger()


@pytest.fixture
def make_progress(clock, sink):
    """
    Factory fixture for ProgressLogger (testing only).

    Usage:
        pl = make_progress()
        pl = make_progress(expected_updates=1000, frequency=1.0)
    """
    from progress_logger.observability.memory import NullMemorySampler
    from progress_logger.observability.progress import ProgressLogger

    def _make(expected_updates=None, items=None, frequency=None, memory=None, clock_=None):
        b = (
            ProgressLogger.builder()
            .with_logger(sink)
            .with_clock(clock_ or clock)
            .with_memory_sampler(memory or NullMemorySampler())
        )
        if expected_updates is not None:
            b = b.with_expected_updates(expected_updates)
        if items is not None:
            b = b.with_items_name(items)
        if frequency is not None:
            b = b.with_frequency(frequency)
        return b.start()

    return _make


@pytest.fixture
def counting_clock() -> CountingClock:
    return CountingClock()
