#!filepath: progress_logger/observability/progress.py
from __future__ import annotations

import operator
import time
from datetime import timedelta
from typing import Callable, Optional

from progress_logger.config.progress_config import ProgressConfig
from progress_logger.observability.memory import MemorySampler, MemoryUsage, NullMemorySampler
from progress_logger.observability.pretty import format_bytes, format_duration, pretty
from progress_logger.utils.errors import PreconditionError, TrackerStoppedError
from progress_logger.utils.logger import logs

# update_light() 只在 count 为该值整数倍时检查时间
LIGHT_CHECK_EVERY = 1_000_000

_MAX_ETA_SECONDS = timedelta.max.total_seconds()


def _as_timedelta(seconds: Optional[float]) -> Optional[timedelta]:
    """超出 timedelta 范围的 ETA 截断为 timedelta.max"""
    if seconds is None:
        return None
    if seconds >= _MAX_ETA_SECONDS:
        return timedelta.max
    return timedelta(seconds=seconds)


class ProgressLogger:
    """
    单线程进度计数器：循环里调用 update()/up()，按时间间隔输出一行进度。

    用法：
        pl = ProgressLogger.builder().with_expected_updates(n).with_items_name("rows").start()
        for row in rows:
            pl.up()
        pl.stop()

    两条更新路径：
    - update(n)：每次调用都读时钟，适合每秒几千次以内的调用
    - update_light(n)：count 到达 1_000_000 的整数倍才读时钟，适合热循环

    不是线程安全的，只能由一个线程持有。
    """

    def __init__(
        self,
        config: Optional[ProgressConfig] = None,
        *,
        logger=None,
        memory=None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.config = config or ProgressConfig()
        self._logger = logger if logger is not None else logs
        if memory is None:
            memory = MemorySampler() if self.config.sample_memory else NullMemorySampler()
        self._memory = memory
        self._clock = clock or time.perf_counter

        now = self._clock()
        self.start = now
        self.last_emitted = now
        self._count = 0
        self._throughput: Optional[float] = None
        self._eta: Optional[timedelta] = None
        self._stopped = False

    @classmethod
    def builder(cls) -> "ProgressLoggerBuilder":
        return ProgressLoggerBuilder()

    @classmethod
    def from_config(cls, config: ProgressConfig, **kwargs) -> "ProgressLogger":
        return cls(config, **kwargs)

    # ---------------------------------------------------------
    # 只读属性
    # ---------------------------------------------------------
    @property
    def count(self) -> int:
        return self._count

    @property
    def expected_updates(self) -> Optional[int]:
        return self.config.expected_updates

    @property
    def items(self) -> str:
        return self.config.items

    @property
    def frequency(self) -> float:
        return self.config.frequency

    @property
    def stopped(self) -> bool:
        return self._stopped

    def elapsed(self) -> float:
        return self._clock() - self.start

    def throughput(self) -> Optional[float]:
        """Items per second computed at the most recent emission."""
        return self._throughput

    def time_to_completion(self) -> Optional[timedelta]:
        """ETA computed at the most recent emission (None without expected_updates)."""
        return self._eta

    # ---------------------------------------------------------
    # 更新路径（热路径）
    # ---------------------------------------------------------
    def update(self, n: int) -> None:
        self._add(n)
        self._check_time()

    def update_light(self, n: int) -> None:
        self._add(n)
        # count == 0 不算检查点
        if self._count and self._count % LIGHT_CHECK_EVERY == 0:
            self._check_time()

    def up(self) -> None:
        self.update(1)

    def stop(self) -> None:
        """Emit the final line regardless of frequency. The logger is unusable afterwards."""
        self._ensure_running()
        now = self._clock()
        self._log(now)
        self.last_emitted = now
        self._stopped = True

    def __enter__(self) -> "ProgressLogger":
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self._stopped:
            self.stop()

    # ---------------------------------------------------------
    # 内部
    # ---------------------------------------------------------
    def _ensure_running(self) -> None:
        if self._stopped:
            raise TrackerStoppedError("ProgressLogger already stopped")

    def _add(self, n: int) -> None:
        self._ensure_running()
        n = operator.index(n)
        if n < 0:
            raise PreconditionError(f"update() expects a non-negative count, got {n}")
        self._count += n

    def _check_time(self) -> None:
        now = self._clock()
        if now - self.last_emitted > self.frequency:
            self._log(now)
            self.last_emitted = now

    def _log(self, now: float) -> None:
        elapsed = now - self.start
        # elapsed == 0 → 吞吐量记为 0，而不是 inf
        throughput = self._count / elapsed if elapsed > 0 else 0.0

        eta: Optional[float] = None
        expected = self.expected_updates
        if expected is not None:
            remaining = expected - self._count
            if remaining <= 0:
                eta = 0.0
            elif throughput > 0:
                eta = remaining / throughput

        self._throughput = throughput
        self._eta = _as_timedelta(eta)

        usage = self._memory.sample()
        self._logger.info(self._render(elapsed, throughput, eta, usage))

    def _render(
        self,
        elapsed: float,
        throughput: float,
        eta: Optional[float],
        usage: Optional[MemoryUsage],
    ) -> str:
        styled = self.config.pretty
        items = self.items

        if usage is None:
            mem = "[mem n/a]"
        else:
            mem = f"[mem {format_bytes(usage.used)} | swap {format_bytes(usage.swap)}]"

        line = f"{mem} {format_duration(elapsed)} {pretty(self._count, styled)} {items}"
        if self.expected_updates is not None:
            left = pretty(eta, styled) if eta is not None else "?"
            line += f", {left} s left"
        line += f" ({pretty(throughput, styled)} {items}/s)"
        return line


class ProgressLoggerBuilder:
    """
    链式配置，start() 时才创建 ProgressLogger 并开始计时。
    """

    def __init__(self):
        self._expected_updates: Optional[int] = None
        self._items: Optional[str] = None
        self._frequency: Optional[float | timedelta] = None
        self._pretty: Optional[bool] = None
        self._logger = None
        self._memory = None
        self._clock: Optional[Callable[[], float]] = None

    def with_expected_updates(self, updates: int) -> "ProgressLoggerBuilder":
        self._expected_updates = updates
        return self

    def with_items_name(self, name: str) -> "ProgressLoggerBuilder":
        self._items = name
        return self

    def with_frequency(self, freq: float | timedelta) -> "ProgressLoggerBuilder":
        self._frequency = freq
        return self

    def with_pretty(self, enabled: bool) -> "ProgressLoggerBuilder":
        self._pretty = enabled
        return self

    def with_logger(self, logger) -> "ProgressLoggerBuilder":
        self._logger = logger
        return self

    def with_memory_sampler(self, memory) -> "ProgressLoggerBuilder":
        self._memory = memory
        return self

    def with_clock(self, clock: Callable[[], float]) -> "ProgressLoggerBuilder":
        self._clock = clock
        return self

    def config(self) -> ProgressConfig:
        fields = {
            "expected_updates": self._expected_updates,
            "items": self._items,
            "frequency": self._frequency,
            "pretty": self._pretty,
        }
        return ProgressConfig(**{k: v for k, v in fields.items() if v is not None})

    def start(self) -> ProgressLogger:
        return ProgressLogger(
            self.config(),
            logger=self._logger,
            memory=self._memory,
            clock=self._clock,
        )
