#!filepath: progress_logger/observability/memory.py
from dataclasses import dataclass
from typing import Optional

import psutil

from progress_logger.utils.logger import logs


@dataclass(frozen=True)
class MemoryUsage:
    """System memory / swap in use, in bytes."""

    used: int
    swap: int


class MemorySampler:
    """
    每次 sample() 都重新读取系统内存与 swap。
    平台不支持时返回 None，不影响进度行输出。
    """

    def sample(self) -> Optional[MemoryUsage]:
        try:
            used = psutil.virtual_memory().used
            swap = psutil.swap_memory().used
        except (psutil.Error, OSError, RuntimeError, NotImplementedError) as e:
            logs.debug(f"[Memory] sampling unavailable: {e!r}")
            return None
        return MemoryUsage(used=int(used), swap=int(swap))


class NullMemorySampler:
    """Memory sampling disabled."""

    def sample(self) -> Optional[MemoryUsage]:
        return None
