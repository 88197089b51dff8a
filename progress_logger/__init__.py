#!filepath: progress_logger/__init__.py

from .utils.logger import Logging, logs, init_logging
from .utils.errors import ProgressLoggerError, PreconditionError, TrackerStoppedError
from .config.app_config import AppConfig
from .config.progress_config import ProgressConfig
from .observability.progress import ProgressLogger, ProgressLoggerBuilder
from .observability.pretty import pretty, strip_styles
from .observability.memory import MemorySampler, MemoryUsage

__version__ = "0.1.0"

__all__ = [
    "logs", "Logging", "init_logging",
    "ProgressLoggerError", "PreconditionError", "TrackerStoppedError",
    "AppConfig", "ProgressConfig",
    "ProgressLogger", "ProgressLoggerBuilder",
    "pretty", "strip_styles",
    "MemorySampler", "MemoryUsage",
]
