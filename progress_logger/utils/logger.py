#!filepath: progress_logger/utils/logger.py
import os
import sys
import json
from functools import wraps
from time import perf_counter
from typing import Any, Callable, Optional

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}"


class Logging:
    """
    进度日志的输出端（sink）
    ---------------------------------------
    - 默认只写 stderr
    - 可选按日期切割的文件日志 + 保留周期
    - 包含函数级日志装饰器 / 进度装饰器
    ---------------------------------------
    ProgressLogger 只调用 .info(line)，路由、过滤、落盘都在这里配置。
    """

    def __init__(
        self,
        log_level: str = "INFO",
        log_dir: Optional[str] = None,
        rotation: str = "1 day",
        retention: str = "30 days",
        console: bool = True,
    ):
        self.level = log_level.upper()
        self.log_dir = log_dir
        self.rotation = rotation
        self.retention = retention
        self.console = console

    def configure(
        self,
        log_level: Optional[str] = None,
        log_dir: Optional[str] = None,
        rotation: Optional[str] = None,
        retention: Optional[str] = None,
        console: Optional[bool] = None,
    ) -> "Logging":
        """
        配置全局 loguru logger（会清掉之前的所有 sink）。
        只有应用入口（CLI / init_logging）才应该调用；
        作为库被 import 时不碰宿主程序的 sink。
        """
        if log_level is not None:
            self.level = log_level.upper()
        if log_dir is not None:
            self.log_dir = log_dir
        if rotation is not None:
            self.rotation = rotation
        if retention is not None:
            self.retention = retention
        if console is not None:
            self.console = console

        if self.log_dir:
            os.makedirs(self.log_dir, exist_ok=True)

        logger.remove()

        if self.console:
            logger.add(
                sink=sys.stderr,
                level=self.level,
                format=LOG_FORMAT,
            )

        if self.log_dir:
            logger.add(
                sink=f"{self.log_dir}/{{time:YYYY-MM-DD}}.log",
                rotation=self.rotation,
                retention=self.retention,
                level=self.level,
                format=LOG_FORMAT,
                enqueue=True,  # 多进程安全
                backtrace=True,
                diagnose=True,
            )
        return self

    # ----------- 日志方法 -----------
    def debug(self, msg: str, *args, **kwargs):
        logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        logger.exception(msg, *args, **kwargs)

    # ---------- 日志装饰器 ----------
    def catch(
        self,
        msg: str = "Exception occurred",
        log_inputs: bool = False,
        log_time: bool = True,
    ) -> Callable:

        def decorator(func: Callable):
            @wraps(func)
            def wrapper(*args, **kwargs):

                if log_inputs:
                    logger.info(
                        f"[CALL] {func.__name__} args={args}, kwargs={json.dumps(kwargs, ensure_ascii=False, default=str)}"
                    )

                start = perf_counter()

                try:
                    result = func(*args, **kwargs)
                except Exception:
                    logger.exception(f"[ERROR] {func.__name__}: {msg}")
                    raise

                if log_time:
                    cost = perf_counter() - start
                    logger.info(f"[TIME] {func.__name__} took {cost:.4f}s")

                return result

            return wrapper

        return decorator

    def progress(
        self,
        task: str,
        total: Any = None,
        items: str = "updates",
        frequency: float = 10.0,
    ):
        """
        最小侵入的进度装饰器：注入一个已启动的 ProgressLogger，调用结束后 stop()。

        用法：
            @logs.progress("ingest", total=lambda args: len(args[0]), items="rows")
            def ingest(rows, progress=None):
                for row in rows:
                    progress.up()
        """
        from progress_logger.observability.progress import ProgressLogger

        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                # total 可以是常数或 lambda args
                computed_total = total(args) if callable(total) else total

                builder = (
                    ProgressLogger.builder()
                    .with_items_name(items)
                    .with_frequency(frequency)
                    .with_logger(self)
                )
                if computed_total is not None:
                    builder = builder.with_expected_updates(int(computed_total))

                self.info(f"[{task}] START")
                with builder.start() as prog:
                    result = func(*args, progress=prog, **kwargs)
                self.info(f"[{task}] DONE")
                return result

            return wrapper

        return decorator


def init_logging(config) -> Logging:
    """
    用 LogConfig 重新配置全局 logs（原地修改，已 import 的引用依然有效）
    """
    return logs.configure(
        log_level=config.level,
        log_dir=config.dir or "",
        rotation=config.rotation,
        retention=config.retention,
        console=config.console,
    )


# 默认全局 logs：只转发到 loguru，不改动 sink（由 init_logging 配置）
logs = Logging()
