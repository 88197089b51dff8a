#!filepath: progress_logger/config/app_config.py
import os

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

from .log_config import LogConfig
from .progress_config import ProgressConfig


def project_root() -> str:
    """
    返回项目根目录（基于当前文件位置推导）:
    progress_logger/config/app_config.py → progress_logger/config → progress_logger → project_root
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "../../"))


class AppConfig(BaseModel):
    log: LogConfig = LogConfig()
    progress: ProgressConfig = ProgressConfig()

    @classmethod
    def load(cls, path: str | None = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 progress_logger/config/base.yml
        - PROGRESS_LOG_LEVEL / PROGRESS_LOG_DIR 覆盖 log 段
        """
        load_dotenv(os.path.join(project_root(), ".env"))

        if path is None:
            path = os.path.join(os.path.dirname(__file__), "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        log = dict(raw.get("log") or {})
        if os.getenv("PROGRESS_LOG_LEVEL"):
            log["level"] = os.getenv("PROGRESS_LOG_LEVEL")
        if os.getenv("PROGRESS_LOG_DIR"):
            log["dir"] = os.getenv("PROGRESS_LOG_DIR")
        raw["log"] = log

        return cls(**raw)
