#!filepath: progress_logger/config/progress_config.py
from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, NonNegativeFloat, NonNegativeInt, field_validator


class ProgressConfig(BaseModel):
    """
    ProgressLogger 的不可变配置：
    - expected_updates: 预期总数（None → 不报告 ETA）
    - items:            计数单位名称
    - frequency:        两次输出之间的最小间隔（秒）
    - pretty:           数字是否加下划线分组
    - sample_memory:    是否在每行里带上内存 / swap
    """

    model_config = {"frozen": True}

    expected_updates: Optional[NonNegativeInt] = None
    items: str = "updates"
    frequency: NonNegativeFloat = 10.0
    pretty: bool = True
    sample_memory: bool = True

    @field_validator("frequency", mode="before")
    @classmethod
    def _seconds(cls, v):
        if isinstance(v, timedelta):
            return v.total_seconds()
        return v
