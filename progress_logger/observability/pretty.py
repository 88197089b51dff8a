#!filepath: progress_logger/observability/pretty.py
from __future__ import annotations

import math
import re
from typing import List

from progress_logger.utils.errors import PreconditionError

UNDERLINE_ON = "\x1b[4m"
UNDERLINE_OFF = "\x1b[24m"

_STYLE_RE = re.compile(r"\x1b\[(?:4|24)m")


def _chunks(digits: str) -> List[str]:
    """
    按 3 位从右往左切分，返回值仍按阅读顺序（高位在前）
    "1234567" → ["1", "234", "567"]
    """
    head = len(digits) % 3 or 3
    out = [digits[:head]]
    for i in range(head, len(digits), 3):
        out.append(digits[i:i + 3])
    return out


def _group(digits: str, styled: bool) -> str:
    if not styled:
        return digits

    chunks = _chunks(digits)
    n = len(chunks)
    parts = []
    for i, chunk in enumerate(chunks):
        # 从右数第 k 块（0 起），奇数块加下划线 → 最低位块永远不加
        k = n - 1 - i
        if k % 2 == 1:
            parts.append(f"{UNDERLINE_ON}{chunk}{UNDERLINE_OFF}")
        else:
            parts.append(chunk)
    return "".join(parts)


def pretty(value: int | float, styled: bool = True) -> str:
    """
    Render a non-negative number with its three-digit groups visually
    separated by alternating underline, e.g. 1234567 → 1_234_567 where
    ``234`` is underlined.

    Floats keep exactly two decimals; the fraction is never styled.
    Negative input (and NaN) raises PreconditionError.
    """
    if isinstance(value, bool):
        raise PreconditionError(f"pretty() expects a number, got bool {value!r}")

    if isinstance(value, int):
        if value < 0:
            raise PreconditionError(f"pretty() expects a non-negative integer, got {value}")
        return _group(str(value), styled)

    if isinstance(value, float):
        if math.isnan(value) or value < 0:
            raise PreconditionError(f"pretty() expects a non-negative float, got {value}")
        if math.isinf(value):
            return "inf"
        # 先四舍五入再切分，999.999 → "1000.00"
        integer, fraction = f"{value:.2f}".split(".")
        return f"{_group(integer, styled)}.{fraction}"

    raise PreconditionError(f"pretty() expects int or float, got {type(value).__name__}")


def strip_styles(text: str) -> str:
    """Remove the underline markers added by pretty()."""
    return _STYLE_RE.sub("", text)


def format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.2f}s"


def format_bytes(n: int | float) -> str:
    units = ["B", "KiB", "MiB", "GiB", "TiB"]
    value = float(n)
    for unit in units:
        if value < 1024 or unit == units[-1]:
            return f"{value:.2f} {unit}"
        value /= 1024
    return f"{value:.2f} {units[-1]}"
