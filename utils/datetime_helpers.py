# -*- coding: utf-8 -*-
"""Datetime helpers for snapshot serialization.

系统内所有时间统一使用带时区的 UTC ``datetime``。实体快照写入键值存储时
转为 ISO 8601 字符串，读回时再解析为 ``datetime``，保证撤销/重做后
时间戳与原值完全一致。
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    """当前 UTC 时间（带时区）。"""

    return datetime.now(timezone.utc)


def _ensure_utc(dt: datetime) -> datetime:
    """将给定 ``datetime`` 统一转换为带 UTC 时区的对象。"""

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """将 ``datetime`` 格式化为 UTC ISO 字符串。

    :param dt: 需要转换的时间; ``None`` 时直接返回 ``None``。
    :return: 带 ``+00:00`` 时区偏移的 ISO 8601 格式字符串。
    """

    if dt is None:
        return None
    return _ensure_utc(dt).isoformat()


def parse_iso(value: Union[str, datetime, None]) -> Optional[datetime]:
    """解析 ISO 字符串；已是 ``datetime`` 时仅做时区归一。"""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _ensure_utc(value)
    # 兼容 JavaScript 的 "Z" 结尾写法
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return _ensure_utc(datetime.fromisoformat(value))
