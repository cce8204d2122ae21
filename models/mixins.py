# models/mixins.py
from dataclasses import fields
from datetime import datetime
from typing import Any, Dict

from sqlalchemy import func, DateTime
from extensions.database import db
from utils.datetime_helpers import to_iso, parse_iso

COMMON_TABLE_ARGS = {
    "mysql_engine": "InnoDB",
    "mysql_charset": "utf8mb4",
    "mysql_collate": "utf8mb4_unicode_ci",
}


class TimestampMixin:
    created_at = db.Column(DateTime, nullable=False, server_default=func.now(), index=True)
    updated_at = db.Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now(), index=True)


class SnapshotMixin:
    """
    实体快照混入类（用于 dataclass 实体）
    - to_dict(): 转为可写入键值存储的纯数据，datetime 转 ISO 字符串
    - from_dict(): 从纯数据还原实体，未知字段忽略
    - UPDATABLE_FIELDS: update 时允许合并的字段
    """

    UPDATABLE_FIELDS: tuple = ()
    DATETIME_FIELDS: tuple = ("created_at", "updated_at")

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                value = to_iso(value)
            elif isinstance(value, list):
                value = list(value)
            data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                continue
            if key in cls.DATETIME_FIELDS:
                value = parse_iso(value)
                if value is None:
                    # 缺省时交给 default_factory
                    continue
            kwargs[key] = value
        return cls(**kwargs)

    @classmethod
    def filter_patch(cls, patch: Dict[str, Any]) -> Dict[str, Any]:
        """只保留允许更新的字段。"""
        return {k: v for k, v in (patch or {}).items() if k in cls.UPDATABLE_FIELDS}
