# -*- coding: utf-8 -*-
"""
__init__.py
--------------------------------------------------------------------
汇总导入所有模型，外部模块可简化引用：from models import CatalogStep, HistoryLog
注意：
- KeyValueEntry 为 SQLAlchemy 模型，其余为 dataclass 实体
- 避免循环导入：各模型仅在这里集中 import。
"""

from .mixins import TimestampMixin, SnapshotMixin
from .kv_entry import KeyValueEntry
from .catalog_step import CatalogStep
from .test_case import TestCase
from .test_step_membership import TestStepMembership
from .history import HistoryEntry, HistoryLog

__all__ = [
    "TimestampMixin", "SnapshotMixin", "KeyValueEntry",
    "CatalogStep", "TestCase", "TestStepMembership",
    "HistoryEntry", "HistoryLog",
]
