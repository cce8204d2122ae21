# -*- coding: utf-8 -*-
"""
catalog_step.py
--------------------------------------------------------------------
用例步骤目录实体：
- 可复用的测试动作，对应一个 Java 类/方法
- sql_tables 记录该步骤涉及的数据表
- name 唯一性由上层校验保证，这里不做约束
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from .mixins import SnapshotMixin
from utils.datetime_helpers import utcnow


@dataclass
class CatalogStep(SnapshotMixin):
    id: str
    name: str
    description: str = ""
    java_class: str = ""
    java_method: str = ""
    sql_tables: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    UPDATABLE_FIELDS = ("name", "description", "java_class", "java_method", "sql_tables")

    def matches(self, keyword: str) -> bool:
        """关键字模糊匹配（名称、描述、类名、方法名，不区分大小写）"""
        keyword = (keyword or "").lower()
        return any(
            keyword in (value or "").lower()
            for value in (self.name, self.description, self.java_class, self.java_method)
        )
