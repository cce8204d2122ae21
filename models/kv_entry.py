# -*- coding: utf-8 -*-
"""
kv_entry.py
--------------------------------------------------------------------
键值存储表：
- 作为 STORE_BACKEND=database 时的持久化载体
- value 为 JSON，保存变更历史或实体集合的整体快照
"""

from extensions.database import db
from .mixins import TimestampMixin, COMMON_TABLE_ARGS


class KeyValueEntry(TimestampMixin, db.Model):
    __tablename__ = "kv_entry"
    __table_args__ = (COMMON_TABLE_ARGS,)

    key = db.Column(db.String(255), primary_key=True)
    value = db.Column(db.JSON)
