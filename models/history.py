# -*- coding: utf-8 -*-
"""
history.py
--------------------------------------------------------------------
变更历史：
- HistoryEntry：一次变更的完整前后快照
- HistoryLog：有界、带游标的变更序列，支持撤销 / 重做 / 跳转 / 清空 / 备注

HistoryLog 只是通用容器，不理解实体语义；快照的解释交给各实体的回放服务。
"""

import logging
import time
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from constants.history import (
    ChangeAction,
    EntityType,
    DEFAULT_MAX_HISTORY,
    NOTHING_TO_UNDO,
    NOTHING_TO_REDO,
    INVALID_HISTORY_POSITION,
)
from .catalog_step import CatalogStep
from .test_case import TestCase
from .test_step_membership import TestStepMembership
from utils.datetime_helpers import utcnow, to_iso, parse_iso

logger = logging.getLogger(__name__)

# 快照类型按实体类型区分；data-entry-row 没有对应模型，保持原始 dict
SNAPSHOT_MODELS = {
    EntityType.CATALOG_STEP: CatalogStep,
    EntityType.TEST_CASE: TestCase,
    EntityType.TEST_MEMBERSHIP: TestStepMembership,
}

Snapshot = Union[CatalogStep, TestCase, TestStepMembership, Dict[str, Any]]
SnapshotState = Union[Snapshot, List[Snapshot], None]


def new_entry_id() -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def encode_snapshot(state: SnapshotState) -> Any:
    if state is None:
        return None
    if isinstance(state, list):
        return [encode_snapshot(item) for item in state]
    if hasattr(state, "to_dict"):
        return state.to_dict()
    return dict(state)


def decode_snapshot(entity_type: EntityType, data: Any) -> SnapshotState:
    if data is None:
        return None
    if isinstance(data, list):
        return [decode_snapshot(entity_type, item) for item in data]
    model = SNAPSHOT_MODELS.get(entity_type)
    if model is None:
        return dict(data)
    return model.from_dict(data)


@dataclass
class HistoryEntry:
    action: ChangeAction
    entity_type: EntityType
    entity_id: str
    description: str
    previous_state: SnapshotState = None
    new_state: SnapshotState = None
    entity_name: Optional[str] = None
    comment: Optional[str] = None
    id: str = field(default_factory=new_entry_id)
    timestamp: datetime = field(default_factory=utcnow)

    def target_state(self, going_back: bool) -> SnapshotState:
        """撤销时取变更前快照，重做时取变更后快照"""
        return self.previous_state if going_back else self.new_state

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": to_iso(self.timestamp),
            "action": self.action.value,
            "entity_type": self.entity_type.value,
            "entity_id": self.entity_id,
            "entity_name": self.entity_name,
            "description": self.description,
            "comment": self.comment,
            "previous_state": encode_snapshot(self.previous_state),
            "new_state": encode_snapshot(self.new_state),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        entity_type = EntityType(data["entity_type"])
        return cls(
            id=data["id"],
            timestamp=parse_iso(data.get("timestamp")) or utcnow(),
            action=ChangeAction(data["action"]),
            entity_type=entity_type,
            entity_id=data["entity_id"],
            entity_name=data.get("entity_name"),
            description=data.get("description", ""),
            comment=data.get("comment"),
            previous_state=decode_snapshot(entity_type, data.get("previous_state")),
            new_state=decode_snapshot(entity_type, data.get("new_state")),
        )


class HistoryLog:
    """
    有界变更日志。

    current_index 指向最后一个已生效的条目，-1 表示位于第一个条目之前。
    不变量：-1 <= current_index <= len(entries) - 1，len(entries) <= max_history_size。
    undo()/redo() 只移动游标并返回条目，不修改任何实体集合。
    """

    def __init__(self, entries: Optional[List[HistoryEntry]] = None, current_index: int = -1,
                 max_history_size: int = DEFAULT_MAX_HISTORY):
        if max_history_size < 1:
            raise ValueError("max_history_size must be at least 1")
        self.entries: List[HistoryEntry] = list(entries or [])
        self.max_history_size = max_history_size
        self.current_index = max(-1, min(current_index, len(self.entries) - 1))
        self._evict_overflow()

    @property
    def can_undo(self) -> bool:
        return self.current_index >= 0

    @property
    def can_redo(self) -> bool:
        return self.current_index < len(self.entries) - 1

    def __len__(self):
        return len(self.entries)

    def _evict_overflow(self):
        overflow = len(self.entries) - self.max_history_size
        if overflow > 0:
            del self.entries[:overflow]
            self.current_index = max(-1, self.current_index - overflow)

    def append(self, entry: HistoryEntry) -> None:
        # 丢弃游标之后的重做分支
        del self.entries[self.current_index + 1:]
        self.entries.append(entry)
        self._evict_overflow()
        self.current_index = len(self.entries) - 1

    def peek_undo(self) -> Optional[HistoryEntry]:
        if not self.can_undo:
            return None
        return self.entries[self.current_index]

    def peek_redo(self) -> Optional[HistoryEntry]:
        if not self.can_redo:
            return None
        return self.entries[self.current_index + 1]

    def undo(self) -> Optional[HistoryEntry]:
        entry = self.peek_undo()
        if entry is None:
            logger.warning(NOTHING_TO_UNDO)
            return None
        self.current_index -= 1
        logger.info(f"Undone: {entry.description}")
        return entry

    def redo(self) -> Optional[HistoryEntry]:
        entry = self.peek_redo()
        if entry is None:
            logger.warning(NOTHING_TO_REDO)
            return None
        self.current_index += 1
        logger.info(f"Redone: {entry.description}")
        return entry

    def jump_to_entry(self, target_index: int) -> bool:
        """仅移动游标，不回放中间条目"""
        if target_index < -1 or target_index >= len(self.entries):
            logger.warning(f"{INVALID_HISTORY_POSITION}: {target_index}")
            return False
        self.current_index = target_index
        if target_index >= 0:
            logger.info(f"Jumped to: {self.entries[target_index].description}")
        return True

    def clear_history(self) -> None:
        self.entries = []
        self.current_index = -1
        logger.info("History cleared")

    def find(self, entry_id: str) -> Optional[HistoryEntry]:
        return next((e for e in self.entries if e.id == entry_id), None)

    def add_comment(self, entry_id: str, comment: str) -> bool:
        for i, entry in enumerate(self.entries):
            if entry.id == entry_id:
                self.entries[i] = replace(entry, comment=comment)
                return True
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [e.to_dict() for e in self.entries],
            "current_index": self.current_index,
            "max_history_size": self.max_history_size,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]],
                  max_history_size: Optional[int] = None) -> "HistoryLog":
        """
        从存储数据还原。
        :param max_history_size: 指定时覆盖存储中的容量，超出部分从最旧的条目开始淘汰
        """
        data = data or {}
        capacity = max_history_size or data.get("max_history_size") or DEFAULT_MAX_HISTORY
        return cls(
            entries=[HistoryEntry.from_dict(e) for e in data.get("entries", [])],
            current_index=data.get("current_index", -1),
            max_history_size=capacity,
        )
