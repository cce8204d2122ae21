# services/history_service.py
import logging
from collections import Counter, OrderedDict
from typing import Any, Dict, List, Optional

from constants.history import (
    ChangeAction,
    EntityType,
    DEFAULT_MAX_HISTORY,
    NOTHING_TO_UNDO,
    NOTHING_TO_REDO,
)
from models.history import HistoryEntry, HistoryLog, SnapshotState
from repositories.history_repository import HistoryRepository

logger = logging.getLogger(__name__)


class HistoryService:
    """
    变更历史业务逻辑层：持有唯一的 HistoryLog 实例，所有实体服务共享同一个对象。

    撤销 / 重做统一从这里进入：先 peek 下一条目，交给对应实体类型的回放服务执行，
    回放成功后游标才移动一次，保证一次撤销只消耗一个游标位置、只修改一个集合。
    """

    def __init__(self, repository: HistoryRepository, max_history_size: int = DEFAULT_MAX_HISTORY):
        self.repository = repository
        self.log: HistoryLog = repository.load(max_history_size=max_history_size)
        self._adapters: Dict[EntityType, Any] = {}

    # ---------- 回放服务注册 ----------
    def register_adapter(self, entity_type: EntityType, adapter) -> None:
        if entity_type in self._adapters:
            raise ValueError(f"Replay adapter for {entity_type.value} already registered")
        self._adapters[entity_type] = adapter

    def adapter_for(self, entity_type: EntityType):
        return self._adapters.get(entity_type)

    # ---------- 状态 ----------
    @property
    def can_undo(self) -> bool:
        return self.log.can_undo

    @property
    def can_redo(self) -> bool:
        return self.log.can_redo

    @property
    def current_index(self) -> int:
        return self.log.current_index

    def save(self) -> None:
        self.repository.save(self.log)

    # ---------- 记录 ----------
    def record(
            self,
            action: ChangeAction,
            entity_type: EntityType,
            entity_id: str,
            description: str,
            previous_state: SnapshotState,
            new_state: SnapshotState,
            entity_name: Optional[str] = None,
            comment: Optional[str] = None,
    ) -> HistoryEntry:
        """追加一条变更记录（仅供实体服务在修改集合后调用）"""
        entry = HistoryEntry(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            description=description,
            previous_state=previous_state,
            new_state=new_state,
            entity_name=entity_name,
            comment=comment,
        )
        self.log.append(entry)
        self.save()
        logger.info(f"History recorded: {description} ({entry.id})")
        return entry

    # ---------- 撤销 / 重做 ----------
    def undo(self) -> Optional[HistoryEntry]:
        return self.step(going_back=True)

    def redo(self) -> Optional[HistoryEntry]:
        return self.step(going_back=False)

    def step(self, going_back: bool, entity_type: Optional[EntityType] = None) -> Optional[HistoryEntry]:
        """
        执行一次撤销或重做。
        :param entity_type: 指定时只处理该类型的条目，类型不符则游标保持不动并返回 None
        """
        entry = self.log.peek_undo() if going_back else self.log.peek_redo()
        if entry is None:
            logger.warning(NOTHING_TO_UNDO if going_back else NOTHING_TO_REDO)
            return None

        if entity_type is not None and entry.entity_type != entity_type:
            logger.debug(
                f"Next entry belongs to {entry.entity_type.value}, not {entity_type.value}; cursor unchanged"
            )
            return None

        adapter = self._adapters.get(entry.entity_type)
        if adapter is None:
            logger.warning(f"No replay adapter for {entry.entity_type.value}, entry {entry.id} not replayed")
        else:
            adapter.apply_entry(entry, going_back)

        moved = self.log.undo() if going_back else self.log.redo()
        self.save()
        return moved

    # ---------- 游标 / 清空 / 备注 ----------
    def jump_to_entry(self, target_index: int) -> bool:
        """仅移动游标，不回放被跳过的条目"""
        ok = self.log.jump_to_entry(target_index)
        if ok:
            self.save()
        return ok

    def clear_history(self) -> None:
        self.log.clear_history()
        self.save()

    def add_comment(self, entry_id: str, comment: str) -> bool:
        ok = self.log.add_comment(entry_id, comment)
        if ok:
            self.save()
        else:
            logger.debug(f"add_comment: entry {entry_id} not found")
        return ok

    # ---------- 查询 ----------
    def list_entries(self, entity_type: Optional[EntityType] = None,
                     action: Optional[ChangeAction] = None) -> List[Dict[str, Any]]:
        """时间线：带 index 与 applied 标记，可按实体类型/动作过滤"""
        items = []
        for index, entry in enumerate(self.log.entries):
            if entity_type is not None and entry.entity_type != entity_type:
                continue
            if action is not None and entry.action != action:
                continue
            data = entry.to_dict()
            data["index"] = index
            data["applied"] = index <= self.log.current_index
            items.append(data)
        return items

    def state(self, entity_type: Optional[EntityType] = None,
              action: Optional[ChangeAction] = None) -> Dict[str, Any]:
        return {
            "entries": self.list_entries(entity_type, action),
            "current_index": self.log.current_index,
            "max_history_size": self.log.max_history_size,
            "can_undo": self.log.can_undo,
            "can_redo": self.log.can_redo,
        }

    def stats(self, days: int = 7) -> Dict[str, Any]:
        """按动作、实体类型、日期统计条目数量（日期只保留最近 days 个有记录的日子）"""
        by_action = Counter(e.action.value for e in self.log.entries)
        by_entity = Counter(e.entity_type.value for e in self.log.entries)

        per_day: "OrderedDict[str, Dict[str, int]]" = OrderedDict()
        for entry in sorted(self.log.entries, key=lambda e: e.timestamp):
            day = entry.timestamp.strftime("%Y-%m-%d")
            if day not in per_day:
                per_day[day] = {a: 0 for a in ChangeAction.values()}
            per_day[day][entry.action.value] += 1

        timeline = [{"date": day, **counts} for day, counts in per_day.items()][-days:]
        return {
            "total": len(self.log.entries),
            "by_action": dict(by_action),
            "by_entity_type": dict(by_entity),
            "by_day": timeline,
        }
