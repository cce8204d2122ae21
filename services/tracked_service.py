# services/tracked_service.py
import logging
from dataclasses import replace
from typing import Any, Dict, Generic, List, Optional, TypeVar

from constants.history import ChangeAction, EntityType
from models.history import HistoryEntry
from repositories.entity_repository import EntityRepository
from services.history_service import HistoryService
from utils.datetime_helpers import utcnow

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TrackedEntityService(Generic[T]):
    """
    带变更记录的实体服务（同时也是该实体类型的回放服务）：
    - add / update / delete：先修改集合，再追加一条历史记录，然后持久化
    - apply_entry：把历史条目的快照正向或反向应用到集合
    子类提供 entity_type 与各动作的描述文案。
    """

    entity_type: EntityType = None
    refresh_updated_at = True

    def __init__(self, repository: EntityRepository[T], history: HistoryService):
        self.repository = repository
        self.history = history
        history.register_adapter(self.entity_type, self)

    # ---------- 描述文案（子类覆盖） ----------
    def describe_create(self, entity: T) -> str:
        raise NotImplementedError

    def describe_update(self, entity: T) -> str:
        raise NotImplementedError

    def describe_delete(self, entity: T) -> str:
        raise NotImplementedError

    def entity_name(self, entity: T) -> Optional[str]:
        return getattr(entity, "name", None)

    # ---------- 查询 ----------
    def list_all(self) -> List[T]:
        return self.repository.list_all()

    def get(self, entity_id: str) -> Optional[T]:
        return self.repository.get_by_id(entity_id)

    # ---------- 带记录的增删改 ----------
    def add(self, entity: T) -> T:
        self.repository.add(entity)
        self.history.record(
            ChangeAction.CREATE,
            self.entity_type,
            entity.id,
            self.describe_create(entity),
            previous_state=None,
            new_state=entity,
            entity_name=self.entity_name(entity),
        )
        self.repository.save()
        return entity

    def update(self, entity_id: str, patch: Dict[str, Any]) -> Optional[T]:
        """合并 patch 后原位替换；id 不存在时集合与历史均不变，返回 None"""
        old = self.repository.get_by_id(entity_id)
        if old is None:
            logger.debug(f"update {self.entity_type.value} {entity_id}: not found")
            return None

        changes = type(old).filter_patch(patch)
        if self.refresh_updated_at:
            changes["updated_at"] = utcnow()
        new = replace(old, **changes)

        self.repository.replace(entity_id, new)
        self.history.record(
            ChangeAction.UPDATE,
            self.entity_type,
            entity_id,
            self.describe_update(new),
            previous_state=old,
            new_state=new,
            entity_name=self.entity_name(new),
        )
        self.repository.save()
        return new

    def delete(self, entity_id: str) -> Optional[T]:
        deleted = self.repository.remove(entity_id)
        if deleted is None:
            logger.debug(f"delete {self.entity_type.value} {entity_id}: not found")
            return None

        self.history.record(
            ChangeAction.DELETE,
            self.entity_type,
            entity_id,
            self.describe_delete(deleted),
            previous_state=deleted,
            new_state=None,
            entity_name=self.entity_name(deleted),
        )
        self.repository.save()
        return deleted

    # ---------- 回放 ----------
    def apply_history_change(self, going_back: bool) -> Optional[HistoryEntry]:
        """只处理属于本实体类型的下一条目；类型不符时游标不动"""
        return self.history.step(going_back, entity_type=self.entity_type)

    def apply_entry(self, entry: HistoryEntry, going_back: bool) -> None:
        """把条目快照应用到集合；找不到对应实体时静默跳过"""
        target = entry.target_state(going_back)
        action = entry.action

        if action == ChangeAction.CREATE:
            if going_back:
                self.repository.remove(entry.entity_id)
            elif target is not None:
                self.repository.add(target)
        elif action == ChangeAction.DELETE:
            if going_back:
                if target is not None:
                    self.repository.add(target)
            else:
                self.repository.remove(entry.entity_id)
        elif action == ChangeAction.UPDATE:
            if target is not None:
                self.repository.replace(entry.entity_id, target)
        elif action == ChangeAction.REORDER:
            targets = target if isinstance(target, list) else [target]
            self.repository.replace_matching(t for t in targets if t is not None)
        else:
            logger.warning(f"{action.value} entries are not replayable for {self.entity_type.value}")
            return

        self.repository.save()
        logger.debug(
            f"Replayed {action.value} {self.entity_type.value} {entry.entity_id} "
            f"({'back' if going_back else 'forward'})"
        )
