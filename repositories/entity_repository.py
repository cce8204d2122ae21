# repositories/entity_repository.py
import logging
from typing import Generic, Iterable, List, Optional, TypeVar

from repositories.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EntityRepository(Generic[T]):
    """
    有序实体集合（按 id 索引），整体保存在键值存储的一个 key 下。
    子类只需指定 storage_key 与 model。
    """

    storage_key: str = ""
    model = None

    def __init__(self, store: KeyValueStore):
        self.store = store
        self._items: List[T] = self._load()

    def _load(self) -> List[T]:
        raw = self.store.get(self.storage_key) or []
        return [self.model.from_dict(item) for item in raw]

    def save(self) -> None:
        self.store.set(self.storage_key, [item.to_dict() for item in self._items])

    def reload(self) -> None:
        self._items = self._load()

    def list_all(self) -> List[T]:
        return list(self._items)

    def get_by_id(self, entity_id: str) -> Optional[T]:
        return next((item for item in self._items if item.id == entity_id), None)

    def exists(self, entity_id: str) -> bool:
        return self.get_by_id(entity_id) is not None

    def add(self, entity: T) -> T:
        # 回放时同 id 已存在则原位替换，避免出现重复实体
        if self.replace(entity.id, entity):
            logger.debug(f"{self.storage_key}: {entity.id} already present, replaced in place")
            return entity
        self._items.append(entity)
        return entity

    def replace(self, entity_id: str, entity: T) -> bool:
        for i, item in enumerate(self._items):
            if item.id == entity_id:
                self._items[i] = entity
                return True
        return False

    def remove(self, entity_id: str) -> Optional[T]:
        removed = self.get_by_id(entity_id)
        if removed is not None:
            self._items = [item for item in self._items if item.id != entity_id]
        return removed

    def replace_matching(self, snapshots: Iterable[T]) -> int:
        """按 id 批量替换，集合中不存在的快照直接跳过"""
        by_id = {s.id: s for s in snapshots}
        replaced = 0
        for i, item in enumerate(self._items):
            if item.id in by_id:
                self._items[i] = by_id[item.id]
                replaced += 1
        return replaced
