# repositories/kv_store.py
"""
键值存储：变更历史与实体集合的持久化载体。

约定接口：get(key) / set(key, value) / delete(key) / keys()
value 为可 JSON 序列化的纯数据（dict / list / str / 数字），时间统一为 ISO 字符串。
"""
import json
import logging
from typing import Any, Dict, List, Optional

from extensions.database import db
from extensions.redis_client import get_redis
from models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStore:
    """键值存储基类"""

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> bool:
        raise NotImplementedError

    def delete(self, key: str) -> bool:
        raise NotImplementedError

    def keys(self) -> List[str]:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    """进程内存储，保存 JSON 文本以保证与其它实现一致的往返语义"""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> bool:
        self._data[key] = json.dumps(value, ensure_ascii=False)
        return True

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def keys(self) -> List[str]:
        return list(self._data.keys())


class RedisKeyValueStore(KeyValueStore):
    """Redis 存储，所有 key 加统一前缀，value 以 JSON 文本保存"""

    def __init__(self, client=None, prefix: str = ""):
        self.client = client if client is not None else get_redis()
        self.prefix = prefix

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def get(self, key: str) -> Optional[Any]:
        raw = self.client.get(self._full_key(key))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        return json.loads(raw)

    def set(self, key: str, value: Any) -> bool:
        self.client.set(self._full_key(key), json.dumps(value, ensure_ascii=False))
        return True

    def delete(self, key: str) -> bool:
        return self.client.delete(self._full_key(key)) > 0

    def keys(self) -> List[str]:
        result = []
        for name in self.client.scan_iter(match=f"{self.prefix}*"):
            if isinstance(name, bytes):
                name = name.decode("utf-8")
            result.append(name[len(self.prefix):])
        return result


class DatabaseKeyValueStore(KeyValueStore):
    """关系库存储（kv_entry 表），需在应用上下文中使用；每次写入立即提交"""

    def get(self, key: str) -> Optional[Any]:
        entry = db.session.get(KeyValueEntry, key)
        return entry.value if entry else None

    def set(self, key: str, value: Any) -> bool:
        entry = db.session.get(KeyValueEntry, key)
        if entry is None:
            entry = KeyValueEntry(key=key, value=value)
            db.session.add(entry)
        else:
            entry.value = value
        db.session.commit()
        return True

    def delete(self, key: str) -> bool:
        entry = db.session.get(KeyValueEntry, key)
        if entry is None:
            return False
        db.session.delete(entry)
        db.session.commit()
        return True

    def keys(self) -> List[str]:
        return [row.key for row in KeyValueEntry.query.order_by(KeyValueEntry.key).all()]


def build_store(config) -> KeyValueStore:
    """根据 STORE_BACKEND 配置创建存储实例"""
    backend = (config.get("STORE_BACKEND") or "memory").lower()
    logger.info(f"Using {backend} key-value store")
    if backend == "redis":
        client = get_redis(config.get("REDIS_URL"))
        return RedisKeyValueStore(client, prefix=config.get("STORE_KEY_PREFIX", ""))
    if backend == "database":
        return DatabaseKeyValueStore()
    if backend == "memory":
        return MemoryKeyValueStore()
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")
