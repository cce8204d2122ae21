# repositories/history_repository.py
from typing import Optional

from constants.history import HISTORY_KEY
from models.history import HistoryLog
from repositories.kv_store import KeyValueStore


class HistoryRepository:

    def __init__(self, store: KeyValueStore):
        self.store = store

    def load(self, max_history_size: Optional[int] = None) -> HistoryLog:
        return HistoryLog.from_dict(self.store.get(HISTORY_KEY), max_history_size=max_history_size)

    def save(self, log: HistoryLog) -> None:
        self.store.set(HISTORY_KEY, log.to_dict())
