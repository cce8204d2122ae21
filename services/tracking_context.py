# services/tracking_context.py
import threading
from contextlib import contextmanager

from constants.history import DEFAULT_MAX_HISTORY
from repositories.catalog_step_repository import CatalogStepRepository
from repositories.history_repository import HistoryRepository
from repositories.kv_store import KeyValueStore
from repositories.membership_repository import MembershipRepository
from repositories.test_case_repository import TestCaseRepository
from services.catalog_step_service import CatalogStepService
from services.history_service import HistoryService
from services.membership_service import MembershipService
from services.test_case_service import TestCaseService


class TrackingContext:
    """
    组装一套共享同一个 HistoryLog 的实体服务。
    所有写操作都应在 session() 内执行，保证按调用顺序串行生效。
    """

    def __init__(self, store: KeyValueStore, max_history_size: int = DEFAULT_MAX_HISTORY):
        self.store = store
        self.history = HistoryService(HistoryRepository(store), max_history_size)

        catalog_repo = CatalogStepRepository(store)
        membership_repo = MembershipRepository(store)
        case_repo = TestCaseRepository(store)

        self.catalog_steps = CatalogStepService(catalog_repo, self.history)
        self.memberships = MembershipService(membership_repo, self.history)
        self.test_cases = TestCaseService(case_repo, self.history, membership_repo, catalog_repo)

        self._lock = threading.RLock()

    @contextmanager
    def session(self):
        with self._lock:
            yield self

    def undo(self):
        return self.history.undo()

    def redo(self):
        return self.history.redo()
