# repositories/membership_repository.py
from typing import List

from constants.history import MEMBERSHIPS_KEY
from models.test_step_membership import TestStepMembership
from repositories.entity_repository import EntityRepository


class MembershipRepository(EntityRepository[TestStepMembership]):
    storage_key = MEMBERSHIPS_KEY
    model = TestStepMembership

    def list_by_test_case(self, test_case_id: str) -> List[TestStepMembership]:
        """按 process_order 升序返回用例下的关联"""
        items = [m for m in self._items if m.test_case_id == test_case_id]
        return sorted(items, key=lambda m: (m.process_order, m.id))

    def max_process_order(self, test_case_id: str) -> int:
        orders = [m.process_order for m in self._items if m.test_case_id == test_case_id]
        return max(orders) if orders else 0
