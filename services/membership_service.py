# services/membership_service.py
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from constants.history import ChangeAction, EntityType, BULK_ENTITY_ID
from models.test_step_membership import TestStepMembership
from repositories.membership_repository import MembershipRepository
from services.tracked_service import TrackedEntityService

logger = logging.getLogger(__name__)


class MembershipService(TrackedEntityService[TestStepMembership]):
    """用例-步骤关联业务逻辑层，额外支持批量调整执行顺序"""

    entity_type = EntityType.TEST_MEMBERSHIP
    refresh_updated_at = False
    repository: MembershipRepository

    def describe_create(self, membership: TestStepMembership) -> str:
        return f"Added step to test case (order: {membership.process_order})"

    def describe_update(self, membership: TestStepMembership) -> str:
        return f"Updated step membership (order: {membership.process_order})"

    def describe_delete(self, membership: TestStepMembership) -> str:
        return "Removed step from test case"

    def entity_name(self, membership: TestStepMembership) -> Optional[str]:
        return None

    def list_by_test_case(self, test_case_id: str) -> List[TestStepMembership]:
        return self.repository.list_by_test_case(test_case_id)

    def next_process_order(self, test_case_id: str) -> int:
        return self.repository.max_process_order(test_case_id) + 1

    def reorder(self, updates: Iterable[Dict]) -> List[TestStepMembership]:
        """
        批量修改 process_order，整体记为一条 reorder 记录（entity_id="bulk"）。
        :param updates: [{"id": ..., "process_order": ...}]
        :return: 修改后的关联；没有任何 id 命中时不记录历史，返回空列表
        """
        orders = {u["id"]: int(u["process_order"]) for u in updates}
        previous = [m for m in self.repository.list_all() if m.id in orders]
        if not previous:
            logger.debug("reorder: no matching memberships")
            return []

        current = [replace(m, process_order=orders[m.id]) for m in previous]
        self.repository.replace_matching(current)
        self.history.record(
            ChangeAction.REORDER,
            self.entity_type,
            BULK_ENTITY_ID,
            f"Reordered {len(orders)} test steps",
            previous_state=previous,
            new_state=current,
        )
        self.repository.save()
        return current
