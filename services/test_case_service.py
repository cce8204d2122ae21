# services/test_case_service.py
from typing import Any, Dict, Optional

from constants.history import EntityType
from models.test_case import TestCase
from repositories.catalog_step_repository import CatalogStepRepository
from repositories.membership_repository import MembershipRepository
from repositories.test_case_repository import TestCaseRepository
from services.history_service import HistoryService
from services.tracked_service import TrackedEntityService


class TestCaseService(TrackedEntityService[TestCase]):
    """测试用例业务逻辑层"""

    __test__ = False

    entity_type = EntityType.TEST_CASE

    def __init__(self, repository: TestCaseRepository, history: HistoryService,
                 memberships: MembershipRepository, catalog_steps: CatalogStepRepository):
        super().__init__(repository, history)
        self.memberships = memberships
        self.catalog_steps = catalog_steps

    def describe_create(self, case: TestCase) -> str:
        return f"Created test case: {case.name}"

    def describe_update(self, case: TestCase) -> str:
        return f"Updated test case: {case.name}"

    def describe_delete(self, case: TestCase) -> str:
        return f"Deleted test case: {case.name}"

    def get_with_steps(self, case_id: str) -> Optional[Dict[str, Any]]:
        """
        用例及其有序步骤：按 process_order 排序，每项带上关联与目录步骤。
        步骤已被删除的关联直接跳过（不做级联）。
        """
        case = self.repository.get_by_id(case_id)
        if case is None:
            return None

        steps = []
        for membership in self.memberships.list_by_test_case(case_id):
            step = self.catalog_steps.get_by_id(membership.catalog_step_id)
            if step is None:
                continue
            steps.append({"membership": membership, "catalog_step": step})
        return {"test_case": case, "steps": steps}
