# services/catalog_step_service.py
from typing import List

from constants.history import EntityType
from models.catalog_step import CatalogStep
from repositories.catalog_step_repository import CatalogStepRepository
from services.tracked_service import TrackedEntityService


class CatalogStepService(TrackedEntityService[CatalogStep]):
    """用例步骤目录业务逻辑层"""

    entity_type = EntityType.CATALOG_STEP
    repository: CatalogStepRepository

    def describe_create(self, step: CatalogStep) -> str:
        return f"Created catalog step: {step.name}"

    def describe_update(self, step: CatalogStep) -> str:
        return f"Updated catalog step: {step.name}"

    def describe_delete(self, step: CatalogStep) -> str:
        return f"Deleted catalog step: {step.name}"

    def search(self, keyword: str) -> List[CatalogStep]:
        return self.repository.search(keyword)
