# repositories/catalog_step_repository.py
from typing import List

from constants.history import CATALOG_STEPS_KEY
from models.catalog_step import CatalogStep
from repositories.entity_repository import EntityRepository


class CatalogStepRepository(EntityRepository[CatalogStep]):
    storage_key = CATALOG_STEPS_KEY
    model = CatalogStep

    def search(self, keyword: str) -> List[CatalogStep]:
        if not keyword:
            return self.list_all()
        return [step for step in self._items if step.matches(keyword)]
