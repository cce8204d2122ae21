# constants/history.py
"""
变更历史相关的枚举与常量
统一管理：
  - 变更动作 ChangeAction: create / update / delete / reorder / bulk-*
  - 实体类型 EntityType: catalog-step / test-case / test-membership / data-entry-row
  - 键值存储中使用的逻辑 key
  - 历史引擎对外上报的提示文案
"""

from enum import Enum


class ChangeAction(Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    REORDER = "reorder"
    BULK_UPDATE = "bulk-update"
    BULK_DELETE = "bulk-delete"

    @classmethod
    def values(cls):
        return [m.value for m in cls]


class EntityType(Enum):
    CATALOG_STEP = "catalog-step"
    TEST_CASE = "test-case"
    TEST_MEMBERSHIP = "test-membership"
    DATA_ENTRY_ROW = "data-entry-row"

    @classmethod
    def values(cls):
        return [m.value for m in cls]


# 键值存储 key
HISTORY_KEY = "app-history"
CATALOG_STEPS_KEY = "catalog-steps"
TEST_CASES_KEY = "test-cases"
MEMBERSHIPS_KEY = "test-memberships"

DEFAULT_MAX_HISTORY = 100

# 批量排序条目的 entity_id 占位
BULK_ENTITY_ID = "bulk"

# 上报文案
NOTHING_TO_UNDO = "Nothing to undo"
NOTHING_TO_REDO = "Nothing to redo"
INVALID_HISTORY_POSITION = "Invalid history position"
