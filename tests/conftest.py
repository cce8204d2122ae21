import pytest

from app import create_app
from repositories.kv_store import MemoryKeyValueStore
from services.tracking_context import TrackingContext


@pytest.fixture()
def app():
    """测试用 Flask 应用（内存键值存储）"""
    app = create_app("testing")
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def store():
    return MemoryKeyValueStore()


@pytest.fixture()
def ctx(store):
    """一套共享同一 HistoryLog 的实体服务"""
    return TrackingContext(store, max_history_size=100)


@pytest.fixture
def make_step(ctx):
    """
    创建目录步骤
    """
    from models import CatalogStep

    def _create(step_id: str, name: str = None, **fields):
        return ctx.catalog_steps.add(CatalogStep(id=step_id, name=name or step_id, **fields))
    return _create


@pytest.fixture
def make_case(ctx):
    from models import TestCase

    def _create(case_id: str, name: str = None, description: str = ""):
        return ctx.test_cases.add(TestCase(id=case_id, name=name or case_id, description=description))
    return _create


@pytest.fixture
def make_membership(ctx):
    from models import TestStepMembership

    def _create(membership_id: str, test_case_id: str, catalog_step_id: str, process_order: int):
        return ctx.memberships.add(TestStepMembership(
            id=membership_id,
            test_case_id=test_case_id,
            catalog_step_id=catalog_step_id,
            process_order=process_order,
        ))
    return _create
