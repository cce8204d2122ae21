# extensions/tracking.py
import logging
from flask import current_app

from extensions.database import db
from repositories.kv_store import build_store
from services.tracking_context import TrackingContext

logger = logging.getLogger(__name__)

_EXTENSION_KEY = "tracking"


def init_tracking(app) -> TrackingContext:
    """创建存储与共享的历史上下文，挂到 app.extensions 上"""
    with app.app_context():
        if app.config.get("STORE_BACKEND") == "database":
            # 首次启动时 kv_entry 表可能还不存在
            db.create_all()
        store = build_store(app.config)
        context = TrackingContext(store, max_history_size=app.config["HISTORY_MAX_SIZE"])
    app.extensions[_EXTENSION_KEY] = context
    logger.info(
        f"Tracking context ready: {len(context.history.log)} history entries, "
        f"cursor at {context.history.current_index}"
    )
    return context


def get_tracking() -> TrackingContext:
    return current_app.extensions[_EXTENSION_KEY]
