from flask import Blueprint, request
from utils.response import json_response
from utils.exceptions import BizError
from utils.validators import int_value
from extensions.tracking import get_tracking
from constants.history import (
    ChangeAction,
    EntityType,
    NOTHING_TO_UNDO,
    NOTHING_TO_REDO,
    INVALID_HISTORY_POSITION,
)

history_bp = Blueprint("history", __name__, url_prefix="/api/history")


@history_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message)


def _parse_enum(enum_cls, raw, label):
    if not raw:
        return None
    if raw not in enum_cls.values():
        raise BizError(f"{label}必须是 {enum_cls.values()} 之一", 400)
    return enum_cls(raw)


def _cursor_payload(history, entry=None):
    return {
        "entry": entry,
        "current_index": history.current_index,
        "can_undo": history.can_undo,
        "can_redo": history.can_redo,
    }


@history_bp.get("")
def get_history():
    entity_type = _parse_enum(EntityType, request.args.get("entity_type"), "实体类型")
    action = _parse_enum(ChangeAction, request.args.get("action"), "变更动作")
    with get_tracking().session() as ctx:
        state = ctx.history.state(entity_type=entity_type, action=action)
    return json_response(data=state)


@history_bp.get("/stats")
def get_history_stats():
    days = request.args.get("days", 7, type=int)
    with get_tracking().session() as ctx:
        stats = ctx.history.stats(days=max(days, 1))
    return json_response(data=stats)


@history_bp.post("/undo")
def undo():
    with get_tracking().session() as ctx:
        entry = ctx.history.undo()
        payload = _cursor_payload(ctx.history, entry)
    if entry is None:
        return json_response(code=400, message=NOTHING_TO_UNDO, data=payload)
    return json_response(message=f"Undone: {entry.description}", data=payload)


@history_bp.post("/redo")
def redo():
    with get_tracking().session() as ctx:
        entry = ctx.history.redo()
        payload = _cursor_payload(ctx.history, entry)
    if entry is None:
        return json_response(code=400, message=NOTHING_TO_REDO, data=payload)
    return json_response(message=f"Redone: {entry.description}", data=payload)


@history_bp.post("/jump")
def jump_to_entry():
    """只移动游标，不回放中间的变更"""
    data = request.get_json(silent=True) or {}
    if "index" not in data:
        raise BizError("index 不能为空", 400)
    target_index = int_value(data["index"], "index")

    with get_tracking().session() as ctx:
        ok = ctx.history.jump_to_entry(target_index)
        payload = _cursor_payload(ctx.history)
    if not ok:
        return json_response(code=400, message=INVALID_HISTORY_POSITION, data=payload)
    return json_response(message="已跳转", data=payload)


@history_bp.delete("")
def clear_history():
    with get_tracking().session() as ctx:
        ctx.history.clear_history()
        payload = _cursor_payload(ctx.history)
    return json_response(message="History cleared", data=payload)


@history_bp.post("/entries/<entry_id>/comment")
def add_comment(entry_id: str):
    data = request.get_json(silent=True) or {}
    comment = data.get("comment")
    if not isinstance(comment, str) or not comment.strip():
        raise BizError("备注不能为空", 400)

    # 未知条目静默忽略
    with get_tracking().session() as ctx:
        updated = ctx.history.add_comment(entry_id, comment.strip())
    return json_response(message="备注已保存", data={"id": entry_id, "updated": updated})
