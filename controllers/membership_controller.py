import uuid
from flask import Blueprint, request
from utils.response import json_response
from utils.exceptions import BizError, NotFoundError
from utils.validators import require_text, optional_text, positive_int
from extensions.tracking import get_tracking
from models.test_step_membership import TestStepMembership

membership_bp = Blueprint("membership", __name__, url_prefix="/api/memberships")


@membership_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message)


@membership_bp.get("")
def list_memberships():
    test_case_id = request.args.get("test_case_id", "").strip()
    with get_tracking().session() as ctx:
        if test_case_id:
            items = ctx.memberships.list_by_test_case(test_case_id)
        else:
            items = ctx.memberships.list_all()
    return json_response(data={"items": items, "total": len(items)})


@membership_bp.post("")
def create_membership():
    data = request.get_json(silent=True) or {}
    test_case_id = require_text(data, "test_case_id", "用例ID")
    catalog_step_id = require_text(data, "catalog_step_id", "步骤ID")
    membership_id = optional_text(data, "id", "关联ID") or f"membership-{uuid.uuid4().hex[:12]}"

    with get_tracking().session() as ctx:
        if ctx.memberships.get(membership_id):
            raise BizError("关联ID已存在", 400)
        if data.get("process_order") is None:
            process_order = ctx.memberships.next_process_order(test_case_id)
        else:
            process_order = positive_int(data["process_order"], "执行顺序")
        membership = ctx.memberships.add(TestStepMembership(
            id=membership_id,
            test_case_id=test_case_id,
            catalog_step_id=catalog_step_id,
            process_order=process_order,
        ))
    return json_response(message="添加成功", data=membership, code=201)


@membership_bp.put("/<membership_id>")
def update_membership(membership_id: str):
    data = request.get_json(silent=True) or {}
    patch = {}
    if "test_case_id" in data:
        patch["test_case_id"] = require_text(data, "test_case_id", "用例ID")
    if "catalog_step_id" in data:
        patch["catalog_step_id"] = require_text(data, "catalog_step_id", "步骤ID")
    if "process_order" in data:
        patch["process_order"] = positive_int(data["process_order"], "执行顺序")

    with get_tracking().session() as ctx:
        membership = ctx.memberships.update(membership_id, patch)
    if not membership:
        raise NotFoundError("关联不存在")
    return json_response(message="更新成功", data=membership)


@membership_bp.post("/reorder")
def reorder_memberships():
    data = request.get_json(silent=True) or {}
    items = data.get("items")
    if not isinstance(items, list) or not items:
        raise BizError("items 必须为非空数组", 400)

    updates = []
    for i, item in enumerate(items):
        if not isinstance(item, dict) or not isinstance(item.get("id"), str):
            raise BizError(f"第{i + 1}项缺少 id", 400)
        updates.append({
            "id": item["id"],
            "process_order": positive_int(item.get("process_order"), f"第{i + 1}项执行顺序"),
        })

    with get_tracking().session() as ctx:
        changed = ctx.memberships.reorder(updates)
    return json_response(message="排序已更新", data={"items": changed})


@membership_bp.delete("/<membership_id>")
def delete_membership(membership_id: str):
    with get_tracking().session() as ctx:
        membership = ctx.memberships.delete(membership_id)
    if not membership:
        raise NotFoundError("关联不存在")
    return json_response(message="删除成功", data={"id": membership.id})
