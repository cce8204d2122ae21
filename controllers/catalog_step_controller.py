import uuid
from flask import Blueprint, request
from utils.response import json_response
from utils.exceptions import BizError, NotFoundError
from utils.validators import require_text, optional_text, string_list
from extensions.tracking import get_tracking
from models.catalog_step import CatalogStep

catalog_step_bp = Blueprint("catalog_step", __name__, url_prefix="/api/catalog-steps")


@catalog_step_bp.errorhandler(BizError)
def _biz_error(e: BizError):
    return json_response(code=e.code, message=e.message)


def _collect_fields(data: dict) -> dict:
    fields = {
        "description": optional_text(data, "description", "描述"),
        "java_class": optional_text(data, "java_class", "Java 类名"),
        "java_method": optional_text(data, "java_method", "Java 方法名"),
        "sql_tables": string_list(data, "sql_tables", "数据表"),
    }
    return {k: v for k, v in fields.items() if v is not None}


@catalog_step_bp.get("")
def list_catalog_steps():
    keyword = request.args.get("keyword", "").strip()
    with get_tracking().session() as ctx:
        items = ctx.catalog_steps.search(keyword)
    return json_response(data={"items": items, "total": len(items)})


@catalog_step_bp.get("/<step_id>")
def get_catalog_step(step_id: str):
    with get_tracking().session() as ctx:
        step = ctx.catalog_steps.get(step_id)
    if not step:
        raise NotFoundError("步骤不存在")
    return json_response(data=step)


@catalog_step_bp.post("")
def create_catalog_step():
    data = request.get_json(silent=True) or {}
    name = require_text(data, "name", "步骤名称")
    step_id = optional_text(data, "id", "步骤ID") or f"step-{uuid.uuid4().hex[:12]}"

    with get_tracking().session() as ctx:
        if ctx.catalog_steps.get(step_id):
            raise BizError("步骤ID已存在", 400)
        step = ctx.catalog_steps.add(CatalogStep(id=step_id, name=name, **_collect_fields(data)))
    return json_response(message="创建成功", data=step, code=201)


@catalog_step_bp.put("/<step_id>")
def update_catalog_step(step_id: str):
    data = request.get_json(silent=True) or {}
    patch = _collect_fields(data)
    if "name" in data:
        patch["name"] = require_text(data, "name", "步骤名称")

    with get_tracking().session() as ctx:
        step = ctx.catalog_steps.update(step_id, patch)
    if not step:
        raise NotFoundError("步骤不存在")
    return json_response(message="更新成功", data=step)


@catalog_step_bp.delete("/<step_id>")
def delete_catalog_step(step_id: str):
    with get_tracking().session() as ctx:
        step = ctx.catalog_steps.delete(step_id)
    if not step:
        raise NotFoundError("步骤不存在")
    return json_response(message="删除成功", data={"id": step.id})
