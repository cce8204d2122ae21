# utils/validators.py
"""请求参数的基础校验：只做必填与类型检查，业务规则（如名称唯一）由上层负责"""
from typing import Any, Dict, List, Optional

from utils.exceptions import BizError


def require_text(data: Dict[str, Any], field: str, label: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise BizError(f"{label}不能为空", 400)
    return value.strip()


def optional_text(data: Dict[str, Any], field: str, label: str) -> Optional[str]:
    if field not in data or data[field] is None:
        return None
    value = data[field]
    if not isinstance(value, str):
        raise BizError(f"{label}必须是字符串", 400)
    return value.strip()


def string_list(data: Dict[str, Any], field: str, label: str) -> Optional[List[str]]:
    if field not in data or data[field] is None:
        return None
    value = data[field]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise BizError(f"{label}必须是字符串数组", 400)
    return [v.strip() for v in value if v.strip()]


def positive_int(value: Any, label: str) -> int:
    # bool 是 int 的子类，需要单独排除
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise BizError(f"{label}必须是正整数", 400)
    return value


def int_value(value: Any, label: str) -> int:
    if isinstance(value, bool):
        raise BizError(f"{label}必须是整数", 400)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BizError(f"{label}必须是整数", 400)
