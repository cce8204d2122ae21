from flask import jsonify


def to_payload(obj):
    """把实体 / 历史条目（带 to_dict）及其容器转为可 JSON 序列化的数据"""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, dict):
        return {k: to_payload(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_payload(v) for v in obj]
    return obj


def json_response(message="success", data=None, code=200):
    resp = jsonify({"code": code, "message": message, "data": to_payload(data)})
    resp.status_code = code
    return resp
