# -*- coding: utf-8 -*-
"""目录步骤 / 用例 / 关联接口"""


def _create_step(client, **overrides):
    payload = {
        "id": "step-001",
        "name": "Init DB",
        "description": "Create schema",
        "java_class": "DbSteps",
        "java_method": "initDb",
        "sql_tables": ["users"],
    }
    payload.update(overrides)
    return client.post("/api/catalog-steps", json=payload)


def test_create_and_get_catalog_step(client):
    resp = _create_step(client)
    assert resp.status_code == 201, resp.get_json()
    data = resp.get_json()["data"]
    assert data["id"] == "step-001"
    assert data["sql_tables"] == ["users"]

    resp = client.get("/api/catalog-steps/step-001")
    assert resp.get_json()["data"]["name"] == "Init DB"


def test_create_catalog_step_requires_name(client):
    resp = client.post("/api/catalog-steps", json={"description": "no name"})

    assert resp.status_code == 400
    assert "步骤名称不能为空" in resp.get_json()["message"]


def test_create_catalog_step_rejects_bad_tables(client):
    resp = _create_step(client, sql_tables="users")

    assert resp.status_code == 400


def test_create_catalog_step_generates_id(client):
    resp = client.post("/api/catalog-steps", json={"name": "Anonymous"})

    assert resp.status_code == 201
    assert resp.get_json()["data"]["id"].startswith("step-")


def test_duplicate_catalog_step_id_rejected(client):
    _create_step(client)
    resp = _create_step(client)

    assert resp.status_code == 400


def test_list_catalog_steps_with_keyword(client):
    _create_step(client)
    _create_step(client, id="step-002", name="Open browser", java_class="Web", java_method="open")

    resp = client.get("/api/catalog-steps", query_string={"keyword": "browser"})

    data = resp.get_json()["data"]
    assert data["total"] == 1
    assert data["items"][0]["id"] == "step-002"


def test_update_and_delete_unknown_step_return_404(client):
    assert client.put("/api/catalog-steps/missing", json={"name": "x"}).status_code == 404
    assert client.delete("/api/catalog-steps/missing").status_code == 404
    assert client.get("/api/catalog-steps/missing").status_code == 404

    history = client.get("/api/history").get_json()["data"]
    assert history["entries"] == []


def test_update_catalog_step(client):
    _create_step(client)

    resp = client.put("/api/catalog-steps/step-001", json={"name": "Init database"})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["name"] == "Init database"
    assert resp.get_json()["data"]["java_class"] == "DbSteps"


def test_test_case_detail_includes_ordered_steps(client):
    _create_step(client)
    _create_step(client, id="step-002", name="Login")
    client.post("/api/test-cases", json={"id": "test-001", "name": "Basic Test"})
    client.post("/api/memberships", json={"test_case_id": "test-001", "catalog_step_id": "step-002"})
    client.post("/api/memberships", json={"test_case_id": "test-001", "catalog_step_id": "step-001"})

    resp = client.get("/api/test-cases/test-001")

    data = resp.get_json()["data"]
    assert data["test_case"]["name"] == "Basic Test"
    assert [s["catalog_step"]["id"] for s in data["steps"]] == ["step-002", "step-001"]
    assert [s["membership"]["process_order"] for s in data["steps"]] == [1, 2]


def test_reorder_memberships_endpoint(client):
    client.post("/api/memberships", json={
        "id": "a", "test_case_id": "test-001", "catalog_step_id": "s1", "process_order": 1})
    client.post("/api/memberships", json={
        "id": "b", "test_case_id": "test-001", "catalog_step_id": "s2", "process_order": 2})

    resp = client.post("/api/memberships/reorder", json={"items": [
        {"id": "a", "process_order": 2},
        {"id": "b", "process_order": 1},
    ]})
    assert resp.status_code == 200

    items = client.get("/api/memberships", query_string={"test_case_id": "test-001"}).get_json()["data"]["items"]
    assert [m["id"] for m in items] == ["b", "a"]

    client.post("/api/history/undo")
    items = client.get("/api/memberships", query_string={"test_case_id": "test-001"}).get_json()["data"]["items"]
    assert [(m["id"], m["process_order"]) for m in items] == [("a", 1), ("b", 2)]


def test_reorder_requires_items(client):
    assert client.post("/api/memberships/reorder", json={"items": []}).status_code == 400
    resp = client.post("/api/memberships/reorder", json={"items": [{"id": "a", "process_order": 0}]})
    assert resp.status_code == 400


def test_unknown_route_returns_json_404(client):
    resp = client.get("/api/nowhere")

    assert resp.status_code == 404
    assert resp.get_json()["code"] == 404
