# -*- coding: utf-8 -*-
"""变更历史接口：撤销 / 重做 / 跳转 / 清空 / 备注 / 统计"""

import pytest


@pytest.fixture
def seeded(client):
    client.post("/api/catalog-steps", json={"id": "step-001", "name": "Init DB"})
    client.post("/api/test-cases", json={"id": "test-001", "name": "Basic Test"})
    client.post("/api/memberships", json={
        "id": "mem-001", "test_case_id": "test-001", "catalog_step_id": "step-001", "process_order": 1})
    return client


def test_history_state_after_edits(seeded):
    data = seeded.get("/api/history").get_json()["data"]

    assert data["current_index"] == 2
    assert data["can_undo"] is True
    assert data["can_redo"] is False
    assert [e["entity_type"] for e in data["entries"]] == ["catalog-step", "test-case", "test-membership"]
    assert all(e["applied"] for e in data["entries"])


def test_undo_all_then_redo_all(seeded):
    for _ in range(3):
        assert seeded.post("/api/history/undo").status_code == 200

    assert seeded.get("/api/catalog-steps").get_json()["data"]["total"] == 0
    assert seeded.get("/api/test-cases").get_json()["data"]["total"] == 0
    assert seeded.get("/api/memberships").get_json()["data"]["total"] == 0

    resp = seeded.post("/api/history/undo")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Nothing to undo"
    assert resp.get_json()["data"]["current_index"] == -1

    for _ in range(3):
        assert seeded.post("/api/history/redo").status_code == 200

    step = seeded.get("/api/catalog-steps/step-001").get_json()["data"]
    assert step["name"] == "Init DB"
    resp = seeded.post("/api/history/redo")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Nothing to redo"


def test_undo_response_carries_entry(seeded):
    resp = seeded.post("/api/history/undo")

    body = resp.get_json()
    assert body["message"] == "Undone: Added step to test case (order: 1)"
    assert body["data"]["entry"]["entity_id"] == "mem-001"
    assert body["data"]["can_redo"] is True


def test_jump_moves_cursor_without_replay(seeded):
    resp = seeded.post("/api/history/jump", json={"index": 0})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["current_index"] == 0
    assert seeded.get("/api/test-cases").get_json()["data"]["total"] == 1


@pytest.mark.parametrize("index", [-2, 3])
def test_jump_out_of_range(seeded, index):
    resp = seeded.post("/api/history/jump", json={"index": index})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Invalid history position"
    assert resp.get_json()["data"]["current_index"] == 2


def test_jump_requires_index(seeded):
    assert seeded.post("/api/history/jump", json={}).status_code == 400
    assert seeded.post("/api/history/jump", json={"index": "abc"}).status_code == 400


def test_comment_entry(seeded):
    entries = seeded.get("/api/history").get_json()["data"]["entries"]
    entry_id = entries[1]["id"]

    resp = seeded.post(f"/api/history/entries/{entry_id}/comment", json={"comment": "reviewed"})
    assert resp.get_json()["data"]["updated"] is True

    data = seeded.get("/api/history").get_json()["data"]
    assert data["entries"][1]["comment"] == "reviewed"
    assert data["current_index"] == 2


def test_comment_unknown_entry_is_silent(seeded):
    resp = seeded.post("/api/history/entries/nope/comment", json={"comment": "x"})

    assert resp.status_code == 200
    assert resp.get_json()["data"]["updated"] is False


def test_clear_history(seeded):
    resp = seeded.delete("/api/history")

    assert resp.status_code == 200
    data = seeded.get("/api/history").get_json()["data"]
    assert data["entries"] == []
    assert data["current_index"] == -1
    assert data["max_history_size"] == 100
    # 集合不受影响
    assert seeded.get("/api/catalog-steps").get_json()["data"]["total"] == 1


def test_filter_history_by_entity_type(seeded):
    data = seeded.get("/api/history", query_string={"entity_type": "test-case"}).get_json()["data"]

    assert [e["entity_id"] for e in data["entries"]] == ["test-001"]
    assert data["entries"][0]["index"] == 1


def test_filter_history_rejects_unknown_type(seeded):
    assert seeded.get("/api/history", query_string={"entity_type": "robot"}).status_code == 400


def test_history_stats(seeded):
    seeded.put("/api/test-cases/test-001", json={"description": "smoke"})

    data = seeded.get("/api/history/stats").get_json()["data"]

    assert data["total"] == 4
    assert data["by_action"] == {"create": 3, "update": 1}
    assert data["by_entity_type"]["test-case"] == 2
