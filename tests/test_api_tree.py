"""
Tests for GET /api/tree and POST /api/tree/root.
"""

import sys

import pytest

import api.config.settings as settings_module
from tests.helpers import create_node


@pytest.mark.asyncio
async def test_empty_store_is_not_initialized(client):
    response = await client.get("/api/tree")

    assert response.status_code == 200
    assert response.json() == {"initialized": False, "root": None, "detachedCount": 0}


@pytest.mark.asyncio
async def test_ensure_root_creates_default_root_once(admin_client, monkeypatch):
    monkeypatch.setattr(settings_module, "DEFAULT_ROOT_TITLE", "Leads")

    first = await admin_client.post("/api/tree/root")
    second = await admin_client.post("/api/tree/root")

    assert first.status_code == 200
    assert first.json()["title"] == "Leads"
    assert first.json()["type"] == "branch"
    assert first.json()["parentId"] is None
    assert second.json()["id"] == first.json()["id"]
    assert len((await admin_client.get("/api/nodes")).json()) == 1


@pytest.mark.asyncio
async def test_scenario_tree_and_delete(admin_client, client):
    root = await create_node(admin_client, type="branch", title="Root")
    eng = await create_node(admin_client, type="branch", title="Eng", parentId=root["id"])
    ann = await create_node(
        admin_client,
        type="member",
        parentId=eng["id"],
        memberDetails={"name": "Ann", "role": "Lead", "bio": "..."},
    )

    tree = (await client.get("/api/tree")).json()

    assert tree["initialized"] is True
    assert tree["detachedCount"] == 0
    assert tree["root"]["id"] == root["id"]
    assert tree["root"]["memberDetails"] is None
    assert [child["id"] for child in tree["root"]["children"]] == [eng["id"]]
    eng_node = tree["root"]["children"][0]
    assert eng_node["title"] == "Eng"
    assert [child["id"] for child in eng_node["children"]] == [ann["id"]]
    ann_node = eng_node["children"][0]
    assert ann_node["title"] is None
    assert ann_node["memberDetails"] == {
        "name": "Ann",
        "bio": "...",
        "role": "Lead",
        "imageUrl": None,
    }
    assert ann_node["children"] == []

    assert (await admin_client.delete(f"/api/nodes/{eng['id']}")).status_code == 200

    tree = (await client.get("/api/tree")).json()
    assert tree["root"]["id"] == root["id"]
    assert tree["root"]["children"] == []


@pytest.mark.asyncio
async def test_children_are_listed_in_creation_order(admin_client, client):
    root = await create_node(admin_client, type="branch", title="Root")
    titles = ["Ops", "Eng", "Design", "Sales"]
    for title in titles:
        await create_node(admin_client, type="branch", title=title, parentId=root["id"])

    tree = (await client.get("/api/tree")).json()

    assert [child["title"] for child in tree["root"]["children"]] == titles


@pytest.mark.asyncio
async def test_multiple_roots_in_store_yield_500(admin_client, client, store):
    await create_node(admin_client, type="branch", title="Root")
    # Bypasses NodeService, which refuses a second root
    await store.insert({"type": "branch", "title": "Rogue", "parent_id": None})

    response = await client.get("/api/tree")

    assert response.status_code == 500
    assert "Expected exactly one root node" in response.json()["detail"]


@pytest.mark.asyncio
async def test_tree_deeper_than_recursion_limit(client, service):
    depth = sys.getrecursionlimit() + 200
    root = await service.ensure_root("Root")
    parent_id = root.id
    for level in range(1, depth):
        node = await service.create("branch", parent_id=parent_id, title=f"Level {level}")
        parent_id = node.id

    response = await client.get("/api/tree")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    body = response.text
    assert body.startswith(f'{{"initialized":true,"root":{{"id":"{root.id}"')
    assert body.count('"children":[') == depth
    assert f'"id":"{parent_id}"' in body
    # Innermost node, then one "]}" per enclosing level
    assert body.endswith('"children":[]}' + "]}" * (depth - 1) + ',"detachedCount":0}')
