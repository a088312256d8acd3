from datetime import datetime

import pytest
from sqlalchemy import update

from todo_api.models.todo import Todo

pytestmark = pytest.mark.anyio


async def test_todo_lifecycle(client):
    res = await client.post("/register", json={"username": "al", "email": "al@x.com", "password": "pw"})
    assert res.status_code == 201
    user_id = res.json()["id"]
    res = await client.post("/login", json={"email": "al@x.com", "password": "pw"})
    headers = {"Authorization": f"Bearer {res.json()['token']}"}

    res = await client.post("/todos", json={"title": "buy milk"}, headers=headers)
    assert res.status_code == 201
    todo = res.json()
    assert todo["title"] == "buy milk"
    assert todo["completed"] is False
    assert todo["description"] is None
    assert todo["owner_id"] == user_id
    todo_id = todo["id"]

    res = await client.get("/todos", headers=headers)
    assert res.status_code == 200
    assert [t["id"] for t in res.json()] == [todo_id]

    res = await client.delete(f"/todos/{todo_id}", headers=headers)
    assert res.status_code == 200
    assert res.json()["message"] == "Todo deleted"
    assert res.json()["todo"]["id"] == todo_id

    res = await client.delete(f"/todos/{todo_id}", headers=headers)
    assert res.status_code == 404
    assert res.json()["error"] == "not_found"


async def test_owner_comes_from_token_not_body(client, login):
    al = await login("al", "al@x.com")
    bo = await login("bo", "bo@x.com")

    res = await client.post("/todos", json={"title": "mine", "description": "d", "owner_id": 999}, headers=al)
    assert res.status_code == 201
    owner_id = res.json()["owner_id"]
    assert owner_id != 999

    bo_todo = (await client.post("/todos", json={"title": "bo's"}, headers=bo)).json()
    assert bo_todo["owner_id"] != owner_id


async def test_list_only_returns_own_todos_in_creation_order(client, login):
    al = await login("al", "al@x.com")
    bo = await login("bo", "bo@x.com")

    for title in ("one", "two", "three"):
        await client.post("/todos", json={"title": title}, headers=al)
    await client.post("/todos", json={"title": "other"}, headers=bo)

    res = await client.get("/todos", headers=al)
    assert [t["title"] for t in res.json()] == ["one", "two", "three"]

    res = await client.get("/todos", headers=bo)
    assert [t["title"] for t in res.json()] == ["other"]


async def test_partial_update_only_flips_completed(client, login):
    headers = await login("al", "al@x.com")
    todo = (await client.post("/todos", json={"title": "t", "description": "d"}, headers=headers)).json()

    res = await client.put(f"/todos/{todo['id']}", json={"completed": True}, headers=headers)
    assert res.status_code == 200
    body = res.json()
    assert body["message"] == "Todo updated"
    assert body["todo"]["completed"] is True
    assert body["todo"]["title"] == "t"
    assert body["todo"]["description"] == "d"


async def test_update_title_keeps_other_fields(client, login):
    headers = await login("al", "al@x.com")
    todo = (await client.post("/todos", json={"title": "t", "description": "d"}, headers=headers)).json()
    await client.put(f"/todos/{todo['id']}", json={"completed": True}, headers=headers)

    res = await client.put(f"/todos/{todo['id']}", json={"title": "new", "description": None}, headers=headers)
    assert res.status_code == 200
    updated = res.json()["todo"]
    assert updated["title"] == "new"
    assert updated["description"] == "d"
    assert updated["completed"] is True


async def test_other_users_todo_is_not_found(client, login):
    al = await login("al", "al@x.com")
    bo = await login("bo", "bo@x.com")
    todo = (await client.post("/todos", json={"title": "secret"}, headers=bo)).json()

    res = await client.put(f"/todos/{todo['id']}", json={"title": "hijacked"}, headers=al)
    assert res.status_code == 404
    res = await client.delete(f"/todos/{todo['id']}", headers=al)
    assert res.status_code == 404
    res = await client.get(f"/todos/{todo['id']}", headers=al)
    assert res.status_code == 404

    res = await client.get(f"/todos/{todo['id']}", headers=bo)
    assert res.status_code == 200
    assert res.json()["title"] == "secret"


async def test_delete_missing_todo_leaves_rows(client, login):
    headers = await login("al", "al@x.com")
    await client.post("/todos", json={"title": "keep"}, headers=headers)

    res = await client.delete("/todos/12345", headers=headers)
    assert res.status_code == 404

    res = await client.get("/todos", headers=headers)
    assert [t["title"] for t in res.json()] == ["keep"]


async def test_update_missing_todo(client, login):
    headers = await login("al", "al@x.com")
    res = await client.put("/todos/12345", json={"completed": True}, headers=headers)
    assert res.status_code == 404


async def test_protected_routes_require_token(client):
    assert (await client.get("/todos")).status_code == 401
    assert (await client.post("/todos", json={"title": "x"})).status_code == 401
    assert (await client.put("/todos/1", json={})).status_code == 401
    assert (await client.delete("/todos/1")).status_code == 401


async def test_invalid_token_rejected(client):
    res = await client.get("/todos", headers={"Authorization": "Bearer not-a-token"})
    assert res.status_code == 401
    assert res.json()["error"] == "invalid_token"
    assert res.headers["www-authenticate"] == "Bearer"


async def test_update_refreshes_updated_at_only(client, login, session_factory):
    headers = await login("al", "al@x.com")
    todo = (await client.post("/todos", json={"title": "t"}, headers=headers)).json()

    past = datetime(2000, 1, 1)
    async with session_factory() as session:
        await session.execute(
            update(Todo).where(Todo.id == todo["id"]).values(created_at=past, updated_at=past)
        )
        await session.commit()

    res = await client.put(f"/todos/{todo['id']}", json={"title": "t2"}, headers=headers)
    assert res.status_code == 200
    updated = res.json()["todo"]
    assert datetime.fromisoformat(updated["created_at"]).replace(tzinfo=None) == past
    assert datetime.fromisoformat(updated["updated_at"]).replace(tzinfo=None) > past
