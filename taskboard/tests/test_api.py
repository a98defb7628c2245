"""
API endpoint tests for all routes.
Uses in-memory SQLite + dependency-overridden FastAPI test client.
"""
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import OperationalError

from taskboard.models import Todo


# ===================== HEALTH / ROOT =====================


async def test_root(client):
    r = await client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "running"


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


# ===================== USERS =====================


async def test_list_users(client, seed_data):
    r = await client.get("/users")
    assert r.status_code == 200
    assert [u["name"] for u in r.json()] == ["Alice", "Bob"]


async def test_register_user(client):
    r = await client.post("/users", json={"name": "Carol", "avatar": "https://example.com/c.svg"})
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Carol"
    assert body["avatar"] == "https://example.com/c.svg"
    assert isinstance(body["id"], int)


async def test_register_user_without_name(client):
    r = await client.post("/users", json={"avatar": "https://example.com/c.svg"})
    assert r.status_code == 400
    assert r.json() == {"error": "Name is required"}


async def test_register_user_blank_name(client):
    r = await client.post("/users", json={"name": "   "})
    assert r.status_code == 400


# ===================== CATEGORIES =====================


async def test_create_category(client):
    r = await client.post("/categories", json={"name": "Errands", "color": "#EF4444"})
    assert r.status_code == 200
    assert r.json()["name"] == "Errands"
    assert r.json()["color"] == "#EF4444"


async def test_create_category_without_name(client):
    r = await client.post("/categories", json={"color": "#EF4444"})
    assert r.status_code == 400
    assert "error" in r.json()


async def test_create_category_bad_color(client):
    r = await client.post("/categories", json={"name": "Errands", "color": "red"})
    assert r.status_code == 400


async def test_update_category(client, seed_data):
    r = await client.put(f"/categories/{seed_data['work']}", json={"name": "Office", "color": "#4F46E5"})
    assert r.status_code == 200
    assert r.json() == {"id": seed_data["work"], "name": "Office", "color": "#4F46E5"}


async def test_update_category_keeps_color_when_omitted(client, seed_data):
    r = await client.put(f"/categories/{seed_data['work']}", json={"name": "Office"})
    assert r.status_code == 200
    assert r.json()["color"] == "#10B981"


async def test_update_category_requires_name(client, seed_data):
    r = await client.put(f"/categories/{seed_data['work']}", json={"color": "#4F46E5"})
    assert r.status_code == 400


async def test_update_category_not_found(client):
    r = await client.put("/categories/9999", json={"name": "Nope"})
    assert r.status_code == 404
    assert r.json() == {"error": "Category not found"}


async def test_delete_unused_category(client, seed_data):
    r = await client.delete(f"/categories/{seed_data['home']}")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    r = await client.get("/categories")
    assert [c["name"] for c in r.json()] == ["Work"]


async def test_delete_category_in_use(client, db_session, seed_data):
    db_session.add(Todo(text="Write report", user_id=seed_data["alice"], category_id=seed_data["work"]))
    await db_session.commit()

    r = await client.delete(f"/categories/{seed_data['work']}")
    assert r.status_code == 400
    assert r.json() == {"error": "Category is used by todos"}

    r = await client.get("/categories")
    assert seed_data["work"] in [c["id"] for c in r.json()]


# ===================== TODOS =====================


async def test_create_todo(client, seed_data):
    r = await client.post("/todos", json={
        "text": "Ship report",
        "category_id": seed_data["work"],
        "user_id": seed_data["alice"],
    })
    assert r.status_code == 200
    body = r.json()
    assert body["text"] == "Ship report"
    assert body["completed"] is False
    assert body["user_id"] == seed_data["alice"]
    assert body["category_id"] == seed_data["work"]
    assert body["created_at"] is not None


async def test_create_todo_without_text(client, seed_data):
    r = await client.post("/todos", json={"user_id": seed_data["alice"]})
    assert r.status_code == 400
    assert r.json() == {"error": "Text and user are required"}


async def test_create_todo_without_user(client, seed_data):
    r = await client.post("/todos", json={"text": "Orphan"})
    assert r.status_code == 400
    assert r.json() == {"error": "Text and user are required"}


async def test_create_todo_malformed_user_id(client):
    r = await client.post("/todos", json={"text": "Bad", "user_id": "not-a-number"})
    assert r.status_code == 400
    assert "user_id" in r.json()["error"]


async def test_list_todos_filtered_by_user(client, db_session, seed_data):
    db_session.add_all([
        Todo(text="Alice 1", user_id=seed_data["alice"], category_id=seed_data["work"]),
        Todo(text="Bob 1", user_id=seed_data["bob"], category_id=seed_data["home"]),
        Todo(text="Alice 2", user_id=seed_data["alice"], category_id=seed_data["home"]),
    ])
    await db_session.commit()

    r = await client.get("/todos", params={"user_id": seed_data["alice"]})
    assert r.status_code == 200
    todos = r.json()
    assert [t["text"] for t in todos] == ["Alice 1", "Alice 2"]
    assert all(t["user_id"] == seed_data["alice"] for t in todos)

    r = await client.get("/todos")
    assert len(r.json()) == 3


async def test_update_todo(client, seed_data):
    r = await client.post("/todos", json={"text": "Draft", "category_id": seed_data["work"], "user_id": seed_data["alice"]})
    todo_id = r.json()["id"]

    r = await client.put(f"/todos/{todo_id}", json={"text": "Final", "category_id": seed_data["home"]})
    assert r.status_code == 200
    assert r.json()["text"] == "Final"
    assert r.json()["category_id"] == seed_data["home"]


async def test_update_todo_blank_text(client, seed_data):
    r = await client.post("/todos", json={"text": "Draft", "user_id": seed_data["alice"]})
    r = await client.put(f"/todos/{r.json()['id']}", json={"text": ""})
    assert r.status_code == 400


async def test_update_todo_not_found(client):
    r = await client.put("/todos/9999", json={"text": "Ghost"})
    assert r.status_code == 404


async def test_toggle_todo_twice(client, seed_data):
    r = await client.post("/todos", json={"text": "Flip me", "user_id": seed_data["alice"]})
    todo_id = r.json()["id"]

    r = await client.patch(f"/todos/{todo_id}/toggle")
    assert r.status_code == 200
    assert r.json()["completed"] is True

    r = await client.patch(f"/todos/{todo_id}/toggle")
    assert r.json()["completed"] is False


async def test_toggle_todo_not_found(client):
    r = await client.patch("/todos/9999/toggle")
    assert r.status_code == 404
    assert r.json() == {"error": "Todo not found"}


async def test_delete_todo(client, seed_data):
    r = await client.post("/todos", json={"text": "Temp", "user_id": seed_data["alice"]})
    todo_id = r.json()["id"]

    r = await client.delete(f"/todos/{todo_id}")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    r = await client.get("/todos", params={"user_id": seed_data["alice"]})
    assert r.json() == []


async def test_delete_missing_todo_succeeds(client):
    r = await client.delete("/todos/9999")
    assert r.status_code == 200


# ===================== STORE FAILURES =====================


async def test_store_failure_is_reported_as_500(client, db_session):
    failure = OperationalError("SELECT", {}, Exception("database is locked"))
    with patch.object(db_session, "execute", new_callable=AsyncMock) as mock:
        mock.side_effect = failure
        r = await client.get("/categories")

    assert r.status_code == 500
    assert r.json() == {"error": "database is locked"}


# ===================== END TO END =====================


async def test_full_flow(client):
    r = await client.post("/users", json={"name": "Alice", "avatar": None})
    alice = r.json()["id"]

    r = await client.post("/categories", json={"name": "Work", "color": "#10B981"})
    work = r.json()["id"]

    r = await client.post("/todos", json={"text": "Ship report", "category_id": work, "user_id": alice})
    todo = r.json()["id"]

    r = await client.patch(f"/todos/{todo}/toggle")
    assert r.json()["completed"] is True

    r = await client.delete(f"/categories/{work}")
    assert r.status_code == 400

    r = await client.delete(f"/todos/{todo}")
    assert r.status_code == 200

    r = await client.delete(f"/categories/{work}")
    assert r.status_code == 200
    assert r.json() == {"success": True}
