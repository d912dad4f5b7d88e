# tests/test_api.py

from __future__ import annotations

import httpx
from sqlalchemy import event

from taskkeeper.config import Settings
from taskkeeper.db.session import init_models
from taskkeeper.main import create_app


async def _register(client: httpx.AsyncClient, username: str) -> dict[str, str]:
    resp = await client.post(
        "/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": "s3cret!"},
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


async def test_healthcheck(client: httpx.AsyncClient) -> None:
    resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


async def test_register_then_login(client: httpx.AsyncClient) -> None:
    await _register(client, "alice")

    resp = await client.post("/auth/login", json={"email": "alice@example.com", "password": "s3cret!"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["user"]["username"] == "alice"
    assert "password_hash" not in body["user"]
    assert body["token"]


async def test_duplicate_registration_is_conflict(client: httpx.AsyncClient) -> None:
    await _register(client, "alice")

    resp = await client.post(
        "/auth/register", json={"username": "alice", "email": "alice@example.com", "password": "s3cret!"}
    )

    assert resp.status_code == 409
    assert resp.json() == {"detail": "User with this email already exists"}


async def test_bad_login_is_unauthorized(client: httpx.AsyncClient) -> None:
    await _register(client, "alice")

    resp = await client.post("/auth/login", json={"email": "alice@example.com", "password": "wrong-one"})

    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid email or password"}


async def test_task_endpoints_require_a_token(client: httpx.AsyncClient) -> None:
    assert (await client.get("/tasks")).status_code == 401
    assert (await client.get("/tasks", headers={"Authorization": "Bearer junk"})).status_code == 401


async def test_task_lifecycle(client: httpx.AsyncClient) -> None:
    alice = await _register(client, "alice")

    created = await client.post("/tasks", json={"title": "Ship it", "priority": "high"}, headers=alice)
    assert created.status_code == 201
    task = created.json()
    assert task["completed"] is False
    assert task["priority"] == "high"

    patched = await client.patch(f"/tasks/{task['id']}", json={"completed": True}, headers=alice)
    assert patched.status_code == 200
    assert patched.json()["completed"] is True
    assert patched.json()["title"] == "Ship it"

    done = await client.get("/tasks", params={"completed": "true"}, headers=alice)
    assert [t["id"] for t in done.json()] == [task["id"]]
    assert (await client.get("/tasks", params={"completed": "false"}, headers=alice)).json() == []

    deleted = await client.delete(f"/tasks/{task['id']}", headers=alice)
    assert deleted.json() == {"success": True}
    assert (await client.get(f"/tasks/{task['id']}", headers=alice)).status_code == 404


async def test_invalid_task_input_is_rejected(client: httpx.AsyncClient) -> None:
    alice = await _register(client, "alice")

    assert (await client.post("/tasks", json={"title": ""}, headers=alice)).status_code == 422
    assert (await client.post("/tasks", json={"title": "x", "priority": "urgent"}, headers=alice)).status_code == 422
    assert (await client.get("/tasks", params={"priority": "urgent"}, headers=alice)).status_code == 422


async def test_other_users_task_is_not_found(client: httpx.AsyncClient) -> None:
    alice = await _register(client, "alice")
    bob = await _register(client, "bob")
    task = (await client.post("/tasks", json={"title": "Alice's"}, headers=alice)).json()

    get_resp = await client.get(f"/tasks/{task['id']}", headers=bob)
    patch_resp = await client.patch(f"/tasks/{task['id']}", json={"title": "mine now"}, headers=bob)
    missing_resp = await client.get(f"/tasks/{task['id'] + 999}", headers=bob)
    delete_resp = await client.delete(f"/tasks/{task['id']}", headers=bob)

    assert get_resp.status_code == patch_resp.status_code == missing_resp.status_code == 404
    assert get_resp.json() == missing_resp.json()
    assert delete_resp.json() == {"success": False}
    assert (await client.get(f"/tasks/{task['id']}", headers=alice)).json()["title"] == "Alice's"
    assert (await client.get("/tasks", headers=bob)).json() == []


async def test_failed_commit_is_reported_before_success(settings: Settings) -> None:
    app = create_app(settings)
    await init_models(app.state.engine)
    sync_engine = app.state.engine.sync_engine
    credentials = {"username": "carol", "email": "carol@example.com", "password": "s3cret!"}

    def _storage_down(conn) -> None:
        raise RuntimeError("storage unavailable")

    # Server errors become a 500 response instead of propagating into the test.
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        event.listen(sync_engine, "commit", _storage_down)
        try:
            registered = await http.post("/auth/register", json=credentials)
        finally:
            event.remove(sync_engine, "commit", _storage_down)

        login = await http.post(
            "/auth/login", json={"email": credentials["email"], "password": credentials["password"]}
        )
    await app.state.engine.dispose()

    assert registered.status_code == 500
    assert login.status_code == 401
