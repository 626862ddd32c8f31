"""
API tests for the events administration endpoints.

Requests go through the mounted ``/api`` application with its session
dependencies pointed at an isolated database.
"""

import pytest

from event_admin.auth.jwt_utils import get_password_hash
from event_admin.categories import create_category
from event_admin.db.crud.user import create_user
from event_admin.models import User, UserRole

MASTER_HEADERS = {"Authorization": "Bearer test_master_token"}


def submission(title: str, event_date: str, **overrides) -> dict:
    values = {
        "title": title,
        "description": f"About {title}",
        "event_date": event_date,
        "event_time": "19:00",
        "end_time": "21:00",
    }
    values.update(overrides)
    return values


@pytest.fixture
async def admin_headers(client, session_factory):
    async with session_factory() as session:
        await create_user(
            session,
            User(
                username="editor",
                hashed_password=get_password_hash("s3cret"),
                role=UserRole.ADMIN,
            ),
        )

    response = await client.post(
        "/api/auth/token", data={"username": "editor", "password": "s3cret"}
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def test_screen_lists_events_and_event_categories(client, session_factory):
    async with session_factory() as session:
        await create_category(session, "Shows", "events")
        await create_category(session, "Receitas", "blog")

    await client.post(
        "/api/admin/events", json=submission("Show", "2025-01-01"), headers=MASTER_HEADERS
    )

    response = await client.get("/api/admin/events")

    assert response.status_code == 200
    body = response.json()
    assert body["mode"] == "create"
    assert [e["title"] for e in body["events"]] == ["Show"]
    assert [c["name"] for c in body["categories"]] == ["Shows"]
    assert body["notifications"] == []


async def test_create_is_owned_by_logged_in_user(client, admin_headers):
    me = (await client.get("/api/user/me", headers=admin_headers)).json()

    response = await client.post(
        "/api/admin/events",
        json=submission("Show", "2025-01-01", location=""),
        headers=admin_headers,
    )

    assert response.status_code == 201
    body = response.json()
    [event] = body["events"]
    assert event["user_id"] == me["id"]
    assert event["location"] is None
    assert body["notifications"][0]["level"] == "success"
    assert body["notifications"][0]["message"] == "Evento adicionado com sucesso!"


async def test_create_without_token_is_rejected_without_writing(client):
    response = await client.post(
        "/api/admin/events", json=submission("Show", "2025-01-01")
    )

    assert response.status_code == 401
    body = response.json()
    assert body["events"] == []
    assert body["notifications"][0]["message"] == (
        "Você precisa estar logado para realizar esta ação."
    )

    listing = await client.get("/api/admin/events")
    assert listing.json()["events"] == []


async def test_create_with_invalid_date_reports_store_message(client):
    response = await client.post(
        "/api/admin/events",
        json=submission("Show", "not-a-date"),
        headers=MASTER_HEADERS,
    )

    assert response.status_code == 400
    message = response.json()["notifications"][0]["message"]
    assert message.startswith("Erro ao adicionar evento: ")
    assert "event_date" in message


async def test_search_filters_titles(client):
    for title, day in [
        ("Conference A", "2025-03-01"),
        ("Workshop", "2025-01-01"),
        ("CONFERENCE B", "2025-02-01"),
    ]:
        await client.post(
            "/api/admin/events", json=submission(title, day), headers=MASTER_HEADERS
        )

    response = await client.get("/api/admin/events", params={"search": "conf"})

    body = response.json()
    assert body["search_term"] == "conf"
    assert [e["title"] for e in body["events"]] == ["CONFERENCE B", "Conference A"]


async def test_update_event(client, admin_headers):
    created = await client.post(
        "/api/admin/events",
        json=submission("Show", "2025-01-01", location="Sala 1"),
        headers=MASTER_HEADERS,
    )
    event_id = created.json()["events"][0]["id"]

    response = await client.put(
        f"/api/admin/events/{event_id}",
        json={"title": "Renamed", "description": ""},
        headers=admin_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["mode"] == "create"
    assert body["editing"] is None
    [event] = body["events"]
    assert event["title"] == "Renamed"
    assert event["description"] == "About Show"
    assert event["location"] == "Sala 1"
    assert body["notifications"][0]["message"] == "Evento atualizado com sucesso!"


async def test_update_unknown_event_is_not_written(client):
    response = await client.put(
        "/api/admin/events/missing", json={"title": "Renamed"}, headers=MASTER_HEADERS
    )

    assert response.status_code == 404
    assert response.json()["notifications"][0]["message"] == (
        "ID do evento não encontrado"
    )


async def test_delete_event(client):
    created = await client.post(
        "/api/admin/events", json=submission("Show", "2025-01-01"), headers=MASTER_HEADERS
    )
    event_id = created.json()["events"][0]["id"]

    response = await client.delete(
        f"/api/admin/events/{event_id}", headers=MASTER_HEADERS
    )

    assert response.status_code == 200
    assert response.json()["events"] == []
    assert response.json()["notifications"][0]["message"] == (
        "Evento removido com sucesso!"
    )


async def test_delete_unknown_event_keeps_list(client):
    await client.post(
        "/api/admin/events", json=submission("Show", "2025-01-01"), headers=MASTER_HEADERS
    )

    response = await client.delete("/api/admin/events/missing", headers=MASTER_HEADERS)

    assert response.status_code == 404
    body = response.json()
    assert [e["title"] for e in body["events"]] == ["Show"]
    assert body["notifications"][0]["message"].startswith("Erro ao remover evento: ")


async def test_delete_without_token_is_rejected_without_writing(client):
    created = await client.post(
        "/api/admin/events", json=submission("Show", "2025-01-01"), headers=MASTER_HEADERS
    )
    event_id = created.json()["events"][0]["id"]

    response = await client.delete(
        f"/api/admin/events/{event_id}",
        headers={"Authorization": "Bearer not-a-token"},
    )

    assert response.status_code == 401
    body = response.json()
    assert [e["id"] for e in body["events"]] == [event_id]
    assert body["notifications"][0]["message"] == (
        "Você precisa estar logado para realizar esta ação."
    )

    listing = await client.get("/api/admin/events")
    assert [e["id"] for e in listing.json()["events"]] == [event_id]


async def test_categories_endpoint(client, session_factory):
    async with session_factory() as session:
        await create_category(session, "Shows", "events")

    response = await client.get("/api/admin/categories")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()] == ["Shows"]


async def test_owner_can_create_users(client):
    response = await client.post(
        "/api/admin/users",
        json={"username": "another", "password": "pw", "role": "admin"},
        headers=MASTER_HEADERS,
    )

    assert response.status_code == 201
    assert response.json()["username"] == "another"

    users = await client.get("/api/admin/users", headers=MASTER_HEADERS)
    assert [u["username"] for u in users.json()] == ["another"]


async def test_admin_cannot_manage_users(client, admin_headers):
    response = await client.get("/api/admin/users", headers=admin_headers)

    assert response.status_code == 403


async def test_duplicate_username_is_rejected(client):
    payload = {"username": "another", "password": "pw", "role": "admin"}
    await client.post("/api/admin/users", json=payload, headers=MASTER_HEADERS)

    response = await client.post(
        "/api/admin/users", json=payload, headers=MASTER_HEADERS
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Username already exists"
