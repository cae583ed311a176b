"""Roles API tests: error mapping with overridden services, full flow against Postgres."""

import uuid
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from roster.api.v1.dependencies import (
    get_current_user,
    get_role_service,
    get_role_service_for_write,
)
from roster.domain.exceptions import (
    NoParentRoleException,
    NotOwnerException,
    RoleNotFoundException,
)
from roster.main import app
from tests.unit.factories import make_member, make_owner, make_role, make_sub_role


def _override(service: AsyncMock, actor) -> None:
    app.dependency_overrides[get_role_service] = lambda: service
    app.dependency_overrides[get_role_service_for_write] = lambda: service
    app.dependency_overrides[get_current_user] = lambda: actor


async def test_list_roles_requires_token(client: AsyncClient) -> None:
    response = await client.get("/api/v1/roles")
    assert response.status_code == 401


async def test_non_owner_gets_403(client: AsyncClient) -> None:
    service = AsyncMock()
    service.create_role.side_effect = NotOwnerException(actor_id="member-1")
    _override(service, make_member())
    response = await client.post("/api/v1/roles", json={"name": "Manager"})
    assert response.status_code == 403
    assert response.json()["error"] == "NOT_OWNER"


async def test_list_roles_returns_items_and_total(client: AsyncClient) -> None:
    manager = make_role("r1", "Manager")
    make_sub_role(manager, "s1", "Reviewer")
    service = AsyncMock()
    service.list_roles.return_value = ([manager, make_role("r2", "Support")], 2)
    owner = make_owner()
    _override(service, owner)

    response = await client.get("/api/v1/roles")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    assert [r["name"] for r in data["items"]] == ["Manager", "Support"]
    assert [s["name"] for s in data["items"][0]["child_roles"]] == ["Reviewer"]
    service.list_roles.assert_awaited_once_with(owner)


async def test_get_role_detail(client: AsyncClient) -> None:
    role = make_role("r1", "Manager")
    make_sub_role(role, "s1", "Reviewer")
    service = AsyncMock()
    service.get_role.return_value = role
    _override(service, make_owner())

    response = await client.get("/api/v1/roles/r1")

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Manager"
    assert [s["id"] for s in data["child_roles"]] == ["s1"]
    assert data["user_ids"] == []


async def test_get_missing_role_returns_404(client: AsyncClient) -> None:
    service = AsyncMock()
    service.get_role.side_effect = RoleNotFoundException("r404")
    _override(service, make_owner())
    response = await client.get("/api/v1/roles/r404")
    assert response.status_code == 404
    assert response.json()["details"] == {"role_id": "r404"}


async def test_delete_role_returns_204(client: AsyncClient) -> None:
    service = AsyncMock()
    _override(service, make_owner())
    response = await client.delete("/api/v1/roles/whatever")
    assert response.status_code == 204
    service.delete_role.assert_awaited_once()


async def test_assign_sub_role_without_parent_returns_400(client: AsyncClient) -> None:
    service = AsyncMock()
    service.assign_sub_role.side_effect = NoParentRoleException("s1", "u1")
    _override(service, make_owner())
    response = await client.post(
        "/api/v1/roles/sub-roles/assignments",
        json={"user_id": "u1", "sub_role_id": "s1"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "NO_PARENT_ROLE"


async def test_remove_role_assignment_returns_memberships(client: AsyncClient) -> None:
    member = make_member("u1")
    service = AsyncMock()
    service.remove_role.return_value = member
    _override(service, make_owner())
    response = await client.request(
        "DELETE",
        "/api/v1/roles/assignments",
        json={"user_id": "u1", "role_id": "r1"},
    )
    assert response.status_code == 200
    assert response.json()["role_ids"] == []
    service.remove_role.assert_awaited_once()


@pytest.mark.requires_db
async def test_role_hierarchy_flow(client: AsyncClient, owner_headers) -> None:
    """Owner creates Manager/Reviewer, invites a user, assigns, then removes Manager."""
    headers = owner_headers
    manager = await client.post(
        "/api/v1/roles", json={"name": "Manager", "is_leader": True}, headers=headers
    )
    assert manager.status_code == 201
    manager_id = manager.json()["id"]
    reviewer = await client.post(
        f"/api/v1/roles/{manager_id}/sub-roles", json={"name": "Reviewer"}, headers=headers
    )
    assert reviewer.status_code == 201
    reviewer_id = reviewer.json()["id"]

    email = f"member-{uuid.uuid4().hex[:10]}@example.com"
    invited = await client.post(
        "/api/v1/users/invite", json={"emails": [email]}, headers=headers
    )
    assert invited.status_code == 201
    user_id = invited.json()[0]["user_id"]

    early = await client.post(
        "/api/v1/roles/sub-roles/assignments",
        json={"user_id": user_id, "sub_role_id": reviewer_id},
        headers=headers,
    )
    assert early.status_code == 400

    assigned = await client.post(
        "/api/v1/roles/assignments",
        json={"user_id": user_id, "role_id": manager_id},
        headers=headers,
    )
    assert assigned.json()["role_ids"] == [manager_id]
    assigned = await client.post(
        "/api/v1/roles/sub-roles/assignments",
        json={"user_id": user_id, "sub_role_id": reviewer_id},
        headers=headers,
    )
    assert assigned.json()["sub_role_ids"] == [reviewer_id]

    removed = await client.request(
        "DELETE",
        "/api/v1/roles/assignments",
        json={"user_id": user_id, "role_id": manager_id},
        headers=headers,
    )
    assert removed.status_code == 200
    assert removed.json()["role_ids"] == []
    assert removed.json()["sub_role_ids"] == []

    detail = await client.get(f"/api/v1/roles/{manager_id}", headers=headers)
    assert detail.json()["user_ids"] == []
