"""Unit tests for RoleService and the membership helpers.

Entities are real (transient) ORM instances, so back_populates keeps both
sides of every membership in sync exactly as it does in a session.
"""

from unittest.mock import AsyncMock

import pytest

from roster.application.services.role_service import (
    RoleService,
    attach_role,
    attach_sub_role,
    detach_role,
    detach_sub_role,
)
from roster.domain.exceptions import (
    NoParentRoleException,
    NotOwnerException,
    RoleNotFoundException,
    SubRoleNotFoundException,
    UserNotFoundException,
)
from tests.unit.factories import (
    COMPANY_ID,
    OTHER_COMPANY_ID,
    InMemoryStore,
    make_member,
    make_owner,
    make_role,
    make_sub_role,
)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def repos(store: InMemoryStore):
    return store.role_repo(), store.sub_role_repo(), store.user_repo()


@pytest.fixture
def service(repos) -> RoleService:
    role_repo, sub_role_repo, user_repo = repos
    return RoleService(role_repo, sub_role_repo, user_repo)


# ---- helpers ----


def test_attach_role_updates_both_sides() -> None:
    role = make_role()
    user = make_member()
    attach_role(role, user)
    attach_role(role, user)
    assert user.roles == {role}
    assert role.users == {user}


def test_detach_role_cascades_to_its_sub_roles_only() -> None:
    manager = make_role("r1", "Manager")
    other = make_role("r2", "Other")
    reviewer = make_sub_role(manager, "s1", "Reviewer")
    unrelated = make_sub_role(other, "s2", "Unrelated")
    user = make_member()
    attach_role(manager, user)
    attach_role(other, user)
    attach_sub_role(reviewer, user)
    attach_sub_role(unrelated, user)

    cascaded = detach_role(manager, user)

    assert cascaded == [reviewer]
    assert user.roles == {other}
    assert user.sub_roles == {unrelated}
    assert user not in reviewer.users
    assert user not in manager.users


def test_detach_non_member_is_noop() -> None:
    role = make_role()
    sub_role = make_sub_role(role)
    user = make_member()
    assert detach_role(role, user) == []
    detach_sub_role(sub_role, user)
    assert user.roles == set()
    assert user.sub_roles == set()


# ---- guard ----


async def test_non_creator_is_rejected_before_any_lookup(repos) -> None:
    role_repo, sub_role_repo, user_repo = repos
    service = RoleService(role_repo, sub_role_repo, user_repo)
    member = make_member()

    with pytest.raises(NotOwnerException):
        await service.get_role(member, "r1")
    with pytest.raises(NotOwnerException):
        await service.assign_role(member, "u1", "r1")
    with pytest.raises(NotOwnerException):
        await service.delete_sub_role(member, "s1")

    role_repo.get_entity_by_company_and_id.assert_not_called()
    user_repo.get_by_company_and_id.assert_not_called()
    sub_role_repo.delete_by_company_and_id.assert_not_called()


# ---- role CRUD ----


async def test_create_role_uses_actor_company(service: RoleService, repos) -> None:
    role_repo, _, _ = repos
    created = make_role("r9", "Manager")
    role_repo.create_role = AsyncMock(return_value=created)

    result = await service.create_role(make_owner(), "Manager", True)

    assert result is created
    role_repo.create_role.assert_awaited_once_with(COMPANY_ID, "Manager", True)


async def test_get_role_is_company_scoped(service: RoleService, store: InMemoryStore) -> None:
    role = make_role("r1")
    make_sub_role(role, "s1")
    store.add(role)

    found = await service.get_role(make_owner(), "r1")
    assert found is role
    assert [s.id for s in found.child_roles] == ["s1"]

    with pytest.raises(RoleNotFoundException):
        await service.get_role(make_owner("owner-2", OTHER_COMPANY_ID), "r1")


async def test_update_role_assigns_fields(service: RoleService, store: InMemoryStore, repos) -> None:
    role_repo, _, _ = repos
    role = make_role("r1", "Old")
    store.add(role)

    updated = await service.update_role(make_owner(), "r1", "New", True)

    assert updated.name == "New"
    assert updated.is_leader is True
    role_repo.persist.assert_awaited_once_with(role)


async def test_update_missing_role_raises(service: RoleService) -> None:
    with pytest.raises(RoleNotFoundException):
        await service.update_role(make_owner(), "missing", "X", False)


async def test_delete_missing_role_is_silent(service: RoleService, repos) -> None:
    role_repo, _, _ = repos
    await service.delete_role(make_owner(), "does-not-exist")
    role_repo.delete_by_company_and_id.assert_awaited_once_with(
        COMPANY_ID, "does-not-exist"
    )
    role_repo.persist.assert_not_called()


async def test_delete_role_removes_it(service: RoleService, store: InMemoryStore) -> None:
    store.add(make_role("r1"))
    await service.delete_role(make_owner(), "r1")
    assert "r1" not in store.roles


# ---- sub-roles ----


async def test_create_sub_role_requires_parent_in_company(
    service: RoleService, store: InMemoryStore, repos
) -> None:
    _, sub_role_repo, _ = repos
    store.add(make_role("r1", company_id=OTHER_COMPANY_ID))
    with pytest.raises(RoleNotFoundException):
        await service.create_sub_role(make_owner(), "r1", "Reviewer")
    sub_role_repo.create_sub_role.assert_not_called()


async def test_create_sub_role_links_parent(
    service: RoleService, store: InMemoryStore, repos
) -> None:
    _, sub_role_repo, _ = repos
    parent = make_role("r1")
    store.add(parent)
    sub_role_repo.create_sub_role.side_effect = lambda p, name: make_sub_role(p, "s1", name)

    sub_role = await service.create_sub_role(make_owner(), "r1", "Reviewer")

    assert sub_role.parent_role is parent
    assert parent.child_roles == [sub_role]


async def test_get_sub_role_missing_raises_sub_role_not_found(service: RoleService) -> None:
    with pytest.raises(SubRoleNotFoundException):
        await service.get_sub_role(make_owner(), "missing")


async def test_get_sub_role_in_own_company(service: RoleService, store: InMemoryStore) -> None:
    parent = make_role("r1")
    sub_role = make_sub_role(parent, "s1", "Reviewer")
    store.add(parent, sub_role)

    result = await service.get_sub_role(make_owner(), "s1")

    assert result is sub_role
    assert result.parent_role is parent


async def test_get_sub_role_of_other_company_raises(
    service: RoleService, store: InMemoryStore
) -> None:
    parent = make_role("r1", company_id=OTHER_COMPANY_ID)
    store.add(parent, make_sub_role(parent, "s1"))

    with pytest.raises(SubRoleNotFoundException):
        await service.get_sub_role(make_owner(), "s1")


async def test_list_roles_returns_own_company_roles_with_children(
    service: RoleService, store: InMemoryStore
) -> None:
    manager = make_role("r1", "Manager")
    reviewer = make_sub_role(manager, "s1", "Reviewer")
    support = make_role("r2", "Support")
    foreign = make_role("r3", "Foreign", company_id=OTHER_COMPANY_ID)
    store.add(manager, reviewer, support, foreign)

    roles, total = await service.list_roles(make_owner())

    assert total == 2
    assert [r.id for r in roles] == ["r1", "r2"]
    assert roles[0].child_roles == [reviewer]
    assert roles[1].child_roles == []


async def test_list_roles_requires_creator(service: RoleService, repos) -> None:
    with pytest.raises(NotOwnerException):
        await service.list_roles(make_member())
    repos[0].get_by_company.assert_not_called()


async def test_update_sub_role_renames(service: RoleService, store: InMemoryStore) -> None:
    sub_role = make_sub_role(make_role("r1"), "s1", "Old")
    store.add(sub_role)
    result = await service.update_sub_role(make_owner(), "s1", "New")
    assert result.name == "New"


async def test_delete_sub_role_is_company_scoped(
    service: RoleService, store: InMemoryStore
) -> None:
    sub_role = make_sub_role(make_role("r1", company_id=OTHER_COMPANY_ID), "s1")
    store.add(sub_role)
    await service.delete_sub_role(make_owner(), "s1")
    assert "s1" in store.sub_roles


# ---- assignments ----


async def test_assign_role_to_unknown_user_raises(
    service: RoleService, store: InMemoryStore
) -> None:
    store.add(make_role("r1"))
    with pytest.raises(UserNotFoundException):
        await service.assign_role(make_owner(), "nobody", "r1")


async def test_assign_role_from_other_company_raises(
    service: RoleService, store: InMemoryStore
) -> None:
    store.add(make_member("u1"), make_role("r1", company_id=OTHER_COMPANY_ID))
    with pytest.raises(RoleNotFoundException):
        await service.assign_role(make_owner(), "u1", "r1")


async def test_assign_sub_role_without_parent_raises(
    service: RoleService, store: InMemoryStore
) -> None:
    parent = make_role("r1")
    sub_role = make_sub_role(parent, "s1")
    user = make_member("u1")
    store.add(parent, sub_role, user)

    with pytest.raises(NoParentRoleException):
        await service.assign_sub_role(make_owner(), "u1", "s1")
    assert user.sub_roles == set()

    await service.assign_role(make_owner(), "u1", "r1")
    await service.assign_sub_role(make_owner(), "u1", "s1")
    assert user.sub_roles == {sub_role}
    assert sub_role.users == {user}


async def test_remove_role_cascades_in_one_flush(
    service: RoleService, store: InMemoryStore, repos
) -> None:
    role_repo, _, _ = repos
    parent = make_role("r1")
    sub_role = make_sub_role(parent, "s1")
    user = make_member("u1")
    store.add(parent, sub_role, user)
    attach_role(parent, user)
    attach_sub_role(sub_role, user)

    result = await service.remove_role(make_owner(), "u1", "r1")

    assert result.roles == set()
    assert result.sub_roles == set()
    assert parent.users == set()
    assert sub_role.users == set()
    role_repo.persist.assert_awaited_once_with(user, parent, sub_role)


async def test_remove_role_not_held_is_noop(
    service: RoleService, store: InMemoryStore
) -> None:
    other = make_role("r2")
    user = make_member("u1")
    store.add(make_role("r1"), other, user)
    attach_role(other, user)

    result = await service.remove_role(make_owner(), "u1", "r1")

    assert result.roles == {other}


async def test_remove_sub_role_keeps_parent(
    service: RoleService, store: InMemoryStore
) -> None:
    parent = make_role("r1")
    sub_role = make_sub_role(parent, "s1")
    user = make_member("u1")
    store.add(parent, sub_role, user)
    attach_role(parent, user)
    attach_sub_role(sub_role, user)

    result = await service.remove_sub_role(make_owner(), "u1", "s1")

    assert result.roles == {parent}
    assert result.sub_roles == set()


async def test_manager_reviewer_scenario(
    service: RoleService, store: InMemoryStore, repos
) -> None:
    """Create Manager, add Reviewer under it, assign both, then remove Manager."""
    role_repo, sub_role_repo, _ = repos
    owner = make_owner()
    user = make_member("u1")
    store.add(user)

    async def create_role(company_id, name, is_leader):
        role = make_role("manager", name, company_id)
        role.is_leader = is_leader
        store.add(role)
        return role

    async def create_sub_role(parent, name):
        sub_role = make_sub_role(parent, "reviewer", name)
        store.add(sub_role)
        return sub_role

    role_repo.create_role = AsyncMock(side_effect=create_role)
    sub_role_repo.create_sub_role = AsyncMock(side_effect=create_sub_role)

    manager = await service.create_role(owner, "Manager", True)
    reviewer = await service.create_sub_role(owner, manager.id, "Reviewer")
    await service.assign_role(owner, "u1", manager.id)
    await service.assign_sub_role(owner, "u1", reviewer.id)
    assert user.roles == {manager}
    assert user.sub_roles == {reviewer}

    await service.remove_role(owner, "u1", manager.id)

    assert user.roles == set()
    assert user.sub_roles == set()
    assert manager.is_leader is True
