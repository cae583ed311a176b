"""Role, sub-role and user repository tests. Require Postgres; rolled back after each test."""

import uuid

import pytest

from roster.application.services.role_service import RoleService
from roster.domain.exceptions import UserAlreadyExistsException
from roster.infrastructure.persistence.repositories import (
    CompanyRepository,
    RoleRepository,
    SubRoleRepository,
    UserRepository,
)
from roster.shared.utils.datetime import utc_now
from roster.shared.utils.generators import hash_token


def _email(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10]}@example.com"


async def _owner(db_session):
    company = CompanyRepository(db_session).build_company("Repo Test Co")
    return await UserRepository(db_session).create_creator(
        company, _email("owner"), "OwnerPassword1!"
    )


@pytest.mark.requires_db
async def test_create_creator_persists_company(db_session) -> None:
    owner = await _owner(db_session)
    assert owner.id
    assert owner.own_company_id
    assert owner.company_id == owner.own_company_id
    assert owner.is_creator is True


@pytest.mark.requires_db
async def test_duplicate_email_raises_and_session_stays_usable(db_session) -> None:
    users = UserRepository(db_session)
    owner = await _owner(db_session)
    with pytest.raises(UserAlreadyExistsException):
        await users.create_invited_user(
            owner.own_company_id, owner.email.upper(), hash_token("t"), utc_now()
        )
    assert await users.get_by_email(owner.email) is not None


@pytest.mark.requires_db
async def test_role_lookup_is_company_scoped(db_session) -> None:
    owner = await _owner(db_session)
    other = await _owner(db_session)
    roles = RoleRepository(db_session)
    role = await roles.create_role(owner.own_company_id, "Manager", True)

    assert await roles.get_entity_by_company_and_id(owner.own_company_id, role.id) is role
    assert await roles.get_entity_by_company_and_id(other.own_company_id, role.id) is None
    listed, total = await roles.get_by_company(owner.own_company_id)
    assert total == 1
    assert [r.id for r in listed] == [role.id]


@pytest.mark.requires_db
async def test_assign_and_remove_role_cascades_in_database(db_session) -> None:
    owner = await _owner(db_session)
    company_id = owner.own_company_id
    users = UserRepository(db_session)
    member = await users.create_invited_user(
        company_id, _email("member"), hash_token(uuid.uuid4().hex), utc_now()
    )
    service = RoleService(RoleRepository(db_session), SubRoleRepository(db_session), users)

    manager = await service.create_role(owner, "Manager", True)
    reviewer = await service.create_sub_role(owner, manager.id, "Reviewer")
    await service.assign_role(owner, member.id, manager.id)
    await service.assign_sub_role(owner, member.id, reviewer.id)

    await db_session.refresh(member, attribute_names=["roles", "sub_roles"])
    assert {r.id for r in member.roles} == {manager.id}
    assert {s.id for s in member.sub_roles} == {reviewer.id}

    await service.remove_role(owner, member.id, manager.id)

    await db_session.refresh(member, attribute_names=["roles", "sub_roles"])
    assert member.roles == set()
    assert member.sub_roles == set()


@pytest.mark.requires_db
async def test_sub_role_parent_lookup_requires_membership(db_session) -> None:
    owner = await _owner(db_session)
    company_id = owner.own_company_id
    users = UserRepository(db_session)
    member = await users.create_invited_user(
        company_id, _email("member"), hash_token(uuid.uuid4().hex), utc_now()
    )
    roles = RoleRepository(db_session)
    parent = await roles.create_role(company_id, "Parent", False)
    sub_role = await SubRoleRepository(db_session).create_sub_role(parent, "Child")

    assert await roles.get_by_sub_role_and_user(sub_role, member) is None


@pytest.mark.requires_db
async def test_delete_role_removes_sub_roles(db_session) -> None:
    owner = await _owner(db_session)
    company_id = owner.own_company_id
    roles = RoleRepository(db_session)
    sub_roles = SubRoleRepository(db_session)
    parent = await roles.create_role(company_id, "Doomed", False)
    child = await sub_roles.create_sub_role(parent, "Child")
    child_id = child.id

    assert await roles.delete_by_company_and_id(company_id, parent.id) is True
    assert await roles.delete_by_company_and_id(company_id, parent.id) is False

    db_session.expunge_all()
    assert await sub_roles.get_entity_by_company_and_id(company_id, child_id) is None
