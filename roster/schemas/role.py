"""Role and sub-role API schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RoleCreateRequest(BaseModel):
    """Request body for creating a role."""

    name: str = Field(..., min_length=1, max_length=255)
    is_leader: bool = False


class RoleUpdate(BaseModel):
    """Request body for updating a role (both fields replaced)."""

    name: str = Field(..., min_length=1, max_length=255)
    is_leader: bool = False


class SubRoleCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class SubRoleUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class RoleAssignRequest(BaseModel):
    """Request body for POST/DELETE /roles/assignments."""

    user_id: str = Field(..., min_length=1)
    role_id: str = Field(..., min_length=1)


class SubRoleAssignRequest(BaseModel):
    """Request body for POST/DELETE /roles/sub-roles/assignments."""

    user_id: str = Field(..., min_length=1)
    sub_role_id: str = Field(..., min_length=1)


class SubRoleResponse(BaseModel):
    """Sub-role summary (as listed under its parent)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_role_id: str
    name: str


class SubRoleDetailResponse(SubRoleResponse):
    """Sub-role with the ids of its members."""

    user_ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, sub_role) -> SubRoleDetailResponse:
        return cls(
            id=sub_role.id,
            parent_role_id=sub_role.parent_role_id,
            name=sub_role.name,
            user_ids=sorted(u.id for u in sub_role.users),
        )


class RoleResponse(BaseModel):
    """Role list/create/update response with its sub-roles."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    company_id: str
    name: str
    is_leader: bool
    child_roles: list[SubRoleResponse] = Field(default_factory=list)


class RoleDetailResponse(RoleResponse):
    """Role with the ids of its members."""

    user_ids: list[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, role) -> RoleDetailResponse:
        return cls(
            id=role.id,
            company_id=role.company_id,
            name=role.name,
            is_leader=role.is_leader,
            child_roles=[SubRoleResponse.model_validate(s) for s in role.child_roles],
            user_ids=sorted(u.id for u in role.users),
        )


class RoleListResponse(BaseModel):
    items: list[RoleResponse]
    total: int
