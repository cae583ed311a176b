"""Roles API: roles, sub-roles and user memberships (company-scoped).

The company is always the acting user's own company; the role service
rejects actors who are not company creators before any lookup.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from roster.api.v1.dependencies import (
    get_current_user,
    get_role_service,
    get_role_service_for_write,
)
from roster.application.services.role_service import RoleService
from roster.core.limiter import limit_writes
from roster.infrastructure.persistence.models.user import User
from roster.schemas.role import (
    RoleAssignRequest,
    RoleCreateRequest,
    RoleDetailResponse,
    RoleListResponse,
    RoleResponse,
    RoleUpdate,
    SubRoleAssignRequest,
    SubRoleCreateRequest,
    SubRoleDetailResponse,
    SubRoleResponse,
    SubRoleUpdate,
)
from roster.schemas.user import UserMembershipResponse

router = APIRouter()

CurrentUser = Annotated[User, Depends(get_current_user)]
ReadService = Annotated[RoleService, Depends(get_role_service)]
WriteService = Annotated[RoleService, Depends(get_role_service_for_write)]


@router.post("", response_model=RoleResponse, status_code=201)
@limit_writes
async def create_role(
    request: Request,
    body: RoleCreateRequest,
    actor: CurrentUser,
    service: WriteService,
):
    """Create a role in the caller's company."""
    role = await service.create_role(actor, body.name, body.is_leader)
    return RoleResponse.model_validate(role)


@router.get("", response_model=RoleListResponse)
async def list_roles(actor: CurrentUser, service: ReadService):
    """List the company's roles with their sub-roles."""
    roles, total = await service.list_roles(actor)
    return RoleListResponse(
        items=[RoleResponse.model_validate(r) for r in roles],
        total=total,
    )


# Static /sub-roles and /assignments paths are registered before /{role_id}.
@router.post(
    "/assignments", response_model=UserMembershipResponse, status_code=201
)
@limit_writes
async def assign_role(
    request: Request,
    body: RoleAssignRequest,
    actor: CurrentUser,
    service: WriteService,
):
    user = await service.assign_role(actor, body.user_id, body.role_id)
    return UserMembershipResponse.from_entity(user)


@router.delete("/assignments", response_model=UserMembershipResponse)
@limit_writes
async def remove_role(
    request: Request,
    body: RoleAssignRequest,
    actor: CurrentUser,
    service: WriteService,
):
    """Remove the role from the user, together with its sub-roles."""
    user = await service.remove_role(actor, body.user_id, body.role_id)
    return UserMembershipResponse.from_entity(user)


@router.post(
    "/sub-roles/assignments", response_model=UserMembershipResponse, status_code=201
)
@limit_writes
async def assign_sub_role(
    request: Request,
    body: SubRoleAssignRequest,
    actor: CurrentUser,
    service: WriteService,
):
    """Assign a sub-role; the user must already hold its parent role."""
    user = await service.assign_sub_role(actor, body.user_id, body.sub_role_id)
    return UserMembershipResponse.from_entity(user)


@router.delete("/sub-roles/assignments", response_model=UserMembershipResponse)
@limit_writes
async def remove_sub_role(
    request: Request,
    body: SubRoleAssignRequest,
    actor: CurrentUser,
    service: WriteService,
):
    user = await service.remove_sub_role(actor, body.user_id, body.sub_role_id)
    return UserMembershipResponse.from_entity(user)


@router.get("/sub-roles/{sub_role_id}", response_model=SubRoleDetailResponse)
async def get_sub_role(sub_role_id: str, actor: CurrentUser, service: ReadService):
    sub_role = await service.get_sub_role(actor, sub_role_id)
    return SubRoleDetailResponse.from_entity(sub_role)


@router.put("/sub-roles/{sub_role_id}", response_model=SubRoleDetailResponse)
@limit_writes
async def update_sub_role(
    request: Request,
    sub_role_id: str,
    body: SubRoleUpdate,
    actor: CurrentUser,
    service: WriteService,
):
    sub_role = await service.update_sub_role(actor, sub_role_id, body.name)
    return SubRoleDetailResponse.from_entity(sub_role)


@router.delete("/sub-roles/{sub_role_id}", status_code=204)
@limit_writes
async def delete_sub_role(
    request: Request,
    sub_role_id: str,
    actor: CurrentUser,
    service: WriteService,
) -> Response:
    """Delete a sub-role. Succeeds when it does not exist."""
    await service.delete_sub_role(actor, sub_role_id)
    return Response(status_code=204)


@router.get("/{role_id}", response_model=RoleDetailResponse)
async def get_role(role_id: str, actor: CurrentUser, service: ReadService):
    """Get a role with its sub-roles and members."""
    role = await service.get_role(actor, role_id)
    return RoleDetailResponse.from_entity(role)


@router.put("/{role_id}", response_model=RoleDetailResponse)
@limit_writes
async def update_role(
    request: Request,
    role_id: str,
    body: RoleUpdate,
    actor: CurrentUser,
    service: WriteService,
):
    role = await service.update_role(actor, role_id, body.name, body.is_leader)
    return RoleDetailResponse.from_entity(role)


@router.delete("/{role_id}", status_code=204)
@limit_writes
async def delete_role(
    request: Request,
    role_id: str,
    actor: CurrentUser,
    service: WriteService,
) -> Response:
    """Delete a role with its sub-roles and memberships. Succeeds when it does not exist."""
    await service.delete_role(actor, role_id)
    return Response(status_code=204)


@router.post("/{role_id}/sub-roles", response_model=SubRoleResponse, status_code=201)
@limit_writes
async def create_sub_role(
    request: Request,
    role_id: str,
    body: SubRoleCreateRequest,
    actor: CurrentUser,
    service: WriteService,
):
    """Create a sub-role under the given role."""
    sub_role = await service.create_sub_role(actor, role_id, body.name)
    return SubRoleResponse.model_validate(sub_role)
