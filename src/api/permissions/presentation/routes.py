"""HTTP routes for permission groups, membership and authorization."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from permissions.application.services import (
    AuthorizationEngine,
    GroupRegistry,
    MembershipService,
)
from permissions.dependencies import (
    get_authorization_engine,
    get_group_registry,
    get_membership_service,
    get_namespace,
)
from permissions.ports.exceptions import (
    DuplicateGroupError,
    GroupNotEmptyError,
    GroupNotFoundError,
    NoPermissionsConfiguredError,
    NotAMemberError,
    PermissionsError,
    ReservedGroupNameError,
    StoreUnavailableError,
)
from permissions.presentation.models import (
    AddMemberRequest,
    AuthorizeRequest,
    AuthorizeResponse,
    CreateGroupRequest,
    GroupResponse,
    MembershipResponse,
)
from permissions.presentation.principal import normalize_principal

router = APIRouter(
    prefix="/permissions",
    tags=["permissions"],
)

_ERROR_STATUS: dict[type[PermissionsError], int] = {
    ReservedGroupNameError: status.HTTP_403_FORBIDDEN,
    DuplicateGroupError: status.HTTP_409_CONFLICT,
    GroupNotFoundError: status.HTTP_404_NOT_FOUND,
    GroupNotEmptyError: status.HTTP_409_CONFLICT,
    NotAMemberError: status.HTTP_404_NOT_FOUND,
    NoPermissionsConfiguredError: status.HTTP_404_NOT_FOUND,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _http_error(error: PermissionsError) -> HTTPException:
    """Translate a domain error into an HTTP error naming the offending entity."""
    return HTTPException(
        status_code=_ERROR_STATUS.get(
            type(error), status.HTTP_500_INTERNAL_SERVER_ERROR
        ),
        detail=str(error),
    )


def _parse_principal(raw: str) -> str:
    try:
        return normalize_principal(raw)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )


@router.post(
    "/authorize",
    response_model=AuthorizeResponse,
    summary="Authorize a principal",
    description=(
        "Decide whether a principal may perform an action guarded by the "
        "candidate groups. Members of server_admins are always authorized."
    ),
    responses={
        400: {"description": "Invalid principal"},
        503: {"description": "Permission store unavailable"},
    },
)
async def authorize(
    request: AuthorizeRequest,
    namespace: Annotated[str, Depends(get_namespace)],
    engine: Annotated[AuthorizationEngine, Depends(get_authorization_engine)],
) -> AuthorizeResponse:
    """Authorize a principal against an ordered list of candidate groups."""
    principal = _parse_principal(request.principal)
    try:
        can_perform = await engine.authorize(namespace, principal, request.groups)
    except PermissionsError as e:
        raise _http_error(e)
    return AuthorizeResponse(can_perform=can_perform)


@router.get(
    "/groups",
    response_model=list[GroupResponse],
    summary="List groups",
    responses={
        404: {"description": "No permission groups are configured"},
        503: {"description": "Permission store unavailable"},
    },
)
async def list_groups(
    namespace: Annotated[str, Depends(get_namespace)],
    registry: Annotated[GroupRegistry, Depends(get_group_registry)],
) -> list[GroupResponse]:
    """List every group in the namespace."""
    try:
        groups = await registry.list(namespace)
    except PermissionsError as e:
        raise _http_error(e)
    return [GroupResponse.from_domain(group) for group in groups]


@router.post("/groups", status_code=status.HTTP_201_CREATED)
async def create_group(
    request: CreateGroupRequest,
    namespace: Annotated[str, Depends(get_namespace)],
    registry: Annotated[GroupRegistry, Depends(get_group_registry)],
) -> GroupResponse:
    """Create a new, empty permission group.

    Raises:
        HTTPException: 403 if the name is reserved
        HTTPException: 409 if the group already exists
        HTTPException: 503 if the store is unavailable
    """
    try:
        group = await registry.create(namespace, request.name, request.description)
    except PermissionsError as e:
        raise _http_error(e)
    return GroupResponse.from_domain(group)


@router.get("/groups/{name}")
async def get_group(
    name: str,
    namespace: Annotated[str, Depends(get_namespace)],
    registry: Annotated[GroupRegistry, Depends(get_group_registry)],
) -> GroupResponse:
    """Look up a permission group by name."""
    try:
        group = await registry.get(namespace, name)
    except PermissionsError as e:
        raise _http_error(e)
    return GroupResponse.from_domain(group)


@router.delete("/groups/{name}")
async def delete_group(
    name: str,
    namespace: Annotated[str, Depends(get_namespace)],
    registry: Annotated[GroupRegistry, Depends(get_group_registry)],
) -> GroupResponse:
    """Delete an empty permission group.

    Raises:
        HTTPException: 403 if the name is reserved
        HTTPException: 404 if the group does not exist
        HTTPException: 409 if the group still has members
        HTTPException: 503 if the store is unavailable
    """
    try:
        group = await registry.delete(namespace, name)
    except PermissionsError as e:
        raise _http_error(e)
    return GroupResponse.from_domain(group)


@router.get("/groups/{name}/members")
async def list_members(
    name: str,
    namespace: Annotated[str, Depends(get_namespace)],
    service: Annotated[MembershipService, Depends(get_membership_service)],
) -> list[str]:
    """List the principals in a group."""
    try:
        return await service.list_members(namespace, name)
    except PermissionsError as e:
        raise _http_error(e)


@router.post("/groups/{name}/members", status_code=status.HTTP_201_CREATED)
async def add_member(
    name: str,
    request: AddMemberRequest,
    namespace: Annotated[str, Depends(get_namespace)],
    service: Annotated[MembershipService, Depends(get_membership_service)],
) -> MembershipResponse:
    """Add a principal to a group. Adding an existing member succeeds.

    Raises:
        HTTPException: 400 if the principal is invalid
        HTTPException: 403 if the group is reserved
        HTTPException: 404 if the group does not exist
        HTTPException: 503 if the store is unavailable
    """
    principal = _parse_principal(request.principal)
    try:
        await service.add_member(namespace, name, principal)
    except PermissionsError as e:
        raise _http_error(e)
    return MembershipResponse(group=name, principal=principal)


@router.delete("/groups/{name}/members/{principal}")
async def remove_member(
    name: str,
    principal: str,
    namespace: Annotated[str, Depends(get_namespace)],
    service: Annotated[MembershipService, Depends(get_membership_service)],
) -> MembershipResponse:
    """Remove a principal from a group.

    Raises:
        HTTPException: 400 if the principal is invalid
        HTTPException: 403 if the group is reserved
        HTTPException: 404 if the group does not exist or the principal is not a member
        HTTPException: 503 if the store is unavailable
    """
    normalized = _parse_principal(principal)
    try:
        await service.remove_member(namespace, name, normalized)
    except PermissionsError as e:
        raise _http_error(e)
    return MembershipResponse(group=name, principal=normalized)


@router.get("/principals/{principal}/groups")
async def list_principal_groups(
    principal: str,
    namespace: Annotated[str, Depends(get_namespace)],
    service: Annotated[MembershipService, Depends(get_membership_service)],
) -> list[GroupResponse]:
    """List every group the principal is a member of."""
    normalized = _parse_principal(principal)
    try:
        groups = await service.list_groups_for_principal(namespace, normalized)
    except PermissionsError as e:
        raise _http_error(e)
    return [GroupResponse.from_domain(group) for group in groups]
