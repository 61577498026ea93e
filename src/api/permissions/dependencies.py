"""FastAPI dependencies for the permissions bounded context.

The store is built once in the application lifespan and kept on
``app.state.permission_store``; every request-scoped service is a thin
wrapper around that single instance.
"""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from infrastructure.settings import Settings, get_settings
from permissions.application.observability import (
    DefaultAuthorizationProbe,
    DefaultGroupRegistryProbe,
    DefaultMembershipProbe,
)
from permissions.application.services import (
    AuthorizationEngine,
    GroupRegistry,
    MembershipService,
)
from permissions.domain.value_objects import MAX_IDENTIFIER_LENGTH
from permissions.ports.repositories import IPermissionStore
from shared_kernel.observability_context import ObservationContext


def get_permission_store(request: Request) -> IPermissionStore:
    """Get the permission store created at startup.

    Raises:
        HTTPException: 503 if the application has no store (startup failed)
    """
    store = getattr(request.app.state, "permission_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Permission store is not initialized",
        )
    return store


def get_namespace(
    settings: Annotated[Settings, Depends(get_settings)],
    x_namespace: Annotated[str | None, Header()] = None,
) -> str:
    """Resolve the request namespace.

    Uses the X-Namespace header when present, otherwise the configured
    namespace.

    Raises:
        HTTPException: 400 if the header is present but blank or longer
            than MAX_IDENTIFIER_LENGTH
    """
    if x_namespace is None:
        return settings.namespace
    namespace = x_namespace.strip()
    if not namespace:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Namespace header must not be empty",
        )
    if len(namespace) > MAX_IDENTIFIER_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                "X-Namespace header must be at most "
                f"{MAX_IDENTIFIER_LENGTH} characters"
            ),
        )
    return namespace


def get_observation_context(
    request: Request,
    x_request_id: Annotated[str | None, Header()] = None,
) -> ObservationContext:
    """Build the observation context bound to every probe for this request."""
    return ObservationContext(
        request_id=x_request_id or str(uuid.uuid4()),
        method=request.method,
        path=request.url.path,
    )


def get_group_registry(
    store: Annotated[IPermissionStore, Depends(get_permission_store)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> GroupRegistry:
    """Get GroupRegistry instance."""
    return GroupRegistry(
        store=store,
        probe=DefaultGroupRegistryProbe().with_context(context),
    )


def get_membership_service(
    store: Annotated[IPermissionStore, Depends(get_permission_store)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> MembershipService:
    """Get MembershipService instance."""
    return MembershipService(
        store=store,
        probe=DefaultMembershipProbe().with_context(context),
    )


def get_authorization_engine(
    store: Annotated[IPermissionStore, Depends(get_permission_store)],
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AuthorizationEngine:
    """Get AuthorizationEngine instance."""
    return AuthorizationEngine(
        store=store,
        probe=DefaultAuthorizationProbe().with_context(context),
    )
