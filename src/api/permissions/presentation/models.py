"""Pydantic models for permission API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from permissions.domain.value_objects import MAX_IDENTIFIER_LENGTH, PermissionGroup


class AuthorizeRequest(BaseModel):
    """Request model for an authorization decision."""

    principal: str = Field(
        ...,
        description="Principal id or mention",
        min_length=1,
        max_length=MAX_IDENTIFIER_LENGTH,
    )
    groups: list[str] = Field(
        default_factory=list,
        description="Candidate group names, checked in order",
    )


class AuthorizeResponse(BaseModel):
    """Response model for an authorization decision."""

    can_perform: bool = Field(..., description="Whether the principal is authorized")


class CreateGroupRequest(BaseModel):
    """Request model for creating a permission group."""

    name: str = Field(
        ..., description="Group name", min_length=1, max_length=MAX_IDENTIFIER_LENGTH
    )
    description: str = Field(default="", description="Free-text description")


class GroupResponse(BaseModel):
    """Response model for a permission group."""

    name: str = Field(..., description="Group name")
    description: str = Field(..., description="Group description")

    @classmethod
    def from_domain(cls, group: PermissionGroup) -> GroupResponse:
        """Convert a domain PermissionGroup to an API response."""
        return cls(name=group.name, description=group.description)


class AddMemberRequest(BaseModel):
    """Request model for adding a principal to a group."""

    principal: str = Field(
        ...,
        description="Principal id or mention",
        min_length=1,
        max_length=MAX_IDENTIFIER_LENGTH,
    )


class MembershipResponse(BaseModel):
    """Response model for a membership change."""

    group: str = Field(..., description="Group name")
    principal: str = Field(..., description="Normalized principal id")


class HealthResponse(BaseModel):
    """Response model for health checks."""

    status: str = Field(..., description="ok or unavailable")
    backend: str | None = Field(default=None, description="Configured store backend")
