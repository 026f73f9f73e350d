"""Role API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class RoleCreateRequest(BaseModel):
    """Request body for creating a role. The slug is derived from the name."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=500)
    permission_ids: list[str] = Field(default_factory=list, max_length=200)


class RoleUpdateRequest(BaseModel):
    """Request body for updating a role (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=500)
    permission_ids: list[str] | None = Field(default=None, max_length=200)
    is_active: bool | None = None


class RoleCloneRequest(BaseModel):
    """Request body for cloning a role; name defaults to '<source> (Copy)'."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=500)


class RoleResponse(BaseModel):
    """Role list/detail response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    description: str | None
    is_system: bool
    is_active: bool
    permission_ids: list[str]
    permission_codes: list[str]
    created_by: str | None = None
