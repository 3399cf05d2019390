"""Auth domain types."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserStatus(str, Enum):
    """Account status."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"


class UserProfile(BaseModel):
    """User as exposed to clients. Never carries the password hash."""

    id: int
    name: str
    email: str
    username: str
    phone_number: str | None = None
    address: str | None = None
    organization_id: int
    image: str | None = None
    status: UserStatus | None = None
    role: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class User(UserProfile):
    """User domain model including the stored credential."""

    password_hash: str

    def to_profile(self) -> UserProfile:
        """Return the same user with the password hash stripped."""
        return UserProfile.model_validate(self.model_dump(exclude={"password_hash"}))


class Organization(BaseModel):
    """Organization domain model."""

    id: int
    name: str
    domain: str
    address: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TokenClaims(BaseModel):
    """Claims carried by access and refresh tokens."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    email: str
    role: int
    organization_id: int | None = Field(default=None, alias="organizationId")

    def to_payload(self) -> dict[str, Any]:
        """Serialize to JWT claims, omitting an absent organization."""
        return self.model_dump(by_alias=True, exclude_none=True)


class LoginResult(BaseModel):
    """Outcome of a successful login."""

    access_token: str
    refresh_token: str
    user: UserProfile
