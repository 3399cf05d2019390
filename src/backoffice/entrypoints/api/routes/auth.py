"""Auth API routes for login, token refresh and password change."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from backoffice.core.auth import Organization, UserProfile
from backoffice.core.auth.service import AuthService
from backoffice.entrypoints.api.deps import get_auth_service
from backoffice.entrypoints.api.middleware.jwt_auth import JwtContext, verify_jwt
from backoffice.entrypoints.api.schemas import ApiResponse, envelope

router = APIRouter(prefix="/auth", tags=["auth"])

AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


class LoginRequest(BaseModel):
    """Login request body. ``email`` may also hold a username."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    """Token refresh request body."""

    refresh_token: str


class ChangePasswordRequest(BaseModel):
    """Change password request body."""

    old_password: str
    new_password: str = Field(..., min_length=6)


class LoginData(BaseModel):
    """Tokens and profile returned by login."""

    access_token: str
    refresh_token: str
    user: UserProfile


class AccessTokenData(BaseModel):
    """Access token returned by refresh."""

    access_token: str


@router.post("/login", response_model=ApiResponse[LoginData])
async def login(body: LoginRequest, service: AuthServiceDep) -> dict[str, object]:
    """Authenticate with email or username and password."""
    result = await service.login(body.email, body.password)
    return envelope("User logged in successfully", result.model_dump())


@router.post("/refresh-token", response_model=ApiResponse[AccessTokenData])
async def refresh_token(body: RefreshRequest, service: AuthServiceDep) -> dict[str, object]:
    """Exchange a refresh token for a new access token."""
    access_token = await service.refresh(body.refresh_token)
    return envelope("New access token generated successfully", {"access_token": access_token})


@router.post("/change-password", response_model=ApiResponse[None])
async def change_password(
    body: ChangePasswordRequest,
    service: AuthServiceDep,
    auth: Annotated[JwtContext, Depends(verify_jwt)],
) -> dict[str, object]:
    """Change the authenticated user's password."""
    await service.change_password(auth.user_id, body.old_password, body.new_password)
    return envelope("Password changed successfully")


@router.get("/check-domain", response_model=ApiResponse[Organization])
async def check_domain(
    domain: Annotated[str, Query(min_length=1)],
    service: AuthServiceDep,
) -> dict[str, object]:
    """Resolve the organization that owns a login domain."""
    organization = await service.check_domain_exists(domain)
    if organization is None:
        return envelope("Domain not found")
    return envelope("Domain found", organization.model_dump())
