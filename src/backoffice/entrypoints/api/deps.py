"""Dependency injection and application lifespan management."""

from __future__ import annotations

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from fastapi import Request

from backoffice.adapters.auth import PostgresAuthRepository
from backoffice.adapters.db.app_db import AppDatabase
from backoffice.adapters.entities import (
    OrganizationsRepository,
    SuppliersRepository,
    TagsRepository,
    UsersRepository,
)
from backoffice.adapters.rbac import PermissionsRepository, RolesRepository
from backoffice.core.auth import TokenSettings
from backoffice.core.auth.service import AuthService

if TYPE_CHECKING:
    from fastapi import FastAPI

logger = structlog.get_logger()


class Settings:
    """Application settings loaded from environment."""

    def __init__(self) -> None:
        """Load settings from environment variables."""
        self.database_url = os.getenv("DATABASE_URL", "postgresql://localhost:5432/backoffice")
        self.db_pool_min_size = int(os.getenv("DB_POOL_MIN_SIZE", "2"))
        self.db_pool_max_size = int(os.getenv("DB_POOL_MAX_SIZE", "10"))
        self.default_page_limit = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))
        self.tokens = TokenSettings.from_env()


settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - open the database pool and close it on shutdown."""
    app_db = AppDatabase(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    await app_db.connect()

    app.state.app_db = app_db
    app.state.settings = settings

    logger.info("application_started")
    try:
        yield
    finally:
        await app_db.close()
        logger.info("application_stopped")


def get_app_db(request: Request) -> AppDatabase:
    """Get the application database from app state."""
    app_db: AppDatabase = request.app.state.app_db
    return app_db


def get_settings(request: Request) -> Settings:
    """Get settings from app state, falling back to the module settings."""
    return getattr(request.app.state, "settings", settings)


def get_auth_service(request: Request) -> AuthService:
    """Get auth service bound to the request's database."""
    repo = PostgresAuthRepository(get_app_db(request))
    return AuthService(repo, get_settings(request).tokens)


def get_users_repo(request: Request) -> UsersRepository:
    """Get users repository."""
    return UsersRepository(get_app_db(request), get_settings(request).default_page_limit)


def get_roles_repo(request: Request) -> RolesRepository:
    """Get roles repository."""
    return RolesRepository(get_app_db(request))


def get_permissions_repo(request: Request) -> PermissionsRepository:
    """Get permissions repository."""
    return PermissionsRepository(get_app_db(request), get_settings(request).default_page_limit)


def get_suppliers_repo(request: Request) -> SuppliersRepository:
    """Get suppliers repository."""
    return SuppliersRepository(get_app_db(request), get_settings(request).default_page_limit)


def get_tags_repo(request: Request) -> TagsRepository:
    """Get tags repository."""
    return TagsRepository(get_app_db(request), get_settings(request).default_page_limit)


def get_organizations_repo(request: Request) -> OrganizationsRepository:
    """Get organizations repository."""
    return OrganizationsRepository(
        get_app_db(request), get_settings(request).default_page_limit
    )
