"""API route modules."""

from fastapi import APIRouter

from backoffice.entrypoints.api.routes.auth import router as auth_router
from backoffice.entrypoints.api.routes.organizations import router as organizations_router
from backoffice.entrypoints.api.routes.permissions import router as permissions_router
from backoffice.entrypoints.api.routes.roles import router as roles_router
from backoffice.entrypoints.api.routes.suppliers import router as suppliers_router
from backoffice.entrypoints.api.routes.tags import router as tags_router
from backoffice.entrypoints.api.routes.users import router as users_router

# Create main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(roles_router)
api_router.include_router(permissions_router)
api_router.include_router(suppliers_router)
api_router.include_router(tags_router)
api_router.include_router(organizations_router)

__all__ = ["api_router"]
