"""API routes."""

from fastapi import APIRouter

from jsonformatter.api import admin, auth, encryption, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/User", tags=["user"])
router.include_router(encryption.router, prefix="/EncryptDecryptController", tags=["encryption"])

# Mounted at the root, outside API_PREFIX, where the admin client calls it.
admin_router = admin.router

__all__ = ["admin_router", "router"]
