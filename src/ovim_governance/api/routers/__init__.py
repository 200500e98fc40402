"""API routers."""

from .admission_router import router as admission_router
from .organizations_router import router as organizations_router
from .zones_router import router as zones_router

__all__ = ["admission_router", "organizations_router", "zones_router"]
