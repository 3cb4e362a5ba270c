"""
API routers for the CapOpt pattern service
"""
from .frameworks import router as frameworks_router
from .patterns import router as patterns_router

__all__ = ["frameworks_router", "patterns_router"]
