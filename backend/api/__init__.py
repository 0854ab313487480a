"""
API Routers
"""
from .alerts import router as alerts_router
from .upload import router as upload_router

__all__ = ["alerts_router", "upload_router"]
