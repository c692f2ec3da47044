# API endpoints and routers

from .search_endpoints import router as search_router
from .metrics_endpoints import router as metrics_router

__all__ = [
    "search_router",
    "metrics_router",
]
