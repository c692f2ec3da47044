"""
Metrics endpoint for observability.
Reports per-phase search latency and error statistics.
"""

from fastapi import APIRouter
from typing import Any, Dict

from foodlocator.core.error_handlers import error_handler
from foodlocator.core.metrics import snapshot_metrics

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("")
async def get_metrics() -> Dict[str, Any]:
    return {
        "search": snapshot_metrics(),
        "errors": error_handler.get_error_statistics(),
    }
