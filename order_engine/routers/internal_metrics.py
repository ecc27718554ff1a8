from __future__ import annotations

from fastapi import APIRouter

from order_engine.core.metrics import request_metrics

router = APIRouter(prefix="/internal/metrics", tags=["internal-metrics"])


@router.get("")
def metrics():
    return {"endpoints": request_metrics.snapshot()}


@router.get("/environments")
def environment_metrics():
    return {"environments": request_metrics.snapshot_per_environment()}
