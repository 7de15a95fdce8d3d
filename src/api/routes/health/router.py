"""Endpoints de health check."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from chatbot.config.catalog_loader import ReplyAssetError, load_reply_catalog

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service="dentalspa-chat",
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness: catálogo de respostas carregado e varredura de inatividade viva."""
    checks: dict[str, Any] = {
        "catalog": _check_catalog(),
        "idle_sweeper": _check_sweeper(getattr(request.app.state, "idle_sweeper", None)),
    }
    ready = all(status == "ok" for status in checks.values())
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": checks,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_catalog() -> str:
    try:
        load_reply_catalog()
    except ReplyAssetError as exc:
        logger.warning("readiness_catalog_failed", extra={"error_type": type(exc).__name__})
        return "failed"
    return "ok"


def _check_sweeper(task: Any | None) -> str:
    if task is None:
        return "not_started"
    return "failed" if task.done() else "ok"
