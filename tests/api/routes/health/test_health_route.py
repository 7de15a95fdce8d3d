"""Testes dos endpoints de health e readiness."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from api.routes.health.router import health_check, readiness_check


def _build_request_with_state(state: SimpleNamespace) -> Request:
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/ready",
        "raw_path": b"/ready",
        "query_string": b"",
        "headers": [],
        "app": SimpleNamespace(state=state),
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": b"", "more_body": False}

    return Request(scope, _receive)


@pytest.mark.asyncio
async def test_health_is_always_healthy() -> None:
    response = await health_check()
    assert response.status == "healthy"
    assert response.service == "dentalspa-chat"


@pytest.mark.asyncio
async def test_readiness_returns_not_ready_without_sweeper() -> None:
    request = _build_request_with_state(SimpleNamespace(idle_sweeper=None))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["status"] == "not_ready"
    assert payload["checks"] == {"catalog": "ok", "idle_sweeper": "not_started"}


@pytest.mark.asyncio
async def test_readiness_returns_ready_with_running_sweeper() -> None:
    sweeper = MagicMock()
    sweeper.done.return_value = False
    request = _build_request_with_state(SimpleNamespace(idle_sweeper=sweeper))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 200
    assert payload["status"] == "ready"


@pytest.mark.asyncio
async def test_readiness_reports_dead_sweeper() -> None:
    sweeper = MagicMock()
    sweeper.done.return_value = True
    request = _build_request_with_state(SimpleNamespace(idle_sweeper=sweeper))

    response = await readiness_check(request)
    payload = json.loads(response.body.decode("utf-8"))

    assert response.status_code == 503
    assert payload["checks"]["idle_sweeper"] == "failed"
