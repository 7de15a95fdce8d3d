"""Testes do composition root (validação de settings e factories)."""

from __future__ import annotations

import asyncio
import logging
import random

import pytest

from app.app import run_idle_sweeper
from app.bootstrap import validate_runtime_settings
from app.bootstrap.dependencies import create_chat_service, create_chat_session_store
from app.infra.stores import MemoryChatSessionStore
from config.settings import get_base_settings, get_chat_settings
from config.settings.chat import ChatSettings
from tests.fakes.fake_clock import ManualClock


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_base_settings.cache_clear()
    get_chat_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_chat_settings.cache_clear()


class TestValidateRuntimeSettings:
    def test_production_with_invalid_chat_settings_fails_fast(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("CHAT_IDLE_TIMEOUT_SECONDS", "0")
        with pytest.raises(RuntimeError, match="Configuração inválida para production"):
            validate_runtime_settings()

    def test_development_only_warns(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        monkeypatch.setenv("CHAT_IDLE_TIMEOUT_SECONDS", "0")
        validate_runtime_settings()

    def test_valid_production_settings_pass(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        validate_runtime_settings()


class TestFactories:
    def test_memory_store_is_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CHAT_SESSION_STORE_BACKEND", raising=False)
        assert isinstance(create_chat_session_store(), MemoryChatSessionStore)

    def test_memory_store_outside_development_warns(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("ENVIRONMENT", "staging")
        monkeypatch.delenv("CHAT_SESSION_STORE_BACKEND", raising=False)
        with caplog.at_level(logging.INFO, logger="app.bootstrap.dependencies"):
            create_chat_session_store()
        (record,) = [r for r in caplog.records if r.getMessage() == "memory_store_in_non_dev"]
        assert record.levelno == logging.WARNING
        assert record.environment == "staging"

    def test_unknown_backend_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHAT_SESSION_STORE_BACKEND", "redis")
        with pytest.raises(ValueError, match="CHAT_SESSION_STORE_BACKEND"):
            create_chat_session_store()

    @pytest.mark.asyncio
    async def test_seeded_services_pick_the_same_variants(self) -> None:
        settings = ChatSettings(random_seed=123)
        replies = []
        for _ in range(2):
            service = create_chat_service(settings=settings, clock=ManualClock())
            session = await service.create_session()
            turn = await service.send_message(session.session_id, "Aceita PIX?")
            replies.append(turn.reply.text)
        assert replies[0] == replies[1]

    def test_explicit_rng_is_used(self) -> None:
        rng = random.Random(1)
        service = create_chat_service(settings=ChatSettings(), clock=ManualClock(), rng=rng)
        assert service.frequent_questions()


class _CountingService:
    def __init__(self) -> None:
        self.calls = 0

    async def sweep_idle(self) -> int:
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("falha transitória")
        return 0


@pytest.mark.asyncio
async def test_idle_sweeper_survives_errors_and_cancels() -> None:
    service = _CountingService()
    task = asyncio.create_task(run_idle_sweeper(service, 0.01))  # type: ignore[arg-type]
    await asyncio.sleep(0.1)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert service.calls >= 2
