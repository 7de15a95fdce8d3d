"""Factories — criação de implementações concretas.

Centraliza a criação do store e do serviço de chat a partir das
configurações de ambiente.
"""

from __future__ import annotations

import logging
import os
import random

from app.infra.stores import MemoryChatSessionStore
from app.protocols.clock import ClockProtocol
from app.protocols.session_store import ChatSessionStoreProtocol
from app.services.chat_service import ChatService
from app.sessions.clock import SystemClock
from chatbot.config.catalog_loader import load_reply_catalog
from config.settings import get_base_settings, get_chat_settings
from config.settings.chat import ChatSettings

logger = logging.getLogger(__name__)


def create_chat_session_store(clock: ClockProtocol | None = None) -> ChatSessionStoreProtocol:
    """Cria store de sessões de chat.

    Lê CHAT_SESSION_STORE_BACKEND da env; apenas "memory" é suportado, já
    que o chat não persiste conversas.
    """
    backend = os.getenv("CHAT_SESSION_STORE_BACKEND", "memory").lower()

    if backend == "memory":
        environment = get_base_settings().environment
        if environment != "development":
            logger.warning(
                "memory_store_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        store = MemoryChatSessionStore(clock)
        logger.info("chat_session_store_created", extra={"backend": "memory"})
        return store

    msg = f"CHAT_SESSION_STORE_BACKEND inválido: {backend}"
    raise ValueError(msg)


def create_chat_service(
    store: ChatSessionStoreProtocol | None = None,
    *,
    settings: ChatSettings | None = None,
    clock: ClockProtocol | None = None,
    rng: random.Random | None = None,
) -> ChatService:
    """Cria ChatService com catálogo carregado e fonte aleatória semeável."""
    settings = settings or get_chat_settings()
    clock = clock or SystemClock()
    service = ChatService(
        store or create_chat_session_store(clock),
        settings=settings,
        clock=clock,
        rng=rng or random.Random(settings.random_seed),
        catalog=load_reply_catalog(),
    )
    logger.info(
        "chat_service_created",
        extra={"seeded": settings.random_seed is not None},
    )
    return service
