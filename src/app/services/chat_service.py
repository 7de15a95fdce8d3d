"""Serviço de aplicação do chat.

Orquestra sessões sobre um store: carrega, aplica a operação, emite
mensagens automáticas vencidas e persiste de volta. Operações sobre a
mesma sessão são serializadas por lock (uma resposta por mensagem, sem
intercalação).
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

from app.observability import get_correlation_id, record_latency
from app.protocols.clock import ClockProtocol
from app.protocols.session_store import ChatSessionStoreProtocol
from app.sessions.chat_session import ChatSession, ChatTurn
from chatbot.config.catalog_loader import load_reply_catalog
from chatbot.models import ReplyCatalog, Suggestion
from config.settings.chat import ChatSettings
from utils.errors import SessionNotFoundError

logger = logging.getLogger(__name__)


class ChatService:
    """Casos de uso de sessão de chat (criar, conversar, encerrar, varrer)."""

    __slots__ = ("_catalog", "_clock", "_locks", "_rng", "_settings", "_store")

    def __init__(
        self,
        store: ChatSessionStoreProtocol,
        *,
        settings: ChatSettings,
        clock: ClockProtocol,
        rng: random.Random,
        catalog: ReplyCatalog | None = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._clock = clock
        self._rng = rng
        self._catalog = catalog or load_reply_catalog()
        self._locks: dict[str, asyncio.Lock] = {}

    @staticmethod
    def _generate_session_id() -> str:
        return f"chat_{uuid.uuid4().hex}"

    @asynccontextmanager
    async def _locked(self, session_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(session_id, asyncio.Lock())
        async with lock:
            yield

    async def _load(self, session_id: str) -> ChatSession:
        data = await self._store.load(session_id)
        if data is None:
            self._locks.pop(session_id, None)
            raise SessionNotFoundError(session_id)
        return ChatSession.from_dict(
            data, clock=self._clock, rng=self._rng, catalog=self._catalog
        )

    async def _save(self, session: ChatSession) -> None:
        await self._store.save(
            session.session_id,
            session.to_dict(),
            ttl_seconds=self._settings.session_ttl_seconds,
        )

    def _record(self, operation: str, started: float) -> None:
        record_latency(
            "chat_service",
            operation,
            (time.perf_counter() - started) * 1000,
            get_correlation_id() or None,
        )

    async def create_session(self) -> ChatSession:
        """Cria sessão nova (contexto zerado) e envia a saudação."""
        started = time.perf_counter()
        session = ChatSession.new(
            self._generate_session_id(),
            clock=self._clock,
            rng=self._rng,
            idle_timeout=timedelta(seconds=self._settings.idle_timeout_seconds),
            goodbye_timeout=timedelta(seconds=self._settings.goodbye_timeout_seconds),
            catalog=self._catalog,
        )
        session.start()
        await self._save(session)
        self._record("create_session", started)
        return session

    async def get_session(self, session_id: str) -> ChatSession:
        """Carrega sessão, emitindo avisos de inatividade vencidos.

        Raises:
            SessionNotFoundError: Sessão inexistente ou expirada
        """
        async with self._locked(session_id):
            session = await self._load(session_id)
            if session.poll_idle():
                await self._save(session)
            return session

    async def send_message(self, session_id: str, text: str) -> ChatTurn:
        """Processa mensagem digitada pelo usuário.

        Raises:
            SessionNotFoundError: Sessão inexistente ou expirada
            SessionClosedError: Sessão encerrada
            EmptyMessageError: Texto vazio
        """
        started = time.perf_counter()
        async with self._locked(session_id):
            session = await self._load(session_id)
            try:
                turn = session.send(text)
            finally:
                # despedida emitida antes de um envio tardio também é persistida
                await self._save(session)
        self._record("send_message", started)
        logger.info(
            "chat_message_answered",
            extra={"session_id": session_id, "rule": turn.rule.value},
        )
        return turn

    async def use_suggestion(self, session_id: str, suggestion_id: str) -> ChatTurn:
        """Usa uma sugestão oferecida como mensagem do usuário."""
        started = time.perf_counter()
        async with self._locked(session_id):
            session = await self._load(session_id)
            try:
                turn = session.use_suggestion(suggestion_id)
            finally:
                await self._save(session)
        self._record("use_suggestion", started)
        logger.info(
            "chat_suggestion_used",
            extra={
                "session_id": session_id,
                "suggestion_id": suggestion_id,
                "rule": turn.rule.value,
            },
        )
        return turn

    async def get_suggestions(self, session_id: str) -> tuple[Suggestion, ...]:
        """Sugestões atuais da sessão."""
        session = await self.get_session(session_id)
        return session.suggestions()

    async def close_session(self, session_id: str) -> ChatSession:
        """Encerra a sessão e a descarta do store."""
        async with self._locked(session_id):
            session = await self._load(session_id)
            session.close()
            await self._store.delete(session_id)
        self._locks.pop(session_id, None)
        logger.info("chat_session_closed", extra={"session_id": session_id})
        return session

    async def sweep_idle(self) -> int:
        """Varre sessões vivas e emite mensagens automáticas vencidas.

        Returns:
            Quantidade de mensagens automáticas emitidas.
        """
        produced = 0
        for session_id in await self._store.list_ids():
            async with self._locked(session_id):
                data = await self._store.load(session_id)
                if data is None:
                    self._locks.pop(session_id, None)
                    continue
                session = ChatSession.from_dict(
                    data, clock=self._clock, rng=self._rng, catalog=self._catalog
                )
                messages = session.poll_idle()
                if messages:
                    produced += len(messages)
                    await self._save(session)
        await self._prune_locks()
        if produced:
            logger.info("chat_idle_sweep", extra={"automatic_messages": produced})
        return produced

    async def _prune_locks(self) -> None:
        """Descarta locks de sessões que saíram do store (despedida ou TTL)."""
        live = set(await self._store.list_ids())
        for session_id, lock in list(self._locks.items()):
            if session_id not in live and not lock.locked():
                del self._locks[session_id]

    def frequent_questions(self) -> tuple[str, ...]:
        """Perguntas frequentes exibidas pelo widget."""
        return self._catalog.frequent_questions
