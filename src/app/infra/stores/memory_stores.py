"""Store de sessões de chat em memória.

O chat não persiste nada além da sessão em memória: ao reiniciar o
processo, as conversas são descartadas.
"""

from __future__ import annotations

import json
from datetime import timedelta
from typing import Any

from app.protocols.clock import ClockProtocol
from app.protocols.session_store import ChatSessionStoreProtocol
from app.sessions.clock import SystemClock


class MemoryChatSessionStore(ChatSessionStoreProtocol):
    """Store de sessão em memória com TTL (serializa em JSON a cada save)."""

    def __init__(self, clock: ClockProtocol | None = None) -> None:
        self._clock = clock or SystemClock()
        self._store: dict[str, tuple[str, Any]] = {}  # session_id -> (json, expires_at)

    def _is_expired(self, session_id: str) -> bool:
        entry = self._store.get(session_id)
        if entry is None:
            return True
        _, expires_at = entry
        if self._clock.now() > expires_at:
            del self._store[session_id]
            return True
        return False

    async def save(self, session_id: str, data: dict[str, Any], ttl_seconds: int = 7200) -> None:
        """Salva sessão serializada, renovando o TTL."""
        expires_at = self._clock.now() + timedelta(seconds=ttl_seconds)
        self._store[session_id] = (json.dumps(data, ensure_ascii=False), expires_at)

    async def load(self, session_id: str) -> dict[str, Any] | None:
        """Carrega sessão (None se inexistente ou expirada)."""
        if self._is_expired(session_id):
            return None
        raw, _ = self._store[session_id]
        return json.loads(raw)

    async def delete(self, session_id: str) -> bool:
        """Remove sessão da memória."""
        return self._store.pop(session_id, None) is not None

    async def exists(self, session_id: str) -> bool:
        """Verifica se sessão existe e não expirou."""
        return not self._is_expired(session_id)

    async def list_ids(self) -> list[str]:
        """Lista sessões vivas, descartando as expiradas."""
        return [session_id for session_id in list(self._store) if not self._is_expired(session_id)]
