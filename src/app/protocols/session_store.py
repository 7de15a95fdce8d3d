"""Protocolo de persistência de sessões de chat."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ChatSessionStoreProtocol(ABC):
    """Contrato mínimo assíncrono para armazenamento de sessões serializadas.

    As sessões trafegam como dict (`ChatSession.to_dict()`); o store não
    conhece relógio, catálogo ou fonte aleatória.
    """

    @abstractmethod
    async def save(self, session_id: str, data: dict[str, Any], ttl_seconds: int = 7200) -> None: ...

    @abstractmethod
    async def load(self, session_id: str) -> dict[str, Any] | None: ...

    @abstractmethod
    async def delete(self, session_id: str) -> bool: ...

    @abstractmethod
    async def exists(self, session_id: str) -> bool: ...

    @abstractmethod
    async def list_ids(self) -> list[str]: ...
