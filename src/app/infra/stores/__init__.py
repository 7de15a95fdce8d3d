"""Stores — implementações concretas de persistência.

Módulos disponíveis:
    - memory_stores: Store de sessões de chat em memória
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryChatSessionStore

__all__ = ["MemoryChatSessionStore"]
