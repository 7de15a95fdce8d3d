"""Módulo de sessões de chat.

Exporta a sessão, o vigia de inatividade e o relógio de sistema.
"""

from app.sessions.chat_session import ChatSession, ChatTurn
from app.sessions.clock import SystemClock
from app.sessions.inactivity import (
    InactivityEvent,
    InactivityEventKind,
    InactivityWatcher,
)

__all__ = [
    "ChatSession",
    "ChatTurn",
    "InactivityEvent",
    "InactivityEventKind",
    "InactivityWatcher",
    "SystemClock",
]
