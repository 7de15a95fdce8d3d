"""Protocolos e contratos do core da aplicação."""

from .clock import ClockProtocol
from .session_store import ChatSessionStoreProtocol

__all__ = [
    "ChatSessionStoreProtocol",
    "ClockProtocol",
]
