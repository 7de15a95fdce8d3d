"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    ChatError,
    EmptyMessageError,
    SessionClosedError,
    SessionNotFoundError,
    SuggestionNotFoundError,
)

__all__ = [
    "ChatError",
    "EmptyMessageError",
    "SessionClosedError",
    "SessionNotFoundError",
    "SuggestionNotFoundError",
]
