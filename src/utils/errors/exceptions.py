"""Exceções de domínio das sessões de chat.

O responder nunca levanta erro; estas exceções cobrem apenas o ciclo de
vida da sessão: sessão inexistente ou encerrada, sugestão desconhecida
e mensagem vazia.
"""

from __future__ import annotations


class ChatError(RuntimeError):
    """Base para falhas de sessão de chat."""


class SessionNotFoundError(ChatError):
    """Sessão inexistente ou expirada no store."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Sessão não encontrada: {session_id}")
        self.session_id = session_id


class SessionClosedError(ChatError):
    """Mensagem enviada para sessão já encerrada."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Sessão encerrada: {session_id}")
        self.session_id = session_id


class SuggestionNotFoundError(ChatError):
    """Sugestão não está entre as oferecidas no momento."""

    def __init__(self, suggestion_id: str) -> None:
        super().__init__(f"Sugestão não disponível: {suggestion_id}")
        self.suggestion_id = suggestion_id


class EmptyMessageError(ChatError):
    """Mensagem vazia ou só com espaços (ignorada pelo widget)."""

    def __init__(self) -> None:
        super().__init__("Mensagem vazia")
