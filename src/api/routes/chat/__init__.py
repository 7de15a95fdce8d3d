"""Rotas do chat (sessões, mensagens, sugestões, FAQ)."""

from api.routes.chat.router import router

__all__ = ["router"]
