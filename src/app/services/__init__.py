"""Serviços de aplicação.

Unidades de orquestração sobre sessões e store.
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.chat_service import ChatService

__all__ = ["ChatService"]
