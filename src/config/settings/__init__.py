"""Agregador de settings do serviço de chat.

Re-exporta settings e getters de cada módulo.
"""

from __future__ import annotations

from config.settings.base import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.chat import (
    ChatSettings,
    get_chat_settings,
)

__all__ = [
    "BaseSettings",
    "ChatSettings",
    "Environment",
    "get_base_settings",
    "get_chat_settings",
]
