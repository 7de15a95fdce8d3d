"""Mensagem da conversa do chat (imutável após criada)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import uuid4


class Sender(Enum):
    """Quem enviou a mensagem."""

    USER = "user"
    BOT = "bot"


@dataclass(frozen=True, slots=True)
class Message:
    """Entrada do histórico da conversa.

    Atributos:
        id: Identificador único da mensagem
        sender: Remetente (user/bot)
        text: Conteúdo exibido no chat
        timestamp: Momento da mensagem
    """

    sender: Sender
    text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    id: str = field(default_factory=lambda: uuid4().hex)

    @property
    def is_user(self) -> bool:
        return self.sender is Sender.USER

    def to_dict(self) -> dict[str, Any]:
        """Serializa mensagem para persistência/API."""
        return {
            "id": self.id,
            "sender": self.sender.value,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Message:
        """Deserializa mensagem de persistência."""
        return cls(
            id=data.get("id") or uuid4().hex,
            sender=Sender(data.get("sender", "user")),
            text=data.get("text", ""),
            timestamp=(
                datetime.fromisoformat(data["timestamp"])
                if "timestamp" in data
                else datetime.now(UTC)
            ),
        )
