"""
Gatilhos e registros de transição do ciclo de vida da sessão de chat.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from fsm.states.session import SessionState


class TransitionTrigger(StrEnum):
    """Eventos que movem a sessão entre estados."""

    IDLE_TIMEOUT = "idle_timeout"
    GOODBYE_TIMEOUT = "goodbye_timeout"
    USER_ACTIVITY = "user_activity"
    USER_CLOSED = "user_closed"


@dataclass(frozen=True, slots=True)
class StateTransition:
    """
    Mudança de estado já aplicada.

    Attributes:
        from_state: Estado anterior
        to_state: Estado novo
        trigger: Evento que causou a mudança
        at: Instante (relógio injetado, timezone-aware)
        metadata: Dados de auditoria (nunca texto do usuário)
    """

    from_state: SessionState
    to_state: SessionState
    trigger: TransitionTrigger
    at: datetime
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.at.tzinfo is None:
            raise ValueError("at deve ser timezone-aware")

    def to_dict(self) -> dict[str, Any]:
        return {
            "from_state": self.from_state.name,
            "to_state": self.to_state.name,
            "trigger": self.trigger.value,
            "at": self.at.isoformat(),
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StateTransition:
        return cls(
            from_state=SessionState[data["from_state"]],
            to_state=SessionState[data["to_state"]],
            trigger=TransitionTrigger(data["trigger"]),
            at=datetime.fromisoformat(data["at"]),
            metadata=dict(data.get("metadata") or {}),
        )


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """Transição aplicada ou motivo da recusa (exatamente um dos dois)."""

    transition: StateTransition | None = None
    rejected_reason: str | None = None

    def __post_init__(self) -> None:
        if (self.transition is None) == (self.rejected_reason is None):
            raise ValueError("Informe transition ou rejected_reason, nunca ambos")

    @property
    def accepted(self) -> bool:
        return self.transition is not None

    @classmethod
    def accept(cls, transition: StateTransition) -> TransitionResult:
        return cls(transition=transition)

    @classmethod
    def reject(cls, reason: str) -> TransitionResult:
        return cls(rejected_reason=reason)
