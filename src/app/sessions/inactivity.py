"""Temporizadores de inatividade e despedida da sessão de chat.

Não agenda callbacks: guarda apenas instantes e, a cada `poll(now)`,
devolve os eventos vencidos. Qualquer mensagem (usuário ou bot) rearma o
temporizador via `touch(now)`, cancelando aviso pendente.

Sequência após silêncio do usuário:
    idle_timeout  -> evento INACTIVITY ("ainda está por aí?")
    goodbye_timeout depois do aviso -> evento GOODBYE e fim dos eventos
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any


class InactivityEventKind(Enum):
    INACTIVITY = "inactivity"
    GOODBYE = "goodbye"


@dataclass(frozen=True, slots=True)
class InactivityEvent:
    """Evento vencido, com o instante em que deveria ter disparado."""

    kind: InactivityEventKind
    due_at: datetime


@dataclass(slots=True)
class InactivityWatcher:
    """Temporizador de inatividade com semântica cancel-on-activity.

    Atributos:
        idle_timeout: Silêncio até o aviso de inatividade
        goodbye_timeout: Silêncio após o aviso até a despedida
        last_activity_at: Última mensagem trocada
        armed: Só dispara depois que o usuário enviou algo
        warned_at: Instante do aviso pendente (None se não avisou)
        stopped: Após a despedida (ou encerramento) não há mais eventos
    """

    idle_timeout: timedelta
    goodbye_timeout: timedelta
    last_activity_at: datetime
    armed: bool = False
    warned_at: datetime | None = None
    stopped: bool = False

    def touch(self, now: datetime, *, user_activity: bool = False) -> None:
        """Registra atividade e rearma o temporizador."""
        if self.stopped:
            return
        self.last_activity_at = now
        self.warned_at = None
        if user_activity:
            self.armed = True

    def stop(self) -> None:
        self.stopped = True

    @property
    def next_due_at(self) -> datetime | None:
        """Próximo instante em que algum evento vence (None se inativo)."""
        if self.stopped or not self.armed:
            return None
        if self.warned_at is None:
            return self.last_activity_at + self.idle_timeout
        return self.warned_at + self.goodbye_timeout

    def poll(self, now: datetime) -> list[InactivityEvent]:
        """Devolve os eventos vencidos até `now`, em ordem.

        Um poll atrasado pode devolver os dois eventos de uma vez, cada um
        com seu instante de vencimento.
        """
        events: list[InactivityEvent] = []
        if self.stopped or not self.armed:
            return events

        if self.warned_at is None:
            idle_due = self.last_activity_at + self.idle_timeout
            if now < idle_due:
                return events
            self.warned_at = idle_due
            events.append(InactivityEvent(InactivityEventKind.INACTIVITY, idle_due))

        goodbye_due = self.warned_at + self.goodbye_timeout
        if now >= goodbye_due:
            self.stopped = True
            events.append(InactivityEvent(InactivityEventKind.GOODBYE, goodbye_due))
        return events

    def to_dict(self) -> dict[str, Any]:
        """Serializa estado dos temporizadores para persistência."""
        return {
            "idle_timeout_seconds": self.idle_timeout.total_seconds(),
            "goodbye_timeout_seconds": self.goodbye_timeout.total_seconds(),
            "last_activity_at": self.last_activity_at.isoformat(),
            "armed": self.armed,
            "warned_at": self.warned_at.isoformat() if self.warned_at else None,
            "stopped": self.stopped,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InactivityWatcher:
        """Deserializa estado dos temporizadores."""
        return cls(
            idle_timeout=timedelta(seconds=float(data["idle_timeout_seconds"])),
            goodbye_timeout=timedelta(seconds=float(data["goodbye_timeout_seconds"])),
            last_activity_at=datetime.fromisoformat(data["last_activity_at"]),
            armed=bool(data.get("armed", False)),
            warned_at=(
                datetime.fromisoformat(data["warned_at"]) if data.get("warned_at") else None
            ),
            stopped=bool(data.get("stopped", False)),
        )
