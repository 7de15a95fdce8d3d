"""
Ciclo de vida de uma sessão de chat (FSMStateMachine).

ACTIVE --idle_timeout--> IDLE_WARNED --user_activity--> ACTIVE
IDLE_WARNED --goodbye_timeout--> CLOSED
ACTIVE | IDLE_WARNED --user_closed--> CLOSED

A máquina não lê relógio: todo instante vem de quem chama.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from fsm.rules.guards import evaluate_guards
from fsm.states.session import DEFAULT_INITIAL_STATE, SessionState, is_terminal
from fsm.transitions.rules import get_valid_targets, is_transition_valid
from fsm.types.transition import StateTransition, TransitionResult, TransitionTrigger


class FSMStateMachine:
    """Estado atual e trilha de transições de uma sessão."""

    __slots__ = ("_session_id", "_state", "_transitions")

    def __init__(
        self,
        session_id: str,
        initial_state: SessionState = DEFAULT_INITIAL_STATE,
        transitions: Iterable[StateTransition] = (),
    ) -> None:
        self._session_id = session_id
        self._state = initial_state
        self._transitions: list[StateTransition] = list(transitions)

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def current_state(self) -> SessionState:
        return self._state

    @property
    def is_terminal(self) -> bool:
        return is_terminal(self._state)

    @property
    def history(self) -> tuple[StateTransition, ...]:
        return tuple(self._transitions)

    def valid_targets(self) -> frozenset[SessionState]:
        return get_valid_targets(self._state)

    def can_transition_to(self, target: SessionState, trigger: TransitionTrigger) -> bool:
        return (
            is_transition_valid(self._state, target)
            and evaluate_guards(self._state, target, trigger).allowed
        )

    def transition(
        self,
        target: SessionState,
        trigger: TransitionTrigger | str,
        *,
        at: datetime,
        metadata: dict[str, Any] | None = None,
    ) -> TransitionResult:
        """
        Aplica a transição se o grafo e os guards permitirem.

        Nunca levanta por transição recusada: devolve TransitionResult com
        o motivo, e o estado permanece inalterado.

        Args:
            target: Estado de destino
            trigger: Evento (enum ou seu valor string)
            at: Instante da transição (timezone-aware)
            metadata: Dados de auditoria (sem PII)
        """
        try:
            event = TransitionTrigger(trigger)
        except ValueError:
            return TransitionResult.reject(f"Evento desconhecido: {trigger!r}")

        if not is_transition_valid(self._state, target):
            return TransitionResult.reject(
                f"Transição inválida: {self._state.name} → {target.name}"
            )

        guard = evaluate_guards(self._state, target, event)
        if not guard.allowed:
            return TransitionResult.reject(guard.reason or "bloqueada por guard")

        transition = StateTransition(
            from_state=self._state,
            to_state=target,
            trigger=event,
            at=at,
            metadata=metadata or {},
        )
        self._state = target
        self._transitions.append(transition)
        return TransitionResult.accept(transition)

    def warn_idle(self, at: datetime) -> TransitionResult:
        return self.transition(SessionState.IDLE_WARNED, TransitionTrigger.IDLE_TIMEOUT, at=at)

    def resume(self, at: datetime) -> TransitionResult:
        return self.transition(SessionState.ACTIVE, TransitionTrigger.USER_ACTIVITY, at=at)

    def say_goodbye(self, at: datetime) -> TransitionResult:
        return self.transition(SessionState.CLOSED, TransitionTrigger.GOODBYE_TIMEOUT, at=at)

    def close(self, at: datetime) -> TransitionResult:
        return self.transition(SessionState.CLOSED, TransitionTrigger.USER_CLOSED, at=at)

    def to_dict(self) -> dict[str, Any]:
        """Estado e trilha para persistência junto com a sessão."""
        return {
            "state": self._state.name,
            "transitions": [t.to_dict() for t in self._transitions],
        }

    @classmethod
    def from_dict(cls, session_id: str, data: dict[str, Any]) -> FSMStateMachine:
        state = SessionState.__members__.get(data.get("state") or "", DEFAULT_INITIAL_STATE)
        return cls(
            session_id,
            initial_state=state,
            transitions=[StateTransition.from_dict(t) for t in data.get("transitions", [])],
        )


def create_fsm(
    session_id: str,
    initial_state: SessionState | None = None,
) -> FSMStateMachine:
    """Cria a máquina de uma sessão nova (ou no estado informado)."""
    return FSMStateMachine(session_id, initial_state or DEFAULT_INITIAL_STATE)


INITIAL_STATES = frozenset({DEFAULT_INITIAL_STATE})
