"""
Guards do ciclo de vida da sessão de chat.

O grafo de VALID_TRANSITIONS diz para onde cada estado pode ir; os guards
dizem qual evento pode levar a sessão até lá.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from fsm.states.session import TERMINAL_STATES, SessionState
from fsm.types.transition import TransitionTrigger


@dataclass(frozen=True, slots=True)
class GuardResult:
    """Decisão de um guard (reason só quando negado)."""

    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> GuardResult:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> GuardResult:
        return cls(allowed=False, reason=reason)


Guard = Callable[[SessionState, SessionState, TransitionTrigger], GuardResult]

# Eventos aceitos por estado de destino
TRIGGERS_BY_TARGET: dict[SessionState, frozenset[TransitionTrigger]] = {
    SessionState.ACTIVE: frozenset({TransitionTrigger.USER_ACTIVITY}),
    SessionState.IDLE_WARNED: frozenset({TransitionTrigger.IDLE_TIMEOUT}),
    SessionState.CLOSED: frozenset({
        TransitionTrigger.GOODBYE_TIMEOUT,
        TransitionTrigger.USER_CLOSED,
    }),
}


def guard_terminal_state(
    from_state: SessionState,
    to_state: SessionState,
    trigger: TransitionTrigger,
) -> GuardResult:
    """Sessão encerrada não recebe mais eventos."""
    if from_state in TERMINAL_STATES:
        return GuardResult.deny(f"Sessão em {from_state.name} não aceita '{trigger}'")
    return GuardResult.allow()


def guard_trigger_matches_target(
    from_state: SessionState,
    to_state: SessionState,
    trigger: TransitionTrigger,
) -> GuardResult:
    if trigger not in TRIGGERS_BY_TARGET.get(to_state, frozenset()):
        return GuardResult.deny(f"Evento '{trigger}' não leva a {to_state.name}")
    return GuardResult.allow()


def guard_goodbye_after_warning(
    from_state: SessionState,
    to_state: SessionState,
    trigger: TransitionTrigger,
) -> GuardResult:
    """Despedida automática só depois do aviso de inatividade."""
    if trigger is TransitionTrigger.GOODBYE_TIMEOUT and from_state is not SessionState.IDLE_WARNED:
        return GuardResult.deny(f"Despedida sem aviso prévio a partir de {from_state.name}")
    return GuardResult.allow()


DEFAULT_GUARDS: tuple[Guard, ...] = (
    guard_terminal_state,
    guard_trigger_matches_target,
    guard_goodbye_after_warning,
)


def evaluate_guards(
    from_state: SessionState,
    to_state: SessionState,
    trigger: TransitionTrigger,
    guards: Sequence[Guard] | None = None,
) -> GuardResult:
    """Primeira negação vence; sem negação, a transição é permitida."""
    for guard in DEFAULT_GUARDS if guards is None else guards:
        result = guard(from_state, to_state, trigger)
        if not result.allowed:
            return result
    return GuardResult.allow()
