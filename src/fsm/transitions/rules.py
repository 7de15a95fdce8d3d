"""
Grafo de transições da sessão de chat.
"""

from fsm.rules.guards import TRIGGERS_BY_TARGET
from fsm.states.session import TERMINAL_STATES, SessionState

TransitionMap = dict[SessionState, frozenset[SessionState]]

VALID_TRANSITIONS: TransitionMap = {
    # silêncio gera aviso; usuário pode encerrar
    SessionState.ACTIVE: frozenset({
        SessionState.IDLE_WARNED,
        SessionState.CLOSED,
    }),
    # resposta do usuário reativa; silêncio contínuo encerra
    SessionState.IDLE_WARNED: frozenset({
        SessionState.ACTIVE,
        SessionState.CLOSED,
    }),
    SessionState.CLOSED: frozenset(),
}


def get_valid_targets(state: SessionState) -> frozenset[SessionState]:
    """Destinos alcançáveis a partir de `state` (vazio se terminal)."""
    return VALID_TRANSITIONS.get(state, frozenset())


def is_transition_valid(from_state: SessionState, to_state: SessionState) -> bool:
    if from_state in TERMINAL_STATES:
        return False
    return to_state in get_valid_targets(from_state)


def validate_transition_map() -> list[str]:
    """
    Confere a coerência do grafo com os estados e os guards.

    Returns:
        Lista de problemas (vazia se o grafo estiver íntegro)
    """
    errors: list[str] = []

    for state in SessionState:
        if state not in VALID_TRANSITIONS:
            errors.append(f"Estado {state.name} ausente em VALID_TRANSITIONS")

    for state in TERMINAL_STATES:
        if VALID_TRANSITIONS.get(state):
            errors.append(f"Estado terminal {state.name} não deveria ter saídas")

    for from_state, targets in VALID_TRANSITIONS.items():
        if from_state in targets:
            errors.append(f"Laço em {from_state.name} não é transição de estado")
        for target in targets:
            if not TRIGGERS_BY_TARGET.get(target):
                errors.append(
                    f"Nenhum evento leva a {target.name} (origem {from_state.name})"
                )

    return errors
