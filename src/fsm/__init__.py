"""
Módulo FSM — ciclo de vida da sessão de chat.

ACTIVE → IDLE_WARNED → CLOSED, com retorno a ACTIVE quando o usuário
responde ao aviso de inatividade.

Estrutura:
    - states/: SessionState e estados terminais
    - transitions/: grafo VALID_TRANSITIONS
    - rules/: guards por evento
    - manager/: FSMStateMachine
    - types/: TransitionTrigger, StateTransition, TransitionResult
"""

from fsm.manager import INITIAL_STATES, FSMStateMachine, create_fsm
from fsm.rules import GuardResult, evaluate_guards
from fsm.states import (
    DEFAULT_INITIAL_STATE,
    TERMINAL_STATES,
    SessionState,
    is_terminal,
    is_valid_state,
)
from fsm.transitions import (
    VALID_TRANSITIONS,
    get_valid_targets,
    is_transition_valid,
    validate_transition_map,
)
from fsm.types import StateTransition, TransitionResult, TransitionTrigger

__all__ = [
    "DEFAULT_INITIAL_STATE",
    "INITIAL_STATES",
    "TERMINAL_STATES",
    "VALID_TRANSITIONS",
    "FSMStateMachine",
    "GuardResult",
    "SessionState",
    "StateTransition",
    "TransitionResult",
    "TransitionTrigger",
    "create_fsm",
    "evaluate_guards",
    "get_valid_targets",
    "is_terminal",
    "is_transition_valid",
    "is_valid_state",
    "validate_transition_map",
]
