"""
Exports públicos do módulo fsm/manager.

Máquina de estados (FSMStateMachine) do ciclo de vida da sessão de chat.
"""

from fsm.manager.machine import (
    INITIAL_STATES,
    FSMStateMachine,
    create_fsm,
)

__all__ = [
    "INITIAL_STATES",
    "FSMStateMachine",
    "create_fsm",
]
