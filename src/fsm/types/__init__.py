"""Gatilhos e registros de transição."""

from fsm.types.transition import StateTransition, TransitionResult, TransitionTrigger

__all__ = [
    "StateTransition",
    "TransitionResult",
    "TransitionTrigger",
]
