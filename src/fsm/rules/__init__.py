"""Guards que decidem qual evento pode mover a sessão para cada estado."""

from fsm.rules.guards import (
    DEFAULT_GUARDS,
    TRIGGERS_BY_TARGET,
    Guard,
    GuardResult,
    evaluate_guards,
    guard_goodbye_after_warning,
    guard_terminal_state,
    guard_trigger_matches_target,
)

__all__ = [
    "DEFAULT_GUARDS",
    "TRIGGERS_BY_TARGET",
    "Guard",
    "GuardResult",
    "evaluate_guards",
    "guard_goodbye_after_warning",
    "guard_terminal_state",
    "guard_trigger_matches_target",
]
