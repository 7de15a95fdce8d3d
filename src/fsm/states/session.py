"""
Estados do ciclo de vida de uma sessão de chat.

Uma sessão começa ACTIVE, recebe um aviso de inatividade (IDLE_WARNED)
após o período de silêncio configurado e é encerrada (CLOSED) com a
mensagem de despedida se o silêncio continuar.
"""

from enum import StrEnum


class SessionState(StrEnum):
    """
    Estados canônicos de uma sessão de chat.

    Estados não-terminais:
        - ACTIVE: Conversa em andamento, timer de inatividade armado
        - IDLE_WARNED: Aviso "ainda está por aí?" enviado, aguardando retorno

    Estados terminais:
        - CLOSED: Despedida enviada ou sessão encerrada explicitamente
    """

    ACTIVE = "ACTIVE"
    IDLE_WARNED = "IDLE_WARNED"

    CLOSED = "CLOSED"

    def __str__(self) -> str:
        return self.value


# Uma vez em estado terminal, a sessão não transita para outro estado
TERMINAL_STATES: frozenset[SessionState] = frozenset({
    SessionState.CLOSED,
})

DEFAULT_INITIAL_STATE: SessionState = SessionState.ACTIVE


def is_terminal(state: SessionState) -> bool:
    """
    Verifica se o estado é terminal (sessão encerrada).

    Args:
        state: Estado a ser verificado

    Returns:
        True se o estado é terminal, False caso contrário
    """
    return state in TERMINAL_STATES


def is_valid_state(state: SessionState) -> bool:
    """Verifica se o valor é um estado válido do enum."""
    return isinstance(state, SessionState)
