"""Settings do chat (timers de inatividade, TTL de sessão, aleatoriedade)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class ChatSettings:
    """Configurações de sessão de chat.

    Attributes:
        idle_timeout_seconds: Silêncio até a mensagem "ainda está por aí?"
        goodbye_timeout_seconds: Silêncio após o aviso até a despedida
        session_ttl_seconds: TTL da sessão no store em memória
        idle_sweep_interval_seconds: Intervalo da varredura de inatividade
        random_seed: Semente do gerador de variações (None = não determinístico)
    """

    idle_timeout_seconds: int = 300
    goodbye_timeout_seconds: int = 60
    session_ttl_seconds: int = 7200
    idle_sweep_interval_seconds: int = 15
    random_seed: int | None = None

    def validate(self) -> list[str]:
        """Valida configurações de chat.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.idle_timeout_seconds <= 0:
            errors.append("CHAT_IDLE_TIMEOUT_SECONDS deve ser > 0")

        if self.goodbye_timeout_seconds <= 0:
            errors.append("CHAT_GOODBYE_TIMEOUT_SECONDS deve ser > 0")

        minimum_ttl = self.idle_timeout_seconds + self.goodbye_timeout_seconds
        if self.session_ttl_seconds < minimum_ttl:
            errors.append(
                "CHAT_SESSION_TTL_SECONDS deve cobrir inatividade + despedida "
                f"(>= {minimum_ttl})"
            )

        if self.idle_sweep_interval_seconds <= 0:
            errors.append("CHAT_IDLE_SWEEP_INTERVAL_SECONDS deve ser > 0")

        return errors


def _parse_optional_int(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    return int(raw)


def _load_chat_from_env() -> ChatSettings:
    """Carrega ChatSettings de variáveis de ambiente."""
    return ChatSettings(
        idle_timeout_seconds=int(os.getenv("CHAT_IDLE_TIMEOUT_SECONDS", "300")),
        goodbye_timeout_seconds=int(os.getenv("CHAT_GOODBYE_TIMEOUT_SECONDS", "60")),
        session_ttl_seconds=int(os.getenv("CHAT_SESSION_TTL_SECONDS", "7200")),
        idle_sweep_interval_seconds=int(os.getenv("CHAT_IDLE_SWEEP_INTERVAL_SECONDS", "15")),
        random_seed=_parse_optional_int(os.getenv("CHAT_RANDOM_SEED")),
    )


@lru_cache(maxsize=1)
def get_chat_settings() -> ChatSettings:
    """Retorna instância cacheada de ChatSettings."""
    return _load_chat_from_env()
