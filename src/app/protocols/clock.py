"""Protocolo de relógio injetável (tempo virtual em testes)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class ClockProtocol(ABC):
    """Fonte do instante atual, sempre timezone-aware (UTC)."""

    @abstractmethod
    def now(self) -> datetime: ...
