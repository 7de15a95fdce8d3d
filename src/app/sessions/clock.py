"""Relógio de sistema usado fora dos testes."""

from __future__ import annotations

from datetime import UTC, datetime

from app.protocols.clock import ClockProtocol


class SystemClock(ClockProtocol):
    """Relógio real em UTC."""

    def now(self) -> datetime:
        return datetime.now(UTC)
