"""Testes do vigia de inatividade (aviso e despedida)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from app.sessions.inactivity import InactivityEventKind, InactivityWatcher

T0 = datetime(2026, 3, 2, 14, 0, tzinfo=UTC)


def _at(seconds: float) -> datetime:
    return T0 + timedelta(seconds=seconds)


def _watcher(armed: bool = True) -> InactivityWatcher:
    return InactivityWatcher(
        idle_timeout=timedelta(seconds=300),
        goodbye_timeout=timedelta(seconds=60),
        last_activity_at=T0,
        armed=armed,
    )


def test_unarmed_watcher_never_fires() -> None:
    watcher = _watcher(armed=False)
    assert watcher.poll(_at(10_000)) == []
    assert watcher.next_due_at is None

    watcher.touch(_at(10), user_activity=True)
    assert watcher.next_due_at == _at(310)


def test_warning_then_goodbye_then_silence() -> None:
    watcher = _watcher()
    assert watcher.poll(_at(299)) == []

    warning = watcher.poll(_at(300))
    assert [(e.kind, e.due_at) for e in warning] == [(InactivityEventKind.INACTIVITY, _at(300))]
    assert watcher.poll(_at(359)) == []
    assert watcher.next_due_at == _at(360)

    goodbye = watcher.poll(_at(360))
    assert [(e.kind, e.due_at) for e in goodbye] == [(InactivityEventKind.GOODBYE, _at(360))]
    assert watcher.stopped is True
    assert watcher.poll(_at(100_000)) == []
    assert watcher.next_due_at is None


def test_late_poll_returns_both_events_in_order() -> None:
    events = _watcher().poll(_at(5_000))
    assert [e.kind for e in events] == [InactivityEventKind.INACTIVITY, InactivityEventKind.GOODBYE]
    assert [e.due_at for e in events] == [_at(300), _at(360)]


def test_activity_after_warning_cancels_goodbye() -> None:
    watcher = _watcher()
    watcher.poll(_at(300))
    watcher.touch(_at(320), user_activity=True)

    assert watcher.warned_at is None
    assert watcher.poll(_at(400)) == []
    assert [e.kind for e in watcher.poll(_at(620))] == [InactivityEventKind.INACTIVITY]


def test_stop_and_touch_after_stop() -> None:
    watcher = _watcher()
    watcher.stop()
    watcher.touch(_at(10), user_activity=True)
    assert watcher.last_activity_at == T0
    assert watcher.poll(_at(1_000)) == []


def test_serialization_round_trip() -> None:
    watcher = _watcher()
    watcher.poll(_at(300))
    restored = InactivityWatcher.from_dict(watcher.to_dict())
    assert restored == watcher
    assert [e.kind for e in restored.poll(_at(360))] == [InactivityEventKind.GOODBYE]
