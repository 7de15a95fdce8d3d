"""Testes da sessão de chat: turnos, sugestões, temporizadores e FSM."""

from __future__ import annotations

import random
from datetime import timedelta

import pytest

from app.sessions import ChatSession
from chatbot.models import ResponderRule, Sender
from fsm import SessionState
from tests.fakes.fake_clock import ManualClock
from utils.errors import EmptyMessageError, SessionClosedError, SuggestionNotFoundError


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def session(clock, catalog) -> ChatSession:
    chat = ChatSession.new(
        "chat_test",
        clock=clock,
        rng=random.Random(7),
        idle_timeout=timedelta(seconds=300),
        goodbye_timeout=timedelta(seconds=60),
        catalog=catalog,
    )
    chat.start()
    return chat


def _bot_texts(session: ChatSession) -> list[str]:
    return [m.text for m in session.messages if m.sender is Sender.BOT]


class TestConversation:
    def test_start_sends_greeting_once(self, session, catalog) -> None:
        assert session.start() is session.messages[0]
        assert [m.text for m in session.messages] == [catalog.text("greeting")]
        assert session.state is SessionState.ACTIVE

    def test_send_appends_user_message_and_one_reply(self, session, clock, catalog) -> None:
        clock.advance(5)
        turn = session.send("Aceita PIX?")

        assert turn.user_message.sender is Sender.USER
        assert turn.rule is ResponderRule.PAYMENT_METHOD
        assert turn.reply.text in catalog.variants("payment_pix")
        assert session.messages[-2:] == (turn.user_message, turn.reply)
        assert turn.reply.timestamp == clock.now()
        assert session.context.recent_topics == ("payment",)

    def test_blank_message_is_rejected(self, session) -> None:
        with pytest.raises(EmptyMessageError):
            session.send("   ")
        assert len(session.messages) == 1

    def test_use_suggestion_records_category(self, session) -> None:
        offered = session.suggestions()
        assert offered[0].id == "sug_1"

        turn = session.use_suggestion("sug_1")
        assert turn.user_message.text == offered[0].text
        assert session.context.recent_topics == ("general",)

        with pytest.raises(SuggestionNotFoundError):
            session.use_suggestion("sug_inexistente")


class TestIdleTimers:
    def test_greeting_alone_does_not_start_idle_timer(self, session, clock) -> None:
        clock.advance(10_000)
        assert session.poll_idle() == []
        assert session.state is SessionState.ACTIVE

    def test_exactly_one_warning_and_one_goodbye(self, session, clock, catalog) -> None:
        session.send("oi")

        clock.advance(299)
        assert session.poll_idle() == []
        clock.advance(1)
        assert [m.text for m in session.poll_idle()] == [catalog.text("inactivity")]
        assert session.state is SessionState.IDLE_WARNED
        assert session.poll_idle() == []

        clock.advance(60)
        assert [m.text for m in session.poll_idle()] == [catalog.text("goodbye")]
        assert session.state is SessionState.CLOSED

        clock.advance(10_000)
        assert session.poll_idle() == []
        texts = _bot_texts(session)
        assert texts.count(catalog.text("inactivity")) == 1
        assert texts.count(catalog.text("goodbye")) == 1
        assert session.suggestions() == ()

    def test_reply_after_warning_reactivates(self, session, clock, catalog) -> None:
        session.send("oi")
        clock.advance(300)
        session.poll_idle()

        clock.advance(30)
        session.send("ainda estou aqui")
        assert session.state is SessionState.ACTIVE

        clock.advance(299)
        assert session.poll_idle() == []
        clock.advance(1)
        assert [m.text for m in session.poll_idle()] == [catalog.text("inactivity")]

    def test_late_send_flushes_timers_then_fails(self, session, clock, catalog) -> None:
        session.send("oi")
        started = clock.now()
        clock.advance(1_000)

        with pytest.raises(SessionClosedError):
            session.send("voltei")

        automatic = session.messages[-2:]
        assert [m.text for m in automatic] == [catalog.text("inactivity"), catalog.text("goodbye")]
        assert [m.timestamp for m in automatic] == [
            started + timedelta(seconds=300),
            started + timedelta(seconds=360),
        ]
        assert session.context.last_interaction_time == started + timedelta(seconds=360)

    def test_close_is_idempotent_and_blocks_sending(self, session) -> None:
        session.close()
        session.close()
        assert session.is_closed is True
        assert session.next_timer_due_at is None
        with pytest.raises(SessionClosedError):
            session.send("oi")


class TestSerialization:
    def test_round_trip_keeps_history_context_and_timers(self, session, clock, catalog) -> None:
        session.send("isso está muito caro")
        clock.advance(300)
        session.poll_idle()

        restored = ChatSession.from_dict(
            session.to_dict(), clock=clock, rng=random.Random(1), catalog=catalog
        )
        assert restored.messages == session.messages
        assert restored.context == session.context
        assert restored.state is SessionState.IDLE_WARNED
        assert restored.created_at == session.created_at
        assert restored.transitions == session.transitions
        assert [t.trigger.value for t in restored.transitions] == ["idle_timeout"]

        clock.advance(60)
        assert [m.text for m in restored.poll_idle()] == [catalog.text("goodbye")]
        assert restored.is_closed is True
