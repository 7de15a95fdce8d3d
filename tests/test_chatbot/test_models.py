"""Testes dos modelos do chatbot (serialização e imutabilidade)."""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime

import pytest

from chatbot.models import (
    ConversationContext,
    Message,
    PaymentMethod,
    Sender,
    Sentiment,
    Suggestion,
)

T0 = datetime(2026, 3, 2, 14, 0, tzinfo=UTC)


class TestConversationContext:
    def test_round_trip_preserves_all_fields(self) -> None:
        ctx = ConversationContext(
            last_interaction_time=T0,
            sentiment=Sentiment.NEGATIVE,
            discount_granted=True,
            discount_amount=15,
            mentioned_price=True,
            payment_method_mentioned=PaymentMethod.DEBIT,
            interested_service="canal",
            recent_topics=("payment", "clareamento"),
        )
        assert ConversationContext.from_dict(ctx.to_dict()) == ctx

    def test_with_topic_appends_and_ignores_empty(self) -> None:
        ctx = ConversationContext(last_interaction_time=T0)
        assert ctx.last_topic is None
        updated = ctx.with_topic("payment").with_topic(None).with_topic("clareamento")
        assert updated.recent_topics == ("payment", "clareamento")
        assert updated.last_topic == "clareamento"
        assert ctx.recent_topics == ()

    def test_context_is_frozen(self) -> None:
        ctx = ConversationContext(last_interaction_time=T0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ctx.discount_amount = 20  # type: ignore[misc]


class TestMessage:
    def test_to_dict_and_back(self) -> None:
        message = Message(Sender.USER, "Aceita PIX?", T0)
        data = message.to_dict()
        assert data["sender"] == "user"
        assert Message.from_dict(data) == message
        assert message.is_user is True

    def test_ids_are_unique(self) -> None:
        assert Message(Sender.BOT, "a", T0).id != Message(Sender.BOT, "a", T0).id


def test_suggestion_to_dict() -> None:
    suggestion = Suggestion(id="sug_1", text="Quais serviços?", category="general")
    assert suggestion.to_dict() == {"id": "sug_1", "text": "Quais serviços?", "category": "general"}
