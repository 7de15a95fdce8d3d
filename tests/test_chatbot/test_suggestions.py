"""Testes da seleção de sugestões rápidas e da detecção de tópico."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime

import pytest

from chatbot.models import ConversationContext, Message, Sender
from chatbot.services import detect_topic, select_bucket, select_suggestions

T0 = datetime(2026, 3, 2, 14, 0, tzinfo=UTC)
CTX = ConversationContext(last_interaction_time=T0)


def _history(*texts: str) -> list[Message]:
    senders = (Sender.USER, Sender.BOT)
    return [Message(senders[i % 2], text, T0) for i, text in enumerate(texts)]


class TestSelectBucket:
    def test_weekday_question_selects_schedule(self) -> None:
        history = _history("Tem horário na segunda-feira?")
        assert select_bucket(history, CTX) == "schedule"

    @pytest.mark.parametrize(
        ("text", "bucket"),
        [
            ("Quanto tempo demora?", "duration"),
            ("É urgente, meu dente quebrou", "emergency"),
            ("Qual o preço?", "pricing"),
            ("Tenho pavor de agulha", "fear"),
            ("Quero marcar uma consulta", "appointment"),
            ("oi", "initial"),
        ],
    )
    def test_keyword_buckets(self, text: str, bucket: str) -> None:
        assert select_bucket(_history(text), CTX) == bucket

    def test_schedule_beats_duration_and_emergency(self) -> None:
        history = _history("dor forte", "quanto tempo leva?", "atende no sábado?")
        assert select_bucket(history, CTX) == "schedule"

    def test_only_last_three_messages_count(self) -> None:
        history = _history("tem horário no sábado?", "a", "b", "c")
        assert select_bucket(history, CTX) == "initial"

    def test_interested_service_category(self) -> None:
        assert select_bucket(_history("ok"), replace(CTX, interested_service="implante")) == "services"
        assert select_bucket(_history("ok"), replace(CTX, interested_service="botox")) == "aesthetics"
        unknown = replace(CTX, interested_service="papada", mentioned_price=True)
        assert select_bucket(_history("ok"), unknown) == "pricing"

    def test_discount_context_selects_pricing(self) -> None:
        ctx = replace(CTX, discount_granted=True, discount_amount=10)
        assert select_bucket(_history("ok"), ctx) == "pricing"


class TestSelectSuggestions:
    def test_follow_up_added_for_recent_topic(self, catalog) -> None:
        ctx = replace(CTX, recent_topics=("clareamento",))
        result = select_suggestions(_history("oi", "olá", "ok"), ctx, catalog)

        assert [s.id for s in result[:3]] == [s.id for s in catalog.bucket("initial")[:3]]
        assert result[-1].id == "custom_clareamento"
        assert result[-1].text == "Quanto tempo dura o efeito do clareamento?"
        assert len(result) == 4

    def test_no_follow_up_for_short_history(self, catalog) -> None:
        ctx = replace(CTX, recent_topics=("clareamento",))
        result = select_suggestions(_history("oi", "olá"), ctx, catalog)
        assert result == catalog.bucket("initial")

    def test_no_duplicate_when_bucket_already_covers_topic(self, catalog) -> None:
        ctx = replace(CTX, recent_topics=("payment",), mentioned_price=True)
        result = select_suggestions(_history("oi", "olá", "ok"), ctx, catalog)
        assert result == catalog.bucket("pricing")
        assert all(not s.id.startswith("custom_") for s in result)

    def test_topic_without_follow_up_returns_bucket(self, catalog) -> None:
        ctx = replace(CTX, recent_topics=("harmonização",))
        result = select_suggestions(_history("oi", "olá", "ok"), ctx, catalog)
        assert result == catalog.bucket("initial")


class TestDetectTopic:
    @pytest.mark.parametrize(
        ("text", "topic"),
        [
            ("Quero fazer Clareamento", "clareamento"),
            ("dente do juízo", "extração"),
            ("quanto custa o botox?", "harmonização"),
            ("aceita cartão?", "payment"),
            ("oi", None),
            ("", None),
        ],
    )
    def test_detect_topic(self, text: str, topic: str | None) -> None:
        assert detect_topic(text) == topic
