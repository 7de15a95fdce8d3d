"""Testes das regras de detecção e da política de desconto."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from chatbot.models import ConversationContext, PaymentMethod, Sentiment
from chatbot.rules import detection
from chatbot.rules.discount import MAX_DISCOUNT_PERCENT, grant_discount, is_at_cap


def _norm(text: str) -> str:
    return detection.normalize_utterance(text)


class TestDetection:
    def test_normalize_only_lowercases(self) -> None:
        assert _norm("Perdi Minha MÃE ") == "perdi minha mãe "
        assert _norm(None) == ""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Perdi minha mãe semana passada", True),
            ("meu pai faleceu e eu perdi o rumo", True),
            ("perdi o ônibus", False),
            ("minha mãe vem comigo", False),
        ],
    )
    def test_bereavement_needs_loss_marker_and_keyword(self, text, expected) -> None:
        assert detection.is_bereavement(_norm(text)) is expected

    def test_severe_distress_needs_first_person(self) -> None:
        assert detection.is_severe_distress(_norm("Me sinto desesperado"))
        assert not detection.is_severe_distress(_norm("o filme é horrível"))

    def test_payment_detection_order(self) -> None:
        match = detection.detect_payment(_norm("pix ou crédito?"))
        assert match is not None
        assert match.method is PaymentMethod.PIX
        assert match.reply_key == "payment_pix"

        generic = detection.detect_payment(_norm("Como pagar?"))
        assert generic is not None
        assert generic.method is None
        assert generic.reply_key == "payment_generic"

        assert detection.detect_payment(_norm("oi")) is None

    def test_negative_word_must_be_whole_utterance(self) -> None:
        assert detection.is_negative_word(_norm(" Triste "))
        assert not detection.is_negative_word(_norm("estou triste"))

    def test_sentiment_positive_has_precedence(self) -> None:
        assert detection.detect_sentiment(_norm("feliz mas cansada")) is Sentiment.POSITIVE
        assert detection.detect_sentiment(_norm("péssimo dia")) is Sentiment.NEGATIVE
        assert detection.detect_sentiment(_norm("olá")) is None

    def test_price_and_comparison(self) -> None:
        assert detection.is_price_objection(_norm("Preço alto demais"))
        assert detection.is_comparison_shopping(_norm("achei mais barato em outro lugar"))
        assert not detection.is_comparison_shopping(_norm("quero agendar"))

    def test_why_choose_levels(self) -> None:
        assert detection.is_explicit_why_choose(_norm("Qual a razão para escolher vocês?"))
        assert not detection.is_explicit_why_choose(_norm("qual a vantagem?"))
        assert detection.is_soft_why_choose(_norm("qual a vantagem?"))


class TestDiscountPolicy:
    def _ctx(self, amount: int = 0) -> ConversationContext:
        return ConversationContext(
            last_interaction_time=datetime(2026, 3, 2, tzinfo=UTC),
            discount_granted=amount > 0,
            discount_amount=amount,
        )

    @pytest.mark.parametrize(
        ("current", "floor", "expected"),
        [(0, 10, 10), (15, 10, 15), (10, 15, 15), (15, 20, 20), (20, 15, 20), (0, 35, 20)],
    )
    def test_grant_never_decreases_and_respects_cap(self, current, floor, expected) -> None:
        updated = grant_discount(self._ctx(current), floor)
        assert updated.discount_granted is True
        assert updated.discount_amount == expected

    def test_is_at_cap(self) -> None:
        assert is_at_cap(self._ctx(MAX_DISCOUNT_PERCENT))
        assert not is_at_cap(self._ctx(15))
