"""Resultado de um turno do respondedor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chatbot.models.context import ConversationContext


class ResponderRule(Enum):
    """Regra que produziu a resposta (ordem de avaliação)."""

    BEREAVEMENT = "bereavement"
    SEVERE_DISTRESS = "severe_distress"
    PRICE_OBJECTION = "price_objection"
    COMPARISON_SHOPPING = "comparison_shopping"
    PAYMENT_METHOD = "payment_method"
    NEGATIVE_ESCALATION = "negative_escalation"
    FIXED_PHRASE = "fixed_phrase"
    SENTIMENT = "sentiment"
    WHY_CHOOSE_US = "why_choose_us"
    KEYWORD = "keyword"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ResponderResult:
    """Resposta do bot e contexto atualizado.

    Atributos:
        reply_text: Texto da resposta (pode conter quebras de linha e emoji)
        context: Novo contexto da conversa
        rule: Regra que casou neste turno
    """

    reply_text: str
    context: ConversationContext
    rule: ResponderRule
