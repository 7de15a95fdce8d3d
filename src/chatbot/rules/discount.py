"""Política de escalonamento de desconto.

O desconto de uma sessão só aumenta e nunca passa de MAX_DISCOUNT_PERCENT;
uma vez concedido, `discount_granted` permanece True.
"""

from __future__ import annotations

from dataclasses import replace

from chatbot.models.context import ConversationContext

MAX_DISCOUNT_PERCENT = 20
PRICE_OBJECTION_DISCOUNT = 10
COMPARISON_DISCOUNT = 10
NEGATIVE_SENTIMENT_DISCOUNT = 15
BEREAVEMENT_DISCOUNT = 15
SEVERE_DISTRESS_DISCOUNT = 20


def grant_discount(context: ConversationContext, floor: int) -> ConversationContext:
    """Concede desconto de pelo menos `floor`, sem reduzir o atual.

    Args:
        context: Contexto atual
        floor: Percentual mínimo desejado

    Returns:
        Novo contexto com discount_granted=True e valor limitado ao teto
    """
    amount = min(MAX_DISCOUNT_PERCENT, max(context.discount_amount, floor))
    return replace(context, discount_granted=True, discount_amount=amount)


def is_at_cap(context: ConversationContext) -> bool:
    return context.discount_amount >= MAX_DISCOUNT_PERCENT
