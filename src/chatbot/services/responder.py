"""Respondedor conversacional do chat da clínica.

Função pura: (contexto, histórico, texto) -> (resposta, novo contexto).
As regras são avaliadas em ordem fixa e a primeira que casar encerra o
turno. Nenhuma regra levanta erro: texto sem sinal reconhecido cai na
resposta padrão.

A aleatoriedade (variações equivalentes de uma mesma resposta) vem de um
`random.Random` injetado, para que testes possam fixar a semente.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import UTC, datetime

from app.observability import get_correlation_id, record_discount_escalation
from chatbot.config.catalog_loader import load_reply_catalog
from chatbot.models.catalog import ReplyCatalog
from chatbot.models.context import ConversationContext, Sentiment
from chatbot.models.message import Message
from chatbot.models.result import ResponderResult, ResponderRule
from chatbot.rules import detection
from chatbot.rules.discount import (
    BEREAVEMENT_DISCOUNT,
    COMPARISON_DISCOUNT,
    MAX_DISCOUNT_PERCENT,
    NEGATIVE_SENTIMENT_DISCOUNT,
    PRICE_OBJECTION_DISCOUNT,
    SEVERE_DISTRESS_DISCOUNT,
    grant_discount,
    is_at_cap,
)
from config.logging import log_fallback

logger = logging.getLogger(__name__)

_Rule = Callable[[ConversationContext, str, random.Random, ReplyCatalog], ResponderResult | None]


def respond(
    context: ConversationContext,
    history: Sequence[Message],
    utterance: str,
    *,
    rng: random.Random,
    catalog: ReplyCatalog | None = None,
    now: datetime | None = None,
) -> ResponderResult:
    """Gera a resposta do bot para um texto do usuário.

    Args:
        context: Contexto atual da conversa
        history: Mensagens anteriores (as regras avaliam só texto e contexto)
        utterance: Texto bruto digitado pelo usuário
        rng: Fonte aleatória para escolher entre variações
        catalog: Catálogo de respostas (padrão: assets empacotados)
        now: Momento do turno (padrão: agora, UTC)

    Returns:
        ResponderResult com texto, contexto atualizado e regra aplicada
    """
    catalog = catalog or load_reply_catalog()
    current = context.touched(now or datetime.now(UTC))
    text = detection.normalize_utterance(utterance)

    result = None
    for rule in _RULES:
        result = rule(current, text, rng, catalog)
        if result is not None:
            break
    if result is None:
        log_fallback(logger, "responder", reason="no_rule_matched")
        result = ResponderResult(catalog.text("default"), current, ResponderRule.DEFAULT)

    if result.context.discount_amount > context.discount_amount:
        record_discount_escalation(
            result.rule.value,
            context.discount_amount,
            result.context.discount_amount,
            get_correlation_id() or None,
        )
    logger.debug(
        "responder_rule_matched",
        extra={
            "rule": result.rule.value,
            "discount_amount": result.context.discount_amount,
            "interested_service": result.context.interested_service,
        },
    )
    return result


def _bereavement(
    ctx: ConversationContext, text: str, rng: random.Random, catalog: ReplyCatalog
) -> ResponderResult | None:
    if not detection.is_bereavement(text):
        return None
    updated = grant_discount(replace(ctx, mentioned_family_loss=True), BEREAVEMENT_DISCOUNT)
    return ResponderResult(catalog.text("bereavement"), updated, ResponderRule.BEREAVEMENT)


def _severe_distress(
    ctx: ConversationContext, text: str, rng: random.Random, catalog: ReplyCatalog
) -> ResponderResult | None:
    if not detection.is_severe_distress(text):
        return None
    updated = grant_discount(replace(ctx, has_severe_mental_state=True), SEVERE_DISTRESS_DISCOUNT)
    return ResponderResult(catalog.text("severe_distress"), updated, ResponderRule.SEVERE_DISTRESS)


def _price_objection(
    ctx: ConversationContext, text: str, rng: random.Random, catalog: ReplyCatalog
) -> ResponderResult | None:
    if not detection.is_price_objection(text):
        return None
    updated = replace(ctx, mentioned_price=True)
    if ctx.discount_granted:
        reply = catalog.pick("expensive_followup", rng)
        return ResponderResult(reply, updated, ResponderRule.PRICE_OBJECTION)
    updated = grant_discount(updated, PRICE_OBJECTION_DISCOUNT)
    return ResponderResult(catalog.text("expensive"), updated, ResponderRule.PRICE_OBJECTION)


def _comparison_shopping(
    ctx: ConversationContext, text: str, rng: random.Random, catalog: ReplyCatalog
) -> ResponderResult | None:
    if not detection.is_comparison_shopping(text):
        return None
    if ctx.discount_granted:
        reply = catalog.pick("looking_elsewhere_followup", rng)
        return ResponderResult(reply, ctx, ResponderRule.COMPARISON_SHOPPING)
    updated = grant_discount(ctx, COMPARISON_DISCOUNT)
    return ResponderResult(
        catalog.text("comparison_discount"), updated, ResponderRule.COMPARISON_SHOPPING
    )


def _payment_method(
    ctx: ConversationContext, text: str, rng: random.Random, catalog: ReplyCatalog
) -> ResponderResult | None:
    match = detection.detect_payment(text)
    if match is None:
        return None
    updated = ctx
    if match.method is not None:
        updated = replace(ctx, payment_method_mentioned=match.method)
    return ResponderResult(
        catalog.pick(match.reply_key, rng), updated, ResponderRule.PAYMENT_METHOD
    )


def _negative_escalation(
    ctx: ConversationContext, text: str, rng: random.Random, catalog: ReplyCatalog
) -> ResponderResult | None:
    if ctx.sentiment is not Sentiment.NEGATIVE or not detection.is_negative_word(text):
        return None
    if not ctx.discount_granted:
        updated = grant_discount(ctx, NEGATIVE_SENTIMENT_DISCOUNT)
        return ResponderResult(
            catalog.text("negative_escalation_first"), updated, ResponderRule.NEGATIVE_ESCALATION
        )
    if not is_at_cap(ctx):
        updated = grant_discount(ctx, MAX_DISCOUNT_PERCENT)
        return ResponderResult(
            catalog.text("negative_escalation_max"), updated, ResponderRule.NEGATIVE_ESCALATION
        )
    return None


def _fixed_phrase(
    ctx: ConversationContext, text: str, rng: random.Random, catalog: ReplyCatalog
) -> ResponderResult | None:
    for phrase in catalog.fixed_phrases:
        if phrase.phrase.lower() in text:
            updated = replace(ctx, interested_service=phrase.service)
            return ResponderResult(
                catalog.pick(phrase.reply_key, rng), updated, ResponderRule.FIXED_PHRASE
            )
    return None


def _sentiment(
    ctx: ConversationContext, text: str, rng: random.Random, catalog: ReplyCatalog
) -> ResponderResult | None:
    sentiment = detection.detect_sentiment(text)
    if sentiment is None:
        return None
    updated = replace(ctx, sentiment=sentiment)
    if sentiment is Sentiment.POSITIVE:
        return ResponderResult(catalog.text("positive"), updated, ResponderRule.SENTIMENT)
    if not ctx.discount_granted:
        updated = grant_discount(updated, NEGATIVE_SENTIMENT_DISCOUNT)
    return ResponderResult(catalog.text("negative"), updated, ResponderRule.SENTIMENT)


def _why_choose_us(
    ctx: ConversationContext, text: str, rng: random.Random, catalog: ReplyCatalog
) -> ResponderResult | None:
    if detection.is_explicit_why_choose(text):
        key = "why_choose_us"
    elif detection.is_soft_why_choose(text):
        key = "clinic_advantages"
    else:
        return None
    return ResponderResult(catalog.pick(key, rng), ctx, ResponderRule.WHY_CHOOSE_US)


def _keyword_table(
    ctx: ConversationContext, text: str, rng: random.Random, catalog: ReplyCatalog
) -> ResponderResult | None:
    for rule in catalog.keywords:
        if rule.keyword in text:
            updated = ctx
            if rule.service:
                updated = replace(ctx, interested_service=rule.service)
            return ResponderResult(catalog.pick(rule.reply_key, rng), updated, ResponderRule.KEYWORD)
    return None


_RULES: tuple[_Rule, ...] = (
    _bereavement,
    _severe_distress,
    _price_objection,
    _comparison_shopping,
    _payment_method,
    _negative_escalation,
    _fixed_phrase,
    _sentiment,
    _why_choose_us,
    _keyword_table,
)
