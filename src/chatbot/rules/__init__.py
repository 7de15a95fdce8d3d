"""Regras determinísticas do respondedor (detecção e desconto)."""

from chatbot.rules.detection import (
    NEGATIVE_WORDS,
    PaymentMatch,
    detect_payment,
    detect_sentiment,
    is_bereavement,
    is_comparison_shopping,
    is_explicit_why_choose,
    is_negative_word,
    is_price_objection,
    is_severe_distress,
    is_soft_why_choose,
    normalize_utterance,
)
from chatbot.rules.discount import MAX_DISCOUNT_PERCENT, grant_discount, is_at_cap

__all__ = [
    "MAX_DISCOUNT_PERCENT",
    "NEGATIVE_WORDS",
    "PaymentMatch",
    "detect_payment",
    "detect_sentiment",
    "grant_discount",
    "is_at_cap",
    "is_bereavement",
    "is_comparison_shopping",
    "is_explicit_why_choose",
    "is_negative_word",
    "is_price_objection",
    "is_severe_distress",
    "is_soft_why_choose",
    "normalize_utterance",
]
