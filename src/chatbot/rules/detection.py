"""Detecção determinística de sinais no texto do usuário.

Todas as funções recebem o texto já normalizado por `normalize_utterance`
(minúsculas) e fazem apenas checagens de substring. Nenhuma levanta erro.
"""

from __future__ import annotations

from dataclasses import dataclass

from chatbot.models.context import PaymentMethod, Sentiment

_LOSS_MARKER = "perdi"
_LOSS_KEYWORDS = (
    "mãe",
    "pai",
    "filho",
    "filha",
    "familiar",
    "faleceu",
    "falecimento",
    "morreu",
)

_SEVERE_STATE_KEYWORDS = (
    "depressão",
    "depressivo",
    "suicídio",
    "suicida",
    "muito mal",
    "terrível",
    "horrível",
    "desesperado",
)
_FIRST_PERSON_KEYWORDS = ("sinto", "estou", "me sinto")

_PRICE_OBJECTION_KEYWORDS = (
    "caro",
    "cara",
    "muito caro",
    "preço alto",
    "valor alto",
    "não tenho dinheiro",
    "sem grana",
)

_COMPARISON_KEYWORDS = (
    "comparando preços",
    "pesquisando",
    "outras clínicas",
    "outro lugar",
    "vou procurar",
    "mais barato",
)

_GENERIC_PAYMENT_KEYWORDS = ("pagamento", "forma de pagar", "como pagar")

# Ordem importa: o primeiro método encontrado vence.
_PAYMENT_METHODS: tuple[tuple[str, PaymentMethod, str], ...] = (
    ("pix", PaymentMethod.PIX, "payment_pix"),
    ("débito", PaymentMethod.DEBIT, "payment_debit"),
    ("crédito", PaymentMethod.CREDIT, "payment_credit"),
    ("dinheiro", PaymentMethod.CASH, "payment_cash"),
)

NEGATIVE_WORDS = frozenset(
    {
        "triste",
        "mal",
        "péssimo",
        "péssima",
        "ruim",
        "cansado",
        "cansada",
        "desanimado",
        "desanimada",
    }
)

_POSITIVE_KEYWORDS = ("bem", "feliz", "ótimo", "ótima")
_NEGATIVE_KEYWORDS = ("mal", "triste", "péssimo", "péssima", "ruim", "cansado", "cansada")

_EXPLICIT_WHY_KEYWORDS = (
    "por que contratar",
    "por que escolher vocês",
    "por que ir aí",
    "motivo para escolher",
    "razão para escolher",
)
_SOFT_WHY_KEYWORDS = ("por que", "vantagem", "diferencial", "melhor")


@dataclass(frozen=True, slots=True)
class PaymentMatch:
    """Forma de pagamento detectada e grupo de respostas correspondente.

    `method` é None para menções genéricas ("pagamento", "como pagar").
    """

    method: PaymentMethod | None
    reply_key: str


def normalize_utterance(text: str | None) -> str:
    """Normaliza o texto para as checagens (minúsculas, sem remover acentos)."""
    return (text or "").lower()


def is_bereavement(text: str) -> bool:
    return _LOSS_MARKER in text and _contains_any(text, _LOSS_KEYWORDS)


def is_severe_distress(text: str) -> bool:
    """Estado grave exige palavra-chave de sofrimento e marcador de primeira pessoa."""
    return _contains_any(text, _SEVERE_STATE_KEYWORDS) and _contains_any(
        text, _FIRST_PERSON_KEYWORDS
    )


def is_price_objection(text: str) -> bool:
    return _contains_any(text, _PRICE_OBJECTION_KEYWORDS)


def is_comparison_shopping(text: str) -> bool:
    return _contains_any(text, _COMPARISON_KEYWORDS)


def detect_payment(text: str) -> PaymentMatch | None:
    for keyword, method, reply_key in _PAYMENT_METHODS:
        if keyword in text:
            return PaymentMatch(method=method, reply_key=reply_key)
    if _contains_any(text, _GENERIC_PAYMENT_KEYWORDS):
        return PaymentMatch(method=None, reply_key="payment_generic")
    return None


def is_negative_word(text: str) -> bool:
    """Texto inteiro (sem espaços nas pontas) é uma única palavra negativa."""
    return text.strip() in NEGATIVE_WORDS


def detect_sentiment(text: str) -> Sentiment | None:
    """Positivo tem precedência sobre negativo quando ambos aparecem."""
    if _contains_any(text, _POSITIVE_KEYWORDS):
        return Sentiment.POSITIVE
    if _contains_any(text, _NEGATIVE_KEYWORDS):
        return Sentiment.NEGATIVE
    return None


def is_explicit_why_choose(text: str) -> bool:
    return _contains_any(text, _EXPLICIT_WHY_KEYWORDS)


def is_soft_why_choose(text: str) -> bool:
    return _contains_any(text, _SOFT_WHY_KEYWORDS)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)
