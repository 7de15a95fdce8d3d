"""Detecção de tópico da mensagem do usuário (alimenta recent_topics)."""

from __future__ import annotations

from chatbot.rules.detection import normalize_utterance

# Ordem importa: o primeiro grupo encontrado define o tópico.
_TOPIC_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("clareamento", ("clareamento", "branqueamento")),
    ("extração", ("siso", "juízo")),
    ("harmonização", ("botox", "preenchimento")),
    ("payment", ("cartão", "pix", "pagamento")),
)


def detect_topic(utterance: str | None) -> str | None:
    """Retorna o tópico da mensagem ou None se nenhum for reconhecido."""
    text = normalize_utterance(utterance)
    if not text:
        return None
    for topic, keywords in _TOPIC_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return topic
    return None
