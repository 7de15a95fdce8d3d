"""Contexto da conversa, propriedade exclusiva de uma sessão de chat.

Valor imutável: cada regra do respondedor devolve um novo contexto via
`dataclasses.replace`. Flags nunca voltam a False e o desconto nunca diminui.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class Sentiment(Enum):
    """Último sentimento detectado em palavras-chave livres."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class PaymentMethod(Enum):
    """Forma de pagamento mencionada pelo usuário."""

    PIX = "pix"
    DEBIT = "debit"
    CREDIT = "credit"
    CASH = "cash"


@dataclass(frozen=True, slots=True)
class ConversationContext:
    """Estado acumulado de uma conversa.

    Atributos:
        last_interaction_time: Atualizado a cada resposta do bot
        sentiment: Último sentimento detectado
        discount_granted: Se algum desconto já foi oferecido
        discount_amount: Percentual oferecido (0 a 20, não decrescente)
        mentioned_price: Usuário fez objeção de preço
        mentioned_family_loss: Usuário relatou luto
        has_severe_mental_state: Usuário relatou sofrimento grave
        payment_method_mentioned: Última forma de pagamento citada
        interested_service: Último serviço clínico citado
        recent_topics: Tópicos registrados, em ordem (somente acréscimo)
    """

    last_interaction_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    sentiment: Sentiment = Sentiment.NEUTRAL
    discount_granted: bool = False
    discount_amount: int = 0
    mentioned_price: bool = False
    mentioned_family_loss: bool = False
    has_severe_mental_state: bool = False
    payment_method_mentioned: PaymentMethod | None = None
    interested_service: str | None = None
    recent_topics: tuple[str, ...] = ()

    @property
    def last_topic(self) -> str | None:
        return self.recent_topics[-1] if self.recent_topics else None

    def with_topic(self, topic: str | None) -> ConversationContext:
        """Retorna contexto com o tópico acrescentado (no-op se vazio)."""
        if not topic:
            return self
        return replace(self, recent_topics=(*self.recent_topics, topic))

    def touched(self, now: datetime) -> ConversationContext:
        return replace(self, last_interaction_time=now)

    def to_dict(self) -> dict[str, Any]:
        """Serializa contexto para persistência/API."""
        return {
            "last_interaction_time": self.last_interaction_time.isoformat(),
            "sentiment": self.sentiment.value,
            "discount_granted": self.discount_granted,
            "discount_amount": self.discount_amount,
            "mentioned_price": self.mentioned_price,
            "mentioned_family_loss": self.mentioned_family_loss,
            "has_severe_mental_state": self.has_severe_mental_state,
            "payment_method_mentioned": (
                self.payment_method_mentioned.value if self.payment_method_mentioned else None
            ),
            "interested_service": self.interested_service,
            "recent_topics": list(self.recent_topics),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConversationContext:
        """Deserializa contexto de persistência."""
        payment = data.get("payment_method_mentioned")
        return cls(
            last_interaction_time=(
                datetime.fromisoformat(data["last_interaction_time"])
                if data.get("last_interaction_time")
                else datetime.now(UTC)
            ),
            sentiment=Sentiment(data.get("sentiment", "neutral")),
            discount_granted=bool(data.get("discount_granted", False)),
            discount_amount=int(data.get("discount_amount", 0)),
            mentioned_price=bool(data.get("mentioned_price", False)),
            mentioned_family_loss=bool(data.get("mentioned_family_loss", False)),
            has_severe_mental_state=bool(data.get("has_severe_mental_state", False)),
            payment_method_mentioned=PaymentMethod(payment) if payment else None,
            interested_service=data.get("interested_service"),
            recent_topics=tuple(data.get("recent_topics", ()) or ()),
        )
