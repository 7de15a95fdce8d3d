"""Seleção do bucket de sugestões rápidas.

Função sem efeitos colaterais: olha o texto das últimas mensagens e o
contexto da conversa e escolhe um bucket por prioridade fixa:

schedule > duration > emergency > serviço de interesse (services/aesthetics)
> pricing > fear > appointment > initial
"""

from __future__ import annotations

from collections.abc import Sequence

from chatbot.config.catalog_loader import load_reply_catalog
from chatbot.models.catalog import ReplyCatalog
from chatbot.models.context import ConversationContext
from chatbot.models.message import Message
from chatbot.models.suggestion import Suggestion

RECENT_WINDOW = 3
FOLLOW_UP_MIN_MESSAGES = 2
FOLLOW_UP_BASE_SIZE = 3

_SCHEDULE_KEYWORDS = (
    "horário",
    "quando",
    "atendimento",
    "segunda",
    "terça",
    "quarta",
    "quinta",
    "sexta",
    "sábado",
    "domingo",
)
_DURATION_KEYWORDS = (
    "duração",
    "quanto tempo",
    "demora",
    "leva quanto tempo",
    "sessão",
    "minutos",
    "horas",
)
_EMERGENCY_KEYWORDS = (
    "emergência",
    "urgente",
    "dor forte",
    "quebrou",
    "acidente",
    "sangramento",
)
_DENTAL_SERVICE_KEYWORDS = ("siso", "canal", "implante", "restauração")
_AESTHETIC_SERVICE_KEYWORDS = ("clareamento", "estética", "botox", "preenchimento")
_PRICING_KEYWORDS = ("preço", "valor", "custa", "pagar", "parcelar")
_FEAR_KEYWORDS = ("medo", "receio", "trauma", "ansiedade", "pavor", "nervoso", "nervosa")
_APPOINTMENT_KEYWORDS = ("agendar", "marcar", "consulta", "horário")


def select_bucket(history: Sequence[Message], context: ConversationContext) -> str:
    """Escolhe o nome do bucket ativo para o histórico e contexto dados."""
    recent = " ".join(message.text.lower() for message in history[-RECENT_WINDOW:])

    if _contains_any(recent, _SCHEDULE_KEYWORDS):
        return "schedule"
    if _contains_any(recent, _DURATION_KEYWORDS):
        return "duration"
    if _contains_any(recent, _EMERGENCY_KEYWORDS):
        return "emergency"

    service = (context.interested_service or "").lower()
    if service:
        if _contains_any(service, _DENTAL_SERVICE_KEYWORDS):
            return "services"
        if _contains_any(service, _AESTHETIC_SERVICE_KEYWORDS):
            return "aesthetics"

    if context.mentioned_price or context.discount_granted:
        return "pricing"
    if _contains_any(recent, _PRICING_KEYWORDS):
        return "pricing"
    if _contains_any(recent, _FEAR_KEYWORDS):
        return "fear"
    if _contains_any(recent, _APPOINTMENT_KEYWORDS):
        return "appointment"
    return "initial"


def select_suggestions(
    history: Sequence[Message],
    context: ConversationContext,
    catalog: ReplyCatalog | None = None,
) -> tuple[Suggestion, ...]:
    """Retorna as sugestões do bucket ativo, com extra por tópico recente.

    A sugestão extra só entra quando a conversa tem mais de duas mensagens,
    o último tópico registrado tem acompanhamento no catálogo e nenhuma
    sugestão do bucket já cobre o mesmo assunto.
    """
    catalog = catalog or load_reply_catalog()
    bucket = catalog.bucket(select_bucket(history, context))

    topic = context.last_topic
    if len(history) <= FOLLOW_UP_MIN_MESSAGES or topic is None:
        return bucket
    follow_up = catalog.follow_ups.get(topic)
    if follow_up is None:
        return bucket
    if any(follow_up.marker in suggestion.text.lower() for suggestion in bucket):
        return bucket

    extra = Suggestion(id=f"custom_{topic}", text=follow_up.text, category=follow_up.category)
    return (*bucket[:FOLLOW_UP_BASE_SIZE], extra)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)
