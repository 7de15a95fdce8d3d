"""Chatbot — respondedor roteirizado do chat de marketing da clínica.

Subpastas:
- assets/: catálogo de respostas em YAML (copy de marketing)
- config/: carregamento e validação do catálogo
- models/: contexto, mensagens, sugestões e resultado de turno
- rules/: detecção de sinais no texto e política de desconto
- services/: respondedor, seleção de sugestões e detecção de tópico

Padrão: chatbot decide a resposta; app orquestra a sessão; api adapta.
"""

from chatbot.config import ReplyAssetError, load_reply_catalog
from chatbot.models import (
    ConversationContext,
    Message,
    PaymentMethod,
    ReplyCatalog,
    ResponderResult,
    ResponderRule,
    Sender,
    Sentiment,
    Suggestion,
)
from chatbot.rules import MAX_DISCOUNT_PERCENT, grant_discount
from chatbot.services import detect_topic, respond, select_bucket, select_suggestions

__all__ = [
    "MAX_DISCOUNT_PERCENT",
    "ConversationContext",
    "Message",
    "PaymentMethod",
    "ReplyAssetError",
    "ReplyCatalog",
    "ResponderResult",
    "ResponderRule",
    "Sender",
    "Sentiment",
    "Suggestion",
    "detect_topic",
    "grant_discount",
    "load_reply_catalog",
    "respond",
    "select_bucket",
    "select_suggestions",
]
