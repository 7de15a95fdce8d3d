"""Modelos do respondedor: contexto, mensagens, sugestões e catálogo."""

from chatbot.models.catalog import FixedPhrase, FollowUp, KeywordRule, ReplyCatalog
from chatbot.models.context import ConversationContext, PaymentMethod, Sentiment
from chatbot.models.message import Message, Sender
from chatbot.models.result import ResponderResult, ResponderRule
from chatbot.models.suggestion import Suggestion

__all__ = [
    "ConversationContext",
    "FixedPhrase",
    "FollowUp",
    "KeywordRule",
    "Message",
    "PaymentMethod",
    "ReplyCatalog",
    "ResponderResult",
    "ResponderRule",
    "Sender",
    "Sentiment",
    "Suggestion",
]
