"""Serviços do respondedor: resposta, sugestões e tópicos."""

from chatbot.services.responder import respond
from chatbot.services.suggestions import select_bucket, select_suggestions
from chatbot.services.topics import detect_topic

__all__ = ["detect_topic", "respond", "select_bucket", "select_suggestions"]
