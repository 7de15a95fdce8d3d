"""Logging estruturado (JSON) do serviço de chat.

Uso:
    from config.logging import configure_logging, get_logger

    # Uma vez no bootstrap
    configure_logging(level="INFO", service_name="dentalspa_chat")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("reply_sent", extra={"rule": "keyword"})

Todo log carrega correlation_id e service. Nunca logar o texto do usuário.
"""

from config.logging.config import configure_logging, get_logger, log_fallback
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "log_fallback",
]
