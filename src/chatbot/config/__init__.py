"""Configuração do respondedor: carregamento do catálogo de respostas."""

from chatbot.config.catalog_loader import (
    DEFAULT_CATALOG_PATH,
    ReplyAssetError,
    build_reply_catalog,
    clear_catalog_cache,
    load_catalog_file,
    load_reply_catalog,
)

__all__ = [
    "DEFAULT_CATALOG_PATH",
    "ReplyAssetError",
    "build_reply_catalog",
    "clear_catalog_cache",
    "load_catalog_file",
    "load_reply_catalog",
]
