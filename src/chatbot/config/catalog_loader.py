"""Loader do catálogo de respostas (assets YAML).

Lê `src/chatbot/assets/replies.yaml`, valida a estrutura e congela o
resultado em um `ReplyCatalog`. Falhas aqui são erros de startup, nunca
erros do respondedor.

Observação: IO local (filesystem) é permitido aqui por se tratar de
assets versionados do repositório (sem rede).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from chatbot.models.catalog import FixedPhrase, FollowUp, KeywordRule, ReplyCatalog
from chatbot.models.suggestion import Suggestion

logger = logging.getLogger(__name__)

_CHATBOT_DIR = Path(__file__).resolve().parents[1]
DEFAULT_CATALOG_PATH = _CHATBOT_DIR / "assets" / "replies.yaml"

REQUIRED_REPLIES = (
    "greeting",
    "default",
    "positive",
    "negative",
    "inactivity",
    "goodbye",
    "bereavement",
    "severe_distress",
    "expensive",
    "comparison_discount",
    "negative_escalation_first",
    "negative_escalation_max",
)
REQUIRED_GROUPS = (
    "payment_pix",
    "payment_debit",
    "payment_credit",
    "payment_cash",
    "payment_generic",
    "expensive_followup",
    "looking_elsewhere_followup",
    "why_choose_us",
    "clinic_advantages",
)
REQUIRED_BUCKETS = (
    "initial",
    "services",
    "aesthetics",
    "pricing",
    "appointment",
    "fear",
    "schedule",
    "duration",
    "emergency",
)


class ReplyAssetError(RuntimeError):
    """Erro ao carregar ou validar o catálogo de respostas."""


def _require_mapping(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict) or not value:
        raise ReplyAssetError(f"Seção `{key}` ausente ou inválida")
    return value


def _require_list(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if not isinstance(value, list) or not value:
        raise ReplyAssetError(f"Seção `{key}` ausente ou inválida")
    return value


def _parse_replies(raw: dict[str, Any]) -> dict[str, str]:
    replies: dict[str, str] = {}
    for key, text in raw.items():
        if not isinstance(text, str) or not text.strip():
            raise ReplyAssetError(f"Resposta vazia ou inválida: {key}")
        replies[str(key)] = text.strip()
    missing = [key for key in REQUIRED_REPLIES if key not in replies]
    if missing:
        raise ReplyAssetError(f"Respostas obrigatórias ausentes: {', '.join(missing)}")
    return replies


def _parse_groups(raw: dict[str, Any], replies: dict[str, str]) -> dict[str, tuple[str, ...]]:
    groups: dict[str, tuple[str, ...]] = {}
    for name, items in raw.items():
        if not isinstance(items, list) or not items:
            raise ReplyAssetError(f"Grupo vazio ou inválido: {name}")
        unknown = [item for item in items if item not in replies]
        if unknown:
            raise ReplyAssetError(f"Grupo {name} referencia respostas inexistentes: {unknown}")
        groups[str(name)] = tuple(str(item) for item in items)
    missing = [name for name in REQUIRED_GROUPS if name not in groups]
    if missing:
        raise ReplyAssetError(f"Grupos obrigatórios ausentes: {', '.join(missing)}")
    return groups


def _check_reply_key(key: str, replies: dict[str, str], groups: dict[str, tuple[str, ...]]) -> str:
    if key not in replies and key not in groups:
        raise ReplyAssetError(f"Chave de resposta desconhecida: {key}")
    return key


def _parse_keywords(
    raw: list[Any],
    replies: dict[str, str],
    groups: dict[str, tuple[str, ...]],
) -> tuple[KeywordRule, ...]:
    rules: list[KeywordRule] = []
    seen: set[str] = set()
    for item in raw:
        if not isinstance(item, dict) or not item.get("keyword") or not item.get("reply"):
            raise ReplyAssetError(f"Palavra-chave inválida: {item!r}")
        keyword = str(item["keyword"]).lower()
        if keyword in seen:
            raise ReplyAssetError(f"Palavra-chave duplicada: {keyword}")
        seen.add(keyword)
        service = item.get("service")
        rules.append(
            KeywordRule(
                keyword=keyword,
                reply_key=_check_reply_key(str(item["reply"]), replies, groups),
                service=str(service) if service else None,
            )
        )
    return tuple(rules)


def _parse_fixed_phrases(
    raw: list[Any],
    replies: dict[str, str],
    groups: dict[str, tuple[str, ...]],
) -> tuple[FixedPhrase, ...]:
    phrases: list[FixedPhrase] = []
    for item in raw:
        if not isinstance(item, dict) or not all(item.get(k) for k in ("phrase", "reply", "service")):
            raise ReplyAssetError(f"Frase fixa inválida: {item!r}")
        phrases.append(
            FixedPhrase(
                phrase=str(item["phrase"]),
                reply_key=_check_reply_key(str(item["reply"]), replies, groups),
                service=str(item["service"]),
            )
        )
    return tuple(phrases)


def _parse_suggestions(raw: dict[str, Any]) -> dict[str, tuple[Suggestion, ...]]:
    buckets: dict[str, tuple[Suggestion, ...]] = {}
    for name, items in raw.items():
        if not isinstance(items, list) or not items:
            raise ReplyAssetError(f"Bucket de sugestões vazio: {name}")
        bucket: list[Suggestion] = []
        for item in items:
            if not isinstance(item, dict) or not all(item.get(k) for k in ("id", "text", "category")):
                raise ReplyAssetError(f"Sugestão inválida em {name}: {item!r}")
            bucket.append(
                Suggestion(id=str(item["id"]), text=str(item["text"]), category=str(item["category"]))
            )
        buckets[str(name)] = tuple(bucket)
    missing = [name for name in REQUIRED_BUCKETS if name not in buckets]
    if missing:
        raise ReplyAssetError(f"Buckets obrigatórios ausentes: {', '.join(missing)}")
    return buckets


def _parse_follow_ups(raw: dict[str, Any]) -> dict[str, FollowUp]:
    follow_ups: dict[str, FollowUp] = {}
    for topic, item in raw.items():
        if not isinstance(item, dict) or not all(item.get(k) for k in ("text", "category", "marker")):
            raise ReplyAssetError(f"Sugestão de acompanhamento inválida: {topic}")
        follow_ups[str(topic)] = FollowUp(
            text=str(item["text"]),
            category=str(item["category"]),
            marker=str(item["marker"]).lower(),
        )
    return follow_ups


def build_reply_catalog(data: Any) -> ReplyCatalog:
    """Valida o conteúdo YAML já carregado e monta o catálogo imutável.

    Raises:
        ReplyAssetError: Se alguma seção estiver ausente ou inconsistente
    """
    if not isinstance(data, dict):
        raise ReplyAssetError("Catálogo de respostas deve ser dict")

    replies = _parse_replies(_require_mapping(data, "replies"))
    groups = _parse_groups(_require_mapping(data, "groups"), replies)
    keywords = _parse_keywords(_require_list(data, "keywords"), replies, groups)
    fixed_phrases = _parse_fixed_phrases(_require_list(data, "fixed_phrases"), replies, groups)
    suggestions = _parse_suggestions(_require_mapping(data, "suggestions"))
    follow_ups = _parse_follow_ups(data.get("follow_ups") or {})
    frequent = data.get("frequent_questions") or []
    if not isinstance(frequent, list):
        raise ReplyAssetError("Seção `frequent_questions` deve ser lista")

    return ReplyCatalog(
        replies=MappingProxyType(replies),
        groups=MappingProxyType(groups),
        keywords=keywords,
        fixed_phrases=fixed_phrases,
        suggestions=MappingProxyType(suggestions),
        follow_ups=MappingProxyType(follow_ups),
        frequent_questions=tuple(str(item) for item in frequent),
    )


def load_catalog_file(path: Path) -> ReplyCatalog:
    """Carrega e valida um catálogo a partir de um caminho explícito."""
    if not path.exists():
        raise ReplyAssetError(f"Catálogo de respostas não encontrado: {path}")
    if not path.is_file():
        raise ReplyAssetError(f"Caminho de catálogo inválido: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ReplyAssetError(f"YAML inválido em {path.name}: {exc}") from exc

    catalog = build_reply_catalog(data)
    logger.debug(
        "reply_catalog_loaded",
        extra={
            "replies": len(catalog.replies),
            "keywords": len(catalog.keywords),
            "buckets": len(catalog.suggestions),
        },
    )
    return catalog


@lru_cache(maxsize=1)
def load_reply_catalog() -> ReplyCatalog:
    """Carrega o catálogo padrão empacotado (cached)."""
    return load_catalog_file(DEFAULT_CATALOG_PATH)


def clear_catalog_cache() -> None:
    """Limpa cache (útil em testes)."""
    load_reply_catalog.cache_clear()
