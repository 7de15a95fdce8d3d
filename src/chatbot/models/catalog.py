"""Tabelas imutáveis de respostas pré-escritas.

O catálogo é montado uma vez a partir dos assets YAML e passado ao
respondedor; nada aqui é alterado durante a conversa.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass

from chatbot.models.suggestion import Suggestion


@dataclass(frozen=True, slots=True)
class KeywordRule:
    """Entrada da tabela de palavras-chave (ordem de declaração importa).

    Atributos:
        keyword: Substring procurada no texto em minúsculas
        reply_key: Chave de resposta ou de grupo de variações
        service: Serviço registrado em interested_service (opcional)
    """

    keyword: str
    reply_key: str
    service: str | None = None


@dataclass(frozen=True, slots=True)
class FixedPhrase:
    """Frase completa reconhecida com resposta e serviço associados."""

    phrase: str
    reply_key: str
    service: str


@dataclass(frozen=True, slots=True)
class FollowUp:
    """Sugestão extra oferecida quando um tópico recente foi registrado.

    `marker` evita duplicar: se alguma sugestão já contém o marcador,
    a extra não é adicionada.
    """

    text: str
    category: str
    marker: str


@dataclass(frozen=True, slots=True)
class ReplyCatalog:
    """Catálogo completo de respostas, palavras-chave e sugestões."""

    replies: Mapping[str, str]
    groups: Mapping[str, tuple[str, ...]]
    keywords: tuple[KeywordRule, ...]
    fixed_phrases: tuple[FixedPhrase, ...]
    suggestions: Mapping[str, tuple[Suggestion, ...]]
    follow_ups: Mapping[str, FollowUp]
    frequent_questions: tuple[str, ...]

    def text(self, key: str) -> str:
        """Retorna o texto de uma resposta simples."""
        return self.replies[key]

    def variants(self, key: str) -> tuple[str, ...]:
        """Retorna todas as variações possíveis para uma chave."""
        group = self.groups.get(key)
        if group is not None:
            return tuple(self.replies[item] for item in group)
        return (self.replies[key],)

    def pick(self, key: str, rng: random.Random) -> str:
        """Sorteia uma das variações da chave com a fonte aleatória injetada."""
        options = self.variants(key)
        if len(options) == 1:
            return options[0]
        return rng.choice(options)

    def bucket(self, name: str) -> tuple[Suggestion, ...]:
        return self.suggestions[name]

    def has_reply(self, key: str) -> bool:
        return key in self.groups or key in self.replies
