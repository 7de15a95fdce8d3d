"""Sugestões rápidas (chips) exibidas abaixo da conversa."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Suggestion:
    """Sugestão de próxima pergunta.

    Atributos:
        id: Identificador estável (ex: sug_sch_1)
        text: Texto enviado como mensagem do usuário ao ser escolhida
        category: Categoria registrada em recent_topics ao ser usada
    """

    id: str
    text: str
    category: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "category": self.category}
