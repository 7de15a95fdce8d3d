"""Sessão de chat: histórico, contexto, temporizadores e FSM.

Cada sessão é dona exclusiva do seu `ConversationContext`; nada é
compartilhado entre sessões. Uma mensagem do usuário produz exatamente
uma resposta do bot antes da próxima ser aceita.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from app.observability import get_correlation_id, record_session_transition
from app.protocols.clock import ClockProtocol
from app.sessions.inactivity import InactivityEventKind, InactivityWatcher
from chatbot.config.catalog_loader import load_reply_catalog
from chatbot.models import (
    ConversationContext,
    Message,
    ReplyCatalog,
    ResponderRule,
    Sender,
    Suggestion,
)
from chatbot.services import detect_topic, respond, select_suggestions
from fsm import FSMStateMachine, SessionState, StateTransition, TransitionResult, create_fsm
from utils.errors import EmptyMessageError, SessionClosedError, SuggestionNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ChatTurn:
    """Par mensagem do usuário / resposta do bot de um turno."""

    user_message: Message
    reply: Message
    rule: ResponderRule


class ChatSession:
    """Sessão de chat com o assistente virtual.

    Mutável apenas via métodos controlados; o histórico só cresce.
    """

    __slots__ = (
        "_catalog",
        "_clock",
        "_context",
        "_created_at",
        "_fsm",
        "_messages",
        "_rng",
        "_session_id",
        "_watcher",
    )

    def __init__(
        self,
        session_id: str,
        *,
        clock: ClockProtocol,
        rng: random.Random,
        watcher: InactivityWatcher,
        catalog: ReplyCatalog | None = None,
        context: ConversationContext | None = None,
        messages: list[Message] | None = None,
        lifecycle: FSMStateMachine | None = None,
        created_at: datetime | None = None,
    ) -> None:
        self._session_id = session_id
        self._clock = clock
        self._rng = rng
        self._catalog = catalog or load_reply_catalog()
        self._watcher = watcher
        self._created_at = created_at or clock.now()
        self._context = context or ConversationContext(last_interaction_time=self._created_at)
        self._messages: list[Message] = list(messages or [])
        self._fsm = lifecycle or create_fsm(session_id)

    @classmethod
    def new(
        cls,
        session_id: str,
        *,
        clock: ClockProtocol,
        rng: random.Random,
        idle_timeout: timedelta,
        goodbye_timeout: timedelta,
        catalog: ReplyCatalog | None = None,
    ) -> ChatSession:
        """Cria sessão vazia (contexto novo) pronta para `start()`."""
        now = clock.now()
        watcher = InactivityWatcher(
            idle_timeout=idle_timeout,
            goodbye_timeout=goodbye_timeout,
            last_activity_at=now,
        )
        return cls(
            session_id,
            clock=clock,
            rng=rng,
            watcher=watcher,
            catalog=catalog,
            created_at=now,
        )

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def state(self) -> SessionState:
        return self._fsm.current_state

    @property
    def is_closed(self) -> bool:
        return self._fsm.is_terminal

    @property
    def context(self) -> ConversationContext:
        return self._context

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def transitions(self) -> tuple[StateTransition, ...]:
        """Trilha de mudanças de estado (auditoria)."""
        return self._fsm.history

    @property
    def next_timer_due_at(self) -> datetime | None:
        return self._watcher.next_due_at

    def start(self) -> Message:
        """Envia a saudação inicial (apenas uma vez por sessão)."""
        if self._messages:
            return self._messages[0]
        now = self._clock.now()
        greeting = Message(Sender.BOT, self._catalog.text("greeting"), now)
        self._messages.append(greeting)
        self._watcher.touch(now)
        logger.info("chat_session_started", extra={"session_id": self._session_id})
        return greeting

    def send(self, text: str) -> ChatTurn:
        """Processa texto digitado pelo usuário e devolve o turno completo.

        Raises:
            SessionClosedError: Sessão já encerrada (inclusive por inatividade)
            EmptyMessageError: Texto vazio ou só com espaços
        """
        return self._handle_user_text(text, topic=detect_topic(text))

    def use_suggestion(self, suggestion_id: str) -> ChatTurn:
        """Usa uma sugestão oferecida como se o usuário a tivesse digitado.

        O tópico registrado é a categoria da sugestão.

        Raises:
            SessionClosedError: Sessão já encerrada
            SuggestionNotFoundError: Sugestão não está entre as atuais
        """
        self.poll_idle()
        self._ensure_open()
        offered = {suggestion.id: suggestion for suggestion in self.suggestions()}
        suggestion = offered.get(suggestion_id)
        if suggestion is None:
            raise SuggestionNotFoundError(suggestion_id)
        return self._handle_user_text(suggestion.text, topic=suggestion.category)

    def suggestions(self) -> tuple[Suggestion, ...]:
        """Sugestões atuais (vazio quando a sessão está encerrada)."""
        if self.is_closed:
            return ()
        return select_suggestions(self._messages, self._context, self._catalog)

    def poll_idle(self) -> list[Message]:
        """Emite mensagens automáticas vencidas (aviso e despedida).

        Mensagens automáticas não rearmam o temporizador.
        """
        if self.is_closed:
            return []
        produced: list[Message] = []
        for event in self._watcher.poll(self._clock.now()):
            if event.kind is InactivityEventKind.INACTIVITY:
                message = Message(Sender.BOT, self._catalog.text("inactivity"), event.due_at)
                self._record(self._fsm.warn_idle(event.due_at))
            else:
                message = Message(Sender.BOT, self._catalog.text("goodbye"), event.due_at)
                self._record(self._fsm.say_goodbye(event.due_at))
            self._context = self._context.touched(event.due_at)
            self._messages.append(message)
            produced.append(message)
        return produced

    def close(self) -> None:
        """Encerra a sessão explicitamente (idempotente)."""
        if self.is_closed:
            return
        self._watcher.stop()
        self._record(self._fsm.close(self._clock.now()))

    def _handle_user_text(self, text: str, *, topic: str | None) -> ChatTurn:
        self.poll_idle()
        self._ensure_open()
        if not text or not text.strip():
            raise EmptyMessageError()

        now = self._clock.now()
        history = tuple(self._messages)
        self._context = self._context.with_topic(topic)
        user_message = Message(Sender.USER, text, now)
        self._messages.append(user_message)
        self._watcher.touch(now, user_activity=True)
        if self.state is SessionState.IDLE_WARNED:
            self._record(self._fsm.resume(now))

        result = respond(
            self._context,
            history,
            text,
            rng=self._rng,
            catalog=self._catalog,
            now=now,
        )
        self._context = result.context
        reply = Message(Sender.BOT, result.reply_text, now)
        self._messages.append(reply)
        self._watcher.touch(now)
        return ChatTurn(user_message=user_message, reply=reply, rule=result.rule)

    def _ensure_open(self) -> None:
        if self.is_closed:
            raise SessionClosedError(self._session_id)

    def _record(self, result: TransitionResult) -> None:
        transition = result.transition
        if transition is None:
            logger.warning(
                "chat_session_transition_rejected",
                extra={
                    "session_id": self._session_id,
                    "state": self.state.name,
                    "reason": result.rejected_reason,
                },
            )
            return
        record_session_transition(
            transition.from_state.name,
            transition.to_state.name,
            transition.trigger.value,
            get_correlation_id() or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serializa sessão para o store (sem PII além do texto da conversa)."""
        return {
            "session_id": self._session_id,
            "lifecycle": self._fsm.to_dict(),
            "created_at": self._created_at.isoformat(),
            "context": self._context.to_dict(),
            "messages": [message.to_dict() for message in self._messages],
            "watcher": self._watcher.to_dict(),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        clock: ClockProtocol,
        rng: random.Random,
        catalog: ReplyCatalog | None = None,
    ) -> ChatSession:
        """Reconstrói sessão serializada por `to_dict`."""
        return cls(
            data["session_id"],
            clock=clock,
            rng=rng,
            catalog=catalog,
            watcher=InactivityWatcher.from_dict(data["watcher"]),
            context=ConversationContext.from_dict(data.get("context", {})),
            messages=[Message.from_dict(item) for item in data.get("messages", [])],
            lifecycle=FSMStateMachine.from_dict(data["session_id"], data.get("lifecycle", {})),
            created_at=datetime.fromisoformat(data["created_at"]),
        )
