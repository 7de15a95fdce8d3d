"""Schemas pydantic das rotas de chat."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from app.sessions.chat_session import ChatSession, ChatTurn
from chatbot.models import ConversationContext, Message, Suggestion


class SendMessageRequest(BaseModel):
    """Texto digitado pelo usuário."""

    text: str = Field(max_length=2000)


class UseSuggestionRequest(BaseModel):
    """Sugestão escolhida entre as oferecidas."""

    suggestion_id: str


class MessageOut(BaseModel):
    id: str
    sender: str
    text: str
    timestamp: datetime

    @classmethod
    def from_message(cls, message: Message) -> MessageOut:
        return cls(
            id=message.id,
            sender=message.sender.value,
            text=message.text,
            timestamp=message.timestamp,
        )


class SuggestionOut(BaseModel):
    id: str
    text: str
    category: str

    @classmethod
    def from_suggestion(cls, suggestion: Suggestion) -> SuggestionOut:
        return cls(**suggestion.to_dict())


class ContextOut(BaseModel):
    """Estado da conversa exposto ao widget."""

    last_interaction_time: datetime
    sentiment: str
    discount_granted: bool
    discount_amount: int
    mentioned_price: bool
    mentioned_family_loss: bool
    has_severe_mental_state: bool
    interested_service: str | None = None
    payment_method_mentioned: str | None = None
    recent_topics: list[str] = Field(default_factory=list)

    @classmethod
    def from_context(cls, context: ConversationContext) -> ContextOut:
        return cls(
            last_interaction_time=context.last_interaction_time,
            sentiment=context.sentiment.value,
            discount_granted=context.discount_granted,
            discount_amount=context.discount_amount,
            mentioned_price=context.mentioned_price,
            mentioned_family_loss=context.mentioned_family_loss,
            has_severe_mental_state=context.has_severe_mental_state,
            interested_service=context.interested_service,
            payment_method_mentioned=(
                context.payment_method_mentioned.value
                if context.payment_method_mentioned
                else None
            ),
            recent_topics=list(context.recent_topics),
        )


class SessionOut(BaseModel):
    session_id: str
    state: str
    messages: list[MessageOut]
    context: ContextOut
    suggestions: list[SuggestionOut]

    @classmethod
    def from_session(cls, session: ChatSession) -> SessionOut:
        return cls(
            session_id=session.session_id,
            state=session.state.value,
            messages=[MessageOut.from_message(message) for message in session.messages],
            context=ContextOut.from_context(session.context),
            suggestions=[SuggestionOut.from_suggestion(item) for item in session.suggestions()],
        )


class TurnOut(BaseModel):
    """Mensagem do usuário, resposta do bot e novas sugestões."""

    user_message: MessageOut
    reply: MessageOut
    rule: str
    suggestions: list[SuggestionOut]

    @classmethod
    def from_turn(cls, turn: ChatTurn, suggestions: tuple[Suggestion, ...]) -> TurnOut:
        return cls(
            user_message=MessageOut.from_message(turn.user_message),
            reply=MessageOut.from_message(turn.reply),
            rule=turn.rule.value,
            suggestions=[SuggestionOut.from_suggestion(item) for item in suggestions],
        )


class SuggestionsOut(BaseModel):
    suggestions: list[SuggestionOut]


class FaqOut(BaseModel):
    questions: list[str]
