"""Endpoints do chat consumidos pelo widget.

Os handlers apenas adaptam HTTP para o `ChatService` e mapeiam erros de
domínio: sessão inexistente 404, sessão encerrada 409, sugestão
desconhecida ou mensagem vazia 422.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.routes.chat.schemas import (
    FaqOut,
    SendMessageRequest,
    SessionOut,
    SuggestionOut,
    SuggestionsOut,
    TurnOut,
    UseSuggestionRequest,
)
from app.bootstrap import get_chat_service
from app.services.chat_service import ChatService
from utils.errors import (
    ChatError,
    EmptyMessageError,
    SessionClosedError,
    SessionNotFoundError,
    SuggestionNotFoundError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _http_error(exc: ChatError) -> HTTPException:
    if isinstance(exc, SessionNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, SessionClosedError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, (SuggestionNotFoundError, EmptyMessageError)):
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    else:
        code = status.HTTP_400_BAD_REQUEST
    logger.info(
        "chat_request_rejected",
        extra={"error_type": type(exc).__name__, "status_code": code},
    )
    return HTTPException(status_code=code, detail=str(exc))


@router.post("/sessions", response_model=SessionOut, status_code=status.HTTP_201_CREATED)
async def create_session(service: ChatService = Depends(get_chat_service)) -> SessionOut:
    """Abre sessão nova com saudação e sugestões iniciais."""
    session = await service.create_session()
    return SessionOut.from_session(session)


@router.get("/sessions/{session_id}", response_model=SessionOut)
async def get_session(
    session_id: str,
    service: ChatService = Depends(get_chat_service),
) -> SessionOut:
    """Histórico, estado e sugestões (emite avisos de inatividade vencidos)."""
    try:
        session = await service.get_session(session_id)
    except ChatError as exc:
        raise _http_error(exc) from exc
    return SessionOut.from_session(session)


@router.post("/sessions/{session_id}/messages", response_model=TurnOut)
async def send_message(
    session_id: str,
    body: SendMessageRequest,
    service: ChatService = Depends(get_chat_service),
) -> TurnOut:
    try:
        turn = await service.send_message(session_id, body.text)
        suggestions = await service.get_suggestions(session_id)
    except ChatError as exc:
        raise _http_error(exc) from exc
    return TurnOut.from_turn(turn, suggestions)


@router.post("/sessions/{session_id}/suggestions", response_model=TurnOut)
async def use_suggestion(
    session_id: str,
    body: UseSuggestionRequest,
    service: ChatService = Depends(get_chat_service),
) -> TurnOut:
    """Usa uma sugestão oferecida como mensagem do usuário."""
    try:
        turn = await service.use_suggestion(session_id, body.suggestion_id)
        suggestions = await service.get_suggestions(session_id)
    except ChatError as exc:
        raise _http_error(exc) from exc
    return TurnOut.from_turn(turn, suggestions)


@router.get("/sessions/{session_id}/suggestions", response_model=SuggestionsOut)
async def list_suggestions(
    session_id: str,
    service: ChatService = Depends(get_chat_service),
) -> SuggestionsOut:
    try:
        suggestions = await service.get_suggestions(session_id)
    except ChatError as exc:
        raise _http_error(exc) from exc
    return SuggestionsOut(
        suggestions=[SuggestionOut.from_suggestion(item) for item in suggestions]
    )


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(
    session_id: str,
    service: ChatService = Depends(get_chat_service),
) -> None:
    """Encerra e descarta a sessão."""
    try:
        await service.close_session(session_id)
    except ChatError as exc:
        raise _http_error(exc) from exc


@router.get("/faq", response_model=FaqOut)
async def frequent_questions(service: ChatService = Depends(get_chat_service)) -> FaqOut:
    return FaqOut(questions=list(service.frequent_questions()))
