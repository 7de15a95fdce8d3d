"""Entrypoint da aplicação DentalSpa chat.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from app.bootstrap import get_chat_service, initialize_app, validate_runtime_settings
from app.observability import CORRELATION_HEADER, correlation_scope
from config.logging import get_logger
from config.settings import get_base_settings, get_chat_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from app.services.chat_service import ChatService

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


async def run_idle_sweeper(service: ChatService, interval_seconds: float) -> None:
    """Varre sessões periodicamente emitindo avisos de inatividade e despedidas."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            await service.sweep_idle()
        except Exception as exc:  # noqa: BLE001
            logger.exception("idle_sweep_failed", extra={"error_type": type(exc).__name__})


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Inicia a varredura de inatividade

    Shutdown:
    - Cancela a varredura
    """
    logger.info("app_starting", extra={"service": "dentalspa-chat"})
    validate_runtime_settings()
    settings = get_chat_settings()
    app.state.idle_sweeper = asyncio.create_task(
        run_idle_sweeper(get_chat_service(), settings.idle_sweep_interval_seconds)
    )

    yield

    logger.info("app_shutting_down", extra={"service": "dentalspa-chat"})
    app.state.idle_sweeper.cancel()
    with suppress(asyncio.CancelledError):
        await app.state.idle_sweeper


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="DentalSpa Chat",
        description="Assistente virtual da clínica DentalSpa",
        version="1.0.0",
        lifespan=lifespan,
    )

    # O widget é servido por outra origem
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(get_base_settings().cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @fastapi_app.middleware("http")
    async def correlation_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": "dentalspa-chat"})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting DentalSpa chat in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
