"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente (ex: consultas sobre os logs JSON).

Métricas suportadas:
- Latência: tempo de execução por componente/operação
- Desconto: escalonamento do desconto oferecido na sessão, com a regra
- Sessão: transições do ciclo de vida (ACTIVE, IDLE_WARNED, CLOSED)

Uso:
    from app.observability.metrics import record_latency, record_discount_escalation

    start = time.perf_counter()
    # ... operação ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("chat_service", "send", latency_ms, correlation_id)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "responder", "chat_service")
        operation: Nome da operação (ex: "respond", "send")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "correlation_id": correlation_id,
        },
    )


def record_discount_escalation(
    rule: str,
    previous_amount: int,
    new_amount: int,
    correlation_id: str | None = None,
) -> None:
    """Registra aumento do desconto oferecido.

    Args:
        rule: Regra do respondedor que concedeu o desconto
        previous_amount: Percentual antes do turno
        new_amount: Percentual após o turno
        correlation_id: ID de correlação para rastreamento
    """
    logger.info(
        "metric_discount_escalation",
        extra={
            "metric_type": "discount",
            "component": "responder",
            "rule": rule,
            "previous_amount": previous_amount,
            "new_amount": new_amount,
            "correlation_id": correlation_id,
        },
    )


def record_session_transition(
    from_state: str,
    to_state: str,
    trigger: str,
    correlation_id: str | None = None,
) -> None:
    """Registra transição de estado de uma sessão de chat."""
    logger.info(
        "metric_session_transition",
        extra={
            "metric_type": "session_transition",
            "component": "chat_session",
            "from_state": from_state,
            "to_state": to_state,
            "trigger": trigger,
            "correlation_id": correlation_id,
        },
    )
