"""Métricas registradas como logs estruturados.

Uso:
    start = time.perf_counter()
    ...
    record_latency("dealmaker_api", "create_investor", elapsed_ms, status_code=201)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    *,
    status_code: int | None = None,
) -> None:
    """Registra latência de uma operação.

    Args:
        component: Nome do componente (ex: "dealmaker_api", "token")
        operation: Nome da operação (ex: "create_profile")
        latency_ms: Latência em milissegundos
        status_code: Status HTTP da resposta, quando houver
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "status_code": status_code,
        },
    )
