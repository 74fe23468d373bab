"""
Métricas de rendimento, sucata, atendimento de pedidos e carga das linhas
"""

from dataclasses import dataclass, field
from typing import List, Dict

import numpy as np

from .models import Order, LineSpec, LineLoad, SlittingPattern

# Tempo médio de corte de uma bobina (min), sem contar o setup
MINUTES_PER_COIL = 20.0


@dataclass
class PlanMetrics:
    total_yield: float = 0.0
    total_scrap: float = 0.0
    orders_covered: int = 0
    partially_fulfilled_orders: int = 0
    unfulfilled_orders: int = 0
    total_orders: int = 0
    order_slits_assigned: Dict[str, int] = field(default_factory=dict)
    line_loads: List[LineLoad] = field(default_factory=list)


def compute_line_loads(patterns: List[SlittingPattern], line_specs: List[LineSpec]) -> List[LineLoad]:
    """
    Carga de cada linha na ordem das especificações

    O tempo estimado é MINUTES_PER_COIL por bobina mais um setup_time para
    cada troca entre bobinas consecutivas da mesma linha.
    """
    loads = []
    for spec in line_specs:
        count = sum(1 for p in patterns if p.assigned_line == spec.line_name)
        changes = max(0, count - 1)
        loads.append(LineLoad(
            line_name=spec.line_name,
            coil_count=count,
            setup_changes=changes,
            estimated_minutes=count * MINUTES_PER_COIL + changes * spec.setup_time,
            setup_cost=changes * spec.setup_change_cost,
        ))
    return loads


def aggregate_metrics(
    patterns: List[SlittingPattern],
    orders: List[Order],
    order_slits_assigned: Dict[str, int],
    line_specs: List[LineSpec] = (),
) -> PlanMetrics:
    """
    Calcula as métricas agregadas do plano

    Args:
        patterns: Padrões finais, já com a linha definitiva
        orders: Todos os pedidos da rodada
        order_slits_assigned: Tiras atribuídas por pedido durante a extração
        line_specs: Linhas para o resumo de carga

    Returns:
        Rendimento médio, sucata total, classificação dos pedidos em
        atendidos, parciais e não atendidos e a carga por linha
    """
    yields = np.array([p.yield_percent for p in patterns], dtype=float)
    scraps = np.array([p.scrap_width for p in patterns], dtype=float)

    metrics = PlanMetrics(
        total_yield=float(yields.mean()) if yields.size else 0.0,
        total_scrap=float(scraps.sum()),
        total_orders=len(orders),
        line_loads=compute_line_loads(patterns, list(line_specs)),
    )

    for order in orders:
        assigned = order_slits_assigned.get(order.order_id, 0)
        metrics.order_slits_assigned[order.order_id] = assigned
        if assigned >= order.no_of_slit:
            metrics.orders_covered += 1
        elif assigned > 0:
            metrics.partially_fulfilled_orders += 1
        else:
            metrics.unfulfilled_orders += 1

    return metrics
