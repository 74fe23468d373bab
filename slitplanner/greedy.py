"""
Algoritmo guloso construtivo usado quando o modelo não seleciona nada
"""

import logging
from dataclasses import dataclass, field
from typing import List, Dict

from .models import Coil, Order, LineSpec, SlitWidth, SlittingPattern
from .compatibility import find_line_spec, is_compatible
from .settings import DEFAULT_THICKNESS_TOLERANCE

logger = logging.getLogger(__name__)


@dataclass
class GreedyPlan:
    """Padrões gulosos e o acumulado de tiras por pedido"""
    patterns: List[SlittingPattern] = field(default_factory=list)
    order_slits_assigned: Dict[str, int] = field(default_factory=dict)


def sort_orders(orders: List[Order]) -> List[Order]:
    """Prioridade (High primeiro), mais tiras primeiro, maior largura primeiro"""
    return sorted(orders, key=lambda o: (o.priority.rank, -o.no_of_slit, -o.required_width))


def run_greedy(
    coils: List[Coil],
    orders: List[Order],
    line_specs: List[LineSpec],
    thickness_tolerance: float = DEFAULT_THICKNESS_TOLERANCE,
) -> GreedyPlan:
    """
    Empacota tiras bobina a bobina

    Bobinas maiores primeiro. Para cada bobina, percorre os pedidos ordenados
    e atribui quantas tiras couberem por largura e por facas, limitado ao
    saldo do pedido. Uma posição de faca fica sempre reservada.
    """
    plan = GreedyPlan()
    sorted_coils = sorted(coils, key=lambda c: -c.width)
    sorted_orders = sort_orders(orders)

    for coil in sorted_coils:
        line_spec = find_line_spec(coil, line_specs)
        if line_spec is None:
            continue

        remaining_width = coil.width - line_spec.scrap_edge_min * 2
        knife_count = 0
        slit_widths: List[SlitWidth] = []

        for order in sorted_orders:
            if knife_count >= line_spec.max_knives - 1:
                break
            if not is_compatible(coil, order, thickness_tolerance):
                continue
            if not line_spec.min_slit_width <= order.required_width <= line_spec.max_slit_width:
                continue

            assigned = plan.order_slits_assigned.get(order.order_id, 0)
            needed = order.no_of_slit - assigned
            if needed <= 0:
                continue

            fit_by_width = int(remaining_width // order.required_width)
            fit_by_knives = line_spec.max_knives - knife_count - 1
            slits = min(fit_by_width, fit_by_knives, needed)
            if slits <= 0:
                continue

            slit_widths.append(SlitWidth(width=order.required_width, order_id=order.order_id, quantity=slits))
            remaining_width -= order.required_width * slits
            knife_count += slits
            plan.order_slits_assigned[order.order_id] = assigned + slits

        if not slit_widths:
            continue

        used_width = sum(s.width * s.quantity for s in slit_widths)
        yield_percent = used_width / coil.width * 100
        plan.patterns.append(SlittingPattern(
            pattern_key=f"pattern-{coil.coil_id}-greedy",
            coil_id=coil.coil_id,
            pattern_id=f"P-G-{len(plan.patterns) + 1}",
            slit_widths=slit_widths,
            scrap_width=coil.width - used_width,
            yield_percent=yield_percent,
            score=yield_percent,
            assigned_line=line_spec.line_name,
        ))

    logger.info("Guloso: %d padrões para %d bobinas", len(plan.patterns), len(coils))
    return plan
