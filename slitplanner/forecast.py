"""
Cobertura de matéria-prima: quanto do estoque de bobinas serve a cada pedido
"""

import logging
from typing import List

import numpy as np

from .models import Coil, Order, OrderCoverage
from .compatibility import is_compatible
from .settings import DEFAULT_THICKNESS_TOLERANCE

logger = logging.getLogger(__name__)


def find_compatible_coils(
    order: Order,
    coils: List[Coil],
    thickness_tolerance: float = DEFAULT_THICKNESS_TOLERANCE,
) -> List[Coil]:
    """Bobinas de mesmo material e largura suficiente para a tira do pedido"""
    return [
        coil for coil in coils
        if is_compatible(coil, order, thickness_tolerance) and coil.width >= order.required_width
    ]


def order_rm_coverage(
    orders: List[Order],
    coils: List[Coil],
    thickness_tolerance: float = DEFAULT_THICKNESS_TOLERANCE,
) -> List[OrderCoverage]:
    """
    Compara o peso de cada pedido com o peso das bobinas compatíveis

    Cada pedido é avaliado contra todo o estoque, sem descontar bobinas
    já consideradas para outros pedidos.
    """
    coverage = []
    for order in orders:
        compatible = find_compatible_coils(order, coils, thickness_tolerance)
        available = float(np.sum([c.weight for c in compatible])) if compatible else 0.0
        can_fulfill = available >= order.weight
        coverage.append(OrderCoverage(
            order_id=order.order_id,
            compatible_coils=[c.coil_id for c in compatible],
            available_weight=available,
            required_weight=order.weight,
            can_fulfill=can_fulfill,
            shortfall=0.0 if can_fulfill else order.weight - available,
        ))

    short = [c.order_id for c in coverage if not c.can_fulfill]
    if short:
        logger.info("Pedidos sem matéria-prima suficiente: %s", ", ".join(short))
    return coverage
