"""
Filtro de compatibilidade bobina x pedido x linha
"""

from dataclasses import dataclass
from typing import List, Optional

from .models import Coil, Order, LineSpec
from .settings import DEFAULT_THICKNESS_TOLERANCE


@dataclass(frozen=True)
class CompatiblePair:
    """Bobina com seus pedidos compatíveis e a linha escolhida"""
    coil: Coil
    orders: List[Order]
    line_spec: LineSpec


def is_compatible(coil: Coil, order: Order, thickness_tolerance: float = DEFAULT_THICKNESS_TOLERANCE) -> bool:
    """Mesma classe, mesmo grau e espessura dentro da tolerância"""
    return (
        order.material_class == coil.material_class
        and order.grade == coil.grade
        and abs(order.thickness - coil.thickness) < thickness_tolerance
    )


def find_line_spec(coil: Coil, line_specs: List[LineSpec]) -> Optional[LineSpec]:
    """Primeira linha permitida para a bobina que processa sua classe de material"""
    for spec in line_specs:
        if spec.line_name in coil.line_compatibility and spec.supports(coil.material_class):
            return spec
    return None


def find_compatible_pairs(
    coils: List[Coil],
    orders: List[Order],
    line_specs: List[LineSpec],
    thickness_tolerance: float = DEFAULT_THICKNESS_TOLERANCE,
) -> List[CompatiblePair]:
    """
    Associa cada bobina aos pedidos compatíveis e a uma linha viável

    Bobinas sem pedidos compatíveis ou sem linha capaz são descartadas.
    """
    pairs = []
    for coil in coils:
        compatible_orders = [o for o in orders if is_compatible(coil, o, thickness_tolerance)]
        if not compatible_orders:
            continue

        line_spec = find_line_spec(coil, line_specs)
        if line_spec is None:
            continue

        pairs.append(CompatiblePair(coil=coil, orders=compatible_orders, line_spec=line_spec))

    return pairs
