"""
Geração de padrões de corte longitudinal por bobina
"""

import logging
from dataclasses import dataclass, field
from typing import List, Dict

from .models import LineSpec
from .settings import DEFAULT_MAX_PATTERNS_PER_COIL

logger = logging.getLogger(__name__)

EXACT_REMAINING_BONUS = 20.0


@dataclass(frozen=True)
class SlitDemand:
    """Demanda de um pedido compatível, vista pelo gerador"""
    order_id: str
    width: float
    no_of_slit: int
    remaining_slits: int


@dataclass
class CuttingPattern:
    """Combinação de larguras de tira que cabe na largura útil da bobina"""
    widths: List[float]
    order_indices: List[int]
    slit_counts: Dict[int, int]
    used_width: float
    waste: float
    fulfillment_score: float = field(default=0.0, compare=False)

    @property
    def knife_count(self) -> int:
        return len(self.widths)


def slit_fulfillment_score(slit_counts: Dict[int, int], demands: List[SlitDemand]) -> float:
    """
    Pontuação de atendimento de tiras usada na ordenação dos candidatos

    Para cada pedido tocado: min(tiras / requeridas, 1) x 100, mais um bônus
    quando a contagem fecha exatamente o saldo restante do pedido.
    """
    score = 0.0
    for index, count in slit_counts.items():
        demand = demands[index]
        score += min(count / demand.no_of_slit, 1.0) * 100
        if count == demand.remaining_slits:
            score += EXACT_REMAINING_BONUS
    return score


def generate_patterns(
    coil_width: float,
    demands: List[SlitDemand],
    line_spec: LineSpec,
    max_patterns: int = DEFAULT_MAX_PATTERNS_PER_COIL,
) -> List[CuttingPattern]:
    """
    Enumera padrões viáveis para uma bobina

    Args:
        coil_width: Largura da bobina (mm)
        demands: Pedidos compatíveis com o saldo de tiras de cada um
        line_spec: Linha escolhida para a bobina
        max_patterns: Quantos padrões manter após a ordenação

    Returns:
        Padrões ordenados por atendimento (desc) e desperdício (asc);
        lista vazia se nenhuma tira couber
    """
    edge_trim = line_spec.scrap_edge_min * 2
    usable_width = coil_width - edge_trim
    max_knives = line_spec.max_knives

    patterns: List[CuttingPattern] = []
    widths: List[float] = []
    order_indices: List[int] = []
    slit_counts: Dict[int, int] = {}

    def _enumerate(remaining: float, start_index: int) -> None:
        # Todo prefixo não vazio é um candidato, não só as folhas
        if widths and len(widths) <= max_knives:
            patterns.append(CuttingPattern(
                widths=list(widths),
                order_indices=list(order_indices),
                slit_counts=dict(slit_counts),
                used_width=sum(widths),
                waste=remaining + edge_trim,
            ))

        if len(widths) >= max_knives:
            return

        for i in range(start_index, len(demands)):
            demand = demands[i]
            current = slit_counts.get(i, 0)
            if (
                demand.width <= remaining
                and line_spec.min_slit_width <= demand.width <= line_spec.max_slit_width
                and current < demand.remaining_slits
            ):
                widths.append(demand.width)
                order_indices.append(i)
                slit_counts[i] = current + 1

                _enumerate(remaining - demand.width, i)

                widths.pop()
                order_indices.pop()
                if current:
                    slit_counts[i] = current
                else:
                    del slit_counts[i]

    _enumerate(usable_width, 0)

    for pattern in patterns:
        pattern.fulfillment_score = slit_fulfillment_score(pattern.slit_counts, demands)

    patterns.sort(key=lambda p: (-p.fulfillment_score, p.waste))

    logger.debug(
        "Bobina de %.1fmm: %d padrões enumerados, %d mantidos",
        coil_width, len(patterns), min(len(patterns), max_patterns),
    )
    return patterns[:max_patterns]
