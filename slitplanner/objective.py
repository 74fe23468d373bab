"""
Formulação de cobertura de conjuntos sobre os padrões candidatos
"""

import logging
from dataclasses import dataclass
from typing import List, Dict

from .models import Coil, Order, LineSpec, Weights
from .patterns import CuttingPattern
from .solver import CpModel

logger = logging.getLogger(__name__)

FULFILLMENT_WEIGHT = 50.0
EXACT_MATCH_BONUS = 25.0


@dataclass
class CandidatePattern:
    """Padrão candidato ligado à sua bobina, linha e pedidos compatíveis"""
    coil: Coil
    pattern: CuttingPattern
    line_spec: LineSpec
    orders: List[Order]

    @property
    def yield_percent(self) -> float:
        return self.pattern.used_width / self.coil.width * 100

    def slits_by_order(self) -> Dict[str, int]:
        """Tiras do padrão agrupadas por pedido, na ordem de corte"""
        counts: Dict[str, int] = {}
        for index in self.pattern.order_indices:
            order_id = self.orders[index].order_id
            counts[order_id] = counts.get(order_id, 0) + 1
        return counts


@dataclass
class ObjectiveModel:
    """Modelo CP com uma variável booleana por candidato"""
    model: CpModel
    candidates: List[CandidatePattern]
    variables: List[int]
    scores: List[float]


def pattern_score(candidate: CandidatePattern, weights: Weights) -> float:
    """
    Coeficiente do candidato no objetivo

    rendimento x w1 + atendimento x w2 - sucata x w3 - facas x w4, com os
    pesos lidos como percentuais. O atendimento é medido contra a quantidade
    original de tiras de cada pedido.
    """
    pattern = candidate.pattern
    yield_score = candidate.yield_percent * (weights.w1 / 100)

    orders_by_id = {o.order_id: o for o in candidate.orders}
    fulfillment = 0.0
    for order_id, slit_count in candidate.slits_by_order().items():
        required = orders_by_id[order_id].no_of_slit
        fulfillment += min(slit_count / required, 1.0) * FULFILLMENT_WEIGHT
        if slit_count == required:
            fulfillment += EXACT_MATCH_BONUS

    order_score = fulfillment * (weights.w2 / 100)
    scrap_penalty = (pattern.waste / 100) * (weights.w3 / 100)
    setup_penalty = pattern.knife_count * (weights.w4 / 100)

    return yield_score + order_score - scrap_penalty - setup_penalty


def build_objective_model(candidates: List[CandidatePattern], weights: Weights) -> ObjectiveModel:
    """
    Cria variáveis, restrições por bobina e o objetivo de maximização

    Cada bobina recebe uma restrição 0 <= soma dos seus padrões <= 1.
    """
    model = CpModel()
    variables = [model.new_bool_var(f"pattern_{i}") for i in range(len(candidates))]

    by_coil: Dict[str, List[int]] = {}
    for i, candidate in enumerate(candidates):
        by_coil.setdefault(candidate.coil.coil_id, []).append(i)

    for indices in by_coil.values():
        model.add_linear_constraint([(variables[i], 1) for i in indices], 0, 1)

    scores = []
    for var, candidate in zip(variables, candidates):
        score = pattern_score(candidate, weights)
        model.add_objective_term(var, score)
        scores.append(score)

    model.set_maximize(True)

    logger.debug("Modelo com %d variáveis e %d restrições", len(variables), len(model.constraints))
    return ObjectiveModel(model=model, candidates=candidates, variables=variables, scores=scores)
