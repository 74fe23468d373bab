"""
Núcleo do sistema SlitPlanner com o pipeline de otimização
"""

import time
import logging
from dataclasses import dataclass, field, replace
from functools import reduce
from typing import List, Dict, Tuple, Optional, FrozenSet

from .models import (
    Coil, Order, LineSpec, Weights, SlitWidth, SlittingPattern,
    OptimizationResult, OptimizationRequest, SolverStatus,
)
from .compatibility import find_compatible_pairs
from .patterns import SlitDemand, generate_patterns
from .objective import CandidatePattern, build_objective_model
from .solver import BranchAndBoundSolver, SolveResult
from .greedy import run_greedy
from .balancing import balance_lines
from .metrics import aggregate_metrics, compute_line_loads
from .forecast import order_rm_coverage
from .exceptions import InvalidPlanInput
from .settings import PlannerSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionState:
    """Acumulador da extração: bobinas usadas, tiras por pedido e padrões"""
    used_coils: FrozenSet[str] = frozenset()
    order_slits_assigned: Dict[str, int] = field(default_factory=dict)
    patterns: Tuple[SlittingPattern, ...] = ()


def group_slits(candidate: CandidatePattern) -> List[SlitWidth]:
    """Agrupa as tiras por largura; cada grupo leva o primeiro pedido daquela largura"""
    groups: Dict[float, List] = {}
    for index in candidate.pattern.order_indices:
        order = candidate.orders[index]
        if order.required_width in groups:
            groups[order.required_width][1] += 1
        else:
            groups[order.required_width] = [order.order_id, 1]
    return [SlitWidth(width=w, order_id=oid, quantity=q) for w, (oid, q) in groups.items()]


def _extract_step(state: ExtractionState, item: Tuple[CandidatePattern, float]) -> ExtractionState:
    candidate, score = item
    coil = candidate.coil

    assigned = dict(state.order_slits_assigned)
    for order_id, count in candidate.slits_by_order().items():
        assigned[order_id] = assigned.get(order_id, 0) + count

    pattern = SlittingPattern(
        pattern_key=f"pattern-{coil.coil_id}-or",
        coil_id=coil.coil_id,
        pattern_id=f"P-OR-{len(state.patterns) + 1}",
        slit_widths=group_slits(candidate),
        scrap_width=candidate.pattern.waste,
        yield_percent=candidate.yield_percent,
        score=score,
        assigned_line=candidate.line_spec.line_name,
    )
    return replace(
        state,
        used_coils=state.used_coils | {coil.coil_id},
        order_slits_assigned=assigned,
        patterns=state.patterns + (pattern,),
    )


def extract_patterns(
    candidates: List[CandidatePattern],
    scores: List[float],
    variables: List[int],
    solution: SolveResult,
) -> ExtractionState:
    """
    Converte a atribuição do solver em padrões de saída

    Percorre os candidatos em ordem; um candidato selecionado cuja bobina já
    foi usada é ignorado.
    """
    def step(state: ExtractionState, index: int) -> ExtractionState:
        candidate = candidates[index]
        if solution.value(variables[index]) != 1 or candidate.coil.coil_id in state.used_coils:
            return state
        return _extract_step(state, (candidate, scores[index]))

    return reduce(step, range(len(candidates)), ExtractionState())


def _check_unique_ids(coils: List[Coil], orders: List[Order]) -> None:
    """A extração e o acumulado de tiras são indexados por ID"""
    for label, ids in (("bobina", [c.coil_id for c in coils]), ("pedido", [o.order_id for o in orders])):
        repeated = sorted({i for i in ids if ids.count(i) > 1})
        if repeated:
            raise InvalidPlanInput(f"IDs de {label} repetidos: {', '.join(repeated)}")


class SlitPlanner:
    """
    Sistema principal de otimização do corte longitudinal de bobinas
    """

    def __init__(self, settings: Optional[PlannerSettings] = None):
        """
        Inicializa o planejador

        Args:
            settings: Orçamento do solver e limites de enumeração
        """
        self.settings = settings or PlannerSettings()
        self.solver = BranchAndBoundSolver(node_budget=self.settings.node_budget)

    def optimize_request(self, request: OptimizationRequest) -> OptimizationResult:
        """Otimiza a partir de uma requisição já validada"""
        return self.optimize(request.coils, request.orders, request.line_specs, request.weights)

    def optimize(
        self,
        coils: List[Coil],
        orders: List[Order],
        line_specs: List[LineSpec],
        weights: Optional[Weights] = None,
    ) -> OptimizationResult:
        """
        Seleciona padrões de corte para as bobinas

        Args:
            coils: Bobinas disponíveis
            orders: Pedidos a atender
            line_specs: Linhas de corte
            weights: Pesos do objetivo

        Returns:
            Resultado da otimização; nunca levanta exceção por falta de solução

        Raises:
            InvalidPlanInput: IDs de bobina ou de pedido repetidos
        """
        start_time = time.time()
        weights = weights or Weights()
        _check_unique_ids(coils, orders)

        rm_coverage = order_rm_coverage(orders, coils, self.settings.thickness_tolerance)

        if not coils or not orders or not line_specs:
            logger.info("Entrada vazia: %d bobinas, %d pedidos, %d linhas", len(coils), len(orders), len(line_specs))
            result = OptimizationResult(
                total_orders=len(orders),
                line_loads=compute_line_loads([], line_specs),
                rm_coverage=rm_coverage,
            )
            return self._finish(result, start_time)

        candidates = self._generate_candidates(coils, orders, line_specs)

        status = SolverStatus.NOT_RUN
        metadata = {"candidates": len(candidates)}
        extraction = ExtractionState()

        if candidates:
            objective = build_objective_model(candidates, weights)
            solution = self.solver.solve(objective.model)
            status = solution.status
            metadata.update(
                nodes_explored=solution.nodes_explored,
                budget_exhausted=solution.budget_exhausted,
                objective=solution.objective,
            )
            extraction = extract_patterns(candidates, objective.scores, objective.variables, solution)

        if extraction.patterns:
            patterns = list(extraction.patterns)
            assigned = extraction.order_slits_assigned
            algorithm = "branch_and_bound"
        else:
            logger.warning("Nenhum padrão selecionado pelo modelo, usando algoritmo guloso")
            plan = run_greedy(coils, orders, line_specs, self.settings.thickness_tolerance)
            patterns = plan.patterns
            assigned = plan.order_slits_assigned
            algorithm = "greedy"

        patterns = balance_lines(patterns, line_specs)
        metrics = aggregate_metrics(patterns, orders, assigned, line_specs)

        result = OptimizationResult(
            patterns=patterns,
            total_yield=metrics.total_yield,
            total_scrap=metrics.total_scrap,
            orders_covered=metrics.orders_covered,
            total_orders=metrics.total_orders,
            partially_fulfilled_orders=metrics.partially_fulfilled_orders,
            order_slits_assigned=metrics.order_slits_assigned,
            line_loads=metrics.line_loads,
            rm_coverage=rm_coverage,
            solver_status=status,
            algorithm_used=algorithm,
            metadata=metadata,
        )
        logger.info(
            "Plano com %d padrões, rendimento médio %.2f%%, %d/%d pedidos atendidos",
            len(patterns), result.total_yield, result.orders_covered, result.total_orders,
        )
        return self._finish(result, start_time)

    def _generate_candidates(
        self,
        coils: List[Coil],
        orders: List[Order],
        line_specs: List[LineSpec],
    ) -> List[CandidatePattern]:
        """Filtra compatibilidades e enumera os padrões de cada bobina"""
        pairs = find_compatible_pairs(coils, orders, line_specs, self.settings.thickness_tolerance)

        candidates = []
        for pair in pairs:
            demands = [
                SlitDemand(
                    order_id=o.order_id,
                    width=o.required_width,
                    no_of_slit=o.no_of_slit,
                    remaining_slits=o.no_of_slit,
                )
                for o in pair.orders
            ]
            patterns = generate_patterns(
                pair.coil.width, demands, pair.line_spec, self.settings.max_patterns_per_coil
            )
            candidates.extend(
                CandidatePattern(coil=pair.coil, pattern=p, line_spec=pair.line_spec, orders=pair.orders)
                for p in patterns
            )

        logger.debug("%d bobinas compatíveis, %d candidatos", len(pairs), len(candidates))
        return candidates

    @staticmethod
    def _finish(result: OptimizationResult, start_time: float) -> OptimizationResult:
        result.processing_time = (time.time() - start_time) * 1000
        return result


def optimize(
    coils: List[Coil],
    orders: List[Order],
    line_specs: List[LineSpec],
    weights: Optional[Weights] = None,
) -> OptimizationResult:
    """Método de conveniência com as configurações padrão"""
    return SlitPlanner().optimize(coils, orders, line_specs, weights)
