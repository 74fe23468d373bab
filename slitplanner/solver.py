"""
Modelo de restrições no estilo CP-SAT e solver branch-and-bound
"""

import logging
from bisect import bisect_left
from dataclasses import dataclass
from enum import Enum
from typing import List, Dict, Optional, Tuple

from .models import SolverStatus
from .settings import DEFAULT_NODE_BUDGET

logger = logging.getLogger(__name__)

MAX_INT_BRANCHES = 10


class VarKind(str, Enum):
    BOOL = "bool"
    INT = "int"


@dataclass(frozen=True)
class Variable:
    index: int
    name: str
    kind: VarKind
    lower: int
    upper: int


@dataclass(frozen=True)
class LinearTerm:
    var: int
    coefficient: float


@dataclass(frozen=True)
class LinearConstraint:
    index: int
    terms: Tuple[LinearTerm, ...]
    lower: float
    upper: float

    @property
    def is_at_most_one(self) -> bool:
        return self.upper == 1 and all(t.coefficient == 1 for t in self.terms)


@dataclass
class SolveResult:
    """Resultado da busca"""
    status: SolverStatus
    objective: float
    values: List[int]
    nodes_explored: int = 0
    budget_exhausted: bool = False

    def value(self, var: int) -> int:
        return self.values[var] if 0 <= var < len(self.values) else 0


class CpModel:
    """
    Modelo linear com variáveis inteiras e booleanas

    Variáveis e restrições vivem em arenas indexadas por inteiro; as
    referências entre elas são sempre índices, nunca nomes.
    """

    def __init__(self):
        self.variables: List[Variable] = []
        self.constraints: List[LinearConstraint] = []
        self.objective: Dict[int, float] = {}
        self.maximize = True

    def new_bool_var(self, name: str) -> int:
        return self._add_var(name, VarKind.BOOL, 0, 1)

    def new_int_var(self, lower: int, upper: int, name: str) -> int:
        if lower > upper:
            raise ValueError(f"Domínio vazio para {name}: [{lower}, {upper}]")
        return self._add_var(name, VarKind.INT, lower, upper)

    def _add_var(self, name: str, kind: VarKind, lower: int, upper: int) -> int:
        index = len(self.variables)
        self.variables.append(Variable(index=index, name=name, kind=kind, lower=lower, upper=upper))
        return index

    def add_linear_constraint(self, terms: List[Tuple[int, float]], lower: float, upper: float) -> int:
        """sum(coef * var) dentro de [lower, upper]"""
        index = len(self.constraints)
        self.constraints.append(LinearConstraint(
            index=index,
            terms=tuple(LinearTerm(var=v, coefficient=c) for v, c in terms),
            lower=lower,
            upper=upper,
        ))
        return index

    def add_objective_term(self, var: int, coefficient: float) -> None:
        self.objective[var] = self.objective.get(var, 0.0) + coefficient

    def set_maximize(self, maximize: bool = True) -> None:
        self.maximize = maximize

    def objective_value(self, values: List[int]) -> float:
        return sum(coef * values[var] for var, coef in self.objective.items())


def _term_range(coefficient: float, var: Variable) -> Tuple[float, float]:
    """Menor e maior contribuição de um termo com a variável livre"""
    if coefficient > 0:
        return coefficient * var.lower, coefficient * var.upper
    return coefficient * var.upper, coefficient * var.lower


class BranchAndBoundSolver:
    """
    Busca em profundidade sobre atribuições parciais

    As variáveis são fixadas na ordem de criação. Cada restrição mantém os
    limites mínimo/máximo atingíveis e o ramo é abandonado quando um deles
    sai do intervalo permitido, ou quando a estimativa otimista do objetivo
    não supera a melhor solução já encontrada. O orçamento é um número de
    nós, então a mesma entrada sempre gera a mesma saída.
    """

    def __init__(self, node_budget: int = DEFAULT_NODE_BUDGET):
        self.node_budget = node_budget

    def solve(self, model: CpModel) -> SolveResult:
        n = len(model.variables)
        sign = 1.0 if model.maximize else -1.0
        variables = model.variables
        constraints = model.constraints

        # Coeficientes no sentido de maximização
        gains = [sign * model.objective.get(i, 0.0) for i in range(n)]
        best_of = [max(gains[i] * v.lower, gains[i] * v.upper) for i, v in enumerate(variables)]

        var_terms: List[List[Tuple[int, float]]] = [[] for _ in range(n)]
        low = [0.0] * len(constraints)
        high = [0.0] * len(constraints)
        for constraint in constraints:
            for term in constraint.terms:
                var_terms[term.var].append((constraint.index, term.coefficient))
                lo, hi = _term_range(term.coefficient, variables[term.var])
                low[constraint.index] += lo
                high[constraint.index] += hi

        groups = self._exclusive_groups(model)
        members: Dict[int, List[int]] = {}
        for var, g in sorted(groups.items()):
            members.setdefault(g, []).append(var)
        suffix_best: Dict[int, List[float]] = {}
        for g, vs in members.items():
            running, acc = 0.0, []
            for var in reversed(vs):
                running = max(running, best_of[var])
                acc.append(running)
            suffix_best[g] = acc[::-1]
        closed = dict.fromkeys(members, 0)

        free_suffix = [0.0] * (n + 1)
        for i in range(n - 1, -1, -1):
            free_suffix[i] = free_suffix[i + 1] + (0.0 if i in groups else best_of[i])

        def violated(c: int) -> bool:
            return high[c] < constraints[c].lower or low[c] > constraints[c].upper

        def fix(var: int, value: int, undo: bool = False) -> None:
            step = -1 if undo else 1
            for c, coef in var_terms[var]:
                lo, hi = _term_range(coef, variables[var])
                low[c] += step * (coef * value - lo)
                high[c] += step * (coef * value - hi)
            if value and var in groups:
                closed[groups[var]] += step

        def bound(depth: int, gain: float) -> float:
            total = gain + free_suffix[depth]
            for g, vs in members.items():
                if closed[g]:
                    continue
                k = bisect_left(vs, depth)
                if k < len(vs):
                    total += suffix_best[g][k]
            return total

        def candidate_values(var: Variable) -> List[int]:
            if var.kind == VarKind.BOOL:
                return [1, 0] if model.maximize else [0, 1]
            span = min(var.upper - var.lower + 1, MAX_INT_BRANCHES)
            if model.maximize:
                return [var.upper - k for k in range(span)]
            return [var.lower + k for k in range(span)]

        best_values: Optional[List[int]] = None
        best_gain = float("-inf")
        nodes = 0
        exhausted = False

        assignment = [0] * n
        pending: List[List[int]] = [[] for _ in range(n)]
        gain = 0.0
        depth = 0
        entering = True
        if any(violated(c.index) for c in constraints):
            depth = -1

        while depth >= 0:
            if entering:
                entering = False
                prune = depth == n or (best_values is not None and bound(depth, gain) <= best_gain)
                if depth == n and gain > best_gain:
                    best_gain = gain
                    best_values = list(assignment)
                if depth < n:
                    # Pilha: o último valor é o primeiro tentado
                    pending[depth] = [] if prune else candidate_values(variables[depth])[::-1]

            if depth == n or not pending[depth]:
                depth -= 1
                if depth >= 0:
                    fix(depth, assignment[depth], undo=True)
                    gain -= gains[depth] * assignment[depth]
                continue

            if nodes >= self.node_budget:
                exhausted = True
                break

            value = pending[depth].pop()
            nodes += 1
            fix(depth, value)
            if any(violated(c) for c, _ in var_terms[depth]):
                fix(depth, value, undo=True)
                continue

            assignment[depth] = value
            gain += gains[depth] * value
            depth += 1
            entering = True

        if best_values is not None:
            logger.debug("Busca concluída: %d nós, objetivo %.4f", nodes, sign * best_gain)
            return SolveResult(
                status=SolverStatus.OPTIMAL,
                objective=model.objective_value(best_values),
                values=best_values,
                nodes_explored=nodes,
                budget_exhausted=exhausted,
            )

        logger.warning("Nenhuma atribuição completa em %d nós, aplicando reparo local", nodes)
        values = self._repair(model)
        return SolveResult(
            status=SolverStatus.FEASIBLE,
            objective=model.objective_value(values),
            values=values,
            nodes_explored=nodes,
            budget_exhausted=exhausted,
        )

    @staticmethod
    def _exclusive_groups(model: CpModel) -> Dict[int, int]:
        """Variável booleana -> restrição 'no máximo um' que a contém"""
        groups: Dict[int, int] = {}
        for constraint in model.constraints:
            if not constraint.is_at_most_one:
                continue
            for term in constraint.terms:
                if model.variables[term.var].kind == VarKind.BOOL:
                    groups.setdefault(term.var, constraint.index)
        return groups

    @staticmethod
    def _repair(model: CpModel) -> List[int]:
        """
        Reparo guloso local

        Booleanas começam no valor favorável ao objetivo e inteiras no meio do
        domínio; cada restrição violada empurra suas variáveis de coeficiente
        positivo um passo na direção do limite. Não revalida o resultado.
        """
        values = []
        for var in model.variables:
            if var.kind == VarKind.BOOL:
                values.append(1 if model.maximize else 0)
            else:
                values.append((var.lower + var.upper) // 2)

        for constraint in model.constraints:
            total = sum(t.coefficient * values[t.var] for t in constraint.terms)
            if constraint.lower <= total <= constraint.upper:
                continue
            for term in constraint.terms:
                if term.coefficient <= 0:
                    continue
                var = model.variables[term.var]
                if total < constraint.lower:
                    values[term.var] = min(var.upper, values[term.var] + 1)
                elif total > constraint.upper:
                    values[term.var] = max(var.lower, values[term.var] - 1)

        return values
