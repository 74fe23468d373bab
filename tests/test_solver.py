from __future__ import annotations

import pytest

from slitplanner.models import SolverStatus
from slitplanner.solver import BranchAndBoundSolver, CpModel, VarKind


def test_at_most_one_picks_best_coefficient():
    model = CpModel()
    xs = [model.new_bool_var(f"x{i}") for i in range(3)]
    model.add_linear_constraint([(x, 1) for x in xs], 0, 1)
    for x, score in zip(xs, [5.0, 12.0, 7.0]):
        model.add_objective_term(x, score)

    result = BranchAndBoundSolver().solve(model)
    assert result.status == SolverStatus.OPTIMAL
    assert result.values == [0, 1, 0]
    assert result.objective == pytest.approx(12.0)


def test_independent_groups_are_solved_together():
    model = CpModel()
    a = [model.new_bool_var(f"a{i}") for i in range(2)]
    b = [model.new_bool_var(f"b{i}") for i in range(3)]
    model.add_linear_constraint([(x, 1) for x in a], 0, 1)
    model.add_linear_constraint([(x, 1) for x in b], 0, 1)
    for x, score in zip(a + b, [3.0, 4.0, 1.0, 9.0, 2.0]):
        model.add_objective_term(x, score)

    result = BranchAndBoundSolver().solve(model)
    assert [result.value(x) for x in a] == [0, 1]
    assert [result.value(x) for x in b] == [0, 1, 0]
    assert result.objective == pytest.approx(13.0)


def test_negative_coefficients_are_left_unselected():
    model = CpModel()
    x = model.new_bool_var("x")
    y = model.new_bool_var("y")
    model.add_linear_constraint([(x, 1), (y, 1)], 0, 1)
    model.add_objective_term(x, -2.0)
    model.add_objective_term(y, -1.0)

    result = BranchAndBoundSolver().solve(model)
    assert result.values == [0, 0]
    assert result.objective == 0


def test_minimization_prefers_zero():
    model = CpModel()
    x = model.new_bool_var("x")
    model.add_objective_term(x, 3.0)
    model.set_maximize(False)
    assert BranchAndBoundSolver().solve(model).values == [0]


def test_integer_variable_with_lower_bound_constraint():
    model = CpModel()
    n = model.new_int_var(0, 5, "n")
    x = model.new_bool_var("x")
    model.add_linear_constraint([(n, 1), (x, 2)], 3, 4)
    model.add_objective_term(n, 1.0)
    model.add_objective_term(x, 1.5)

    result = BranchAndBoundSolver().solve(model)
    assert result.status == SolverStatus.OPTIMAL
    # n + 2x in [3, 4]: best is n=4, x=0 (4.0) vs n=2, x=1 (3.5)
    assert result.values == [4, 0]
    assert model.variables[n].kind == VarKind.INT


def test_empty_model_is_trivially_optimal():
    result = BranchAndBoundSolver().solve(CpModel())
    assert result.status == SolverStatus.OPTIMAL
    assert result.values == []
    assert result.objective == 0


def test_infeasible_model_falls_back_to_local_repair():
    model = CpModel()
    x = model.new_bool_var("x")
    y = model.new_bool_var("y")
    model.add_linear_constraint([(x, 1), (y, 1)], 3, 5)
    model.add_objective_term(x, 1.0)

    result = BranchAndBoundSolver().solve(model)
    assert result.status == SolverStatus.FEASIBLE
    assert result.values == [1, 1]


def test_repair_adjusts_violated_constraints_in_order():
    model = CpModel()
    xs = [model.new_bool_var(f"x{i}") for i in range(3)]
    model.add_linear_constraint([(x, 1) for x in xs], 0, 1)
    model.add_linear_constraint([(xs[0], 1)], 2, 2)

    result = BranchAndBoundSolver().solve(model)
    assert result.status == SolverStatus.FEASIBLE
    # First constraint steps every variable down, the second steps x0 back up
    assert result.values == [1, 0, 0]


def test_node_budget_keeps_best_found_so_far():
    model = CpModel()
    xs = [model.new_bool_var(f"x{i}") for i in range(40)]
    for i in range(0, 40, 4):
        model.add_linear_constraint([(x, 1) for x in xs[i:i + 4]], 0, 1)
    for i, x in enumerate(xs):
        model.add_objective_term(x, float(i % 4))

    result = BranchAndBoundSolver(node_budget=100).solve(model)
    assert result.budget_exhausted
    assert result.nodes_explored == 100
    assert result.status == SolverStatus.OPTIMAL
    for i in range(0, 40, 4):
        assert sum(result.values[i:i + 4]) <= 1


def test_search_is_deterministic():
    def build():
        model = CpModel()
        xs = [model.new_bool_var(f"x{i}") for i in range(30)]
        for i in range(0, 30, 5):
            model.add_linear_constraint([(x, 1) for x in xs[i:i + 5]], 0, 1)
        for i, x in enumerate(xs):
            model.add_objective_term(x, float((i * 7) % 11))
        return model

    first = BranchAndBoundSolver(node_budget=200).solve(build())
    second = BranchAndBoundSolver(node_budget=200).solve(build())
    assert first.values == second.values
    assert first.nodes_explored == second.nodes_explored


def test_empty_int_domain_is_rejected():
    with pytest.raises(ValueError):
        CpModel().new_int_var(3, 1, "bad")
