import pytest
from ortools.sat.python import cp_model

from lattice_solver.app.engine_types import CostWeights, GeneratorPair, Problem, Vector2


def _problem(a, b, target, cost_a=3, cost_b=1, bound=None):
    return Problem(
        generators=GeneratorPair(a=Vector2(*a), b=Vector2(*b)),
        target=Vector2(*target),
        weights=CostWeights(cost_a=cost_a, cost_b=cost_b),
        bound=bound,
    )


def _brute_force(problem, limit):
    """Cheapest (cost, presses_a, presses_b) with both presses in [0, limit], or None."""
    a, b, target = problem.generators.a, problem.generators.b, problem.target
    best = None
    for presses_a in range(limit + 1):
        for presses_b in range(limit + 1):
            if presses_a * a.x + presses_b * b.x != target.x:
                continue
            if presses_a * a.y + presses_b * b.y != target.y:
                continue
            cost = problem.weights.cost_a * presses_a + problem.weights.cost_b * presses_b
            if best is None or cost < best[0]:
                best = (cost, presses_a, presses_b)
    return best


def _cpsat(problem, limit):
    a, b, target = problem.generators.a, problem.generators.b, problem.target
    model = cp_model.CpModel()
    presses_a = model.new_int_var(0, limit, "presses_a")
    presses_b = model.new_int_var(0, limit, "presses_b")
    model.add(a.x * presses_a + b.x * presses_b == target.x)
    model.add(a.y * presses_a + b.y * presses_b == target.y)
    model.minimize(problem.weights.cost_a * presses_a + problem.weights.cost_b * presses_b)

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = 10.0
    solver.parameters.num_search_workers = 1
    status = solver.solve(model)
    if status == cp_model.INFEASIBLE:
        return None
    assert status == cp_model.OPTIMAL, f"CP-SAT did not prove optimality: {solver.status_name(status)}"
    return int(solver.objective_value)


@pytest.fixture
def make_problem():
    return _problem


@pytest.fixture
def brute_force():
    return _brute_force


@pytest.fixture
def cpsat_min_cost():
    return _cpsat
