from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import replace

from .engine_constraints import KInterval, apply_press_bound, nonnegative_interval
from .engine_diagnostics import (
    BOUND_EXCEEDED,
    NEGATIVE_MULTIPLIER,
    NON_INTEGER_SOLUTION,
    OFF_LINE_TARGET,
    ZERO_GENERATORS,
)
from .engine_results import build_batch_response, build_feasible_response, build_infeasible_response
from .engine_types import (
    BatchResult,
    Branch,
    CostWeights,
    GeneratorPair,
    Problem,
    Solution,
    SolverConfig,
    Vector2,
)
from .engine_utils import cross, determinant, exact_div, extended_gcd, is_degenerate
from .engine_validation import validate_batch_request, validate_problem
from .logging_utils import log_event
from .models import BatchSolveRequest, SolveRequest


def classify(generators: GeneratorPair) -> Branch:
    return "degenerate" if is_degenerate(generators) else "non_degenerate"


def solve(problem: Problem) -> int | None:
    """Minimal cost of reaching the target, or None when no admissible combination exists."""
    return solve_problem(problem).cost


def solve_problem(problem: Problem) -> Solution:
    validate_problem(problem)
    if classify(problem.generators) == "non_degenerate":
        return solve_non_degenerate(problem)
    return solve_degenerate(problem)


def solve_non_degenerate(problem: Problem) -> Solution:
    """
    Two independent step vectors give a 2x2 system with exactly one real
    solution (Cramer's rule). It is accepted only if both multipliers are
    non-negative integers inside the bound.
    """
    a, b, target = problem.generators.a, problem.generators.b, problem.target
    det = determinant(problem.generators)

    presses_a = exact_div(target.x * b.y - target.y * b.x, det)
    presses_b = exact_div(a.x * target.y - a.y * target.x, det)
    if presses_a is None or presses_b is None:
        return _infeasible("non_degenerate", NON_INTEGER_SOLUTION)
    if presses_a < 0 or presses_b < 0:
        return _infeasible("non_degenerate", NEGATIVE_MULTIPLIER)
    if problem.bound is not None and (presses_a > problem.bound or presses_b > problem.bound):
        return _infeasible("non_degenerate", BOUND_EXCEEDED)
    return _feasible(problem, "non_degenerate", presses_a, presses_b)


def solve_degenerate(problem: Problem) -> Solution:
    """
    Parallel step vectors: every reachable point lies on one line, so the
    problem collapses to ax*nA + bx*nB = px along a coordinate where that line
    is not flat.
    """
    a, b, target = problem.generators.a, problem.generators.b, problem.target

    if a.is_zero() and b.is_zero():
        if target.is_zero():
            return Solution(cost=0, branch="zero", presses_a=0, presses_b=0)
        return _infeasible("zero", ZERO_GENERATORS)

    direction = a if not a.is_zero() else b
    if cross(direction, target) != 0:
        return _infeasible("degenerate", OFF_LINE_TARGET)

    # A coordinate where the direction is non-zero determines the whole vector.
    if direction.x != 0:
        step_a, step_b, goal = a.x, b.x, target.x
    else:
        step_a, step_b, goal = a.y, b.y, target.y

    if step_a == 0:
        return _solve_single_generator(problem, goal, step_b, uses_a=False)
    if step_b == 0:
        return _solve_single_generator(problem, goal, step_a, uses_a=True)
    return _solve_on_line(problem, step_a, step_b, goal)


def _solve_single_generator(problem: Problem, goal: int, step: int, uses_a: bool) -> Solution:
    presses = exact_div(goal, step)
    if presses is None:
        return _infeasible("degenerate", NON_INTEGER_SOLUTION)
    if presses < 0:
        return _infeasible("degenerate", NEGATIVE_MULTIPLIER)
    if problem.bound is not None and presses > problem.bound:
        return _infeasible("degenerate", BOUND_EXCEEDED)
    if uses_a:
        return _feasible(problem, "degenerate", presses, 0)
    return _feasible(problem, "degenerate", 0, presses)


def _solve_on_line(problem: Problem, step_a: int, step_b: int, goal: int) -> Solution:
    gcd, coef_a, coef_b = extended_gcd(step_a, step_b)
    scale = exact_div(goal, gcd)
    if scale is None:
        return _infeasible("degenerate", NON_INTEGER_SOLUTION)

    # All integer solutions: nA(k) = base_a + k*shift_a, nB(k) = base_b + k*shift_b.
    base_a, base_b = coef_a * scale, coef_b * scale
    shift_a, shift_b = step_b // gcd, -(step_a // gcd)

    interval = nonnegative_interval(base_a, shift_a, base_b, shift_b)
    if interval.is_empty:
        return _infeasible("degenerate", NEGATIVE_MULTIPLIER)
    interval = apply_press_bound(interval, base_a, shift_a, base_b, shift_b, problem.bound)
    if interval.is_empty:
        return _infeasible("degenerate", BOUND_EXCEEDED)

    slope = problem.weights.cost_a * shift_a + problem.weights.cost_b * shift_b
    k = _cheapest_k(interval, slope)
    solution = _feasible(problem, "degenerate", base_a + k * shift_a, base_b + k * shift_b)
    return replace(solution, k_range=(interval.low, interval.high))


def _cheapest_k(interval: KInterval, slope: int) -> int:
    # Cost is affine in k, so the minimum sits on an end of the interval.
    # With non-negative weights the end picked here is never open.
    if slope > 0:
        return interval.low
    if slope < 0:
        return interval.high
    return interval.low if interval.low is not None else interval.high


def _feasible(problem: Problem, branch: Branch, presses_a: int, presses_b: int) -> Solution:
    cost = problem.weights.cost_a * presses_a + problem.weights.cost_b * presses_b
    return Solution(cost=cost, branch=branch, presses_a=presses_a, presses_b=presses_b)


def _infeasible(branch: Branch, reason: str) -> Solution:
    return Solution(cost=None, branch=branch, reason=reason)


def solve_batch(
    machines: Iterable[tuple[GeneratorPair, Vector2]],
    config: SolverConfig,
    target_offset: int = 0,
) -> BatchResult:
    solutions = []
    for generators, target in machines:
        problem = Problem(
            generators=generators,
            target=target.shifted(target_offset),
            weights=config.weights,
            bound=config.max_presses,
        )
        solutions.append(solve_problem(problem))
    total_cost = sum(solution.cost for solution in solutions if solution.cost is not None)
    return BatchResult(solutions=solutions, total_cost=total_cost)


def problem_from_request(payload: SolveRequest) -> Problem:
    return Problem(
        generators=GeneratorPair(
            a=Vector2(payload.a.x, payload.a.y),
            b=Vector2(payload.b.x, payload.b.y),
        ),
        target=Vector2(payload.target.x, payload.target.y),
        weights=CostWeights(cost_a=payload.costs.cost_a, cost_b=payload.costs.cost_b),
        bound=payload.max_presses,
    )


def _log_branch(logger, request_id: str, problem: Problem, solution: Solution, index: int | None = None) -> None:
    k_low, k_high = solution.k_range if solution.k_range is not None else (None, None)
    log_event(
        logger,
        "DEBUG",
        "solve.branch",
        request_id=request_id,
        index=index,
        branch=solution.branch,
        determinant=determinant(problem.generators),
        k_low=k_low,
        k_high=k_high,
        presses_a=solution.presses_a,
        presses_b=solution.presses_b,
        reason=solution.reason,
    )


def solve_machine_request(payload: SolveRequest, logger, request_id: str, started_at: float) -> dict:
    problem = problem_from_request(payload)
    solution = solve_problem(problem)
    _log_branch(logger, request_id, problem, solution)

    elapsed_us = int((time.perf_counter() - started_at) * 1_000_000)
    log_event(
        logger,
        "INFO",
        "solve.done",
        request_id=request_id,
        branch=solution.branch,
        status="optimal" if solution.feasible else "infeasible",
        cost=solution.cost,
        reason=solution.reason,
        elapsed_us=elapsed_us,
    )
    if solution.feasible:
        return build_feasible_response(solution)
    return build_infeasible_response(problem, solution)


def solve_batch_request(payload: BatchSolveRequest, logger, request_id: str, started_at: float) -> dict:
    validate_batch_request(payload, logger, request_id)

    config = SolverConfig(
        max_presses=payload.max_presses,
        cost_a=payload.costs.cost_a,
        cost_b=payload.costs.cost_b,
    )
    machines = [
        (
            GeneratorPair(a=Vector2(machine.a.x, machine.a.y), b=Vector2(machine.b.x, machine.b.y)),
            Vector2(machine.target.x, machine.target.y),
        )
        for machine in payload.machines
    ]
    result = solve_batch(machines, config, target_offset=payload.target_offset)
    for index, ((generators, target), solution) in enumerate(zip(machines, result.solutions)):
        problem = Problem(generators=generators, target=target.shifted(payload.target_offset))
        _log_branch(logger, request_id, problem, solution, index=index)

    elapsed_us = int((time.perf_counter() - started_at) * 1_000_000)
    log_event(
        logger,
        "INFO",
        "solve.batch.done",
        request_id=request_id,
        machines=len(machines),
        solved=result.solved,
        total_cost=result.total_cost,
        elapsed_us=elapsed_us,
    )
    return build_batch_response(payload, machines, result)
