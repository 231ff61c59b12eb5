from __future__ import annotations

from .engine_diagnostics import describe_reason, explain_infeasibility
from .engine_types import BatchResult, GeneratorPair, Problem, Solution, Vector2
from .models import BatchSolveRequest


def build_infeasible_response(problem: Problem, solution: Solution) -> dict:
    return {
        "status": "infeasible",
        "cost": None,
        "presses_a": None,
        "presses_b": None,
        "branch": solution.branch,
        "reason_code": solution.reason,
        "reason": describe_reason(solution.reason),
        "infeasibility": explain_infeasibility(problem, solution.reason),
    }


def build_feasible_response(solution: Solution) -> dict:
    return {
        "status": "optimal",
        "cost": solution.cost,
        "presses_a": solution.presses_a,
        "presses_b": solution.presses_b,
        "branch": solution.branch,
        "reason_code": None,
        "reason": None,
    }


def build_batch_response(
    payload: BatchSolveRequest,
    machines: list[tuple[GeneratorPair, Vector2]],
    result: BatchResult,
) -> dict:
    results = []
    rows = zip(payload.machines, machines, result.solutions)
    for index, (machine, (_, target), solution) in enumerate(rows):
        results.append(
            {
                "index": index,
                "id": machine.id,
                "status": "optimal" if solution.feasible else "infeasible",
                "cost": solution.cost,
                "presses_a": solution.presses_a,
                "presses_b": solution.presses_b,
                "branch": solution.branch,
                "reason_code": solution.reason,
                "target": {
                    "x": target.x + payload.target_offset,
                    "y": target.y + payload.target_offset,
                },
            }
        )

    return {
        "status": "ok",
        "total_cost": result.total_cost,
        "solved": result.solved,
        "infeasible": len(result.solutions) - result.solved,
        "target_offset": payload.target_offset,
        "results": results,
    }
