from __future__ import annotations

from .engine_types import Problem

OFF_LINE_TARGET = "off_line_target"
NON_INTEGER_SOLUTION = "non_integer_solution"
NEGATIVE_MULTIPLIER = "negative_multiplier"
BOUND_EXCEEDED = "bound_exceeded"
ZERO_GENERATORS = "zero_generators"

REASON_MESSAGES = {
    OFF_LINE_TARGET: "Target does not lie on the line spanned by the two parallel step vectors.",
    NON_INTEGER_SOLUTION: "The step vectors reach the target only with fractional multipliers.",
    NEGATIVE_MULTIPLIER: "Every integer combination reaching the target needs a negative multiplier.",
    BOUND_EXCEEDED: "Non-negative combinations exist, but none stays within the press limit.",
    ZERO_GENERATORS: "Both step vectors are zero, so only the origin is reachable.",
}


def describe_reason(code: str | None) -> str | None:
    if code is None:
        return None
    return REASON_MESSAGES.get(code, code)


def explain_infeasibility(problem: Problem, code: str) -> dict:
    """Reason payload attached to infeasible results."""
    explanation = {
        "code": code,
        "message": describe_reason(code),
    }
    if code == BOUND_EXCEEDED:
        explanation["max_presses"] = problem.bound
    if code in (OFF_LINE_TARGET, ZERO_GENERATORS):
        explanation["target"] = {"x": problem.target.x, "y": problem.target.y}
    return explanation
