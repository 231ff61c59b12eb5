from __future__ import annotations

import os

from fastapi import HTTPException

from .engine_types import Problem
from .logging_utils import log_event
from .models import BatchSolveRequest

MAX_BATCH_MACHINES = int(os.getenv("LATTICE_SOLVER_MAX_BATCH", "10000"))


def validate_problem(problem: Problem) -> None:
    # Negative weights can make the cost unbounded below along a colinear family.
    if problem.weights.cost_a < 0 or problem.weights.cost_b < 0:
        raise ValueError(
            f"Cost weights must be non-negative, got cost_a={problem.weights.cost_a} "
            f"cost_b={problem.weights.cost_b}."
        )
    if problem.bound is not None and problem.bound < 0:
        raise ValueError(f"Press bound must be non-negative, got {problem.bound}.")


def validate_batch_request(payload: BatchSolveRequest, logger, request_id: str) -> None:
    if not payload.machines:
        log_event(logger, "WARN", "solve.request.rejected", request_id=request_id, reason="no_machines")
        raise HTTPException(status_code=422, detail="At least one machine is required.")

    if len(payload.machines) > MAX_BATCH_MACHINES:
        log_event(
            logger,
            "WARN",
            "solve.request.rejected",
            request_id=request_id,
            reason="batch_too_large",
            machines=len(payload.machines),
            max_machines=MAX_BATCH_MACHINES,
        )
        raise HTTPException(
            status_code=422,
            detail=f"Batch has {len(payload.machines)} machines, the limit is {MAX_BATCH_MACHINES}.",
        )

    machine_ids = [machine.id for machine in payload.machines if machine.id is not None]
    if len(set(machine_ids)) != len(machine_ids):
        log_event(
            logger,
            "WARN",
            "solve.request.rejected",
            request_id=request_id,
            reason="duplicate_machine_ids",
        )
        raise HTTPException(status_code=422, detail="Machine IDs must be unique.")
