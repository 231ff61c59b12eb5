import time
from uuid import uuid4

from fastapi import FastAPI, Request

from .engine import solve_batch_request, solve_machine_request
from .logging_utils import get_logger, log_event
from .models import BatchSolveRequest, SolveRequest


app = FastAPI(title="Lattice Solver Service")
logger = get_logger()


@app.get("/health")
def health():
    log_event(logger, "INFO", "health.check")
    return {"status": "ok"}


@app.post("/solve")
def solve(payload: SolveRequest, request: Request):
    request_id = request.headers.get("X-Request-Id") or uuid4().hex[:8]
    started_at = time.perf_counter()
    log_event(
        logger,
        "INFO",
        "solve.request.received",
        request_id=request_id,
        a=[payload.a.x, payload.a.y],
        b=[payload.b.x, payload.b.y],
        target=[payload.target.x, payload.target.y],
        max_presses=payload.max_presses,
    )
    return solve_machine_request(payload, logger, request_id, started_at)


@app.post("/solve/batch")
def solve_batch(payload: BatchSolveRequest, request: Request):
    request_id = request.headers.get("X-Request-Id") or uuid4().hex[:8]
    started_at = time.perf_counter()
    log_event(
        logger,
        "INFO",
        "solve.batch.received",
        request_id=request_id,
        machines=len(payload.machines),
        max_presses=payload.max_presses,
        target_offset=payload.target_offset,
    )
    return solve_batch_request(payload, logger, request_id, started_at)
