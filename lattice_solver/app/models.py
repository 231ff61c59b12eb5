from pydantic import BaseModel, Field


class Vector(BaseModel):
    x: int
    y: int


class Costs(BaseModel):
    cost_a: int = Field(3, ge=0)
    cost_b: int = Field(1, ge=0)


class Machine(BaseModel):
    id: str | None = None
    a: Vector
    b: Vector
    target: Vector


class SolveRequest(BaseModel):
    a: Vector
    b: Vector
    target: Vector
    costs: Costs = Field(default_factory=Costs)
    max_presses: int | None = Field(None, ge=0)


class BatchSolveRequest(BaseModel):
    machines: list[Machine]
    costs: Costs = Field(default_factory=Costs)
    max_presses: int | None = Field(None, ge=0)
    target_offset: int = 0
