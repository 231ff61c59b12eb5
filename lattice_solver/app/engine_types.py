from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Branch = Literal["zero", "non_degenerate", "degenerate"]


@dataclass(frozen=True)
class Vector2:
    x: int
    y: int

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def shifted(self, offset: int) -> Vector2:
        return Vector2(self.x + offset, self.y + offset)


@dataclass(frozen=True)
class GeneratorPair:
    a: Vector2
    b: Vector2


@dataclass(frozen=True)
class CostWeights:
    cost_a: int = 3
    cost_b: int = 1


@dataclass(frozen=True)
class Problem:
    generators: GeneratorPair
    target: Vector2
    weights: CostWeights = field(default_factory=CostWeights)
    # Upper limit shared by both multipliers; None means unbounded.
    bound: int | None = None


@dataclass(frozen=True)
class Solution:
    cost: int | None
    branch: Branch
    presses_a: int | None = None
    presses_b: int | None = None
    reason: str | None = None
    # Admissible k range of the colinear family; None ends are open.
    k_range: tuple[int | None, int | None] | None = None

    @property
    def feasible(self) -> bool:
        return self.cost is not None


@dataclass(frozen=True)
class SolverConfig:
    max_presses: int | None
    cost_a: int
    cost_b: int

    @classmethod
    def limited(cls) -> SolverConfig:
        return cls(max_presses=100, cost_a=3, cost_b=1)

    @classmethod
    def unlimited(cls) -> SolverConfig:
        return cls(max_presses=None, cost_a=3, cost_b=1)

    @property
    def weights(self) -> CostWeights:
        return CostWeights(cost_a=self.cost_a, cost_b=self.cost_b)


@dataclass(frozen=True)
class BatchResult:
    solutions: list[Solution]
    total_cost: int

    @property
    def solved(self) -> int:
        return sum(1 for solution in self.solutions if solution.feasible)
