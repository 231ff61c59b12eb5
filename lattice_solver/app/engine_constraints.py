from __future__ import annotations

from dataclasses import dataclass

from .engine_utils import ceil_div, floor_div


@dataclass(frozen=True)
class KInterval:
    """
    Closed interval of integer parameters k. A missing end (None) is open.

    Every constraint on the solution family nA(k), nB(k) is affine in k, so it
    either raises `low`, lowers `high`, or leaves the interval untouched.
    """

    low: int | None = None
    high: int | None = None

    @classmethod
    def empty(cls) -> KInterval:
        return cls(low=1, high=0)

    @property
    def is_empty(self) -> bool:
        return self.low is not None and self.high is not None and self.low > self.high

    def require_nonnegative(self, offset: int, step: int) -> KInterval:
        """Narrows to the k satisfying offset + step*k >= 0."""
        if step == 0:
            return self if offset >= 0 else KInterval.empty()
        if step > 0:
            limit = ceil_div(-offset, step)
            low = limit if self.low is None else max(self.low, limit)
            return KInterval(low=low, high=self.high)
        limit = floor_div(offset, -step)
        high = limit if self.high is None else min(self.high, limit)
        return KInterval(low=self.low, high=high)

    def require_at_most(self, offset: int, step: int, bound: int) -> KInterval:
        """Narrows to the k satisfying offset + step*k <= bound."""
        return self.require_nonnegative(bound - offset, -step)


def nonnegative_interval(base_a: int, step_a: int, base_b: int, step_b: int) -> KInterval:
    """
    k range keeping nA(k) = base_a + step_a*k and nB(k) = base_b + step_b*k
    both non-negative.
    """
    return KInterval().require_nonnegative(base_a, step_a).require_nonnegative(base_b, step_b)


def apply_press_bound(
    interval: KInterval,
    base_a: int,
    step_a: int,
    base_b: int,
    step_b: int,
    bound: int | None,
) -> KInterval:
    if bound is None:
        return interval
    return interval.require_at_most(base_a, step_a, bound).require_at_most(base_b, step_b, bound)
