from __future__ import annotations

from .engine_types import GeneratorPair, Vector2


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """
    Returns (gcd, x, y) with a*x + b*y == gcd and gcd >= 0.

    Iterative form of the extended Euclidean algorithm, so the call depth does
    not grow with the inputs. Works for negative a and b; the Bezout
    coefficients then carry whatever signs make the identity hold.

    extended_gcd(0, b) is (b, 0, 1), or (-b, 0, -1) when b < 0 so the gcd
    stays non-negative.
    """
    if a == 0:
        return (b, 0, 1) if b >= 0 else (-b, 0, -1)

    old_r, r = a, b
    old_x, x = 1, 0
    old_y, y = 0, 1
    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_x, x = x, old_x - quotient * x
        old_y, y = y, old_y - quotient * y

    if old_r < 0:
        return -old_r, -old_x, -old_y
    return old_r, old_x, old_y


def floor_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("floor_div by zero")
    return a // b


def ceil_div(a: int, b: int) -> int:
    if b == 0:
        raise ZeroDivisionError("ceil_div by zero")
    return -((-a) // b)


def exact_div(numerator: int, denominator: int) -> int | None:
    quotient, remainder = divmod(numerator, denominator)
    if remainder != 0:
        return None
    return quotient


def cross(u: Vector2, v: Vector2) -> int:
    return u.x * v.y - u.y * v.x


def determinant(generators: GeneratorPair) -> int:
    return cross(generators.a, generators.b)


def is_degenerate(generators: GeneratorPair) -> bool:
    return determinant(generators) == 0
