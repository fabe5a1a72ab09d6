"""Exception classes for the bracketing solvers."""

from __future__ import annotations


class HermRootError(Exception):
    """Base exception for hermroot errors."""

    pass


class SignInvariantViolated(HermRootError, ArithmeticError):
    """
    Raised when a step finds no sign change in either sub-interval of the bracket.

    With a valid bracket and a continuous function this cannot happen, so it is never retried or recovered.
    It is raised from nopython code as well, so it only carries a message.
    """

    pass


class InvalidBracket(SignInvariantViolated):
    """Raised in place of ``SignInvariantViolated`` when the starting endpoints had no sign change."""

    pass


class IterationLimitReached(HermRootError):
    """Raised when a capped solve runs out of iterations before converging."""

    def __init__(self, message: str, lo: float, hi: float, best: float, iterations: int) -> None:
        super().__init__(message)
        self.lo = lo
        self.hi = hi
        self.best = best
        self.iterations = iterations
