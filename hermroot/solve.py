from __future__ import annotations

import logging
import math as mt
from dataclasses import dataclass
from typing import Any

import hermroot.utils as nbu
from hermroot.algo._solver import BISECTION_FREQ, MAX_ITERS, StepKind, inv_cubic_solve
from hermroot.errors import InvalidBracket, IterationLimitReached, SignInvariantViolated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RootResult:
    """
    Outcome of a converged ``find_root`` call, failures raise instead.

    ``iterations`` counts the bracketing steps taken, 0 when an endpoint already met the tolerance. This is the same
    count ``IterationLimitReached.iterations`` carries.
    """

    root: float
    lo: float
    hi: float
    f_root: float
    iterations: int


def log_iteration(n: int, lo: float, hi: float, f_min: float, f_max: float, dx: float, step: int) -> None:
    """Observer writing one DEBUG line per solver iteration."""
    logger.debug(
        "%02d x1 = %.19g x2 = %.19g min(|f(x1)|, |f(x2)|) = %.19g max(|f(x1)|, |f(x2)|) = %.19g "
        "log10(|x2 - x1|) = %+.10f step = %s",
        n, lo, hi, f_min, f_max, mt.log10(dx) if dx > 0.0 else -mt.inf, StepKind(step).name,
    )


def _check_bracket(f: nbu.Op, x0: float, x1: float) -> tuple[float, float]:
    return nbu.op_call_args(f, x0), nbu.op_call_args(f, x1)


def find_root(
    f: nbu.Op,
    df: nbu.Op,
    x0: float,
    x1: float,
    tol: float,
    *,
    max_iters: int | None = None,
    bisect_freq: int = BISECTION_FREQ,
    observer: nbu.Op = None,
    jit: bool | None = None,
    full_output: bool = False,
) -> float | RootResult:
    """
    Find a root of ``f`` in the bracket ``[x0, x1]`` with the hybrid inverse cubic / bisection solver.

    ``f(x0)*f(x1) <= 0`` is required. The result is within the final bracket and either ``|f(root)| < tol`` or the
    bracket is narrower than ``tol``.

    :param f: The function, a callable or an operator tuple ``(callable, *bound_args)``.
    :param df: The derivative of ``f``, same conventions.
    :param x0: Bracket endpoint.
    :param x1: Other bracket endpoint, either order works.
    :param tol: Absolute tolerance on the bracket width and on ``|f|``, positive.
    :param max_iters: Optional iteration cap, unbounded when ``None``.
    :param bisect_freq: Every ``bisect_freq``-th iteration is a forced bisection.
    :param observer: Optional per-iteration hook ``observer(n, lo, hi, f_min, f_max, dx, step)``. When it is not given
        and this module's logger has DEBUG enabled, iterations are logged instead.
    :param jit: ``True`` runs the compiled kernel, ``False`` its python body. ``None`` compiles when ``f``, ``df``
        and ``observer`` are all numba functions, falling back to python if they fail to type.
    :param full_output: Return a ``RootResult`` instead of the root alone.
    :returns: The root, or a ``RootResult``.
    :raises InvalidBracket: if the endpoints don't bracket a sign change and the solver runs into it.
    :raises SignInvariantViolated: if the solver loses the sign change of a valid-looking bracket.
    :raises IterationLimitReached: if ``max_iters`` runs out first.
    """
    if not (mt.isfinite(tol) and tol > 0.0): raise ValueError(f"tol must be positive and finite, got {tol!r}.")
    if bisect_freq < 1: raise ValueError(f"bisect_freq must be at least 1, got {bisect_freq!r}.")
    if max_iters is not None and max_iters < 0: raise ValueError(f"max_iters must be non-negative, got {max_iters!r}.")

    if observer is None and jit is not True and logger.isEnabledFor(logging.DEBUG): observer = log_iteration
    if jit is None: use_jit = nbu.is_jitted(f) and nbu.is_jitted(df) and nbu.is_jitted(observer)
    else: use_jit = jit

    args: tuple[Any, ...] = (f, df, float(x0), float(x1), float(tol), -1 if max_iters is None else int(max_iters),
                             int(bisect_freq), observer)
    try:
        if not use_jit: out = nbu.run_py(inv_cubic_solve, *args)
        elif jit is None: out = nbu.run_numba(inv_cubic_solve, *args)
        else: out = inv_cubic_solve(*args)
    except SignInvariantViolated as err:
        f0, f1 = _check_bracket(f, float(x0), float(x1))
        if f0 * f1 > 0.0:
            raise InvalidBracket(
                f"[{x0!r}, {x1!r}] is not a bracket: f(x0) = {f0!r} and f(x1) = {f1!r} have the same sign."
            ) from err
        raise

    root, lo, hi, f_root, ict, status = out
    # the kernel reports the index of its last iteration, counting from 1
    iterations = int(ict) - 1
    if status == MAX_ITERS:
        logger.warning("No convergence after %d iterations, bracket [%.17g, %.17g].", iterations, lo, hi)
        raise IterationLimitReached(
            f"max_iters={max_iters} reached with bracket [{lo!r}, {hi!r}].", lo, hi, root, iterations
        )

    logger.debug("Converged to %.17g in %d iterations, |f| = %.3g.", root, iterations, abs(f_root))
    if full_output: return RootResult(float(root), float(lo), float(hi), float(f_root), iterations)
    return float(root)
