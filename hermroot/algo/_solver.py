from __future__ import annotations

from enum import IntEnum

import hermroot.utils as nbu

from ._steps import bisect_step, false_position_step, inv_cubic_step

BISECTION_FREQ = 5

# Return status of inv_cubic_solve
CONVERGED = 0
MAX_ITERS = 1


class CoordinateChangeFlag(IntEnum):
    """Which bracket endpoint the latest step replaced. ``RESET`` after a bisection."""

    RESET = 0
    FIRST = 1
    SECOND = 2


class StepKind(IntEnum):
    """The step that produced the current bracket, as reported to observers."""

    NONE = 0
    BISECTION = 1
    INVERSE_CUBIC = 2
    FALSE_POSITION = 3


# plain ints so observers can store them in integer arrays from nopython mode.
_STEP_NONE = int(StepKind.NONE)
_STEP_BISECTION = int(StepKind.BISECTION)
_STEP_INVERSE_CUBIC = int(StepKind.INVERSE_CUBIC)
_STEP_FALSE_POSITION = int(StepKind.FALSE_POSITION)


@nbu.jt
def inv_cubic_solve(f_op, g_op, x0, x1, tol, max_iters=-1, bisect_freq=BISECTION_FREQ, obs_op=None):
    """
    Bracketed root finder accelerating bisection with inverse cubic Hermite interpolation.

    Each iteration tries the root of the cubic Hermite model of the inverse function on the current bracket. When
    that candidate lands outside the open bracket it falls back to false position. Two rules keep it from crawling:

      * every ``bisect_freq``-th iteration is a plain bisection, so the width at least halves that often;
      * when the same endpoint has moved twice in a row (the classic one-sided regula falsi stall) the next
        iteration is an extra bisection.

    Only the endpoint that moved gets ``f`` and ``f'`` re-evaluated, the other endpoint's values are reused.

    Convergence when the bracket is narrower than ``tol`` or either endpoint has ``|f| < tol``. The best endpoint,
    smaller ``|f|`` with ties going to ``x1``, is returned. There is no iteration cap unless ``max_iters >= 0``.

    Variable calculations are all f64.

    :param f_op: function or operator tuple; called via nbu.op_call_args(f_op, x) -> f(x).
    :param g_op: derivative operator; nbu.op_call_args(g_op, x) -> f'(x).
    :param x0: Bracket endpoint. ``f(x0)*f(x1) <= 0`` is required but not checked, a reversed bracket is fine.
    :param x1: Other bracket endpoint.
    :param tol: Absolute tolerance on both the bracket width and ``|f|``.
    :param max_iters: Iteration cap, negative for none.
    :param bisect_freq: Period of the scheduled bisection steps.
    :param obs_op: Optional observer operator, called at the top of every iteration with
        ``(n, lo, hi, min|f|, max|f|, width, step)`` where ``step`` is the ``StepKind`` value that produced the
        bracket.
    :returns: ``(best, lo, hi, f(best), iterations, status)``. Status 0 converged, 1 iteration cap reached.
    :raises SignInvariantViolated: if a step loses the sign change, which means the bracket was never valid.
    """
    lo, hi = float(x0), float(x1)
    f0, f1 = nbu.op_call_args(f_op, lo), nbu.op_call_args(f_op, hi)
    df0, df1 = nbu.op_call_args(g_op, lo), nbu.op_call_args(g_op, hi)
    if hi < lo:
        lo, hi = hi, lo
        f0, f1 = f1, f0
        df0, df1 = df1, df0

    dx = hi - lo
    last_changed = CoordinateChangeFlag.RESET
    should_bisect = False
    last_step = _STEP_NONE
    ict = 1

    # NB: terminates as long as f(lo) and f(hi) keep opposite signs, in the worst case the width halves every
    # bisect_freq iterations.
    while True:
        plo = lo

        af0, af1 = abs(f0), abs(f1)
        f_min, f_max = min(af0, af1), max(af0, af1)
        if af0 < af1: x_best, f_best = lo, f0
        else: x_best, f_best = hi, f1

        if obs_op is not None: nbu.op_call_args(obs_op, (ict, lo, hi, f_min, f_max, dx, last_step))

        if dx < tol or f_min < tol: return x_best, lo, hi, f_best, ict, CONVERGED
        if max_iters >= 0 and ict > max_iters: return x_best, lo, hi, f_best, ict, MAX_ITERS

        if ict % bisect_freq == 0 or should_bisect:
            lo, hi = bisect_step(f_op, lo, hi, f0, f1)
            should_bisect = False
            last_changed = CoordinateChangeFlag.RESET
            last_step = _STEP_BISECTION
        else:
            clo, chi, ok = inv_cubic_step(f_op, lo, hi, f0, df0, f1, df1)
            if not ok:
                lo, hi = false_position_step(f_op, lo, hi, f0, f1)
                last_step = _STEP_FALSE_POSITION
            else:
                lo, hi = clo, chi
                last_step = _STEP_INVERSE_CUBIC

        prev_changed = last_changed
        if lo != plo:
            f0 = nbu.op_call_args(f_op, lo)
            df0 = nbu.op_call_args(g_op, lo)
            last_changed = CoordinateChangeFlag.FIRST
        else:
            f1 = nbu.op_call_args(f_op, hi)
            df1 = nbu.op_call_args(g_op, hi)
            last_changed = CoordinateChangeFlag.SECOND

        if last_changed == prev_changed: should_bisect = True

        ict += 1
        dx = hi - lo
