from __future__ import annotations

import math as mt

import hermroot.utils as nbu

from ..errors import SignInvariantViolated
from ..op._hermite import inverse_cubic_root

# Every step returns the sub-bracket of [x0, x1] that still holds the sign change. x0 < x1 is assumed.


@nbu.rgi
def split_bracket(
    x0: float, x1: float, x_new: float, f0: float, f1: float, f_new: float
) -> tuple[float, float, bool]:
    """
    Pick the side of ``x_new`` that keeps opposite signs at the endpoints, left side first.

    :returns: ``(lo, hi, ok)``. ``ok`` is False when neither side has a sign change.
    """
    if f_new * f0 <= 0.0: return x0, x_new, True
    elif f_new * f1 <= 0.0: return x_new, x1, True
    return x0, x1, False


@nbu.rgi
def bisect_step(f_op: nbu.Op, x0: float, x1: float, f0: float, f1: float) -> tuple[float, float]:
    """Classic interval halving. The returned bracket is exactly half as wide."""
    x_new = 0.5 * (x0 + x1)
    f_new = nbu.op_call_args(f_op, x_new)
    lo, hi, ok = split_bracket(x0, x1, x_new, f0, f1, f_new)
    if not ok: raise SignInvariantViolated("Bisection step found no sign change in either half of the bracket.")
    return lo, hi


@nbu.rgi
def false_position_step(f_op: nbu.Op, x0: float, x1: float, f0: float, f1: float) -> tuple[float, float]:
    """
    Regula falsi: the root of the secant through both endpoints. Requires ``f0 != f1``, which a bracket that hasn't
    converged always satisfies.
    """
    x_new = (x0 * f1 - x1 * f0) / (f1 - f0)
    f_new = nbu.op_call_args(f_op, x_new)
    lo, hi, ok = split_bracket(x0, x1, x_new, f0, f1, f_new)
    if not ok: raise SignInvariantViolated("False position step found no sign change in either side of the bracket.")
    return lo, hi


@nbu.rgi
def inv_cubic_step(
    f_op: nbu.Op, x0: float, x1: float, f0: float, df0: float, f1: float, df1: float
) -> tuple[float, float, bool]:
    """
    Bracket reduction at the root of the inverse cubic Hermite model.

    The candidate is only trusted strictly inside ``(x0, x1)``. Anywhere else the local model has extrapolated, so
    the step is rejected without evaluating ``f``; callers fall back to another step.

    :param f_op: Function operator, see ``hermroot.utils.op_call_args``.
    :returns: ``(lo, hi, ok)``. When rejected ``ok`` is False and the bracket is ``(nan, nan)``.
    """
    # flat endpoints or equal values leave the inverse model undefined
    if df0 == 0.0 or df1 == 0.0 or f0 == f1: return mt.nan, mt.nan, False
    x_new = inverse_cubic_root(x0, x1, f0, df0, f1, df1)
    if not (mt.isfinite(x_new) and x0 < x_new < x1): return mt.nan, mt.nan, False

    f_new = nbu.op_call_args(f_op, x_new)
    lo, hi, ok = split_bracket(x0, x1, x_new, f0, f1, f_new)
    if not ok: raise SignInvariantViolated("Inverse cubic step found no sign change in either side of the bracket.")
    return lo, hi, True
