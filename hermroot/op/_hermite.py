from __future__ import annotations

import math as mt

import hermroot.utils as nbu


@nbu.rgi
def two_point_cubic(x: float, x0: float, x1: float, f0: float, df0: float, f1: float, df1: float) -> float:
    """
    Evaluate the cubic Hermite interpolant matching ``f`` and ``f'`` at two points.

    The polynomial ``p`` satisfies ``p(x0)=f0``, ``p(x1)=f1``, ``p'(x0)=df0`` and ``p'(x1)=df1``, and is evaluated
    in the normalized Hermite basis over ``t = (x - x0)/(x1 - x0)``. Any real ``x`` is accepted, outside ``[x0, x1]``
    it extrapolates.

    :param x: Evaluation point.
    :param x0: First node, must differ from ``x1``.
    :param x1: Second node.
    :param f0: ``f(x0)``.
    :param df0: ``f'(x0)``.
    :param f1: ``f(x1)``.
    :param df1: ``f'(x1)``.
    :returns: ``p(x)``.
    """
    h = x1 - x0
    t = (x - x0) / h
    t2 = t * t
    t3 = t2 * t

    h00 = 2.0 * t3 - 3.0 * t2 + 1.0
    h10 = t3 - 2.0 * t2 + t
    h01 = -2.0 * t3 + 3.0 * t2
    h11 = t3 - t2

    return f0 * h00 + h * df0 * h10 + f1 * h01 + h * df1 * h11


@nbu.rgi
def two_point_cubic_deriv(x: float, x0: float, x1: float, f0: float, df0: float, f1: float, df1: float) -> float:
    """
    Derivative ``dp/dx`` of ``two_point_cubic`` at ``x``, same arguments.

    :returns: ``p'(x)``.
    """
    h = x1 - x0
    t = (x - x0) / h
    t2 = t * t

    dh00 = 6.0 * t2 - 6.0 * t
    dh10 = 3.0 * t2 - 4.0 * t + 1.0
    dh11 = 3.0 * t2 - 2.0 * t

    # dh01 == -dh00
    return (f0 - f1) * dh00 / h + df0 * dh10 + df1 * dh11


@nbu.rgi
def inverse_cubic_root(x0: float, x1: float, f0: float, df0: float, f1: float, df1: float) -> float:
    """
    Root estimate from the cubic Hermite interpolant of the inverse function.

    The roles of ``x`` and ``f`` are swapped: the cubic passes through ``(f0, x0)`` and ``(f1, x1)`` with slopes
    ``1/df0`` and ``1/df1`` (reciprocal rule), and is evaluated at ``f = 0``.

    :returns: The candidate root, or nan when the inverse model is undefined (a flat endpoint or ``f0 == f1``).
    """
    if df0 == 0.0 or df1 == 0.0 or f0 == f1: return mt.nan
    return two_point_cubic(0.0, f0, f1, x0, 1.0 / df0, x1, 1.0 / df1)
