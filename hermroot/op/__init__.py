from __future__ import annotations

from ._hermite import inverse_cubic_root, two_point_cubic, two_point_cubic_deriv

__all__ = [
    "inverse_cubic_root",
    "two_point_cubic",
    "two_point_cubic_deriv",
]
