from __future__ import annotations

from ._solver import (
    BISECTION_FREQ,
    CONVERGED,
    MAX_ITERS,
    CoordinateChangeFlag,
    StepKind,
    inv_cubic_solve,
)
from ._steps import bisect_step, false_position_step, inv_cubic_step, split_bracket

__all__ = [
    "BISECTION_FREQ",
    "CONVERGED",
    "MAX_ITERS",
    "CoordinateChangeFlag",
    "StepKind",
    "bisect_step",
    "false_position_step",
    "inv_cubic_solve",
    "inv_cubic_step",
    "split_bracket",
]
