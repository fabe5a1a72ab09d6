from __future__ import annotations

import logging

from . import algo, errors, op, utils
from .errors import HermRootError, InvalidBracket, IterationLimitReached, SignInvariantViolated
from .solve import RootResult, find_root

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "algo",
    "errors",
    "op",
    "utils",
    "HermRootError",
    "InvalidBracket",
    "IterationLimitReached",
    "RootResult",
    "SignInvariantViolated",
    "find_root",
]
