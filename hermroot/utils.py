from __future__ import annotations

import os
from types import NoneType
from typing import Any, Callable

import numba as nb
import numba.core.errors as nb_error
from numba import types
from numba.core.registry import CPUDispatcher
from numba.extending import overload, register_jitable

_N = types.none
CSeq = tuple[Any, ...] | list[Any]
CSeqRuntime = (tuple, list)


def _env_flag(raw: str | None) -> bool:
    return bool(raw) and raw.strip().lower() not in ("0", "false", "no", "off")


# every fastmath flag except nnan and ninf, step rejection compares against nan candidates.
FASTMATH_FLAGS = frozenset({"nsz", "arcp", "contract", "afn", "reassoc"})


def _fastmath(raw: str | None) -> bool | set[str]:
    return set(FASTMATH_FLAGS) if _env_flag(raw) else False


# This only changes once at import time.
# --- Global Fastmath : off by default. When on, the flag set keeps nan/inf semantics.
_fm = _fastmath(os.environ.get("HR_GLOB_FM", "false"))
# --- Global Error Model : 'numpy' gives inf/nan on float division by zero instead of raising, same as the math the
# kernels are written for.
_erm = os.environ.get("HR_GLOB_EM", "numpy")


"""
## Configurations
s : Sync, the only threading strategy used here.
c : Cache the compilation for new signatures.
i : Manual/forced Numba-IR level inline.

## Decorators
jt - Numba jit using the base defaults and extension characters seen above.
rg - Register Jittable, these functions compile into the Numba IR when referenced from a jit scope but run as plain
python when called from the interpreter. A jitted function's python body is always reachable as
`jitfunc.py_func(*args, **kwargs)`.
ov - Overload decorators, used to give a python helper a separate nopython implementation.
"""

_dft = dict(fastmath=_fm, error_model=_erm)  # base python arguments.
jit_s = _dft
jit_sc = jit_s | dict(cache=True)
jit_si = jit_s | dict(inline="always")

# --- JIT DECORATORS
jt = nb.njit(**jit_s)  # plain jit

# --- REGISTER JITTABLE DECORATORS
# inlined into the calling kernel, so the steps and the hermite helpers compile as one scope with the solver.
rgi = register_jitable(**jit_si)


# --- OVERLOADS DECORATORS
# I'm pretty sure caching is redundant for overloads, but assuming not and including.
def ovsic(impl: Callable[..., Any]) -> Callable[..., Any]: return overload(impl, jit_options=jit_sc, inline="always")


Op = Callable[..., Any] | NoneType | CSeq


def op_call_args(call_op: Op, args: CSeq | Any = (), defr: Any = None) -> Any:
    """
    Call an operator with arguments supplied either directly or via an operator tuple.

    ``op_call_args`` accepts either:

    - a callable ``call_op``, or
    - a sequence whose first element is a callable and whose remaining elements
      are pre-bound arguments,

    and applies ``args`` to it. If ``args`` is a tuple or list it is expanded;
    otherwise it is treated as a single argument. This is how the solvers take
    ``f``, ``f'`` and observers, so a function can carry its own state (arrays,
    parameters) into a nopython kernel:

    .. code-block:: python

        @hermroot.utils.jt
        def shifted_cubic(x, shift):
            return x * x * x - shift

        f_op = (shifted_cubic, 2.0)
        op_call_args(f_op, 1.5)
        # -> shifted_cubic(1.5, 2.0)

    :param call_op: Callable or tuple/list whose first element is callable, remaining elements are fixed arguments.
    :param args: Arguments to apply, either as a tuple/list or a single value.
    :param defr: Default return value when ``call_op`` is ``None``.
    :returns: Function output.
    """
    if isinstance(call_op, NoneType):
        if defr is None: return call_op
        else: return defr

    ct = callable(call_op)  # otherwise CSeq
    rt = isinstance(args, CSeqRuntime)  # otherwise single element.
    if ct:
        if rt: return call_op(*args)
        return call_op(args)
    else:
        if rt: return call_op[0](*args, *call_op[1:])
        return call_op[0](args, *call_op[1:])


@ovsic(op_call_args)
def _op_call_args(call_op, args=(), defr=None):  # pragma: no cover
    if call_op is _N:
        if defr is _N or defr is None: return lambda call_op, args=(), defr=None: None
        else: return lambda call_op, args=(), defr=None: defr

    ct = isinstance(call_op, types.Callable)
    rt = isinstance(args, (types.BaseTuple, types.LiteralList))

    if ct:
        if rt: return lambda call_op, args=(), defr=None: call_op(*args)
        return lambda call_op, args=(), defr=None: call_op(args)
    else:
        if rt: return lambda call_op, args=(), defr=None: call_op[0](*args, *call_op[1:])
        return lambda call_op, args=(), defr=None: call_op[0](args, *call_op[1:])


def is_jitted(call_op: Op) -> bool:
    """
    True when ``call_op`` can be handed to a nopython kernel: a numba dispatcher, or an operator tuple led by one.
    ``None`` counts as jitted since optional operators prune out of the compiled kernel.

    :param call_op: Callable, operator sequence or ``None``.
    :returns: Whether the operator compiles.
    """
    if call_op is None: return True
    if isinstance(call_op, CSeqRuntime): return len(call_op) > 0 and isinstance(call_op[0], CPUDispatcher)
    return isinstance(call_op, CPUDispatcher)


def run_py(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    Numba's base python definition is inside the ``py_func`` field, if it exists we call it here.

    :param func: callable.
    :param args: Variable unnamed ordered args.
    :param kwargs: Variable named unordered kwargs.
    :returns: The function result.
    """
    if hasattr(func, "py_func"): func = func.py_func

    return func(*args, **kwargs)


def run_numba(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """
    First attempts to call the numba dispatcher in fully compiled (no-python) mode.

    If typing fails it runs the python body instead. Errors raised by the algorithm itself are not caught.

    :param func: callable.
    :param args: Variable unnamed ordered args.
    :param kwargs: Variable named unordered kwargs.
    :returns: The function result.
    """
    try:
        return func(*args, **kwargs)
    except (nb_error.TypingError, nb_error.UnsupportedError):
        return run_py(func, *args, **kwargs)
