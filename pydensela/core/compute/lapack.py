"""
Thin calling convention over scipy's LAPACK wrappers.

Every routine in scipy.linalg.lapack returns its outputs followed by
``work`` (for routines with a workspace argument) and ``info``. This module
centralizes the two things every caller needs: the workspace query
(``lwork=-1``) and the rejection of illegal arguments (``info < 0``).
Positive ``info`` values mean different things per routine and are mapped
to exceptions by the callers.
"""

from typing import Any, Callable

import numpy as np


def routine_name(func: Callable[..., Any], name: str) -> str:
    """Prefixed routine name, e.g. 'dgeev' for the double geev wrapper."""
    return f"{getattr(func, 'typecode', '')}{name}"


def workspace_size(func: Callable[..., Any], *args: Any, **kwargs: Any) -> int:
    """
    Optimal ``lwork`` reported by a LAPACK workspace query.

    The routine is called once with ``lwork=-1``; the optimal size comes
    back in the first entry of the ``work`` output.
    """
    kwargs['lwork'] = -1
    ret = func(*args, **kwargs)
    return max(1, int(np.real(ret[-2][0])))


def call_lapack(
    func: Callable[..., Any],
    name: str,
    *args: Any,
    query_workspace: bool = False,
    **kwargs: Any,
) -> tuple[Any, ...]:
    """
    Call a LAPACK wrapper and check for illegal arguments.

    Args:
        func: Wrapper obtained from ``get_lapack_funcs``
        name: Unprefixed routine name, used in error messages
        *args: Positional arguments forwarded to the wrapper
        query_workspace: Run an ``lwork=-1`` query first and pass the
            optimal size (only for routines that return ``work``)
        **kwargs: Keyword arguments forwarded to the wrapper

    Returns:
        The full output tuple of the wrapper; ``info`` is the last entry.

    Raises:
        ValueError: If LAPACK reports an illegal argument (info < 0)
    """
    if query_workspace and 'lwork' not in kwargs:
        kwargs['lwork'] = workspace_size(func, *args, **dict(kwargs))
    ret = func(*args, **kwargs)
    info = int(ret[-1])
    if info < 0:
        raise ValueError(
            f"LAPACK reported an illegal value in the {-info}-th argument "
            f"of {routine_name(func, name)}"
        )
    return ret
