"""
Reduction-axis tags.

Axis selection for matrix reductions is a sealed enumeration with a single
dispatcher. ``1``/``MAJOR`` collapse the first dimension (one result per
column), ``2``/``MINOR`` collapse the second (one result per row).
``LEADING`` is the only layout-sensitive tag: it collapses the columns of
a row-major operand and the rows of a column-major one.
"""

from enum import Enum
from typing import Union

from pydensela.core.exceptions import ValidationError
from pydensela.core.layout import Layout


class Axis(Enum):
    """Reduction axis selector."""
    ONE = 1
    TWO = 2
    MAJOR = 'major'
    MINOR = 'minor'
    LEADING = 'leading'


AxisLike = Union[Axis, int, str]


def as_axis(axis: AxisLike) -> Axis:
    """
    Normalize an axis argument to an Axis member.

    Accepts Axis members, the integers 1 and 2, and the strings
    'major', 'minor', 'leading'.

    Raises:
        ValidationError: For anything else (including numpy-style 0)
    """
    if isinstance(axis, Axis):
        return axis
    if isinstance(axis, bool):
        raise ValidationError(f"axis: expected 1, 2 or an Axis tag, got {axis!r}")
    try:
        return Axis(axis)
    except ValueError:
        raise ValidationError(
            f"axis: expected 1, 2, 'major', 'minor' or 'leading', got {axis!r}"
        ) from None


def resolve_axis(axis: AxisLike, layout: Layout) -> int:
    """
    Translate an axis tag into a numpy axis index.

    Args:
        axis: Axis tag
        layout: Storage layout of the operand (only used for LEADING)

    Returns:
        0 to collapse rows, 1 to collapse columns
    """
    tag = as_axis(axis)
    if tag in (Axis.ONE, Axis.MAJOR):
        return 0
    if tag in (Axis.TWO, Axis.MINOR):
        return 1
    return 1 if layout is Layout.ROW_MAJOR else 0
