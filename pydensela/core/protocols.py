"""
Core protocols for pydensela.

These define structural interfaces rather than base classes, so adaptors,
user-defined lazy expressions and backends participate without inheriting
from anything in this package.

Design Principles:
    - Minimal contracts: prescribe only what's truly universal
    - Structural typing: anything with the right methods qualifies
"""

from typing import Protocol, TypeVar, Any, runtime_checkable

from numpy.typing import NDArray

P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class DenseOperand(Protocol):
    """
    Anything that can be materialized as a dense numpy array.

    Implemented by the structured adaptors (Symmetric, Hermitian,
    Triangular) and by user-defined lazy expressions. The layout adapter
    calls ``to_dense()`` exactly once per operation, so an expression is
    evaluated on demand and never cached by the library.
    """

    def to_dense(self) -> NDArray[Any]:
        """Return the operand as a dense array in its own layout."""
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    A backend takes a validated design and produces a Result containing
    domain-specific parameters. Backends never validate user input; that
    happens when the design is built.
    """

    @property
    def name(self) -> str:
        """Backend identifier, e.g. 'cpu_lapack' or 'cpu_gelsy'."""
        ...

    def solve(self, design: D, **options: Any) -> Any:
        """
        Execute the computation.

        Returns:
            Result[P] with the computed payload
        """
        ...
