"""
Generic result container for pydensela backends.

Every backend returns its payload inside a Result envelope so that timing,
backend identification and numerical warnings travel with the numbers.
Free functions unwrap ``params``; bundle-returning entry points keep the
envelope behind a solution wrapper.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (driver, info codes, rank)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a cached decomposition cannot drift
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for backend computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (eigenvalues, factors, solution)
        info: Structured metadata (driver name, structure, rank)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=EigenParams(values=w, right=vr),
        ...     info={'driver': 'dgeev', 'structure': 'general'},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_lapack'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
