"""
Exception hierarchy for pydensela.

All exceptions inherit from PyDenseLAError so callers can catch any
library-specific error with a single clause. Two families are surfaced:

    ValidationError  - a precondition on shape, layout or argument value
                       was violated before the backend was entered.
    NumericalError   - the LAPACK backend reported a failure; carries the
                       routine name and its ``info`` return code.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyDenseLAError(Exception):
    """Base exception for all pydensela errors."""
    pass


class ValidationError(PyDenseLAError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, when a
    square matrix is required, or when operands have inconsistent sizes.
    """
    pass


class LayoutError(ValidationError):
    """
    Operands have incompatible storage layouts.

    Raised when an operation requires its matrix operands to share a
    layout (row-major vs column-major) and they do not.
    """
    pass


class StateError(PyDenseLAError):
    """
    Object queried in a state that does not support the request.

    Raised, for instance, when the factors of a QZ decomposition are
    accessed before ``decompose`` has been called.
    """
    pass


class NumericalError(PyDenseLAError):
    """
    Numerical computation failed.

    Base class for failures reported by the LAPACK backend.

    Attributes:
        routine: LAPACK routine that reported the failure, if known
        info: The routine's ``info`` return value, if known
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None
    ):
        super().__init__(message)
        self.routine = routine
        self.info = info


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when an operation requires invertibility (inverse, negative
    matrix powers) but the matrix is exactly or numerically singular.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(m, n))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
        routine: str | None = None,
        info: int | None = None
    ):
        super().__init__(message, routine=routine, info=info)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised by the generalized symmetric/Hermitian eigensolver when the
    right-hand matrix B fails the positive-definiteness requirement.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        minor_order: Order of the leading minor that is not positive definite
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        minor_order: int | None = None,
        routine: str | None = None,
        info: int | None = None
    ):
        super().__init__(message, routine=routine, info=info)
        self.matrix_name = matrix_name
        self.minor_order = minor_order


class ConvergenceError(NumericalError):
    """
    Iterative backend algorithm failed to converge.

    Raised when QR/QZ iterations or the SVD fail to converge inside
    LAPACK.

    Attributes:
        routine: LAPACK routine that failed
        info: The routine's ``info`` return value
        n_converged: Number of eigenvalues/singular values that did
            converge, when the routine reports it
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
        n_converged: int | None = None
    ):
        super().__init__(message, routine=routine, info=info)
        self.n_converged = n_converged


class NumericalWarning(UserWarning):
    """
    Non-fatal numerical condition.

    Issued through ``warnings.warn`` when a result is computed but may be
    inaccurate, e.g. a generalized eigenvalue whose denominator sits at
    the underflow floor.
    """
    pass
