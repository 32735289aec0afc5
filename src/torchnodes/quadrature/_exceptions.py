"""Exceptions for quadrature rule generation."""


class QuadratureError(Exception):
    """Base exception for quadrature rule errors."""

    pass


class ConfigurationError(QuadratureError, ValueError):
    """Raised when a rule is requested with invalid inputs.

    This occurs when:
    - The number of points is less than 1
    - A Lobatto rule (both end points) is requested with fewer than 2 points
    - The end point is not one of "neither", "left", "right", "both"
    - The recurrence coefficients have inconsistent shapes
    - The interval bounds are not ordered
    """

    pass


class ConvergenceError(QuadratureError):
    """Raised when the tridiagonal eigensolver fails to converge.

    Parameters
    ----------
    max_iterations : int
        The iteration budget that was exhausted.
    """

    def __init__(self, max_iterations: int):
        self.max_iterations = max_iterations

        super().__init__(
            f"No convergence after {max_iterations} iterations "
            f"(try increasing max_iterations)"
        )
