"""
Gauss-type quadrature rules for the Legendre weight function.

Node/weight computation:
    legendre_gauss, legendre_gauss_lobatto, legendre_gauss_radau

Quadrature rule classes:
    LegendreRule

Golub-Welsch engine (accepts any recurrence coefficients):
    legendre_recurrence_coefficients, gauss_rule, tridiagonal_shift_solve,
    tridiagonal_eigenproblem_

Types:
    EndPoint, QuadratureRule, RecurrenceCoefficients

Exceptions:
    QuadratureError, ConfigurationError, ConvergenceError
"""

from torchnodes.quadrature._end_point import EndPoint
from torchnodes.quadrature._exceptions import (
    ConfigurationError,
    ConvergenceError,
    QuadratureError,
)
from torchnodes.quadrature._gauss_rule import gauss_rule
from torchnodes.quadrature._legendre import (
    legendre_gauss,
    legendre_gauss_lobatto,
    legendre_gauss_radau,
)
from torchnodes.quadrature._recurrence import legendre_recurrence_coefficients
from torchnodes.quadrature._result_types import (
    QuadratureRule,
    RecurrenceCoefficients,
)
from torchnodes.quadrature._rules import LegendreRule
from torchnodes.quadrature._tridiagonal_eigenproblem import (
    tridiagonal_eigenproblem_,
)
from torchnodes.quadrature._tridiagonal_shift_solve import (
    tridiagonal_shift_solve,
)

__all__ = [
    # Node/weight computation
    "legendre_gauss",
    "legendre_gauss_lobatto",
    "legendre_gauss_radau",
    # Rule classes
    "LegendreRule",
    # Engine
    "legendre_recurrence_coefficients",
    "gauss_rule",
    "tridiagonal_shift_solve",
    "tridiagonal_eigenproblem_",
    # Types
    "EndPoint",
    "QuadratureRule",
    "RecurrenceCoefficients",
    # Exceptions
    "QuadratureError",
    "ConfigurationError",
    "ConvergenceError",
]
