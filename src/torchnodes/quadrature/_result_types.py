from typing import NamedTuple

from torch import Tensor


class RecurrenceCoefficients(NamedTuple):
    """Coefficients of the three-term recurrence for monic polynomials.

    ``p(k, x) = (x - a[k-1]) p(k-1, x) - b[k-1]**2 p(k-2, x)`` with
    ``b[0]**2`` equal to the mass of the weight function.
    """

    a: Tensor  # (n,) - diagonal of the Jacobi matrix
    b: Tensor  # (n + 1,) - b[0] = sqrt(mass), b[k] couples a[k-1] and a[k]


class QuadratureRule(NamedTuple):
    """Nodes and weights of a quadrature rule, nodes sorted ascending."""

    nodes: Tensor
    weights: Tensor
