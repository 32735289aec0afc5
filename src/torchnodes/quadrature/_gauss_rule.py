"""Gauss, Gauss-Radau and Gauss-Lobatto rules from recurrence coefficients."""

from typing import Union

import torch
from torch import Tensor

from torchnodes.quadrature._end_point import (
    EndPoint,
    _check_end_point,
    _includes_left,
    _includes_right,
)
from torchnodes.quadrature._exceptions import ConfigurationError
from torchnodes.quadrature._result_types import QuadratureRule
from torchnodes.quadrature._tridiagonal_eigenproblem import (
    tridiagonal_eigenproblem_,
)
from torchnodes.quadrature._tridiagonal_shift_solve import (
    tridiagonal_shift_solve,
)


def gauss_rule(
    lo: Union[float, Tensor],
    hi: Union[float, Tensor],
    a: Tensor,
    b: Tensor,
    end_point: EndPoint = "neither",
    max_iterations: int = 100,
) -> QuadratureRule:
    r"""
    Gauss rule for a weight function given by its recurrence coefficients.

    Generates nodes :math:`x_j` and weights :math:`w_j` such that

    .. math::

        \sum_{j=1}^{n} w_j f(x_j) \approx \int_{lo}^{hi} f(x) w(x) dx

    using the Golub-Welsch algorithm: the nodes are the eigenvalues of the
    Jacobi matrix built from ``a`` and ``b``, the weights are
    :math:`b_0^2` times the squared first components of its normalised
    eigenvectors.

    Parameters
    ----------
    lo, hi : float or Tensor
        Interval of integration, ``lo < hi``.
    a : Tensor
        Diagonal recurrence coefficients, shape (n,). Overwritten.
    b : Tensor
        Off-diagonal recurrence coefficients, shape (n + 1,), with
        ``b[0]**2`` the integral of the weight function over the interval.
        Overwritten.
    end_point : {"neither", "left", "right", "both"}
        Which end points of the interval are forced to be nodes:

        - ``"neither"``: Gauss rule, ``lo < x[j] < hi``
        - ``"left"``: left Radau rule, ``x[0] == lo``
        - ``"right"``: right Radau rule, ``x[-1] == hi``
        - ``"both"``: Lobatto rule, ``x[0] == lo`` and ``x[-1] == hi``

    max_iterations : int
        Maximum number of QL iterations per eigenvalue.

    Returns
    -------
    QuadratureRule
        Named tuple ``(nodes, weights)``, each of shape (n,), with the nodes
        in ascending order.

    Raises
    ------
    ConfigurationError
        If the inputs are invalid, including ``end_point="both"`` with fewer
        than two points.
    ConvergenceError
        If the eigensolver does not converge within ``max_iterations``.

    Notes
    -----
    ``a`` and ``b`` are consumed: the end point modification writes into
    them and the eigensolver overwrites them. Pass fresh tensors (or clones)
    on every call.

    For the Radau and Lobatto rules the last entries of the Jacobi matrix
    are modified so that the fixed end points become eigenvalues (Golub,
    1973). The fixed nodes are then set to ``lo`` and ``hi`` exactly.

    References
    ----------
    Golub, G. H., & Welsch, J. H. (1969). Calculation of Gauss quadrature rules.
    Mathematics of Computation, 23(106), 221-230.

    Golub, G. H. (1973). Some modified matrix eigenvalue problems.
    SIAM Review, 15(2), 318-334.
    """
    _check_end_point(end_point)

    if a.dim() != 1:
        raise ConfigurationError(f"a must be 1D, got {a.dim()}D")

    n = a.shape[0]

    if n < 1:
        raise ConfigurationError(f"n must be at least 1, got {n}")
    if b.shape != (n + 1,):
        raise ConfigurationError(
            f"b must have shape ({n + 1},), got {tuple(b.shape)}"
        )
    if not a.is_floating_point() or a.dtype != b.dtype:
        raise ConfigurationError(
            f"a and b must share a floating-point dtype, got {a.dtype} and "
            f"{b.dtype}"
        )
    if end_point == "both" and n < 2:
        raise ConfigurationError(
            "Must have at least two points for both ends."
        )
    if max_iterations < 1:
        raise ConfigurationError(
            f"max_iterations must be at least 1, got {max_iterations}"
        )

    lo = torch.as_tensor(lo, dtype=a.dtype, device=a.device)
    hi = torch.as_tensor(hi, dtype=a.dtype, device=a.device)

    if not lo < hi:
        raise ConfigurationError(f"lo must be less than hi, got {lo} and {hi}")

    with torch.no_grad():
        if end_point == "left":
            if n == 1:
                a[0] = lo
            else:
                a[n - 1] = (
                    tridiagonal_shift_solve(n, lo, a, b) * b[n - 1] ** 2 + lo
                )
        elif end_point == "right":
            if n == 1:
                a[0] = hi
            else:
                a[n - 1] = (
                    tridiagonal_shift_solve(n, hi, a, b) * b[n - 1] ** 2 + hi
                )
        elif end_point == "both":
            g = tridiagonal_shift_solve(n, lo, a, b)
            t = (hi - lo) / (g - tridiagonal_shift_solve(n, hi, a, b))
            b[n - 1] = torch.sqrt(t)
            a[n - 1] = lo + g * t

        w = torch.empty_like(a)

        tridiagonal_eigenproblem_(a, b, w, max_iterations)

        w = (b[0] * w) ** 2

        sorted_idx = torch.argsort(a, stable=True)
        nodes = a[sorted_idx]
        weights = w[sorted_idx]

        # Ensure end point values are exact.
        if _includes_left(end_point):
            nodes[0] = lo
        if _includes_right(end_point):
            nodes[n - 1] = hi

    return QuadratureRule(nodes, weights)
