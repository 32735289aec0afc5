"""Legendre-Gauss, Legendre-Gauss-Radau and Legendre-Gauss-Lobatto rules."""

from typing import Literal, Optional

import torch

from torchnodes.quadrature._end_point import EndPoint, _check_end_point
from torchnodes.quadrature._exceptions import ConfigurationError
from torchnodes.quadrature._gauss_rule import gauss_rule
from torchnodes.quadrature._recurrence import legendre_recurrence_coefficients
from torchnodes.quadrature._result_types import QuadratureRule


def legendre_gauss(
    n: int,
    end_point: EndPoint = "neither",
    *,
    max_iterations: int = 100,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> QuadratureRule:
    """
    Compute the n-point Legendre-Gauss rule on [-1, 1].

    The weight function is w(x) = 1. Use ``end_point="left"``, ``"right"``
    or ``"both"`` for the left Radau, right Radau or Lobatto rules.

    Parameters
    ----------
    n : int
        Number of quadrature points.
    end_point : {"neither", "left", "right", "both"}
        End points of [-1, 1] included among the nodes. Default "neither".
    max_iterations : int
        Maximum number of QL iterations per eigenvalue.
    dtype : torch.dtype
        Floating-point type the rule is computed in. Default is float64.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    QuadratureRule
        Named tuple ``(nodes, weights)``, each of shape (n,), nodes sorted
        ascending. The weights sum to 2.

    Raises
    ------
    ConfigurationError
        If n < 1, or n < 2 with ``end_point="both"``.
    ConvergenceError
        If the eigensolver does not converge.

    Notes
    -----
    The Gauss rule is exact for polynomials of degree <= 2n-1, the Radau
    rules for degree <= 2n-2 and the Lobatto rule for degree <= 2n-3.

    Examples
    --------
    >>> nodes, weights = legendre_gauss(3)
    >>> nodes
    tensor([-0.7746,  0.0000,  0.7746], dtype=torch.float64)
    >>> weights
    tensor([0.5556, 0.8889, 0.5556], dtype=torch.float64)
    """
    _check_end_point(end_point)

    if n < 1:
        raise ConfigurationError(f"n must be at least 1, got {n}")

    a, b = legendre_recurrence_coefficients(n, dtype=dtype, device=device)

    return gauss_rule(-1.0, 1.0, a, b, end_point, max_iterations)


def legendre_gauss_lobatto(
    n: int,
    *,
    max_iterations: int = 100,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> QuadratureRule:
    """
    Compute the n-point Legendre-Gauss-Lobatto rule on [-1, 1].

    Equivalent to ``legendre_gauss(n, "both")``: the nodes include both -1
    and 1.

    Raises
    ------
    ConfigurationError
        If n < 2.

    Examples
    --------
    >>> nodes, weights = legendre_gauss_lobatto(3)
    >>> nodes
    tensor([-1.,  0.,  1.], dtype=torch.float64)
    >>> weights
    tensor([0.3333, 1.3333, 0.3333], dtype=torch.float64)
    """
    return legendre_gauss(
        n,
        "both",
        max_iterations=max_iterations,
        dtype=dtype,
        device=device,
    )


def legendre_gauss_radau(
    n: int,
    end_point: Literal["left", "right"] = "left",
    *,
    max_iterations: int = 100,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> QuadratureRule:
    """
    Compute the n-point Legendre-Gauss-Radau rule on [-1, 1].

    The left rule includes -1 among the nodes, the right rule includes 1.
    """
    if end_point not in ("left", "right"):
        raise ConfigurationError(
            f"end_point must be 'left' or 'right', got {end_point!r}"
        )

    return legendre_gauss(
        n,
        end_point,
        max_iterations=max_iterations,
        dtype=dtype,
        device=device,
    )
