"""Quadrature rule class."""

from typing import Callable, Optional, Tuple, Union

import torch
from torch import Tensor

from torchnodes.quadrature._end_point import (
    EndPoint,
    _check_end_point,
    _includes_left,
    _includes_right,
)
from torchnodes.quadrature._exceptions import ConfigurationError
from torchnodes.quadrature._legendre import legendre_gauss


class LegendreRule:
    """
    Legendre-Gauss, -Radau or -Lobatto quadrature rule on an interval.

    Parameters
    ----------
    n : int
        Number of quadrature points.
    end_point : {"neither", "left", "right", "both"}
        End points of the interval included among the nodes.
    max_iterations : int
        Maximum number of QL iterations per eigenvalue.

    Examples
    --------
    >>> rule = LegendreRule(8, "both")
    >>> nodes, weights = rule.nodes_and_weights(a=0, b=1)
    >>> result = rule.integrate(torch.sin, 0, torch.pi)  # approximately 2.0

    Attributes
    ----------
    n : int
        Number of points.
    end_point : str
        End points included among the nodes.
    """

    def __init__(
        self,
        n: int,
        end_point: EndPoint = "neither",
        max_iterations: int = 100,
    ):
        _check_end_point(end_point)
        if n < 1:
            raise ConfigurationError(f"n must be at least 1, got {n}")
        if end_point == "both" and n < 2:
            raise ConfigurationError(
                "Must have at least two points for both ends."
            )
        if max_iterations < 1:
            raise ConfigurationError(
                f"max_iterations must be at least 1, got {max_iterations}"
            )
        self.n = n
        self.end_point = end_point
        self.max_iterations = max_iterations
        self._cache: dict = {}

    def _get_base_nodes_weights(
        self,
        dtype: torch.dtype,
        device: torch.device,
    ) -> Tuple[Tensor, Tensor]:
        """Reference rule on [-1, 1], computed once per dtype and device."""
        key = (str(dtype), str(device))
        if key not in self._cache:
            self._cache[key] = legendre_gauss(
                self.n,
                self.end_point,
                max_iterations=self.max_iterations,
                dtype=dtype,
                device=device,
            )
        return self._cache[key]

    def nodes_and_weights(
        self,
        a: Union[float, Tensor] = -1.0,
        b: Union[float, Tensor] = 1.0,
        *,
        dtype: Optional[torch.dtype] = None,
        device: Optional[torch.device] = None,
    ) -> Tuple[Tensor, Tensor]:
        """
        Nodes and weights of the rule on the interval [a, b].

        The reference rule on [-1, 1] is built once per dtype and device
        and mapped affinely. Radau and Lobatto nodes fixed at -1 or 1 land
        on ``a`` or ``b`` bit for bit; the affine map alone could round
        them off the interval.

        Parameters
        ----------
        a, b : float or Tensor
            Interval limits. Tensor limits broadcast against each other and
            give one rule per element.
        dtype : torch.dtype, optional
            Defaults to the dtype of a tensor limit, else ``torch.float64``.
        device : torch.device, optional
            Defaults to the device of a tensor limit, else the CPU.

        Returns
        -------
        nodes : Tensor
            Ascending nodes, shape (*batch, n) for tensor limits, else (n,).
        weights : Tensor
            Positive weights, same shape as ``nodes``, summing to ``b - a``.
        """
        if isinstance(a, Tensor):
            dtype = dtype or a.dtype
            device = device or a.device
        elif isinstance(b, Tensor):
            dtype = dtype or b.dtype
            device = device or b.device
        else:
            dtype = dtype or torch.float64
            device = device or torch.device("cpu")

        if not isinstance(a, Tensor):
            a = torch.tensor(a, dtype=dtype, device=device)
        if not isinstance(b, Tensor):
            b = torch.tensor(b, dtype=dtype, device=device)

        base_nodes, base_weights = self._get_base_nodes_weights(dtype, device)

        # x' = (b - a) / 2 * x + (a + b) / 2, weights scale by (b - a) / 2
        half_width = (b - a) / 2
        center = (a + b) / 2

        if a.dim() > 0 or b.dim() > 0:
            half_width = half_width.unsqueeze(-1)  # (*batch, 1)
            center = center.unsqueeze(-1)  # (*batch, 1)

        nodes = half_width * base_nodes + center
        weights = half_width * base_weights

        if _includes_left(self.end_point):
            nodes[..., 0] = a
        if _includes_right(self.end_point):
            nodes[..., -1] = b

        return nodes, weights

    def integrate(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tensor:
        """
        Approximate the integral of f over [a, b].

        Exact, up to rounding, for polynomials of degree 2n - 1 (Gauss),
        2n - 2 (Radau) or 2n - 3 (Lobatto).

        Parameters
        ----------
        f : callable
            Evaluated once on the nodes, a tensor of shape (*batch, n); must
            return a tensor of the same shape.
        a, b : float or Tensor
            Interval limits, batched as in :meth:`nodes_and_weights`.

        Returns
        -------
        Tensor
            The weighted sum over the last dimension, shape (*batch,).
        """
        nodes, weights = self.nodes_and_weights(a, b)
        values = f(nodes)
        return (values * weights).sum(dim=-1)
