"""Three-term recurrence coefficients for orthogonal polynomial families."""

from typing import Optional

import torch

from torchnodes.quadrature._exceptions import ConfigurationError
from torchnodes.quadrature._result_types import RecurrenceCoefficients


def legendre_recurrence_coefficients(
    n: int,
    *,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> RecurrenceCoefficients:
    r"""
    Recurrence coefficients of the monic Legendre polynomials on [-1, 1].

    The monic Legendre polynomials satisfy

    .. math::

        p_k(x) = x \, p_{k-1}(x) - b_{k-1}^2 \, p_{k-2}(x)

    with :math:`b_k = k / \sqrt{(2k + 1)(2k - 1)}`. The weight function is
    :math:`w(x) = 1`, so :math:`b_0 = \sqrt{2}`.

    Parameters
    ----------
    n : int
        Number of quadrature points the coefficients are built for.
    dtype : torch.dtype
        Floating-point type of the coefficients. Default is float64.
    device : torch.device, optional
        Device for the coefficient tensors.

    Returns
    -------
    RecurrenceCoefficients
        ``a`` of shape (n,), all zero because the weight is symmetric, and
        ``b`` of shape (n + 1,).

    Raises
    ------
    ConfigurationError
        If n < 1.

    Examples
    --------
    >>> a, b = legendre_recurrence_coefficients(3)
    >>> b
    tensor([1.4142, 0.5774, 0.5164, 0.5071], dtype=torch.float64)
    """
    if n < 1:
        raise ConfigurationError(f"n must be at least 1, got {n}")

    a = torch.zeros(n, dtype=dtype, device=device)

    # (2k + 1)(2k - 1) is formed in integer arithmetic so that it is exact
    # before the conversion to dtype.
    k = torch.arange(1, n + 1, dtype=torch.int64, device=device)
    denominator = torch.sqrt(((2 * k + 1) * (2 * k - 1)).to(dtype))

    b = torch.empty(n + 1, dtype=dtype, device=device)
    b[0] = torch.sqrt(torch.tensor(2, dtype=dtype, device=device))
    b[1:] = k.to(dtype) / denominator

    return RecurrenceCoefficients(a, b)
