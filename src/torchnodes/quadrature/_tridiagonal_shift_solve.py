from typing import Union

from torch import Tensor


def tridiagonal_shift_solve(
    n: int,
    shift: Union[float, Tensor],
    a: Tensor,
    b: Tensor,
) -> Tensor:
    r"""
    Last component of the solution of a shifted tridiagonal system.

    Solves

    .. math::

        (J_{n-1} - s I) \delta = e_{n-1}

    by forward elimination and returns :math:`\delta_{n-1}`. :math:`J_{n-1}`
    is the leading block of the Jacobi matrix, with diagonal ``a[:n-1]`` and
    off-diagonal ``b[1:n-1]``; :math:`e_{n-1}` is its last standard basis
    vector. For ``n == 1`` the result is ``1 / (a[0] - s)``.

    Parameters
    ----------
    n : int
        Number of quadrature points. Must be at least 1.
    shift : float or Tensor
        The shift :math:`s`.
    a : Tensor
        Diagonal entries, shape (n,).
    b : Tensor
        Recurrence off-diagonal entries, shape (n + 1,).

    Returns
    -------
    Tensor
        0-d tensor with the dtype of ``a``.

    Notes
    -----
    Setting ``a[n-1] = s + b[n-1]**2 * delta`` makes ``s`` an eigenvalue of
    the modified n x n Jacobi matrix (Golub, 1973, section 7).
    """
    t = a[0] - shift

    for i in range(1, n - 1):
        t = a[i] - shift - b[i] ** 2 / t

    return 1 / t
