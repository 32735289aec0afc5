"""Implicit QL eigensolver for symmetric tridiagonal matrices."""

import math

import torch
from torch import Tensor

from torchnodes.quadrature._exceptions import (
    ConfigurationError,
    ConvergenceError,
)


def tridiagonal_eigenproblem_(
    d: Tensor,
    e: Tensor,
    z: Tensor,
    max_iterations: int = 100,
) -> None:
    r"""
    Eigenvalues and first eigenvector components of a tridiagonal matrix.

    Operates in place on ``d``, ``e`` and ``z``.

    Parameters
    ----------
    d : Tensor
        Shape (n,). On entry, the diagonal of the matrix. On exit, its
        eigenvalues, in no particular order.
    e : Tensor
        Shape (n + 1,). On entry, ``e[i]`` holds the ``(i, i - 1)`` entry of
        the matrix for ``i = 1, ..., n - 1``. ``e[0]`` is neither read nor
        written and ``e[n]`` is used as scratch. Overwritten on exit.
    z : Tensor
        Shape (n,). On exit, ``z[i]`` is the first component of the
        normalised eigenvector belonging to ``d[i]``.
    max_iterations : int
        Maximum number of QL iterations spent on each eigenvalue.

    Raises
    ------
    ConfigurationError
        If the shapes of ``d``, ``e`` and ``z`` are inconsistent or
        ``max_iterations < 1``.
    ConvergenceError
        If an eigenvalue has not deflated after ``max_iterations``
        iterations. The contents of ``e`` and ``z`` are then unspecified.

    Notes
    -----
    Implicit QL with Wilkinson shifts, a modified version of the EISPACK
    routine ``imtql2`` that only accumulates the first row of the eigenvector
    matrix, which is all the Golub-Welsch algorithm needs.

    An off-diagonal entry is negligible when

    .. math::

        |e_{i+1}| \le \varepsilon (|d_i| + |d_{i+1}|)

    where :math:`\varepsilon` is the machine epsilon of the dtype. Every
    operation rounds in that dtype, so the result depends only on the dtype.
    ``torch.float64`` runs on Python floats, other dtypes on 0-d tensors
    with the negligibility scan vectorised over the remaining block.

    References
    ----------
    Martin, R. S., & Wilkinson, J. H. (1968). The implicit QL algorithm.
    Numerische Mathematik, 12, 377-383.

    Dubrulle, A. (1970). A short note on the implicit QL algorithm for
    symmetric tridiagonal matrices. Numerische Mathematik, 15, 450.
    """
    n = z.shape[0]

    if d.shape != (n,):
        raise ConfigurationError(
            f"d must have shape ({n},), got {tuple(d.shape)}"
        )
    if e.shape != (n + 1,):
        raise ConfigurationError(
            f"e must have shape ({n + 1},), got {tuple(e.shape)}"
        )
    if max_iterations < 1:
        raise ConfigurationError(
            f"max_iterations must be at least 1, got {max_iterations}"
        )

    dtype = torch.promote_types(
        torch.promote_types(d.dtype, e.dtype),
        z.dtype,
    )

    eps = torch.finfo(dtype).eps

    with torch.no_grad():
        z.zero_()
        z[0] = 1

        # A 1 x 1 matrix is already diagonal.
        if n == 1:
            return

        e[n] = 0

        # Python floats are IEEE doubles; every other dtype works on lists
        # of 0-d tensors whose elements are replaced, never modified in
        # place.
        if dtype == torch.float64:
            dd = d.tolist()
            ee = e.tolist()
            zz = z.tolist()

            hypot = math.hypot
            copysign = math.copysign
            find_negligible = _find_negligible

            one = 1.0
            zero = 0.0
        else:
            dd = list(d.to(dtype).unbind(0))
            ee = list(e.to(dtype).unbind(0))
            zz = list(z.to(dtype).unbind(0))

            hypot = torch.hypot
            copysign = torch.copysign
            find_negligible = _find_negligible_stacked

            one = torch.ones((), dtype=dtype, device=z.device)
            zero = torch.zeros((), dtype=dtype, device=z.device)

        for l in range(n):
            for j in range(1, max_iterations + 1):
                m = find_negligible(dd, ee, l, eps)

                if m == l:
                    break

                if j == max_iterations:
                    raise ConvergenceError(max_iterations)

                # Wilkinson shift from the leading 2 x 2 block.
                p = dd[l]

                g = (dd[l + 1] - p) / (2 * ee[l + 1])
                r = hypot(g, one)
                g = dd[m] - p + ee[l + 1] / (g + copysign(r, g))

                s = one
                c = one
                p = zero

                for i in range(m - 1, l - 1, -1):
                    f = s * ee[i + 1]
                    h = c * ee[i + 1]

                    if abs(f) < abs(g):
                        s = f / g
                        r = hypot(s, one)
                        ee[i + 2] = g * r
                        c = one / r
                        s = s * c
                    else:
                        c = g / f
                        r = hypot(c, one)
                        ee[i + 2] = f * r
                        s = one / r
                        c = c * s

                    g = dd[i + 1] - p
                    r = (dd[i] - g) * s + 2 * c * h
                    p = s * r
                    dd[i + 1] = g + p
                    g = c * r - h

                    # First component of the rotated eigenvectors.
                    f = zz[i + 1]
                    zz[i + 1] = s * zz[i] + c * f
                    zz[i] = c * zz[i] - s * f

                dd[l] = dd[l] - p
                ee[l + 1] = g
                ee[m + 1] = zero

        if dtype == torch.float64:
            d.copy_(torch.tensor(dd, dtype=dtype))
            e.copy_(torch.tensor(ee, dtype=dtype))
            z.copy_(torch.tensor(zz, dtype=dtype))
        else:
            d.copy_(torch.stack(dd))
            e.copy_(torch.stack(ee))
            z.copy_(torch.stack(zz))


def _find_negligible(d, e, l, eps):
    """First m >= l with a negligible e[m + 1], or n - 1."""
    n = len(d)

    for i in range(l, n - 1):
        if abs(e[i + 1]) <= eps * (abs(d[i]) + abs(d[i + 1])):
            return i

    return n - 1


def _find_negligible_stacked(d, e, l, eps):
    n = len(d)

    if l >= n - 1:
        return n - 1

    diagonal = torch.stack(d[l:n]).abs()

    mask = torch.stack(e[l + 1 : n]).abs() <= eps * (
        diagonal[:-1] + diagonal[1:]
    )

    hits = torch.nonzero(mask)

    if hits.numel() == 0:
        return n - 1

    return l + int(hits[0, 0])
