"""torchnodes: Gauss-type quadrature nodes and weights in PyTorch."""

from . import quadrature
from .quadrature import (
    legendre_gauss,
    legendre_gauss_lobatto,
    legendre_gauss_radau,
)

__all__ = [
    "quadrature",
    "legendre_gauss",
    "legendre_gauss_lobatto",
    "legendre_gauss_radau",
]

__version__ = "0.1.0"
