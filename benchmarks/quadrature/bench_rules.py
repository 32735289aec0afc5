"""Benchmarks for Legendre quadrature rule generation.

Times the implicit QL engine for each end point variant and precision and
compares the Gauss rule with numpy's ``leggauss`` and a dense
``torch.linalg.eigh`` of the Jacobi matrix.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import numpy as np
import torch

from torchnodes.quadrature import legendre_gauss


def benchmark(
    func: Callable,
    *args: Any,
    warmup: int = 1,
    iterations: int = 5,
    **kwargs: Any,
) -> dict[str, float]:
    """Run a simple benchmark on a function.

    Returns
    -------
    dict
        Dictionary with keys 'mean', 'std', 'min' and 'max' in seconds.
    """
    for _ in range(warmup):
        func(*args, **kwargs)

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        times.append(time.perf_counter() - start)

    return {
        "mean": np.mean(times),
        "std": np.std(times),
        "min": np.min(times),
        "max": np.max(times),
    }


def format_time(seconds: float) -> str:
    """Format time in appropriate units."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.3f}us"
    elif seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    else:
        return f"{seconds:.3f}s"


def dense_gauss(n: int) -> tuple[torch.Tensor, torch.Tensor]:
    k = torch.arange(1, n, dtype=torch.float64)
    off_diag = k / torch.sqrt(4 * k**2 - 1)
    jacobi = torch.diag(off_diag, diagonal=1) + torch.diag(off_diag, diagonal=-1)
    eigenvalues, eigenvectors = torch.linalg.eigh(jacobi)
    return eigenvalues, 2 * eigenvectors[0, :] ** 2


def bench_end_points(n: int = 32) -> None:
    print(f"\nEnd point variants (n={n})")
    print("-" * 30)
    for dtype in (torch.float32, torch.float64):
        for end_point in ("neither", "left", "right", "both"):
            result = benchmark(legendre_gauss, n, end_point, dtype=dtype)
            print(
                f"  {str(dtype):14s} {end_point:8s} "
                f"{format_time(result['mean'])} +/- {format_time(result['std'])}"
            )


def bench_references(sizes: tuple[int, ...] = (8, 32, 128)) -> None:
    print("\nGauss rule against references")
    print("-" * 30)
    for n in sizes:
        times = {
            "implicit QL": benchmark(legendre_gauss, n),
            "numpy leggauss": benchmark(np.polynomial.legendre.leggauss, n),
            "torch eigh": benchmark(dense_gauss, n),
        }
        for name, result in times.items():
            print(f"  n={n:4d} {name:15s} {format_time(result['mean'])}")


if __name__ == "__main__":
    bench_end_points()
    bench_references()
