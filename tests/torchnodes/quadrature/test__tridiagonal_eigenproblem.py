import numpy as np
import pytest
import scipy.linalg
import torch

from torchnodes.quadrature import (
    ConfigurationError,
    ConvergenceError,
    legendre_recurrence_coefficients,
    tridiagonal_eigenproblem_,
)


def _random_tridiagonal(n, seed, dtype=torch.float64):
    generator = torch.Generator().manual_seed(seed)
    d = torch.randn(n, dtype=dtype, generator=generator)
    e = torch.empty(n + 1, dtype=dtype)
    e[0] = 0
    e[1:n] = torch.rand(n - 1, dtype=dtype, generator=generator) + 0.5
    e[n] = 0
    return d, e


class TestTridiagonalEigenproblem:
    @pytest.mark.parametrize("n", [2, 3, 8, 20])
    def test_matches_scipy(self, n):
        """Eigenvalues and first eigenvector components match LAPACK"""
        d, e = _random_tridiagonal(n, seed=n)
        expected_values, expected_vectors = scipy.linalg.eigh_tridiagonal(
            d.numpy(), e[1:n].numpy()
        )

        z = torch.empty(n, dtype=torch.float64)
        tridiagonal_eigenproblem_(d, e, z)

        order = torch.argsort(d)
        np.testing.assert_allclose(
            d[order].numpy(), expected_values, rtol=1e-12, atol=1e-12
        )
        # Eigenvectors are defined up to sign.
        np.testing.assert_allclose(
            (z[order] ** 2).numpy(),
            expected_vectors[0] ** 2,
            rtol=1e-10,
            atol=1e-12,
        )

    def test_first_components_are_normalised(self):
        """The first row of an orthogonal matrix has unit norm"""
        d, e = _random_tridiagonal(12, seed=1)
        z = torch.empty(12, dtype=torch.float64)

        tridiagonal_eigenproblem_(d, e, z)

        torch.testing.assert_close(
            (z**2).sum(), torch.tensor(1.0, dtype=torch.float64)
        )

    def test_trace_is_preserved(self):
        d, e = _random_tridiagonal(10, seed=2)
        trace = d.sum()
        z = torch.empty(10, dtype=torch.float64)

        tridiagonal_eigenproblem_(d, e, z)

        torch.testing.assert_close(d.sum(), trace)

    def test_single_element(self):
        d = torch.tensor([3.0], dtype=torch.float64)
        e = torch.tensor([5.0, 7.0], dtype=torch.float64)
        z = torch.full((1,), 9.0, dtype=torch.float64)

        tridiagonal_eigenproblem_(d, e, z)

        assert d.tolist() == [3.0]
        assert z.tolist() == [1.0]

    def test_diagonal_matrix(self):
        """A diagonal matrix deflates immediately"""
        d = torch.tensor([2.0, -1.0, 4.0], dtype=torch.float64)
        e = torch.zeros(4, dtype=torch.float64)
        z = torch.empty(3, dtype=torch.float64)

        tridiagonal_eigenproblem_(d, e, z, max_iterations=1)

        assert d.tolist() == [2.0, -1.0, 4.0]
        assert z.tolist() == [1.0, 0.0, 0.0]

    def test_first_entry_of_e_is_untouched(self):
        d, e = _random_tridiagonal(6, seed=3)
        e[0] = 42.0
        z = torch.empty(6, dtype=torch.float64)

        tridiagonal_eigenproblem_(d, e, z)

        assert e[0].item() == 42.0

    def test_returns_none(self):
        d, e = _random_tridiagonal(4, seed=4)
        z = torch.empty(4, dtype=torch.float64)

        assert tridiagonal_eigenproblem_(d, e, z) is None

    def test_deterministic(self):
        d1, e1 = _random_tridiagonal(15, seed=5)
        d2, e2 = d1.clone(), e1.clone()
        z1 = torch.empty(15, dtype=torch.float64)
        z2 = torch.empty(15, dtype=torch.float64)

        tridiagonal_eigenproblem_(d1, e1, z1)
        tridiagonal_eigenproblem_(d2, e2, z2)

        assert torch.equal(d1, d2)
        assert torch.equal(z1, z2)

    @pytest.mark.parametrize("dtype", [torch.float32, torch.float64])
    def test_split_matrix(self, dtype):
        """A zero off-diagonal entry splits the matrix into two blocks"""
        d, e = _random_tridiagonal(9, seed=8)
        e[4] = 0
        expected = scipy.linalg.eigvalsh_tridiagonal(d.numpy(), e[1:9].numpy())

        d, e = d.to(dtype), e.to(dtype)
        z = torch.empty(9, dtype=dtype)

        tridiagonal_eigenproblem_(d, e, z)

        tolerance = 1e-5 if dtype == torch.float32 else 1e-12
        np.testing.assert_allclose(
            torch.sort(d).values.double().numpy(),
            expected,
            rtol=tolerance,
            atol=tolerance,
        )
        torch.testing.assert_close(
            (z.double() ** 2).sum(),
            torch.tensor(1.0, dtype=torch.float64),
            rtol=tolerance,
            atol=tolerance,
        )

    @pytest.mark.parametrize("dtype", [torch.float32, torch.float64])
    def test_legendre_nodes(self, dtype):
        """Eigenvalues of the Legendre Jacobi matrix are the Gauss nodes"""
        a, b = legendre_recurrence_coefficients(5, dtype=dtype)
        z = torch.empty(5, dtype=dtype)

        tridiagonal_eigenproblem_(a, b, z)

        expected, _ = np.polynomial.legendre.leggauss(5)
        tolerance = 1e-5 if dtype == torch.float32 else 1e-14
        np.testing.assert_allclose(
            torch.sort(a).values.double().numpy(),
            expected,
            rtol=tolerance,
            atol=tolerance,
        )
        assert z.dtype == dtype


class TestTridiagonalEigenproblemErrors:
    def test_convergence_error(self):
        d, e = _random_tridiagonal(10, seed=6)
        z = torch.empty(10, dtype=torch.float64)

        with pytest.raises(ConvergenceError) as info:
            tridiagonal_eigenproblem_(d, e, z, max_iterations=1)

        assert info.value.max_iterations == 1

    def test_larger_budget_converges(self):
        d, e = _random_tridiagonal(10, seed=6)
        z = torch.empty(10, dtype=torch.float64)

        tridiagonal_eigenproblem_(d, e, z, max_iterations=30)

        assert torch.all(torch.isfinite(d))

    def test_invalid_max_iterations(self):
        d, e = _random_tridiagonal(3, seed=7)
        z = torch.empty(3, dtype=torch.float64)

        with pytest.raises(ConfigurationError, match="max_iterations"):
            tridiagonal_eigenproblem_(d, e, z, max_iterations=0)

    def test_shape_mismatch_d(self):
        d = torch.zeros(4, dtype=torch.float64)
        e = torch.zeros(4, dtype=torch.float64)
        z = torch.empty(3, dtype=torch.float64)

        with pytest.raises(ConfigurationError, match="d must have shape"):
            tridiagonal_eigenproblem_(d, e, z)

    def test_shape_mismatch_e(self):
        d = torch.zeros(3, dtype=torch.float64)
        e = torch.zeros(3, dtype=torch.float64)
        z = torch.empty(3, dtype=torch.float64)

        with pytest.raises(ConfigurationError, match="e must have shape"):
            tridiagonal_eigenproblem_(d, e, z)
