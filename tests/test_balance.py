"""Tests for LAPACK balancing and its inverse."""

import numpy as np
import pytest
import torch

from core.balance import BalanceResult, balance_, rcswap_, unbalance_


DTYPE = torch.float64


def _badly_scaled(n=5, seed=0):
    g = torch.Generator().manual_seed(seed)
    R = torch.randn(n, n, dtype=DTYPE, generator=g)
    D = torch.diag(2.0 ** torch.arange(0, 4 * n, 4, dtype=DTYPE))
    return D @ R @ torch.linalg.inv(D)


def _triangular_mix():
    """Lower-triangular head, dense tail: forces row and column permutations."""
    return torch.tensor([
        [1.0, 0.0, 0.0, 0.0, 0.0],
        [2.0, 3.0, 0.0, 0.0, 0.0],
        [4.0, 5.0, 6.0, 7.0, 0.0],
        [8.0, 9.0, 1.0, 2.0, 0.0],
        [3.0, 4.0, 5.0, 6.0, 7.0],
    ], dtype=DTYPE)


class TestBalance:

    def test_result_bounds(self):
        A = _triangular_mix()
        bal = balance_(A)
        assert isinstance(bal, BalanceResult)
        assert 0 <= bal.ilo <= bal.ihi <= A.shape[0] - 1
        assert bal.scale.shape == (5,)

    def test_permutations_recorded(self):
        A = _triangular_mix()
        bal = balance_(A)
        # Isolated eigenvalues mean the unreduced block is strictly smaller
        assert bal.ihi - bal.ilo + 1 < 5
        outside = np.r_[bal.scale[:bal.ilo], bal.scale[bal.ihi + 1:]]
        assert np.all(outside == np.round(outside))
        assert np.all((outside >= 1) & (outside <= 5))

    def test_reduces_norm(self):
        A = _badly_scaled()
        before = torch.linalg.matrix_norm(A, ord=1).item()
        balance_(A)
        after = torch.linalg.matrix_norm(A, ord=1).item()
        assert after < before

    def test_in_place(self):
        A = _badly_scaled()
        ptr = A.data_ptr()
        balance_(A)
        assert A.data_ptr() == ptr

    def test_preserves_eigenvalues(self):
        A = _badly_scaled()
        ev_before = torch.sort(torch.linalg.eigvals(A).abs()).values
        balance_(A)
        ev_after = torch.sort(torch.linalg.eigvals(A).abs()).values
        assert torch.allclose(ev_before, ev_after, rtol=1e-8)

    @pytest.mark.parametrize("dtype", [torch.float32, torch.complex128])
    def test_other_dtypes(self, dtype):
        A = _badly_scaled(n=4).to(dtype)
        A0 = A.clone()
        bal = balance_(A)
        assert A.dtype == dtype
        unbalance_(A, bal)
        assert torch.allclose(A, A0, rtol=1e-4 if dtype == torch.float32 else 1e-10)


class TestUnbalance:

    @pytest.mark.parametrize("make", [_badly_scaled, _triangular_mix])
    def test_round_trip(self, make):
        """Unbalancing the balanced matrix recovers the input."""
        A = make()
        A0 = A.clone()
        bal = balance_(A)
        unbalance_(A, bal)
        assert torch.allclose(A, A0, rtol=1e-12, atol=1e-12)

    def test_upper_triangular_round_trip(self):
        A = _triangular_mix().T.contiguous()
        A0 = A.clone()
        bal = balance_(A)
        assert unbalance_(A, bal) is A
        assert torch.allclose(A, A0, rtol=1e-12, atol=1e-12)

    def test_identity_scale_is_noop(self):
        X = torch.arange(9, dtype=DTYPE).reshape(3, 3)
        bal = BalanceResult(0, 2, np.ones(3))
        assert torch.equal(unbalance_(X.clone(), bal), X)

    def test_diagonal_undo(self):
        X = torch.ones(2, 2, dtype=DTYPE)
        bal = BalanceResult(0, 1, np.array([2.0, 0.5]))
        unbalance_(X, bal)
        expected = torch.tensor([[1.0, 4.0], [0.25, 1.0]], dtype=DTYPE)
        assert torch.allclose(X, expected)


class TestRcswap:

    def test_swaps_rows_and_columns(self):
        X = torch.arange(9, dtype=DTYPE).reshape(3, 3)
        Y = X.clone()
        rcswap_(Y, 0, 2)
        perm = [2, 1, 0]
        assert torch.equal(Y, X[perm][:, perm])

    def test_same_index_noop(self):
        X = torch.arange(4, dtype=DTYPE).reshape(2, 2)
        Y = X.clone()
        rcswap_(Y, 1, 1)
        assert torch.equal(Y, X)
