import numpy as np
import pytest
import scipy.sparse as sp
from core.exceptions import ComputationFailure
from inout.yaml_parser import SolverSettings
from utils.linops import LinearOperator, solve, make_inverter, reciprocal_condition

def test_inverse_of_regular_matrix():
    A = np.array([[1.0, 2.0], [3.0, 4.0]])
    A_inv = solve(A)
    np.testing.assert_allclose(A @ A_inv, np.eye(2), atol=1e-12)

def test_inverse_accepts_nested_lists_and_ints():
    A_inv = solve([[2, 0], [0, 4]])
    np.testing.assert_allclose(A_inv, [[0.5, 0.0], [0.0, 0.25]])

def test_complex_inverse():
    A = np.array([[1 + 1j, 2], [0, 1j]])
    np.testing.assert_allclose(A @ solve(A), np.eye(2), atol=1e-12)

def test_solve_with_rhs():
    A = np.array([[3.0, 1.0], [1.0, 2.0]])
    np.testing.assert_allclose(solve(A, np.array([9.0, 8.0])), [2.0, 3.0])

def test_cholesky_path():
    A = np.array([[4.0, 1.0], [1.0, 3.0]])
    np.testing.assert_allclose(solve(A, assume_posdef=True), np.linalg.inv(A))

def test_cholesky_rejects_indefinite():
    A = np.array([[1.0, 2.0], [2.0, 1.0]])
    with pytest.raises(ComputationFailure):
        solve(A, assume_posdef=True)

def test_sparse_inverse():
    A = sp.csc_matrix(np.array([[4.0, 0.0, 1.0], [0.0, 2.0, 0.0], [1.0, 0.0, 3.0]]))
    np.testing.assert_allclose(solve(A), np.linalg.inv(A.toarray()))

def test_sparse_singular():
    A = sp.csc_matrix(np.array([[1.0, 0.0], [0.0, 0.0]]))
    with pytest.raises(ComputationFailure):
        solve(A)

@pytest.mark.parametrize("A", [
    np.array([[1.0, 2.0], [2.0, 4.0]]),
    np.zeros((3, 3)),
])
def test_singular_matrix_raises(A):
    with pytest.raises(ComputationFailure) as excinfo:
        solve(A)
    assert isinstance(excinfo.value.__cause__, np.linalg.LinAlgError)

def test_non_square_raises():
    with pytest.raises(ComputationFailure):
        solve(np.ones((2, 3)))

def test_non_finite_raises():
    with pytest.raises(ComputationFailure):
        solve(np.array([[1.0, np.nan], [0.0, 1.0]]))

def test_rhs_dimension_mismatch_raises():
    with pytest.raises(ComputationFailure):
        solve(np.eye(2), np.ones(3))

def test_tol_rejects_ill_conditioned():
    eps = 1e-12
    A = np.array([[1.0, 1.0], [1.0, 1.0 + eps]])
    with pytest.raises(ComputationFailure):
        solve(A, tol=1e-8)
    # same matrix passes without the threshold
    assert np.all(np.isfinite(solve(A)))

def test_reciprocal_condition():
    assert reciprocal_condition(np.eye(3)) == pytest.approx(1.0)
    assert reciprocal_condition(np.zeros((2, 2))) == 0.0

def test_linear_operator_reuses_factorisation():
    A = np.array([[2.0, 1.0], [1.0, 3.0]])
    op = LinearOperator(A)
    for b in (np.array([1.0, 0.0]), np.array([0.0, 1.0])):
        np.testing.assert_allclose(A @ op(b), b, atol=1e-12)
    np.testing.assert_allclose(op.inverse(), np.linalg.inv(A))

def test_make_inverter_binds_settings():
    settings = SolverSettings(assume_posdef=True, tol=1e-6)
    invert = make_inverter(settings)
    with pytest.raises(ComputationFailure):
        invert(np.array([[1.0, 2.0], [2.0, 1.0]]))
    # call-time keywords override the bound defaults
    result = invert(np.array([[1.0, 2.0], [2.0, 1.0]]), assume_posdef=False)
    np.testing.assert_allclose(result, np.linalg.inv([[1.0, 2.0], [2.0, 1.0]]))

def test_default_tol_rejects_near_singular():
    A = np.array([[1e-20, 0.0], [0.0, 1.0]])
    with pytest.raises(ComputationFailure) as excinfo:
        solve(A)
    assert "computationally singular" in str(excinfo.value)
    # tol=None turns the condition check off
    np.testing.assert_allclose(solve(A, tol=None), [[1e20, 0.0], [0.0, 1.0]])

def test_ragged_input_raises_computation_failure():
    ragged = np.array([[1.0, 2.0], [3.0]], dtype=object)
    with pytest.raises(ComputationFailure):
        solve(ragged)
