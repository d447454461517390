"""Unit tests for griddiff.diffop."""

from __future__ import annotations

import copy
import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from numpy.testing import assert_allclose

from griddiff.derivatives.fornberg import fornberg_weights
from griddiff.diffop import DifferentialOperator, Point3, as_point
from griddiff.exceptions import EvaluationError, GridConfigurationError, GridDiffError

OFFSETS = np.array([-0.2, -0.1, 0.0, 0.1, 0.2])


def cubic(q1, q2, q3):
    """A separable cubic with known partial derivatives."""
    return q1**3 - 2.0 * q2**2 + 0.5 * q3


def _make_operator(max_order: int = 2) -> DifferentialOperator:
    return DifferentialOperator.from_offsets((0.5, -1.0, 2.0), OFFSETS, OFFSETS, OFFSETS, max_order)


def test_as_point_accepts_sequences():
    """Tests that three coordinates become a Point3 of floats."""
    p = as_point(np.array([1, 2, 3]))
    assert p == Point3(1.0, 2.0, 3.0)
    assert isinstance(p.q1, float)


def test_as_point_rejects_wrong_length():
    """Tests that a point needs exactly three coordinates."""
    with pytest.raises(GridConfigurationError):
        as_point([1.0, 2.0])


def test_tables_match_engine_per_axis():
    """Tests that each axis table is built from its own grid and coordinate."""
    point = (0.1, 0.2, 0.3)
    g1 = [0.0, 0.1, 0.3]
    g2 = [-0.5, 0.0, 0.2, 0.4]
    g3 = [0.3, 0.35, 0.5]
    op = DifferentialOperator(point, g1, g2, g3, 2)

    for axis, (q0, grid) in enumerate(zip(point, (g1, g2, g3))):
        assert_allclose(op.table(axis), fornberg_weights(q0, grid, 3))
        assert_allclose(op.grid(axis), grid)
    assert op.max_order == 2
    assert op.point == Point3(0.1, 0.2, 0.3)


def test_two_point_grid_with_order_two_fails():
    """Tests that an order-2 operator needs at least three points per axis."""
    with pytest.raises(GridConfigurationError):
        DifferentialOperator((0.0, 0.0, 0.0), [0.0, 1.0], [0.0, 1.0, 2.0], [0.0, 1.0, 2.0], 2)


def test_three_point_grid_with_order_two_succeeds():
    """Tests the smallest valid grids for an order-2 operator."""
    grid = [-1.0, 0.0, 1.0]
    op = DifferentialOperator((0.0, 0.0, 0.0), grid, grid, grid, 2)
    assert all(t.shape == (3, 3) for t in op.tables)


def test_two_point_grid_with_order_one_succeeds():
    """Tests that two points are enough for first derivatives."""
    grid = [0.0, 1.0]
    op = DifferentialOperator((0.0, 0.0, 0.0), grid, grid, grid, 1)
    assert_allclose(op.eval_axis(0, 1, [3.0, 5.0]), 2.0)


@pytest.mark.parametrize("axis", [0, 1, 2])
def test_single_point_grid_fails(axis):
    """Tests that every axis grid needs at least two points."""
    grids = [[0.0, 1.0], [0.0, 1.0], [0.0, 1.0]]
    grids[axis] = [0.0]
    with pytest.raises(GridConfigurationError, match=f"q{axis + 1} grid"):
        DifferentialOperator((0.0, 0.0, 0.0), *grids, 0)


def test_negative_max_order_fails():
    """Tests that max_order must be non-negative."""
    grid = [0.0, 1.0]
    with pytest.raises(GridConfigurationError):
        DifferentialOperator((0.0, 0.0, 0.0), grid, grid, grid, -1)


def test_configuration_error_is_value_error():
    """Tests that configuration errors can be caught as ValueError."""
    assert issubclass(GridConfigurationError, GridDiffError)
    with pytest.raises(ValueError):
        DifferentialOperator((0.0, 0.0, 0.0), [0.0], [0.0], [0.0], 1)


def test_non_1d_grid_fails():
    """Tests that a grid must be one-dimensional."""
    grid = [0.0, 1.0, 2.0]
    with pytest.raises(GridConfigurationError, match="1D"):
        DifferentialOperator((0.0, 0.0, 0.0), np.zeros((3, 2)), grid, grid, 1)


def test_eval_axis_reproduces_polynomial_derivatives():
    """Tests first and second partials of a separable cubic."""
    op = _make_operator()
    x, y, z = op.point
    v1, v2, v3 = op.sample(cubic)

    assert_allclose(op.eval_axis(0, 0, v1), cubic(x, y, z), atol=1e-12)
    assert_allclose(op.eval_axis(0, 1, v1), 3.0 * x**2, atol=1e-10)
    assert_allclose(op.eval_axis(0, 2, v1), 6.0 * x, atol=1e-9)
    assert_allclose(op.eval_axis(1, 1, v2), -4.0 * y, atol=1e-10)
    assert_allclose(op.eval_axis(1, 2, v2), -4.0, atol=1e-9)
    assert_allclose(op.eval_axis(2, 1, v3), 0.5, atol=1e-10)
    assert_allclose(op.eval_axis(2, 2, v3), 0.0, atol=1e-9)


def test_eval_axis_order_above_max_fails():
    """Tests that orders beyond the built tables are rejected."""
    op = _make_operator(max_order=1)
    with pytest.raises(EvaluationError, match="higher than max"):
        op.eval_axis(0, 2, np.zeros(OFFSETS.size))


def test_eval_axis_negative_order_fails():
    """Tests that negative orders are rejected."""
    op = _make_operator()
    with pytest.raises(EvaluationError):
        op.eval_axis(0, -1, np.zeros(OFFSETS.size))


@pytest.mark.parametrize(
    ("size", "message"),
    [(OFFSETS.size - 1, "too few"), (OFFSETS.size + 1, "too many")],
)
def test_eval_axis_value_count_must_match(size, message):
    """Tests that exactly one value per abscissa is required."""
    op = _make_operator()
    with pytest.raises(EvaluationError, match=message):
        op.eval_axis(1, 1, np.zeros(size))


def test_eval_axis_invalid_axis_fails():
    """Tests that only axes 0, 1 and 2 exist."""
    op = _make_operator()
    with pytest.raises(EvaluationError, match="axis"):
        op.eval_axis(3, 1, np.zeros(OFFSETS.size))


@pytest.mark.parametrize("axis", [1.0, 1.5, "1", None])
def test_non_integer_axis_fails(axis):
    """Tests that axes must be integers, even integral floats."""
    op = _make_operator()
    with pytest.raises(EvaluationError, match="axis"):
        op.eval_axis(axis, 1, np.zeros(OFFSETS.size))
    with pytest.raises(EvaluationError, match="axis"):
        op.grid(axis)
    with pytest.raises(EvaluationError, match="axis"):
        op.table(axis)


def test_numpy_integer_axis_is_accepted():
    """Tests that NumPy integers index axes like Python ints."""
    op = _make_operator()
    assert op.grid(np.int64(2)) is op.grid(2)


def test_non_integer_order_fails():
    """Tests that derivative orders must be integers."""
    op = _make_operator()
    with pytest.raises(EvaluationError, match="order"):
        op.eval_axis(0, 1.0, np.zeros(OFFSETS.size))


def test_translated_samples_reuse_one_operator():
    """Tests that one local stencil serves every node of a uniform mesh."""
    h = 0.05
    offsets = h * np.arange(-2, 3)
    op = DifferentialOperator.from_offsets((0.0, 0.0, 0.0), offsets, offsets, offsets, 2)

    for x0 in (0.3, 1.1, 2.7):
        samples = np.sin(x0 + offsets)
        assert_allclose(op.eval_axis(0, 1, samples), np.cos(x0), rtol=1e-6, atol=1e-7)
        assert_allclose(op.eval_axis(0, 2, samples), -np.sin(x0), rtol=1e-5, atol=1e-6)


def test_stored_arrays_are_read_only():
    """Tests that grids and tables cannot be mutated in place."""
    op = _make_operator()
    with pytest.raises(ValueError):
        op.table(0)[0, 0] = 5.0
    with pytest.raises(ValueError):
        op.grid(1)[0] = 5.0


def test_grids_are_copied_on_construction():
    """Tests that later changes to the caller's grid do not leak in."""
    grid = np.array([-1.0, 0.0, 1.0])
    op = DifferentialOperator((0.0, 0.0, 0.0), grid, grid, grid, 1)
    grid[0] = -3.0
    assert op.grid(0)[0] == -1.0


@pytest.mark.parametrize("duplicate", [lambda op: op.copy(), copy.copy, copy.deepcopy])
def test_copy_is_deep(duplicate):
    """Tests that copies hold equal but independent arrays."""
    op = _make_operator()
    other = duplicate(op)

    assert other is not op
    assert other.point == op.point
    assert other.max_order == op.max_order
    for a, b in zip(op.tables + op.grids, other.tables + other.grids):
        assert_allclose(b, a)
        assert not np.shares_memory(a, b)
        assert not b.flags.writeable


def test_repeated_abscissas_log_warning(caplog):
    """Tests that duplicates are reported but not rejected."""
    grid = [0.0, 1.0, 2.0]
    with caplog.at_level(logging.WARNING, logger="griddiff"):
        op = DifferentialOperator((0.5, 0.5, 0.5), [0.0, 1.0, 1.0], grid, grid, 1)

    assert "repeated abscissas" in caplog.text
    assert not np.isfinite(op.table(0)).all()
    assert np.isfinite(op.table(1)).all()


def test_sample_axis_holds_other_coordinates():
    """Tests that sampling varies only the requested coordinate."""
    op = DifferentialOperator((1.0, 2.0, 3.0), [0.0, 1.0], [5.0, 6.0], [7.0, 8.0], 1)
    assert_allclose(op.sample_axis(lambda a, b, c: 100 * a + 10 * b + c, 1), [153.0, 163.0])


def test_concurrent_evaluation(extra_threads_ok):
    """Tests that one operator can be evaluated from several threads."""
    if not extra_threads_ok:
        pytest.skip("cannot spawn threads in this environment")

    op = _make_operator()
    values = op.sample_axis(cubic, 0)
    expected = op.eval_axis(0, 2, values)

    with ThreadPoolExecutor(max_workers=4) as ex:
        results = list(ex.map(lambda _: op.eval_axis(0, 2, values), range(64)))

    assert all(r == expected for r in results)


def test_repr_mentions_sizes():
    """Tests the debugging representation."""
    assert "grid_sizes=(5, 5, 5)" in repr(_make_operator())
