import pytest
import numpy as np
from meanforce.core.moments import MomentAccumulator, ForceStatistics
from meanforce.errors import EmptyAccumulatorError


@pytest.mark.parametrize("values", [
    [1.0, 2.0, 3.0],
    [5.0],
    [-2.5, 0.0, 7.25, 1e3, -1e3],
    list(np.random.default_rng(0).normal(1e4, 2.0, size=1000)),
])
def test_accumulator_matches_two_pass(values):
    acc = MomentAccumulator()
    for v in values:
        acc.accumulate(v)
    mean, var = acc.finalize()
    arr = np.asarray(values)
    assert acc.count == len(values)
    np.testing.assert_allclose(mean, arr.mean(), rtol=1e-12)
    np.testing.assert_allclose(var, np.mean((arr - arr.mean())**2), rtol=1e-8, atol=1e-10)
    np.testing.assert_allclose(acc.sum, arr.sum(), rtol=1e-10)
    np.testing.assert_allclose(acc.sum_squares, np.sum(arr**2), rtol=1e-10)


def test_accumulator_population_variance():
    acc = MomentAccumulator()
    for v in (1.0, 2.0, 3.0):
        acc.accumulate(v)
    mean, var = acc.finalize()
    assert mean == pytest.approx(2.0)
    assert var == pytest.approx(2.0 / 3.0, abs=1e-6)


def test_single_value_has_zero_variance():
    acc = MomentAccumulator()
    acc.accumulate(4.2)
    assert acc.finalize() == (pytest.approx(4.2), 0.0)


def test_empty_accumulator():
    acc = MomentAccumulator()
    with pytest.raises(EmptyAccumulatorError):
        acc.finalize()
    mean, std, count = acc.summary()
    assert np.isnan(mean) and np.isnan(std) and count == 0


def test_merge_equals_single_stream():
    rng = np.random.default_rng(1)
    a_vals, b_vals = rng.normal(size=37), rng.normal(3.0, 2.0, size=11)
    a, b, whole = MomentAccumulator(), MomentAccumulator(), MomentAccumulator()
    for v in a_vals:
        a.accumulate(v); whole.accumulate(v)
    for v in b_vals:
        b.accumulate(v); whole.accumulate(v)
    a.merge(b)
    assert a.count == whole.count
    np.testing.assert_allclose(a.finalize(), whole.finalize(), rtol=1e-10)


def test_merge_with_empty_is_noop():
    a = MomentAccumulator()
    a.accumulate(1.0)
    a.merge(MomentAccumulator())
    assert a.count == 1
    empty = MomentAccumulator()
    empty.merge(a)
    assert empty.finalize() == (1.0, 0.0)


def test_force_statistics_add_and_reset():
    stats = ForceStatistics()
    stats.add(1.0, 2.0, 1.0)
    stats.add(3.0, 4.0, 2.0)
    assert stats.count == 2
    summary = stats.summary()
    assert summary['radial_force']['mean'] == pytest.approx(2.0)
    assert summary['torque']['std'] == pytest.approx(1.0)
    assert summary['symmetric_torque']['count'] == 2
    stats.reset()
    assert stats.count == 0
    assert np.isnan(stats.summary()['torque']['mean'])
