import numpy as np
import pytest

from buddhabrot.iterators import (
    Complex,
    batch_trajectories,
    buddhabrot_points,
    escape_lengths,
)


def test_complex_arithmetic():
    a = Complex(1.0, 2.0)
    b = Complex(3.0, -1.0)
    # (1 + 2i)(3 - i) = 3 - i + 6i - 2i^2 = 5 + 5i
    assert a * b == Complex(5.0, 5.0)
    assert a + b == Complex(4.0, 1.0)
    assert a.sqmagnitude() == 5.0
    # values are immutable
    with pytest.raises(AttributeError):
        a.real = 7.0


def test_origin_never_escapes():
    """c = 0 is a fixed point, so the orbit is discarded."""
    for max_iter in (1, 2, 10, 1000):
        assert list(buddhabrot_points(Complex(0.0, 0.0), max_iter)) == []


def test_period_two_orbit_is_discarded():
    """c = -1 oscillates 0 -> -1 -> 0 ... and never exceeds |z|^2 = 1."""
    assert list(buddhabrot_points(Complex(-1.0, 0.0), 5)) == []


def test_escaping_orbit_keeps_every_iterate():
    """c = 1+i: z1 = 1+i (|z|^2 = 2, continues), z2 = 1+3i (|z|^2 = 10, escapes)."""
    expected = [Complex(1.0, 1.0), Complex(1.0, 3.0)]
    assert list(buddhabrot_points(Complex(1.0, 1.0), 2)) == expected
    assert list(buddhabrot_points(Complex(1.0, 1.0), 50)) == expected


def test_cap_too_short_to_escape():
    # z1 = 1+i has |z|^2 == 2, which is not an escape
    assert list(buddhabrot_points(Complex(1.0, 1.0), 1)) == []


def test_trajectory_is_consumed_once():
    traj = buddhabrot_points(Complex(1.0, 1.0), 10)
    assert len(list(traj)) == 2
    assert list(traj) == []


def test_invalid_cap():
    with pytest.raises(ValueError):
        list(buddhabrot_points(Complex(1.0, 1.0), 0))
    with pytest.raises(ValueError):
        escape_lengths(np.array([1.0]), np.array([1.0]), 0)


def test_trajectory_properties_over_random_seeds():
    """Length <= cap; all points but the last stay within |z|^2 <= 2; the last escapes."""
    rng = np.random.default_rng(1234)
    seeds_r = rng.uniform(-2.0, 1.0, 400)
    seeds_i = rng.uniform(-2.0, 2.0, 400)

    for max_iter in (1, 3, 20, 100):
        for r, i in zip(seeds_r, seeds_i):
            traj = list(buddhabrot_points(Complex(r, i), max_iter))
            assert len(traj) <= max_iter
            if traj:
                assert all(p.sqmagnitude() <= 2.0 for p in traj[:-1])
                assert traj[-1].sqmagnitude() > 2.0


def test_escape_lengths_match_scalar_orbits():
    rng = np.random.default_rng(99)
    c_real = rng.uniform(-2.0, 1.0, 500)
    c_imag = rng.uniform(-2.0, 2.0, 500)
    max_iter = 60

    lengths = escape_lengths(c_real, c_imag, max_iter)
    expected = [
        len(list(buddhabrot_points(Complex(r, i), max_iter)))
        for r, i in zip(c_real.tolist(), c_imag.tolist())
    ]

    np.testing.assert_array_equal(lengths, expected)
    # some seeds must escape and some must be discarded for this to mean anything
    assert (lengths == 0).any()
    assert (lengths > 0).any()


def test_batch_trajectories_replay_escaping_seeds():
    c_real = np.array([1.0, 0.0, -1.0])
    c_imag = np.array([1.0, 0.0, 0.0])
    lengths = escape_lengths(c_real, c_imag, 10)
    np.testing.assert_array_equal(lengths, [2, 0, 0])

    steps = [(zr.copy(), zi.copy()) for zr, zi in batch_trajectories(c_real, c_imag, lengths)]

    assert len(steps) == 2
    np.testing.assert_array_equal(steps[0][0], [1.0])
    np.testing.assert_array_equal(steps[0][1], [1.0])
    np.testing.assert_array_equal(steps[1][0], [1.0])
    np.testing.assert_array_equal(steps[1][1], [3.0])


def test_batch_trajectories_yield_every_point():
    rng = np.random.default_rng(5)
    c_real = rng.uniform(-2.0, 1.0, 300)
    c_imag = rng.uniform(-2.0, 2.0, 300)
    lengths = escape_lengths(c_real, c_imag, 40)

    total = sum(zr.size for zr, _ in batch_trajectories(c_real, c_imag, lengths))
    assert total == lengths.sum()

    # the final point of each replayed orbit is outside the escape radius
    last_sq = []
    for r, i, n in zip(c_real.tolist(), c_imag.tolist(), lengths.tolist()):
        if n:
            traj = list(buddhabrot_points(Complex(r, i), 40))
            assert len(traj) == n
            last_sq.append(traj[-1].sqmagnitude())
    assert all(v > 2.0 for v in last_sq)
