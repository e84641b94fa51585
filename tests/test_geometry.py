import pytest
import numpy as np
from meanforce.core.geometry import center_of_mass, superpose, align_subunits
from meanforce.errors import DegenerateWeightError


def rotation_z(theta):
    c, s = np.cos(theta), np.sin(theta)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


@pytest.fixture
def cloud():
    return np.random.default_rng(42).normal(size=(12, 3))


def test_center_of_mass_unweighted_is_mean(cloud):
    np.testing.assert_allclose(center_of_mass(cloud), cloud.mean(axis=0), atol=1e-12)
    np.testing.assert_allclose(center_of_mass(cloud, np.full(12, 2.5)), cloud.mean(axis=0), atol=1e-12)


def test_center_of_mass_single_nonzero_weight(cloud):
    w = np.zeros(12)
    w[5] = 3.0
    np.testing.assert_allclose(center_of_mass(cloud, w), cloud[5], atol=1e-12)


@pytest.mark.parametrize("weights", [np.zeros(4), -np.ones(4)])
def test_center_of_mass_degenerate_weights(weights):
    with pytest.raises(DegenerateWeightError):
        center_of_mass(np.ones((4, 3)), weights)


def test_center_of_mass_validation():
    with pytest.raises(ValueError, match="shape"):
        center_of_mass(np.ones((4, 2)))
    with pytest.raises(ValueError, match="Weights"):
        center_of_mass(np.ones((4, 3)), np.ones(3))


@pytest.mark.parametrize("theta", [0.0, 0.3, -1.2, 3.0])
def test_superpose_recovers_rigid_motion(cloud, theta):
    rot = rotation_z(theta)
    trans = np.array([10.0, -2.0, 0.5])
    target = cloud @ rot.T + trans
    r, t, rmsd = superpose(cloud, target)
    np.testing.assert_allclose(r, rot, atol=1e-10)
    np.testing.assert_allclose(t, trans, atol=1e-10)
    assert rmsd == pytest.approx(0.0, abs=1e-10)
    assert np.linalg.det(r) == pytest.approx(1.0)


def test_superpose_rejects_reflection(cloud):
    mirrored = cloud * np.array([1.0, 1.0, -1.0])
    r, _, rmsd = superpose(cloud, mirrored)
    assert np.linalg.det(r) == pytest.approx(1.0)
    assert rmsd > 0


def test_superpose_weighted_rmsd(cloud):
    target = cloud.copy()
    target[0] += np.array([0.0, 0.0, 1.0])
    w = np.ones(12)
    w[0] = 0.0
    _, _, rmsd = superpose(cloud, target, w)
    assert rmsd == pytest.approx(0.0, abs=1e-10)


def test_align_subunits_delegates(cloud):
    rot = rotation_z(0.7)
    target = cloud @ rot.T
    for a, b in zip(align_subunits(cloud, target), superpose(cloud, target)):
        np.testing.assert_allclose(a, b)


def test_superpose_shape_mismatch():
    with pytest.raises(ValueError, match="differ"):
        superpose(np.ones((3, 3)), np.ones((4, 3)))
