import numpy as np
import pytest


def format_frame(positions, forces, position_tokens=None):
    """Lines of one frame: 'timestep' marker then 'id x y z fx fy fz' per atom."""
    lines = ["timestep 0\n"]
    for i, (x, f) in enumerate(zip(positions, forces)):
        pos = position_tokens[i] if position_tokens is not None else f"{x[0]:.8f} {x[1]:.8f} {x[2]:.8f}"
        lines.append(f"{i + 1} {pos} {f[0]:.8f} {f[1]:.8f} {f[2]:.8f}\n")
    return lines


@pytest.fixture
def two_unit_positions():
    """Four atoms: subunit A about the origin, subunit B the same shape shifted by 10 along x."""
    return np.array([
        [1.0, 0.0, 0.0],
        [-1.0, 0.0, 0.0],
        [11.0, 0.0, 0.0],
        [9.0, 0.0, 0.0],
    ])


@pytest.fixture
def radial_forces():
    """Forces of a 4-atom frame whose radial force is `value`."""
    def _make(value):
        f = np.zeros((4, 3))
        f[2:, 0] = value
        return f
    return _make


@pytest.fixture
def write_force_file(tmp_path):
    """Write a force trajectory file from a list of force arrays; returns its path."""
    def _write(name, positions, force_frames, tail_lines=(), later_position_tokens=None):
        lines = []
        for k, forces in enumerate(force_frames):
            tokens = later_position_tokens if k > 0 else None
            lines.extend(format_frame(positions, forces, tokens))
        lines.extend(tail_lines)
        path = tmp_path / name
        path.write_text("".join(lines))
        return path
    return _write


@pytest.fixture
def frame_lines():
    return format_frame
