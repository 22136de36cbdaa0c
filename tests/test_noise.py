import pytest

from voxelterrain.noise import perlin_noise_2d


def _samples():
    return [(i * 0.37 + 0.013, j * 0.53 + 0.029) for i in range(40) for j in range(40)]


@pytest.mark.parametrize("point", [(0, 0), (3, 7), (-5, 12), (255, 1), (100, -100)])
def test_zero_at_lattice_points(point):
    assert perlin_noise_2d(*point) == pytest.approx(0.0, abs=1e-12)


def test_values_within_unit_range():
    values = [perlin_noise_2d(x, y) for x, y in _samples()]
    assert all(-1.0 <= value <= 1.0 for value in values)


def test_noise_is_not_flat():
    values = [perlin_noise_2d(x, y) for x, y in _samples()]
    assert max(abs(value) for value in values) > 0.05
    assert min(values) < 0.0 < max(values)


def test_deterministic():
    points = _samples()[:50]
    forward = [perlin_noise_2d(x, y) for x, y in points]
    backward = [perlin_noise_2d(x, y) for x, y in reversed(points)]
    assert forward == backward[::-1]
    assert any(abs(value) > 1e-6 for value in forward)


def test_periodic_over_256_units():
    for x, y in _samples()[:100]:
        assert perlin_noise_2d(x + 256.0, y) == pytest.approx(perlin_noise_2d(x, y), abs=1e-9)
        assert perlin_noise_2d(x, y - 256.0) == pytest.approx(perlin_noise_2d(x, y), abs=1e-9)


def test_continuous_across_cell_boundaries():
    for base in (1.0, 2.0, 17.0):
        left = perlin_noise_2d(base - 1e-7, 0.4)
        right = perlin_noise_2d(base + 1e-7, 0.4)
        assert left == pytest.approx(right, abs=1e-5)


def test_small_steps_give_small_changes():
    for x, y in _samples()[:200]:
        delta = abs(perlin_noise_2d(x + 1e-4, y) - perlin_noise_2d(x, y))
        assert delta < 1e-3