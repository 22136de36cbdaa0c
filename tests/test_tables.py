import pytest

from voxelterrain.tables import (
    CORNER_OFFSETS,
    EDGE_CORNERS,
    EDGE_OFFSETS,
    TRIANGLE_TABLE,
    edges_for_configuration,
)


def _cut_edges(config):
    inside = {corner for corner in range(8) if config & (1 << corner)}
    return {
        edge
        for edge, (a, b) in enumerate(EDGE_CORNERS)
        if (a in inside) != (b in inside)
    }


def test_table_covers_every_configuration():
    assert len(TRIANGLE_TABLE) == 256
    for config in range(256):
        triangles = edges_for_configuration(config)
        assert len(triangles) * 3 == len(TRIANGLE_TABLE[config]), config


def test_empty_and_full_cubes_have_no_triangles():
    assert edges_for_configuration(0) == ()
    assert edges_for_configuration(255) == ()


def test_single_corner_configuration():
    assert edges_for_configuration(1) == ((0, 8, 3),)


def test_bottom_face_configuration():
    assert edges_for_configuration(15) == ((9, 8, 10), (10, 8, 11))


@pytest.mark.parametrize("config", [-1, 256, 1000])
def test_out_of_range_configuration(config):
    with pytest.raises(ValueError):
        edges_for_configuration(config)


def test_triangle_counts_are_bounded():
    for config in range(256):
        triangles = edges_for_configuration(config)
        assert len(triangles) <= 5
        assert all(len(t) == 3 for t in triangles)
        assert all(0 <= e < 12 for t in triangles for e in t)


def test_triangles_use_exactly_the_cut_edges():
    for config in range(256):
        used = {e for t in edges_for_configuration(config) for e in t}
        assert used == _cut_edges(config), config


def test_complement_configurations_cut_the_same_edges():
    for config in range(256):
        a = {e for t in edges_for_configuration(config) for e in t}
        b = {e for t in edges_for_configuration(255 - config) for e in t}
        assert a == b


def test_edges_join_adjacent_corners():
    for config in range(1, 255):
        inside = {corner for corner in range(8) if config & (1 << corner)}
        for triangle in edges_for_configuration(config):
            for edge in triangle:
                a, b = EDGE_CORNERS[edge]
                pa, pb = EDGE_OFFSETS[edge]
                assert CORNER_OFFSETS[a] == pa
                assert CORNER_OFFSETS[b] == pb
                assert sum(abs(u - v) for u, v in zip(pa, pb)) == 1
                assert (a in inside) != (b in inside)