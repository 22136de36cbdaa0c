import pytest

from voxelterrain.chunk import Chunk, FoliageLayer, GrassInstance, MeshInstanceData


def test_mesh_instance_data_defaults():
    data = MeshInstanceData()
    assert data.mesh is None
    assert data.min_scale == 1.0
    assert data.max_scale == 1.0


def test_add_instance_returns_sequential_ids():
    layer = FoliageLayer(MeshInstanceData())
    first = layer.add_instance((1, 2, 3), 45.0, 1.5)
    second = layer.add_instance((4, 5, 6), 90.0, 0.5)
    assert (first, second) == (0, 1)
    assert layer.instances[0] == GrassInstance((1.0, 2.0, 3.0), 45.0, 1.5)
    assert len(layer) == 2


def test_remove_instance_shifts_later_instances():
    layer = FoliageLayer(MeshInstanceData())
    for k in range(3):
        layer.add_instance((k, 0, 0), 0.0, 1.0)
    layer.remove_instance(1)
    assert [inst.location[0] for inst in layer.instances] == [0.0, 2.0]


@pytest.mark.parametrize("index", [-1, 2, 10])
def test_remove_instance_out_of_range(index):
    layer = FoliageLayer(MeshInstanceData())
    layer.add_instance((0, 0, 0), 0.0, 1.0)
    layer.add_instance((1, 0, 0), 0.0, 1.0)
    with pytest.raises(IndexError):
        layer.remove_instance(index)
    assert len(layer) == 2


def test_clear_removes_everything():
    layer = FoliageLayer(MeshInstanceData())
    layer.add_instance((0, 0, 0), 0.0, 1.0)
    layer.clear()
    assert layer.instances == []


def test_reset_mesh_data_keeps_foliage_and_size():
    chunk = Chunk(local_size=(3, 4))
    chunk.vertices.append((0.0, 0.0, 0.0))
    chunk.triangles.extend([0, 0, 0])
    chunk.vertex_colors.append((1.0, 0.0, 0.0, 1.0))
    chunk.vertex_map[(0, 0, 0)] = 0
    chunk.mesh_ids.append(0)
    chunk.grass_instance_positions.append((1.0, 1.0, 1.0))
    chunk.reset_mesh_data()
    assert chunk.vertices == []
    assert chunk.triangles == []
    assert chunk.vertex_colors == []
    assert chunk.vertex_map == {}
    assert chunk.mesh_ids == [0]
    assert chunk.grass_instance_positions == [(1.0, 1.0, 1.0)]
    assert chunk.local_size == (3, 4)


def test_chunks_do_not_share_lists():
    a = Chunk()
    b = Chunk()
    a.vertices.append((1.0, 2.0, 3.0))
    assert b.vertices == []