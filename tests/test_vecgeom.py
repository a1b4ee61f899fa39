import numpy as np
import pytest

from g4vg.errors import VECGEOM, G4VGError
from g4vg.vecgeom import (
    BooleanComponent,
    GeoManager,
    Transformation3D,
    UnplacedBooleanVolume,
    UnplacedBox,
    UnplacedOrb,
    UnplacedScaledShape,
)


class TestTransformation3D:
    def test_identity(self):
        t = Transformation3D()
        assert t.is_identity()
        assert not t.has_rotation
        assert not t.has_translation

    def test_reflection_rejected(self):
        with pytest.raises(G4VGError) as excinfo:
            Transformation3D((0.0, 0.0, 0.0), np.diag([1.0, 1.0, -1.0]))
        assert excinfo.value.which == VECGEOM

    def test_apply_round_trip(self):
        t = Transformation3D((1.0, 2.0, 3.0), [[0, -1, 0], [1, 0, 0], [0, 0, 1]])
        points = np.array([[1.0, 0.0, 0.0]])
        np.testing.assert_allclose(t.apply(points), [[1.0, 3.0, 3.0]])
        np.testing.assert_allclose(t.apply_inverse(t.apply(points)), points)


class TestGeoManager:
    def test_ids_increment(self, manager):
        a = manager.make_logical_volume("a", UnplacedBox(1.0, 1.0, 1.0))
        b = manager.make_logical_volume("b", UnplacedOrb(1.0))
        assert (a.id, b.id) == (0, 1)
        assert manager.find_logical_volume(1) is b
        assert manager.find_logical_volume(7) is None

    def test_placed_volumes_registered(self, manager):
        world = manager.make_logical_volume("world", UnplacedBox(10.0, 10.0, 10.0))
        child = manager.make_logical_volume("child", UnplacedBox(1.0, 1.0, 1.0))
        pv = world.place_daughter("child_pv", child, Transformation3D((2.0, 0.0, 0.0)), copy_no=4)
        assert world.daughters == [pv]
        assert pv.copy_no == 4
        top = world.place()
        assert manager.num_placed_volumes == 2
        assert (pv.id, top.id) == (0, 1)

    def test_close(self, manager):
        world = manager.make_logical_volume("world", UnplacedBox(10.0, 10.0, 10.0))
        assert not manager.is_closed
        manager.set_world_and_close(world.place())
        assert manager.is_closed
        assert manager.world.logical_volume is world

    def test_foreign_world_rejected(self, manager):
        other = GeoManager().make_logical_volume("world", UnplacedBox(1.0, 1.0, 1.0))
        with pytest.raises(G4VGError) as excinfo:
            manager.set_world_and_close(other.place())
        assert excinfo.value.which == VECGEOM

    def test_clear(self, manager):
        manager.make_logical_volume("a", UnplacedBox(1.0, 1.0, 1.0))
        manager.clear()
        assert manager.num_logical_volumes == 0
        assert manager.make_logical_volume("b", UnplacedBox(1.0, 1.0, 1.0)).id == 0

    def test_global_instance(self):
        assert GeoManager.instance() is GeoManager.instance()


class TestCompositeShapes:
    def test_scaled_shape_mirror(self):
        shape = UnplacedScaledShape(UnplacedBox(1.0, 2.0, 3.0), (1.0, 1.0, -1.0))
        assert shape.capacity() == pytest.approx(48.0)
        lo, hi = shape.extent()
        np.testing.assert_allclose(lo, [-1.0, -2.0, -3.0])
        np.testing.assert_allclose(hi, [1.0, 2.0, 3.0])

    def test_zero_scale_rejected(self):
        with pytest.raises(ValueError):
            UnplacedScaledShape(UnplacedBox(1.0, 1.0, 1.0), (1.0, 0.0, 1.0))

    def test_union_extent_and_capacity(self):
        left = BooleanComponent(UnplacedBox(10.0, 10.0, 10.0), Transformation3D())
        right = BooleanComponent(UnplacedBox(10.0, 10.0, 10.0), Transformation3D((20.0, 0.0, 0.0)))
        union = UnplacedBooleanVolume("union", left, right)
        lo, hi = union.extent()
        np.testing.assert_allclose(lo, [-10.0, -10.0, -10.0])
        np.testing.assert_allclose(hi, [30.0, 10.0, 10.0])
        assert union.capacity() == pytest.approx(16000.0, rel=0.02)

    def test_unknown_operation(self):
        box = BooleanComponent(UnplacedBox(1.0, 1.0, 1.0), Transformation3D())
        with pytest.raises(ValueError):
            UnplacedBooleanVolume("xor", box, box)
