"""Tests for solid capacities, containment, and solid-by-solid conversion."""

import math

import numpy as np
import pytest

from g4vg.errors import GEANT4, IMPLEMENTATION, RUNTIME, G4VGError
from g4vg.geant4 import (
    Box,
    Cons,
    Ellipsoid,
    EllipticalCone,
    GenericTrap,
    IntersectionSolid,
    Orb,
    Paraboloid,
    Polycone,
    Polyhedra,
    ReflectedSolid,
    Solid,
    Sphere,
    SubtractionSolid,
    Tet,
    Transform3D,
    Trap,
    Trd,
    Tubs,
    UnionSolid,
)
from g4vg.solid_converter import SolidConverter
from g4vg.vecgeom import (
    UnplacedBooleanVolume,
    UnplacedBox,
    UnplacedScaledShape,
    UnplacedTrapezoid,
    UnplacedTube,
)


class TestCapacities:
    def test_box(self):
        assert Box("b", 250.0, 250.0, 250.0).cubic_volume() == pytest.approx(1.25e8)

    def test_full_tube(self):
        assert Tubs("t", 0.0, 10.0, 5.0).cubic_volume() == pytest.approx(math.pi * 100.0 * 10.0)

    def test_tube_segment(self):
        full = Tubs("t", 2.0, 10.0, 5.0).cubic_volume()
        quarter = Tubs("t", 2.0, 10.0, 5.0, 0.0, math.pi / 2).cubic_volume()
        assert quarter == pytest.approx(full / 4)

    def test_phi_is_clamped(self):
        assert Tubs("t", 0.0, 1.0, 1.0, 0.0, 10.0).dphi == pytest.approx(2 * math.pi)

    def test_cone_matches_frustum(self):
        vol = Cons("c", 0.0, 10.0, 0.0, 20.0, 15.0).cubic_volume()
        assert vol == pytest.approx(math.pi * 30.0 * (100.0 + 200.0 + 400.0) / 3.0)

    def test_hemisphere(self):
        vol = Sphere("s", 0.0, 10.0, 0.0, 2 * math.pi, 0.0, math.pi / 2).cubic_volume()
        assert vol == pytest.approx(2.0 * math.pi * 1000.0 / 3.0)

    def test_full_ellipsoid(self):
        assert Ellipsoid("e", 1.0, 2.0, 3.0).cubic_volume() == pytest.approx(4.0 * math.pi * 6.0 / 3.0)

    def test_paraboloid(self):
        # Solid of revolution of rho^2 linear in z
        assert Paraboloid("p", 5.0, 0.0, 10.0).cubic_volume() == pytest.approx(math.pi * 5.0 * 100.0)

    def test_trd_reduces_to_box(self):
        assert Trd("t", 3.0, 3.0, 4.0, 4.0, 5.0).cubic_volume() == pytest.approx(480.0)

    def test_trap_reduces_to_trd(self):
        trap = Trap("t", 5.0, 0.1, 0.2, 4.0, 3.0, 3.0, 0.3, 6.0, 7.0, 7.0, 0.3)
        trd = Trd("t", 3.0, 7.0, 4.0, 6.0, 5.0)
        assert trap.cubic_volume() == pytest.approx(trd.cubic_volume())

    def test_tet(self):
        tet = Tet("t", (0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1))
        assert tet.cubic_volume() == pytest.approx(1.0 / 6.0)

    def test_polycone_reduces_to_tube(self):
        vol = Polycone("p", 0.0, 2 * math.pi, [-5.0, 0.0, 5.0], [2.0, 2.0, 2.0], [10.0, 10.0, 10.0]).cubic_volume()
        assert vol == pytest.approx(Tubs("t", 2.0, 10.0, 5.0).cubic_volume())

    def test_polyhedra_square_prism(self):
        vol = Polyhedra("p", 0.0, 2 * math.pi, 4, [0.0, 10.0], [0.0, 0.0], [1.0, 1.0]).cubic_volume()
        assert vol == pytest.approx(40.0)

    def test_gentrap_reduces_to_box(self):
        square = [(-1, -1), (-1, 1), (1, 1), (1, -1)]
        assert GenericTrap("g", 2.0, square * 2).cubic_volume() == pytest.approx(16.0)

    def test_elliptical_cone_cut_clamped(self):
        cone = EllipticalCone("e", 1.0, 1.0, 5.0, 20.0)
        assert cone.z_top_cut == 5.0


class TestParameterValidation:
    @pytest.mark.parametrize(
        "factory",
        [
            lambda: Box("b", -1.0, 1.0, 1.0),
            lambda: Tubs("t", 5.0, 2.0, 1.0),
            lambda: Orb("o", 0.0),
            lambda: Ellipsoid("e", 1.0, 1.0, 1.0, 0.5, -0.5),
            lambda: Tet("t", (0, 0, 0), (1, 0, 0), (2, 0, 0), (3, 0, 0)),
            lambda: Polycone("p", 0.0, 1.0, [0.0, 1.0], [0.0], [1.0, 1.0]),
            lambda: GenericTrap("g", 1.0, [(0, 0)] * 7),
        ],
    )
    def test_invalid_parameters(self, factory):
        with pytest.raises(G4VGError) as excinfo:
            factory()
        assert excinfo.value.which == GEANT4

    def test_boolean_rejects_reflected_component(self):
        with pytest.raises(G4VGError):
            UnionSolid("u", Box("a", 1.0, 1.0, 1.0), Box("b", 1.0, 1.0, 1.0), Transform3D.reflection_z())


class TestContainment:
    def test_tube_segment(self):
        tube = Tubs("t", 2.0, 10.0, 5.0, 0.0, math.pi / 2)
        points = np.array([[5.0, 5.0, 0.0], [-5.0, 5.0, 0.0], [1.0, 1.0, 0.0], [5.0, 5.0, 6.0]])
        np.testing.assert_array_equal(tube.inside(points), [True, False, False, False])

    def test_unsupported_solid_raises(self):
        with pytest.raises(G4VGError) as excinfo:
            Paraboloid("p", 5.0, 0.0, 10.0).inside(np.zeros((1, 3)))
        assert excinfo.value.which == IMPLEMENTATION

    def test_boolean_operations(self):
        a = Box("a", 10.0, 10.0, 10.0)
        b = Box("b", 10.0, 10.0, 10.0)
        shift = Transform3D.translation_of(15.0, 0.0, 0.0)
        points = np.array([[-8.0, 0.0, 0.0], [8.0, 0.0, 0.0], [20.0, 0.0, 0.0]])
        np.testing.assert_array_equal(UnionSolid("u", a, b, shift).inside(points), [True, True, True])
        np.testing.assert_array_equal(SubtractionSolid("s", a, b, shift).inside(points), [True, False, False])
        np.testing.assert_array_equal(IntersectionSolid("i", a, b, shift).inside(points), [False, True, False])

    def test_boolean_capacity_estimate(self):
        box = Box("box", 100.0, 100.0, 100.0)
        orb = Orb("orb", 60.0)
        solid = SubtractionSolid("diff", box, orb, Transform3D.translation_of(20.0, 0.0, 0.0))
        expected = 8.0e6 - 4.0 * math.pi * 60.0**3 / 3.0
        assert solid.cubic_volume() == pytest.approx(expected, rel=0.02)
        # Estimated once and cached
        assert solid.cubic_volume() == solid.cubic_volume()

    def test_intersection_capacity_estimate(self):
        a = Box("a", 10.0, 10.0, 10.0)
        b = Box("b", 10.0, 10.0, 10.0)
        solid = IntersectionSolid("i", a, b, Transform3D.translation_of(10.0, 0.0, 0.0))
        assert solid.cubic_volume() == pytest.approx(4000.0, rel=0.02)


class TestSolidConverter:
    def test_box(self):
        result = SolidConverter()(Box("b", 1.0, 2.0, 3.0))
        assert isinstance(result, UnplacedBox)
        assert (result.dx, result.dy, result.dz) == (1.0, 2.0, 3.0)

    def test_scale_applies_to_lengths_only(self):
        convert = SolidConverter(scale=0.1)
        tube = convert(Tubs("t", 10.0, 20.0, 30.0, 0.5, 1.0))
        assert isinstance(tube, UnplacedTube)
        assert tube.rmax == pytest.approx(2.0)
        assert tube.sphi == 0.5
        assert tube.dphi == 1.0

    def test_trap_stores_tangent(self):
        trap = SolidConverter()(Trap("t", 5.0, 0.1, 0.2, 4.0, 3.0, 3.0, 0.3, 6.0, 7.0, 7.0, -0.2))
        assert isinstance(trap, UnplacedTrapezoid)
        assert trap.tan_alpha1 == pytest.approx(math.tan(0.3))
        assert trap.tan_alpha2 == pytest.approx(math.tan(-0.2))

    def test_shared_solid_converted_once(self):
        convert = SolidConverter()
        box = Box("b", 1.0, 1.0, 1.0)
        assert convert(box) is convert(box)
        assert len(convert) == 1

    def test_boolean_components_are_unplaced(self):
        convert = SolidConverter()
        box = Box("box", 100.0, 100.0, 100.0)
        orb = Orb("orb", 60.0)
        result = convert(SubtractionSolid("diff", box, orb, Transform3D.translation_of(20.0, 0.0, 0.0)))
        assert isinstance(result, UnplacedBooleanVolume)
        assert result.operation == "subtraction"
        assert result.left.unplaced is convert(box)
        np.testing.assert_allclose(result.right.transformation.translation, [20.0, 0.0, 0.0])
        expected = 8.0e6 - 4.0 * math.pi * 60.0**3 / 3.0
        assert result.capacity() == pytest.approx(expected, rel=0.02)

    def test_reflected_solid_becomes_scaled_shape(self):
        trd = Trd("trd", 10.0, 20.0, 30.0, 40.0, 50.0)
        result = SolidConverter(compare_volumes=True)(ReflectedSolid("trd_refl", trd, Transform3D.reflection_z()))
        assert isinstance(result, UnplacedScaledShape)
        assert result.scale == (1.0, 1.0, -1.0)
        assert result.capacity() == pytest.approx(trd.cubic_volume())
        np.testing.assert_array_equal(result.inside(np.array([[18.0, 0.0, -49.0]])), [True])

    def test_unknown_solid_type(self):
        with pytest.raises(G4VGError) as excinfo:
            SolidConverter()(Solid("mystery"))
        assert excinfo.value.which == IMPLEMENTATION
        assert "Solid" in excinfo.value.details.what

    def test_capacity_mismatch_detected(self):
        class MislabeledBox(Box):
            def cubic_volume(self):
                return 2.0 * super().cubic_volume()

        box = MislabeledBox("liar", 1.0, 1.0, 1.0)
        assert isinstance(SolidConverter()(box), UnplacedBox)
        with pytest.raises(G4VGError) as excinfo:
            SolidConverter(compare_volumes=True)(box)
        assert excinfo.value.which == RUNTIME
        assert "liar" in excinfo.value.details.what

    def test_boolean_comparison_is_skipped(self, caplog):
        box = Box("box", 10.0, 10.0, 10.0)
        union = UnionSolid("u", box, box, Transform3D.translation_of(5.0, 0.0, 0.0))
        with caplog.at_level("WARNING", logger="g4vg.solid_converter"):
            SolidConverter(compare_volumes=True)(union)
        assert "Skipping capacity comparison" in caplog.text
