"""
===============================================================================
GEOMETRY AND INTERSECTION TESTS
===============================================================================

Tests for core.geometry, core.prism and core.intersection:

1. Prism construction: winding normalization and outline validation
2. Outward edge normals
3. Nearest intersection: distance, point, facing normal, media on both sides
4. Rays starting on a surface do not re-hit it
5. Shared vertices resolve to the least grazing edge
6. Parallel rays and degenerate edges are skipped
7. Overlapping prisms: the top-most prism's medium wins

Run with:
    python developer_tests/test_geometry_intersection.py

Or with pytest:
    pytest developer_tests/test_geometry_intersection.py -v
===============================================================================
"""

import math
import sys
from pathlib import Path

import pytest
from hypothesis import given, settings, strategies as st

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from bending_light_shapely.core.geometry import Line, Point, geometry
from bending_light_shapely.core.intersection import (
    _edge_hit,
    find_nearest_intersection,
    medium_beyond,
)
from bending_light_shapely.core.medium import AIR, DIAMOND, GLASS, VACUUM, WATER
from bending_light_shapely.core.prism import Prism
from bending_light_shapely.core.ray import Ray

TOLERANCE = 1e-9


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(f"{msg}: expected {expected}, got {actual} (diff={abs(actual - expected)})")


def square(size=10.0, medium=GLASS):
    """Counterclockwise square with its lower-left corner at the origin."""
    return Prism([(0, 0), (size, 0), (size, size), (0, size)], medium=medium)


# =============================================================================
# Prism construction
# =============================================================================

def test_clockwise_outline_is_reversed():
    print("\n" + "=" * 60)
    print("Test: clockwise vertices are stored counterclockwise")
    print("=" * 60)
    prism = Prism([(0, 0), (0, 10), (10, 10), (10, 0)])
    assert prism.signed_area() > 0
    assert_close(prism.signed_area(), 100.0, msg="area")
    print("  Winding normalized - PASS")


def test_outline_validation():
    with pytest.raises(ValueError, match="3 distinct"):
        Prism([(0, 0), (1, 1)])
    with pytest.raises(ValueError, match="3 distinct"):
        Prism([(0, 0), (1, 1), (0, 0)])
    with pytest.raises(ValueError, match="simple polygon"):
        Prism([(0, 0), (1, 1), (1, 0), (0, 1)])  # bowtie
    with pytest.raises(ValueError, match="simple polygon"):
        Prism([(0, 0), (1, 1), (2, 2)])  # collinear


def test_prism_medium_must_be_medium():
    with pytest.raises(ValueError, match="medium"):
        Prism([(0, 0), (1, 0), (0, 1)], medium=1.5)


def test_outward_normals():
    prism = square()
    normals = [geometry.edge_normal(edge) for edge in prism.edges()]
    expected = [(0, -1), (1, 0), (0, 1), (-1, 0)]
    for normal, (ex, ey) in zip(normals, expected):
        assert_close(normal.x, ex, msg="normal x")
        assert_close(normal.y, ey, msg="normal y")


def test_contains_is_strict():
    prism = square()
    assert prism.contains(Point(5, 5))
    assert not prism.contains(Point(0, 5))
    assert not prism.contains(Point(15, 5))


def test_translate_and_rotate_keep_shape():
    prism = square()
    before = prism.signature()
    prism.translate(3, -2)
    assert prism.vertices[0] == Point(3, -2)
    prism.rotate(math.pi / 6)
    assert_close(prism.signed_area(), 100.0, tol=1e-9, msg="area after rotation")
    assert_close(prism.get_edge_length(0), 10.0, tol=1e-9, msg="edge after rotation")
    assert prism.signature() != before


# =============================================================================
# Nearest intersection
# =============================================================================

def test_hit_from_outside():
    print("\n" + "=" * 60)
    print("Test: ray from the left hits the left face of a glass square")
    print("=" * 60)
    ray = Ray(Point(-5, 5), Point(1, 0), wavelength=650, medium_index=1.0)
    hit = find_nearest_intersection(ray, [square()], VACUUM, 1000.0)

    assert hit is not None
    assert_close(hit.distance, 5.0, msg="distance")
    assert_close(hit.point.x, 0.0, msg="point x")
    assert_close(hit.point.y, 5.0, msg="point y")
    assert_close(hit.normal.x, -1.0, msg="normal x")
    assert geometry.dot(hit.normal, ray.direction) < 0
    assert hit.n1 == 1.0
    assert hit.n2 == 1.5
    assert (hit.prism_index, hit.edge_index) == (0, 3)
    print(f"  Hit at ({hit.point.x:.3f}, {hit.point.y:.3f}), n1={hit.n1}, n2={hit.n2} - PASS")


def test_far_medium_uses_ray_wavelength():
    ray = Ray(Point(-5, 5), Point(1, 0), wavelength=400, medium_index=1.0)
    hit = find_nearest_intersection(ray, [square()], VACUUM, 1000.0)
    assert hit.n2 == GLASS.index_at(400)


def test_ray_on_surface_does_not_rehit_it():
    # Refracted ray starting on the left face, travelling inside the glass
    ray = Ray(Point(0, 5), Point(1, 0), wavelength=650, medium_index=1.5)
    hit = find_nearest_intersection(ray, [square()], AIR, 1000.0)
    assert hit is not None
    assert hit.edge_index == 1
    assert_close(hit.distance, 10.0, msg="distance")
    assert hit.n1 == 1.5
    assert hit.n2 == AIR.index_at(650)


def test_miss_returns_none():
    ray = Ray(Point(-5, 5), Point(-1, 0), wavelength=650)
    assert find_nearest_intersection(ray, [square()], AIR, 1000.0) is None
    ray = Ray(Point(-5, 5), Point(1, 0), wavelength=650)
    assert find_nearest_intersection(ray, [], AIR, 1000.0) is None


def test_hit_beyond_escape_distance_is_ignored():
    ray = Ray(Point(-50, 5), Point(1, 0), wavelength=650)
    assert find_nearest_intersection(ray, [square()], AIR, 40.0) is None
    assert find_nearest_intersection(ray, [square()], AIR, 60.0) is not None


def test_vertex_hit_prefers_least_grazing_edge():
    print("\n" + "=" * 60)
    print("Test: shared vertex resolves to the edge the ray meets most directly")
    print("=" * 60)
    d = geometry.normalize_vec(Point(2, 1))
    ray = Ray(Point(-5, -2.5), d, wavelength=650)
    hit = find_nearest_intersection(ray, [square()], AIR, 1000.0)

    assert hit is not None
    assert_close(hit.point.x, 0.0, tol=1e-9, msg="vertex x")
    assert_close(hit.point.y, 0.0, tol=1e-9, msg="vertex y")
    # Left edge (3): |dot| = 2/sqrt(5); bottom edge (0): |dot| = 1/sqrt(5)
    assert hit.edge_index == 3
    # The ray enters the glass through the corner
    assert hit.n1 == 1.0
    assert hit.n2 == GLASS.index_at(650)
    print("  Left edge chosen, glass on the far side - PASS")


def test_vertex_hit_equal_angles_uses_lowest_index():
    d = geometry.normalize_vec(Point(1, 1))
    ray = Ray(Point(-5, -5), d, wavelength=650)
    hit = find_nearest_intersection(ray, [square()], AIR, 1000.0)
    assert hit is not None
    assert hit.edge_index == 0
    assert hit.n2 == GLASS.index_at(650)


def test_seam_vertex_enters_the_neighbouring_prism():
    print("\n" + "=" * 60)
    print("Test: ray through the shared corner of two touching prisms")
    print("=" * 60)
    glass = square(medium=GLASS)
    water = Prism([(10, 0), (20, 0), (20, 10), (10, 10)], medium=WATER)
    ray = Ray(Point(5, -5), geometry.normalize_vec(Point(1, 1)), wavelength=650, medium_index=1.0)
    hit = find_nearest_intersection(ray, [glass, water], VACUUM, 1000.0)

    assert hit is not None
    assert_close(hit.point.x, 10.0, msg="seam x")
    assert_close(hit.point.y, 0.0, msg="seam y")
    # Four edges meet the ray at 45 deg; the glass bottom edge has the lowest index
    assert (hit.prism_index, hit.edge_index) == (0, 0)
    assert hit.n2 == WATER.index_at(650)
    print(f"  n2={hit.n2:.4f} (water) - PASS")


def test_parallel_edge_is_skipped():
    # Ray along the bottom edge: the bottom edge is parallel, the side edges are hit
    ray = Ray(Point(-5, 0), Point(1, 0), wavelength=650)
    hit = find_nearest_intersection(ray, [square()], AIR, 1000.0)
    assert hit is not None
    assert hit.edge_index == 3
    assert_close(hit.distance, 5.0, msg="distance")


def test_degenerate_edge_is_skipped():
    ray = Ray(Point(-5, 0), Point(1, 0), wavelength=650)
    edge = Line(Point(0, 0), Point(0, 0))
    assert _edge_hit(ray, edge, 1000.0) is None
    assert geometry.ray_segment_parameters(ray.origin, ray.direction, edge) is None


def test_intersection_is_deterministic():
    prisms = [square(), Prism([(20, 0), (30, 0), (25, 8)], medium=WATER)]
    ray = Ray(Point(-5, 3), geometry.normalize_vec(Point(1, 0.05)), wavelength=540)
    first = find_nearest_intersection(ray, prisms, AIR, 1000.0)
    second = find_nearest_intersection(ray, prisms, AIR, 1000.0)
    assert first == second


# =============================================================================
# Overlaps
# =============================================================================

def test_top_most_prism_wins_in_overlap():
    print("\n" + "=" * 60)
    print("Test: overlapping prisms, later prism is on top")
    print("=" * 60)
    bottom = square(medium=GLASS)
    top = Prism([(5, 0), (15, 0), (15, 10), (5, 10)], medium=DIAMOND)
    prisms = [bottom, top]

    # Just past the top prism's left edge, inside both prisms
    medium = medium_beyond(Point(5, 5), Point(1, 0), prisms, AIR)
    assert medium is DIAMOND

    ray = Ray(Point(2, 5), Point(1, 0), wavelength=650, medium_index=1.5)
    hit = find_nearest_intersection(ray, prisms, AIR, 1000.0)
    assert (hit.prism_index, hit.edge_index) == (1, 3)
    assert hit.n2 == DIAMOND.index_at(650)
    print("  Diamond wins over glass - PASS")


def test_beyond_every_prism_is_environment():
    assert medium_beyond(Point(0, 5), Point(-1, 0), [square()], WATER) is WATER


@settings(max_examples=100, deadline=None)
@given(
    y=st.floats(min_value=0.5, max_value=9.5),
    angle=st.floats(min_value=-1.2, max_value=1.2),
)
def test_hits_are_ahead_and_on_the_outline(y, angle):
    """Any ray aimed into the square from the left meets its outline ahead of it."""
    ray = Ray(Point(-1, y), geometry.direction_from_angle(angle), wavelength=650)
    hit = find_nearest_intersection(ray, [square()], AIR, 1000.0)
    if hit is None:
        return
    assert hit.distance > 0
    assert geometry.dot(hit.normal, ray.direction) <= 0
    assert square().to_shapely().exterior.distance(hit.point.to_shapely()) < 1e-9


def run_all_tests():
    tests = [
        test_clockwise_outline_is_reversed,
        test_outline_validation,
        test_prism_medium_must_be_medium,
        test_outward_normals,
        test_contains_is_strict,
        test_translate_and_rotate_keep_shape,
        test_hit_from_outside,
        test_far_medium_uses_ray_wavelength,
        test_ray_on_surface_does_not_rehit_it,
        test_miss_returns_none,
        test_hit_beyond_escape_distance_is_ignored,
        test_vertex_hit_prefers_least_grazing_edge,
        test_vertex_hit_equal_angles_uses_lowest_index,
        test_seam_vertex_enters_the_neighbouring_prism,
        test_parallel_edge_is_skipped,
        test_degenerate_edge_is_skipped,
        test_intersection_is_deterministic,
        test_top_most_prism_wins_in_overlap,
        test_beyond_every_prism_is_environment,
        test_hits_are_ahead_and_on_the_outline,
    ]
    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            failed += 1
            print(f"  FAILED: {test.__name__}: {e}")
    print(f"\nSUMMARY: {len(tests) - failed}/{len(tests)} tests passed")
    return failed == 0


if __name__ == "__main__":
    sys.exit(0 if run_all_tests() else 1)
