"""
===============================================================================
SNELL / FRESNEL TESTS
===============================================================================

Tests for core.fresnel:

1. Snell's law in vector form (30 deg air -> glass gives 19.47 deg)
2. Total internal reflection threshold (glass -> air critical angle 41.81 deg)
3. Normal incidence and index-matched interfaces
4. Power conservation of split_ray(), child roles and lineage
5. Standalone helpers: critical, Brewster and refraction angles, Fresnel
   coefficients
6. Property tests over random indices and angles

Run with:
    python developer_tests/test_fresnel.py

Or with pytest:
    pytest developer_tests/test_fresnel.py -v
===============================================================================
"""

import math
import sys
from pathlib import Path

import pytest
from hypothesis import assume, given, settings, strategies as st

# Add the src-python directory to the path
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from bending_light_shapely.core.fresnel import (
    brewster_angle,
    critical_angle,
    fresnel_coefficients,
    fresnel_reflectance,
    refraction_angle,
    solve_interface,
    split_ray,
)
from bending_light_shapely.core.geometry import Point, geometry
from bending_light_shapely.core.intersection import Intersection
from bending_light_shapely.core.ray import (
    ROLE_INTERNALLY_REFLECTED,
    ROLE_REFLECTED,
    ROLE_REFRACTED,
    Ray,
)

TOLERANCE = 1e-9
ANGLE_TOLERANCE = 0.01  # degrees

# Horizontal interface; the normal faces rays coming from above
UP = Point(0.0, 1.0)


def assert_close(actual, expected, tol=TOLERANCE, msg=""):
    """Assert two values are close within tolerance."""
    if abs(actual - expected) > tol:
        raise AssertionError(f"{msg}: expected {expected}, got {actual} (diff={abs(actual - expected)})")


def assert_angle_close(actual_deg, expected_deg, tol=ANGLE_TOLERANCE, msg=""):
    """Assert two angles (in degrees) are close."""
    assert_close(actual_deg, expected_deg, tol, msg)


def incoming(theta_deg):
    """Unit direction going down onto the interface at theta from the normal."""
    theta = math.radians(theta_deg)
    return Point(math.sin(theta), -math.cos(theta))


def make_hit(n1, n2, point=Point(0.0, 0.0), normal=UP):
    return Intersection(point=point, normal=normal, n1=n1, n2=n2,
                        distance=1.0, prism_index=0, edge_index=0)


# =============================================================================
# Snell's law
# =============================================================================

def test_snell_air_to_glass_30_degrees():
    print("\n" + "=" * 60)
    print("Test: 30 deg from n=1.0 into n=1.5")
    print("=" * 60)
    solution = solve_interface(incoming(30), UP, 1.0, 1.5)

    assert not solution.is_tir
    assert_angle_close(math.degrees(solution.theta1), 30.0, msg="theta1")
    assert_angle_close(math.degrees(solution.theta2), 19.47, msg="theta2")

    refracted = solution.refracted_direction
    # Angle between the refracted ray and the inward normal
    theta2 = math.degrees(math.acos(-geometry.dot(refracted, UP)))
    assert_angle_close(theta2, 19.47, msg="refracted direction")
    assert refracted.x > 0 and refracted.y < 0
    print(f"  theta2 = {theta2:.4f} deg - PASS")


def test_reflected_direction_mirrors_incidence():
    d = incoming(30)
    solution = solve_interface(d, UP, 1.0, 1.5)
    assert_close(solution.reflected_direction.x, d.x, msg="reflected x")
    assert_close(solution.reflected_direction.y, -d.y, msg="reflected y")


def test_reflectance_at_30_degrees():
    solution = solve_interface(incoming(30), UP, 1.0, 1.5)
    expected = fresnel_reflectance(1.0, 1.5, 30.0)
    assert_close(solution.reflectance, expected, tol=1e-9, msg="R")
    assert 0.04 < solution.reflectance < 0.06
    assert_close(solution.transmittance, 1.0 - solution.reflectance, msg="T")


# =============================================================================
# Total internal reflection
# =============================================================================

def test_tir_threshold_glass_to_air():
    print("\n" + "=" * 60)
    print("Test: TIR from n=1.5 into n=1.0 above 41.81 deg")
    print("=" * 60)
    below = solve_interface(incoming(41.0), UP, 1.5, 1.0)
    above = solve_interface(incoming(41.82), UP, 1.5, 1.0)

    assert not below.is_tir
    assert below.refracted_direction is not None
    assert above.is_tir
    assert above.theta2 is None
    assert above.refracted_direction is None
    assert above.reflectance == 1.0
    assert above.transmittance == 0.0
    print("  41.00 deg refracts, 41.82 deg totally reflects - PASS")


def test_exactly_critical_angle_is_tir():
    theta_c = math.degrees(math.asin(1.0 / 1.5))
    solution = solve_interface(incoming(theta_c), UP, 1.5, 1.0)
    assert solution.is_tir


def test_no_tir_into_denser_medium():
    solution = solve_interface(incoming(89.0), UP, 1.0, 1.5)
    assert not solution.is_tir
    assert solution.reflectance < 1.0


# =============================================================================
# Degenerate cases
# =============================================================================

def test_normal_incidence():
    d = Point(0.0, -1.0)
    solution = solve_interface(d, UP, 1.0, 1.5)
    assert solution.refracted_direction == d
    assert solution.theta2 == 0.0
    assert_close(solution.reflectance, 0.04, msg="R at normal incidence")
    assert_close(solution.reflected_direction.y, 1.0, msg="reflected back")


def test_matched_indices_pass_straight_through():
    d = incoming(50)
    solution = solve_interface(d, UP, 1.33, 1.33)
    assert solution.refracted_direction == d
    assert solution.reflectance == 0.0
    assert not solution.is_tir


def test_near_normal_incidence_angle_is_exact():
    print("\n" + "=" * 60)
    print("Test: incidence angles a few nanoradians off the normal")
    print("=" * 60)
    for theta_deg in (1e-6, 1e-7, 1e-9):
        expected = math.radians(theta_deg)
        d = incoming(theta_deg)

        matched = solve_interface(d, UP, 1.0, 1.0)
        assert_close(matched.theta1, expected, tol=1e-15, msg=f"theta1 at {theta_deg} deg")
        assert_close(matched.theta2, expected, tol=1e-15, msg=f"theta2 at {theta_deg} deg")

        solution = solve_interface(d, UP, 1.0, 1.5)
        sin2 = abs(geometry.cross(solution.refracted_direction, UP))
        assert_close(math.sin(solution.theta1), 1.5 * sin2, tol=1e-15, msg="Snell near normal")
        print(f"  theta={theta_deg:g} deg: theta1={solution.theta1:.6e} rad - PASS")


# =============================================================================
# split_ray
# =============================================================================

def test_split_conserves_power_and_sets_lineage():
    print("\n" + "=" * 60)
    print("Test: split_ray children")
    print("=" * 60)
    ray = Ray(Point(-1, 1), incoming(30), wavelength=532, power=0.25,
              medium_index=1.0, depth=3, ray_id=7)
    children, truncated = split_ray(ray, make_hit(1.0, 1.5))

    assert truncated == 0.0
    assert [c.role for c in children] == [ROLE_REFLECTED, ROLE_REFRACTED]
    assert_close(sum(c.power for c in children), 0.25, tol=1e-15, msg="power")
    for child in children:
        assert child.parent_id == 7
        assert child.depth == 4
        assert child.wavelength == 532
        assert child.origin == Point(0.0, 0.0)
    assert children[0].medium_index == 1.0
    assert children[1].medium_index == 1.5
    print("  reflected + refracted = incident power - PASS")


def test_split_under_tir_keeps_all_power():
    ray = Ray(Point(0, 0), incoming(60), wavelength=650, power=0.5, medium_index=1.5)
    children, truncated = split_ray(ray, make_hit(1.5, 1.0))
    assert len(children) == 1
    assert children[0].role == ROLE_INTERNALLY_REFLECTED
    assert children[0].power == 0.5
    assert children[0].medium_index == 1.5
    assert truncated == 0.0


def test_split_drops_dim_children():
    ray = Ray(Point(0, 0), Point(0.0, -1.0), wavelength=650, power=1.0)
    children, truncated = split_ray(ray, make_hit(1.0, 1.5), min_power=0.05)
    # R = 0.04 at normal incidence: the reflected child is dropped
    assert [c.role for c in children] == [ROLE_REFRACTED]
    assert_close(truncated, 0.04, msg="truncated")
    assert_close(children[0].power + truncated, 1.0, tol=1e-15, msg="total")


# =============================================================================
# Standalone helpers
# =============================================================================

def test_critical_angle():
    assert_angle_close(critical_angle(1.5, 1.0), 41.81, msg="glass/air")
    with pytest.raises(ValueError, match="No TIR"):
        critical_angle(1.0, 1.5)
    with pytest.raises(ValueError):
        critical_angle(1.5, 1.5)


def test_brewster_angle_zeroes_p_reflectance():
    theta_b = brewster_angle(1.0, 1.5)
    assert_angle_close(theta_b, 56.31, msg="Brewster")
    coeffs = fresnel_coefficients(1.0, 1.5, theta_b)
    assert coeffs['R_p'] < 1e-12
    assert coeffs['R_s'] > 0.1


def test_refraction_angle():
    assert_angle_close(refraction_angle(1.0, 1.5, 30.0), 19.47, msg="air/glass")
    assert refraction_angle(1.5, 1.0, 45.0) is None


def test_fresnel_coefficients():
    coeffs = fresnel_coefficients(1.0, 1.5, 0.0)
    assert_close(coeffs['R'], 0.04, msg="R")
    assert_close(coeffs['T'], 0.96, msg="T")
    assert fresnel_coefficients(1.5, 1.0, 60.0) == {'R_s': 1.0, 'R_p': 1.0, 'R': 1.0, 'T': 0.0}


# =============================================================================
# Property tests
# =============================================================================

indices = st.floats(min_value=1.0, max_value=2.5)
angles = st.floats(min_value=0.0, max_value=89.0)


@settings(max_examples=300)
@given(n1=indices, n2=indices, theta=angles)
def test_snell_holds_for_refracted_rays(n1, n2, theta):
    solution = solve_interface(incoming(theta), UP, n1, n2)
    assert 0.0 <= solution.reflectance <= 1.0
    if solution.is_tir:
        assert n1 > n2
        assert solution.reflectance == 1.0
        return
    refracted = solution.refracted_direction
    assert_close(math.hypot(refracted.x, refracted.y), 1.0, tol=1e-9, msg="unit length")
    # Refracted ray continues through the interface
    assert geometry.dot(refracted, UP) <= 0
    sin2 = abs(geometry.cross(refracted, UP))
    assert_close(n1 * math.sin(solution.theta1), n2 * sin2, tol=1e-9, msg="Snell")


@settings(max_examples=300)
@given(n1=indices, n2=indices, theta=angles,
       power=st.floats(min_value=1e-6, max_value=1.0))
def test_split_power_is_conserved(n1, n2, theta, power):
    ray = Ray(Point(0, 1), incoming(theta), wavelength=500, power=power, medium_index=n1)
    children, truncated = split_ray(ray, make_hit(n1, n2))
    assert truncated == 0.0
    assert 1 <= len(children) <= 2
    assert_close(sum(c.power for c in children), power, tol=1e-12, msg="power")
    assert all(c.power >= 0 for c in children)


@settings(max_examples=200)
@given(n2=st.floats(min_value=1.0, max_value=1.49), theta=angles)
def test_tir_matches_critical_angle(n2, theta):
    n1 = 1.5
    theta_c = critical_angle(n1, n2)
    assume(abs(theta - theta_c) > 1e-5)
    assert solve_interface(incoming(theta), UP, n1, n2).is_tir == (theta > theta_c)


def run_all_tests():
    tests = [
        test_snell_air_to_glass_30_degrees,
        test_reflected_direction_mirrors_incidence,
        test_reflectance_at_30_degrees,
        test_tir_threshold_glass_to_air,
        test_exactly_critical_angle_is_tir,
        test_no_tir_into_denser_medium,
        test_normal_incidence,
        test_matched_indices_pass_straight_through,
        test_near_normal_incidence_angle_is_exact,
        test_split_conserves_power_and_sets_lineage,
        test_split_under_tir_keeps_all_power,
        test_split_drops_dim_children,
        test_critical_angle,
        test_brewster_angle_zeroes_p_reflectance,
        test_refraction_angle,
        test_fresnel_coefficients,
        test_snell_holds_for_refracted_rays,
        test_split_power_is_conserved,
        test_tir_matches_critical_angle,
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
