"""
Copyright 2026 bending-light-shapely authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

===============================================================================
Snell / Fresnel interface solver
===============================================================================
solve_interface() is the single place where the physics of a flat interface
between two dielectrics is evaluated: angle of incidence, total internal
reflection, Snell's law in vector form and the unpolarized Fresnel
reflectance. split_ray() turns a solution into child rays.

The standalone helpers at the bottom answer "what should I expect?" questions
without running a simulation. They take and return angles in degrees.
===============================================================================
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .constants import NORMAL_INCIDENCE_EPSILON, TIR_EPSILON
from .geometry import Point, geometry
from .intersection import Intersection
from .ray import (
    ROLE_INTERNALLY_REFLECTED,
    ROLE_REFLECTED,
    ROLE_REFRACTED,
    Ray,
)


@dataclass(frozen=True)
class InterfaceSolution:
    """
    Outcome of light meeting an interface.

    Attributes:
        theta1: Angle of incidence in radians
        theta2: Angle of refraction in radians, None under total internal reflection
        reflectance: Fraction of the power reflected (1.0 under TIR)
        is_tir: True if the interface totally reflects
        reflected_direction: Unit direction of the reflected ray
        refracted_direction: Unit direction of the refracted ray, None under TIR
    """
    theta1: float
    theta2: Optional[float]
    reflectance: float
    is_tir: bool
    reflected_direction: Point
    refracted_direction: Optional[Point]

    @property
    def transmittance(self) -> float:
        return 0.0 if self.is_tir else 1.0 - self.reflectance


def _reflectances(n1: float, n2: float, cos1: float, cos2: float) -> Tuple[float, float]:
    """Fresnel power reflectances (R_s, R_p) for given cosines."""
    # Reference: http://en.wikipedia.org/wiki/Fresnel_equations
    denom_s = n1 * cos1 + n2 * cos2
    denom_p = n2 * cos1 + n1 * cos2
    r_s = ((n1 * cos1 - n2 * cos2) / denom_s) ** 2 if denom_s > 0 else 1.0
    r_p = ((n2 * cos1 - n1 * cos2) / denom_p) ** 2 if denom_p > 0 else 1.0
    return r_s, r_p


def solve_interface(
    direction: Point,
    normal: Point,
    n1: float,
    n2: float,
    verbose: int = 0
) -> InterfaceSolution:
    """
    Solve refraction and reflection at an interface.

    Args:
        direction: Unit direction of the incoming ray
        normal: Unit surface normal facing the incoming ray
        n1: Refractive index on the incident side
        n2: Refractive index on the far side
        verbose: Verbosity level (2 prints the interface physics)

    Returns:
        The InterfaceSolution.
    """
    # Snell's law in vector form
    # Reference: http://en.wikipedia.org/wiki/Snell%27s_law#Vector_form
    cos1 = min(1.0, max(0.0, -geometry.dot(direction, normal)))
    # Taken from the cross product, not sqrt(1 - cos1^2), to stay exact near normal incidence
    sin1 = min(1.0, abs(geometry.cross(direction, normal)))
    theta1 = math.atan2(sin1, cos1)

    reflected = geometry.normalize_vec(Point(
        direction.x + 2 * cos1 * normal.x,
        direction.y + 2 * cos1 * normal.y
    ))

    if verbose >= 2:
        print(f"  Interface: n1={n1:.4f}, n2={n2:.4f}, theta1={math.degrees(theta1):.4f} deg")

    if n1 > n2 and sin1 >= n2 / n1 - TIR_EPSILON:
        if verbose >= 2:
            print("  -> TIR")
        return InterfaceSolution(
            theta1=theta1,
            theta2=None,
            reflectance=1.0,
            is_tir=True,
            reflected_direction=reflected,
            refracted_direction=None,
        )

    if sin1 < NORMAL_INCIDENCE_EPSILON or n1 == n2:
        # Normal incidence or index match: no bending
        reflectance = ((n1 - n2) / (n1 + n2)) ** 2
        if verbose >= 2:
            print(f"  -> STRAIGHT THROUGH, R={reflectance:.6f}")
        return InterfaceSolution(
            theta1=theta1,
            theta2=theta1,
            reflectance=reflectance,
            is_tir=False,
            reflected_direction=reflected,
            refracted_direction=direction,
        )

    eta = n1 / n2
    sin2 = min(1.0, eta * sin1)
    cos2 = math.sqrt(max(0.0, 1.0 - sin2 * sin2))
    refracted = geometry.normalize_vec(Point(
        eta * direction.x + (eta * cos1 - cos2) * normal.x,
        eta * direction.y + (eta * cos1 - cos2) * normal.y
    ))

    r_s, r_p = _reflectances(n1, n2, cos1, cos2)
    reflectance = (r_s + r_p) / 2

    if verbose >= 2:
        print(f"  -> REFRACTION theta2={math.degrees(math.asin(sin2)):.4f} deg, "
              f"R_s={r_s:.6f}, R_p={r_p:.6f}, R={reflectance:.6f}")

    return InterfaceSolution(
        theta1=theta1,
        theta2=math.asin(sin2),
        reflectance=reflectance,
        is_tir=False,
        reflected_direction=reflected,
        refracted_direction=refracted,
    )


def split_ray(
    ray: Ray,
    intersection: Intersection,
    min_power: float = 0.0,
    verbose: int = 0
) -> Tuple[List[Ray], float]:
    """
    Split a ray at an interface into its reflected and refracted children.

    The reflected child carries power * R and the refracted child carries the
    remainder, so the split conserves power to rounding. Under total internal
    reflection the only child is an 'internally_reflected' ray carrying all
    the power.

    Children are returned with ray_id 0; the caller assigns identifiers.

    Args:
        ray: The incident ray
        intersection: Where it meets the interface
        min_power: Children with power below this are dropped
        verbose: Verbosity level

    Returns:
        (children, truncated_power): children in the order reflected,
        refracted, and the total power of the dropped children.
    """
    solution = solve_interface(
        ray.direction, intersection.normal, intersection.n1, intersection.n2, verbose
    )

    reflected_power = ray.power * solution.reflectance
    candidates = [
        Ray(
            origin=intersection.point,
            direction=solution.reflected_direction,
            wavelength=ray.wavelength,
            power=reflected_power,
            medium_index=intersection.n1,
            role=ROLE_INTERNALLY_REFLECTED if solution.is_tir else ROLE_REFLECTED,
            depth=ray.depth + 1,
            parent_id=ray.ray_id,
        )
    ]
    if not solution.is_tir:
        candidates.append(Ray(
            origin=intersection.point,
            direction=solution.refracted_direction,
            wavelength=ray.wavelength,
            power=ray.power - reflected_power,
            medium_index=intersection.n2,
            role=ROLE_REFRACTED,
            depth=ray.depth + 1,
            parent_id=ray.ray_id,
        ))

    children: List[Ray] = []
    truncated = 0.0
    for child in candidates:
        if child.power < min_power:
            truncated += child.power
            if verbose >= 2:
                print(f"  Dropped {child.role} child, power={child.power:.6g}")
        else:
            children.append(child)
    return children, truncated


# =============================================================================
# Standalone helpers (angles in degrees)
# =============================================================================

def critical_angle(n1: float, n2: float) -> float:
    """
    Critical angle for total internal reflection, in degrees.

    Raises:
        ValueError: If n1 <= n2 (no TIR possible).
    """
    if n1 <= n2:
        raise ValueError(
            f"No TIR possible: n1={n1} must be greater than n2={n2}."
        )
    return math.degrees(math.asin(n2 / n1))


def brewster_angle(n1: float, n2: float) -> float:
    """Brewster's angle (where R_p = 0), in degrees."""
    return math.degrees(math.atan(n2 / n1))


def refraction_angle(n1: float, n2: float, theta_i_deg: float) -> Optional[float]:
    """
    Refraction angle from Snell's law, in degrees.

    Returns:
        The refraction angle, or None beyond the critical angle.
    """
    sin_t = (n1 / n2) * math.sin(math.radians(theta_i_deg))
    if abs(sin_t) > 1.0:
        return None
    return math.degrees(math.asin(sin_t))


def fresnel_coefficients(n1: float, n2: float, theta_i_deg: float) -> Dict[str, float]:
    """
    Fresnel power reflectances at an interface.

    Args:
        n1: Refractive index of the incident medium.
        n2: Refractive index of the transmitting medium.
        theta_i_deg: Angle of incidence in degrees (from normal).

    Returns:
        Dict with keys 'R_s', 'R_p', 'R' (unpolarized average) and 'T'
        (1 - R). Beyond the critical angle all reflectances are 1.
    """
    theta_t_deg = refraction_angle(n1, n2, theta_i_deg)
    if theta_t_deg is None:
        return {'R_s': 1.0, 'R_p': 1.0, 'R': 1.0, 'T': 0.0}

    cos_i = math.cos(math.radians(theta_i_deg))
    cos_t = math.cos(math.radians(theta_t_deg))
    r_s, r_p = _reflectances(n1, n2, cos_i, cos_t)
    r = (r_s + r_p) / 2
    return {'R_s': r_s, 'R_p': r_p, 'R': r, 'T': 1.0 - r}


def fresnel_reflectance(n1: float, n2: float, theta_i_deg: float) -> float:
    """Unpolarized Fresnel reflectance."""
    return fresnel_coefficients(n1, n2, theta_i_deg)['R']
