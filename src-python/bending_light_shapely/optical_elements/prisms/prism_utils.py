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
PRISM UTILITIES
===============================================================================
Closed-form prism optics:
- Minimum deviation angle and the incidence that produces it
- Refractive index from a measured minimum deviation
- Deviation at arbitrary incidence
- Medium-aware versions that evaluate the dispersion model at a wavelength

They give the expected answer for a traced scene without running the
simulator. Indices are relative: pass n_prism / n_outside when the prism
does not sit in vacuum.
===============================================================================
"""

import math
from typing import Iterable, List, Optional, Tuple

from ...core.medium import Medium


# =============================================================================
# Thin-prism formulas
# =============================================================================

def minimum_deviation(apex_angle_deg: float, n: float) -> float:
    """
    Smallest deviation (degrees) a prism of apex A and relative index n can
    produce.

    It occurs for the symmetric path, where the ray crosses the prism
    parallel to its base and enters and leaves at the same angle.

    Formula: D_min = 2 * arcsin(n * sin(A/2)) - A

    Args:
        apex_angle_deg: Apex angle A, degrees.
        n: Index of the prism relative to its surroundings.

    Returns:
        D_min in degrees.

    Raises:
        ValueError: If n * sin(A/2) > 1 (no ray gets through symmetrically).

    Example:
        >>> minimum_deviation(60.0, 1.5)
        37.18...
    """
    apex = math.radians(apex_angle_deg)
    arg = n * math.sin(apex / 2)

    if arg > 1.0:
        raise ValueError(
            f"No minimum deviation for A={apex_angle_deg} deg, n={n}: "
            f"n * sin(A/2) = {arg:.4f} exceeds 1."
        )

    return math.degrees(2 * math.asin(arg) - apex)


def refractive_index_from_deviation(apex_angle_deg: float, d_min_deg: float) -> float:
    """
    Inverse of minimum_deviation: the relative index implied by a measured D_min.

    n = sin((D_min + A) / 2) / sin(A / 2)
    """
    apex = math.radians(apex_angle_deg)
    d_min = math.radians(d_min_deg)
    return math.sin((d_min + apex) / 2) / math.sin(apex / 2)


def deviation_at_incidence(apex_angle_deg: float, n: float, theta_i_deg: float) -> float:
    """
    Deviation (degrees) for a ray entering the first face at theta_i.

    Snell's law is applied at the entry face, the internal angle at the exit
    face is A - r1, and Snell's law is applied again on the way out.

    Args:
        apex_angle_deg: Apex angle A, degrees.
        n: Index of the prism relative to its surroundings.
        theta_i_deg: Incidence on the entry face, measured from its normal.

    Returns:
        Deviation in degrees, or float('nan') when the exit face reflects
        the ray totally.

    Example:
        >>> deviation_at_incidence(60.0, 1.5, 48.59)
        37.18...
    """
    apex = math.radians(apex_angle_deg)
    incidence = math.radians(theta_i_deg)

    r1 = math.asin(math.sin(incidence) / n)
    r2 = apex - r1

    sin_exit = n * math.sin(r2)
    if abs(sin_exit) > 1.0:
        return float('nan')

    # (incidence - r1) + (exit - r2)
    return math.degrees(incidence + math.asin(sin_exit) - apex)


def incidence_for_minimum_deviation(apex_angle_deg: float, n: float) -> float:
    """
    Entry angle (degrees) of the symmetric path: (A + D_min) / 2.

    >>> incidence_for_minimum_deviation(60.0, 1.5)
    48.59...
    """
    return (apex_angle_deg + minimum_deviation(apex_angle_deg, n)) / 2


# =============================================================================
# Medium-aware versions
# =============================================================================

def relative_index(medium: Medium, wavelength: float, outside: Optional[Medium] = None) -> float:
    """Index of `medium` relative to `outside` (vacuum if None) at a wavelength."""
    n_outside = outside.index_at(wavelength) if outside is not None else 1.0
    return medium.index_at(wavelength) / n_outside


def deviation_spectrum(
    apex_angle_deg: float,
    medium: Medium,
    theta_i_deg: float,
    wavelengths: Iterable[float],
    outside: Optional[Medium] = None
) -> List[Tuple[float, float]]:
    """
    Deviation at a fixed incidence across wavelengths.

    Returns:
        (wavelength_nm, deviation_deg) pairs in the order given.
    """
    return [
        (wl, deviation_at_incidence(apex_angle_deg, relative_index(medium, wl, outside), theta_i_deg))
        for wl in wavelengths
    ]
