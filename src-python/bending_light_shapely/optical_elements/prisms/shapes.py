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
Prism shapes
===============================================================================
Constructors that compute vertex geometry from physical parameters, for the
shapes of the prism toolbox. Each shape is laid out in a canonical pose,
rotated around the origin, then translated so its anchor lands on
`position`.

    Coordinate system: +X = East, +Y = North

Equilateral (edge 0 is the base, vertex 2 the apex):

            V2
           /  \
          /    \
        V0------V1

Right angle (right angle at V0, edge 1 is the hypotenuse):

        V2
        | \
        |  \
        V0--V1

All vertex lists are counterclockwise.
===============================================================================
"""

import math
from typing import Iterable, List, Optional, Tuple, Union

from ...core.geometry import Point
from ...core.medium import GLASS, Medium
from ...core.prism import Prism

PointLike = Union[Point, Tuple[float, float]]

VALID_ANCHORS = ('centroid', 'apex')


def _place(
    vertices: List[Tuple[float, float]],
    position: Tuple[float, float],
    rotation: float,
    anchor: str = 'centroid',
    apex_index: Optional[int] = None
) -> List[Point]:
    """
    Rotate canonical vertices around the origin, then translate the anchor
    (vertex average, or the apex vertex) onto `position`.

    Args:
        vertices: (x, y) tuples in canonical position/orientation.
        position: Target anchor coordinates.
        rotation: Rotation angle in degrees (counterclockwise).
        anchor: 'centroid' or 'apex'.
        apex_index: Index of the apex vertex, for anchor='apex'.

    Raises:
        ValueError: If the anchor is unknown or the shape has no apex.
    """
    if anchor not in VALID_ANCHORS:
        raise ValueError(f"anchor must be 'centroid' or 'apex', got '{anchor}'")
    if anchor == 'apex' and apex_index is None:
        raise ValueError("anchor='apex' needs a shape with an apex vertex")

    theta = math.radians(rotation)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    rotated = [(x * cos_t - y * sin_t, x * sin_t + y * cos_t) for x, y in vertices]

    if anchor == 'apex':
        ref_x, ref_y = rotated[apex_index]
    else:
        ref_x = sum(v[0] for v in rotated) / len(rotated)
        ref_y = sum(v[1] for v in rotated) / len(rotated)

    offset_x = position[0] - ref_x
    offset_y = position[1] - ref_y
    return [Point(x + offset_x, y + offset_y) for x, y in rotated]


def equilateral_prism(
    side_length: float,
    position: Tuple[float, float] = (0.0, 0.0),
    rotation: float = 0.0,
    medium: Medium = GLASS,
    anchor: str = 'centroid',
    name: Optional[str] = None
) -> Prism:
    """
    Create an equilateral (60-60-60) dispersing prism.

    Args:
        side_length: Length of each side.
        position: Reference point coordinates.
        rotation: Rotation angle in degrees.
        medium: Prism material.
        anchor: Position reference ('centroid' or 'apex').
        name: Optional label.

    Raises:
        ValueError: If side_length is not positive.
    """
    if side_length <= 0:
        raise ValueError(f"side_length must be positive, got {side_length}")
    s = side_length
    h = s * math.sqrt(3) / 2
    vertices = [(0.0, 0.0), (s, 0.0), (s / 2, h)]
    return Prism(_place(vertices, position, rotation, anchor, apex_index=2),
                 medium=medium, name=name)


def right_angle_prism(
    leg_length: float,
    position: Tuple[float, float] = (0.0, 0.0),
    rotation: float = 0.0,
    medium: Medium = GLASS,
    anchor: str = 'centroid',
    name: Optional[str] = None
) -> Prism:
    """
    Create a 45-90-45 right-angle prism.

    With n >= sqrt(2) light entering a leg face normally is totally
    reflected at the hypotenuse.

    Args:
        leg_length: Length of each of the two equal legs.
        position: Reference point coordinates.
        rotation: Rotation angle in degrees.
        medium: Prism material.
        anchor: Position reference ('centroid' or 'apex', the right angle).
        name: Optional label.
    """
    if leg_length <= 0:
        raise ValueError(f"leg_length must be positive, got {leg_length}")
    a = leg_length
    vertices = [(0.0, 0.0), (a, 0.0), (0.0, a)]
    # V0 holds the right angle; list it as the apex for anchoring
    return Prism(_place(vertices, position, rotation, anchor, apex_index=0),
                 medium=medium, name=name)


def rectangle_slab(
    width: float,
    height: float,
    position: Tuple[float, float] = (0.0, 0.0),
    rotation: float = 0.0,
    medium: Medium = GLASS,
    name: Optional[str] = None
) -> Prism:
    """Create a rectangular slab centred on `position`."""
    if width <= 0 or height <= 0:
        raise ValueError(f"width and height must be positive, got {width} x {height}")
    vertices = [(0.0, 0.0), (width, 0.0), (width, height), (0.0, height)]
    return Prism(_place(vertices, position, rotation), medium=medium, name=name)


def trapezoid_prism(
    base_length: float,
    top_length: float,
    height: float,
    position: Tuple[float, float] = (0.0, 0.0),
    rotation: float = 0.0,
    medium: Medium = GLASS,
    name: Optional[str] = None
) -> Prism:
    """
    Create an isosceles trapezoid, long side down.

    Args:
        base_length: Length of the bottom edge.
        top_length: Length of the top edge (shorter than the base).
        height: Distance between the two parallel edges.
    """
    if not 0 < top_length < base_length:
        raise ValueError(
            f"top_length must be positive and shorter than base_length, "
            f"got top={top_length}, base={base_length}"
        )
    if height <= 0:
        raise ValueError(f"height must be positive, got {height}")
    inset = (base_length - top_length) / 2
    vertices = [
        (0.0, 0.0),
        (base_length, 0.0),
        (base_length - inset, height),
        (inset, height),
    ]
    return Prism(_place(vertices, position, rotation), medium=medium, name=name)


def polygon_prism(
    vertices: Iterable[PointLike],
    medium: Medium = GLASS,
    name: Optional[str] = None
) -> Prism:
    """Create a prism from explicit vertices (either winding)."""
    return Prism(vertices, medium=medium, name=name)
