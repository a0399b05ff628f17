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
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .constants import (
    DEGENERATE_EDGE_LENGTH,
    EDGE_PARAMETER_EPSILON,
    MIN_RAY_SEGMENT_LENGTH,
    SURFACE_PROBE_OFFSET,
)
from .geometry import Line, Point, geometry
from .medium import Medium
from .prism import Prism
from .ray import Ray


@dataclass(frozen=True)
class Intersection:
    """
    A point where a ray meets a prism edge.

    Attributes:
        point: The intersection point
        normal: Unit surface normal, oriented against the incoming ray
            (dot(normal, ray.direction) < 0)
        n1: Refractive index on the incident side
        n2: Refractive index on the far side
        distance: Distance from the ray origin
        prism_index: Index of the prism hit in the scene's prism list
        edge_index: Index of the edge hit within that prism
    """
    point: Point
    normal: Point
    n1: float
    n2: float
    distance: float
    prism_index: int
    edge_index: int


def _edge_hit(ray: Ray, edge: Line, max_distance: float) -> Optional[Dict[str, Any]]:
    """
    Intersect a ray with one edge.

    Returns:
        Dict with 'distance', 'point' and 'normal' (facing the ray), or None
        for a miss, a parallel ray or a degenerate edge.
    """
    if geometry.segment_length_squared(edge) < DEGENERATE_EDGE_LENGTH ** 2:
        return None

    params = geometry.ray_segment_parameters(ray.origin, ray.direction, edge)
    if params is None:
        return None
    t, s = params

    if t <= MIN_RAY_SEGMENT_LENGTH or t > max_distance:
        return None
    if s < -EDGE_PARAMETER_EPSILON or s > 1 + EDGE_PARAMETER_EPSILON:
        return None

    normal = geometry.edge_normal(edge)
    if geometry.dot(normal, ray.direction) > 0:
        normal = Point(-normal.x, -normal.y)

    return {
        'distance': t,
        'point': ray.point_at(t),
        'normal': normal,
    }


def medium_beyond(
    point: Point,
    direction: Point,
    prisms: Sequence[Prism],
    environment: Medium
) -> Medium:
    """
    The medium a ray enters when it crosses a surface at `point`, probed a
    short distance further along its direction of travel. Probing along the
    ray rather than the surface normal stays off the outline when the hit
    is a polygon corner. The top-most prism containing the probe point wins.
    """
    probe = geometry.along(point, direction, SURFACE_PROBE_OFFSET)
    for prism in reversed(prisms):
        if prism.contains(probe):
            return prism.medium
    return environment


def find_nearest_intersection(
    ray: Ray,
    prisms: Sequence[Prism],
    environment: Medium,
    escape_distance: float,
    verbose: int = 0
) -> Optional[Intersection]:
    """
    Find the nearest intersection strictly ahead of a ray.

    Every edge of every prism is tested. Hits closer than
    MIN_RAY_SEGMENT_LENGTH (the ray's own starting surface) or beyond
    escape_distance are ignored. Hits within MIN_RAY_SEGMENT_LENGTH of the
    nearest one (a shared vertex, or coincident edges of touching prisms) are
    resolved in favour of the least grazing surface, then of the lowest
    (prism, edge) index.

    Args:
        ray: The ray to trace
        prisms: Prisms in drawing order
        environment: Medium outside every prism
        escape_distance: Farthest distance considered
        verbose: Verbosity level (0=silent, 2=list every candidate)

    Returns:
        The Intersection, or None if the ray leaves the bounded domain.
    """
    candidates: List[Dict[str, Any]] = []
    for prism_index, prism in enumerate(prisms):
        for edge_index, edge in enumerate(prism.edges()):
            hit = _edge_hit(ray, edge, escape_distance)
            if hit is None:
                continue
            hit['prism_index'] = prism_index
            hit['edge_index'] = edge_index
            candidates.append(hit)

    if not candidates:
        return None

    nearest_distance = min(c['distance'] for c in candidates)
    tied = [c for c in candidates if c['distance'] - nearest_distance < MIN_RAY_SEGMENT_LENGTH]

    # Least grazing surface first; the sort is stable so index order breaks ties
    tied.sort(key=lambda c: -abs(geometry.dot(c['normal'], ray.direction)))
    best = tied[0]

    if verbose >= 2:
        print(f"  {len(candidates)} edge hits, {len(tied)} at nearest distance {nearest_distance:.6f}")
        print(f"  chosen prism {best['prism_index']} edge {best['edge_index']}")

    far_medium = medium_beyond(best['point'], ray.direction, prisms, environment)

    return Intersection(
        point=best['point'],
        normal=best['normal'],
        n1=ray.medium_index,
        n2=far_medium.index_at(ray.wavelength),
        distance=best['distance'],
        prism_index=best['prism_index'],
        edge_index=best['edge_index'],
    )
