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

import math
from dataclasses import dataclass, replace
from typing import Optional

from shapely.geometry import LineString

from .geometry import Point, geometry

# Optical roles of rays and segments
ROLE_INCIDENT = 'incident'
ROLE_REFLECTED = 'reflected'
ROLE_REFRACTED = 'refracted'
ROLE_INTERNALLY_REFLECTED = 'internally_reflected'

ROLES = (ROLE_INCIDENT, ROLE_REFLECTED, ROLE_REFRACTED, ROLE_INTERNALLY_REFLECTED)


@dataclass(frozen=True)
class Ray:
    """
    Representation of a light ray waiting to be traced.

    Rays are immutable. Interactions at an interface produce new child rays
    (see fresnel.split_ray) rather than modifying the incident one.

    Attributes:
        origin (Point): Starting point
        direction (Point): Unit direction vector
        wavelength (float): Wavelength in nm
        power (float): Fraction of the source intensity (0.0 to 1.0)
        medium_index (float): Refractive index of the medium the ray travels in
        role (str): 'incident', 'reflected', 'refracted' or 'internally_reflected'
        depth (int): Number of interfaces between the source and this ray

    Lineage Tracking Attributes:
        ray_id (int): Identifier of this ray within one trace, in queue order
        parent_id (int or None): Identifier of the ray that spawned this one
    """
    origin: Point
    direction: Point
    wavelength: float
    power: float = 1.0
    medium_index: float = 1.0
    role: str = ROLE_INCIDENT
    depth: int = 0
    ray_id: int = 0
    parent_id: Optional[int] = None

    def point_at(self, distance: float) -> Point:
        """Point reached after travelling `distance` along the ray."""
        return geometry.along(self.origin, self.direction, distance)

    def with_id(self, ray_id: int) -> 'Ray':
        return replace(self, ray_id=ray_id)

    @property
    def angle(self) -> float:
        """Direction angle in radians from the +x axis."""
        return math.atan2(self.direction.y, self.direction.x)


@dataclass(frozen=True)
class RaySegment:
    """
    A finalized, bounded piece of a ray: the unit of output for drawing.

    Attributes:
        start (Point): Ray origin
        end (Point): Next intersection, or the escape point
        direction (Point): Unit direction vector
        wavelength (float): Wavelength in nm
        power (float): Fraction of the source intensity
        medium_index (float): Refractive index of the medium traversed
        role (str): Optical role of the ray
        depth (int): Interface count from the source
        ray_id (int): Identifier of the ray this segment finalizes
        parent_id (int or None): Identifier of the parent ray
        escaped (bool): True if the segment leaves the play area instead of
                        ending at an intersection
    """
    start: Point
    end: Point
    direction: Point
    wavelength: float
    power: float
    medium_index: float
    role: str
    depth: int
    ray_id: int
    parent_id: Optional[int] = None
    escaped: bool = False

    @classmethod
    def from_ray(cls, ray: Ray, end: Point, escaped: bool = False) -> 'RaySegment':
        return cls(
            start=ray.origin,
            end=end,
            direction=ray.direction,
            wavelength=ray.wavelength,
            power=ray.power,
            medium_index=ray.medium_index,
            role=ray.role,
            depth=ray.depth,
            ray_id=ray.ray_id,
            parent_id=ray.parent_id,
            escaped=escaped,
        )

    @property
    def length(self) -> float:
        return geometry.distance(self.start, self.end)

    @property
    def angle(self) -> float:
        """Direction angle in radians from the +x axis."""
        return math.atan2(self.direction.y, self.direction.x)

    def to_shapely(self) -> LineString:
        return LineString([self.start.to_tuple(), self.end.to_tuple()])

    def distance_to(self, point: Point) -> float:
        """Shortest distance from a point to this segment."""
        return self.to_shapely().distance(point.to_shapely())
