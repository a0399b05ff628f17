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
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from shapely.geometry import Point as ShapelyPoint, LineString, Polygon

from .constants import PARALLEL_THRESHOLD


@dataclass(frozen=True)
class Point:
    """
    2D point, also used as a free vector (directions, normals, offsets).
    Interchangeable with shapely.geometry.Point via to_shapely/from_shapely.
    """
    x: float
    y: float

    def to_shapely(self) -> ShapelyPoint:
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Point':
        return cls(sp.x, sp.y)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Line:
    """
    Two-point segment. Prism edges are stored this way, p1 to p2 in
    polygon order.
    """
    p1: Point
    p2: Point

    def to_shapely(self) -> LineString:
        return LineString([self.p1.to_tuple(), self.p2.to_tuple()])


class Geometry:
    """
    Vector arithmetic on Points plus the few polygon helpers the tracer needs.
    Polygon-level predicates (containment, validity) are delegated to Shapely.
    """

    @staticmethod
    def line(p1: Point, p2: Point) -> Line:
        return Line(p1, p2)

    @staticmethod
    def subtract(p1: Point, p2: Point) -> Point:
        return Point(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def scale_vec(p1: Point, factor: float) -> Point:
        return Point(p1.x * factor, p1.y * factor)

    @staticmethod
    def along(origin: Point, direction: Point, distance: float) -> Point:
        """Point reached by moving `distance` from `origin` along `direction`."""
        return Point(origin.x + direction.x * distance, origin.y + direction.y * distance)

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def cross(p1: Point, p2: Point) -> float:
        """z-component of the 3D cross product; positive when p2 is CCW of p1."""
        return p1.x * p2.y - p1.y * p2.x

    @staticmethod
    def ray_segment_parameters(
        origin: Point,
        direction: Point,
        seg: Line
    ) -> Optional[Tuple[float, float]]:
        """
        Solve origin + t * direction = seg.p1 + s * (seg.p2 - seg.p1).

        Args:
            origin: Ray start point
            direction: Ray direction (need not be normalized)
            seg: Segment to intersect

        Returns:
            (t, s), or None if the ray and segment are parallel
        """
        edge = Geometry.subtract(seg.p2, seg.p1)
        denominator = Geometry.cross(direction, edge)
        if abs(denominator) < PARALLEL_THRESHOLD:
            return None
        offset = Geometry.subtract(seg.p1, origin)
        t = Geometry.cross(offset, edge) / denominator
        s = Geometry.cross(offset, direction) / denominator
        return t, s

    @staticmethod
    def segment_length(seg: Line) -> float:
        return Geometry.distance(seg.p1, seg.p2)

    @staticmethod
    def segment_length_squared(seg: Line) -> float:
        dx = seg.p2.x - seg.p1.x
        dy = seg.p2.y - seg.p1.y
        return dx * dx + dy * dy

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        return math.hypot(p1.x - p2.x, p1.y - p2.y)

    @staticmethod
    def midpoint(p1: Point, p2: Point) -> Point:
        return Point((p1.x + p2.x) * 0.5, (p1.y + p2.y) * 0.5)

    @staticmethod
    def normalize_vec(p1: Point) -> Point:
        """Unit vector along p1; the zero vector comes back unchanged."""
        length = math.hypot(p1.x, p1.y)
        if length == 0:
            return p1
        return Point(p1.x / length, p1.y / length)

    @staticmethod
    def rotate_about(p1: Point, center: Point, angle: float) -> Point:
        """Rotate a point about `center` by `angle` radians (counterclockwise)."""
        c, s = math.cos(angle), math.sin(angle)
        dx = p1.x - center.x
        dy = p1.y - center.y
        return Point(center.x + dx * c - dy * s, center.y + dx * s + dy * c)

    @staticmethod
    def direction_from_angle(angle: float) -> Point:
        """Unit vector at `angle` radians from the +x axis."""
        return Point(math.cos(angle), math.sin(angle))

    @staticmethod
    def edge_normal(seg: Line) -> Point:
        """
        Unit normal of a segment, rotated clockwise from its direction.
        For a counterclockwise polygon this is the outward normal.
        """
        dx = seg.p2.x - seg.p1.x
        dy = seg.p2.y - seg.p1.y
        return Geometry.normalize_vec(Point(dy, -dx))

    @staticmethod
    def signed_area(vertices: Sequence[Point]) -> float:
        """
        Signed polygon area (shoelace formula). Positive for counterclockwise.
        """
        area = 0.0
        n = len(vertices)
        for i in range(n):
            p = vertices[i]
            q = vertices[(i + 1) % n]
            area += p.x * q.y - q.x * p.y
        return area / 2

    @staticmethod
    def polygon(vertices: Sequence[Point]) -> Polygon:
        """Build a Shapely Polygon from a vertex sequence."""
        return Polygon([(p.x, p.y) for p in vertices])


# Shared instance, imported as `geometry`
geometry = Geometry()
