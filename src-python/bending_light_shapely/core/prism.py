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
from typing import FrozenSet, Iterable, List, Optional, Tuple, Union

from shapely.geometry import Polygon

from .constants import CAPABILITY_DRAGGABLE, CAPABILITY_ROTATABLE
from .geometry import Line, Point, geometry
from .medium import GLASS, Medium

PointLike = Union[Point, Tuple[float, float]]


def _as_point(p: PointLike) -> Point:
    if isinstance(p, Point):
        return p
    return Point(float(p[0]), float(p[1]))


class Prism:
    """
    A polygonal region of an optical medium.

    The outline is a closed polygon given by its vertices; edge i connects
    vertex i to vertex (i + 1) % n. Vertices are stored in counterclockwise
    order (Shapely convention), so the edge normal from
    Geometry.edge_normal() points outward.

    Translation and rotation keep the winding and the simplicity of the
    outline, so they are the only mutations offered besides swapping the
    medium.

    Attributes:
        medium: The Medium filling the prism
        name: Optional label
        capabilities: Interactions the host may offer for this prism
    """

    DEFAULT_CAPABILITIES = frozenset({CAPABILITY_DRAGGABLE, CAPABILITY_ROTATABLE})

    def __init__(
        self,
        vertices: Iterable[PointLike],
        medium: Medium = GLASS,
        name: Optional[str] = None,
        capabilities: Optional[FrozenSet[str]] = None
    ) -> None:
        """
        Args:
            vertices: Polygon vertices in either winding order.
            medium: The medium inside the prism.
            name: Optional label.
            capabilities: Capability names (defaults to draggable + rotatable).

        Raises:
            ValueError: If the outline has fewer than three distinct vertices,
                        zero area, or crosses itself.
        """
        points = [_as_point(p) for p in vertices]
        if len(set(points)) < 3:
            raise ValueError(
                f"A prism needs at least 3 distinct vertices, got {len(set(points))}"
            )
        polygon = geometry.polygon(points)
        if not polygon.is_valid or polygon.area == 0:
            raise ValueError("Prism outline must be a simple polygon with non-zero area")

        if geometry.signed_area(points) < 0:
            points.reverse()

        self._vertices: Tuple[Point, ...] = tuple(points)
        self._polygon: Optional[Polygon] = polygon
        self.medium = medium
        self.name = name
        self.capabilities = frozenset(capabilities) if capabilities is not None \
            else self.DEFAULT_CAPABILITIES

    @property
    def vertices(self) -> Tuple[Point, ...]:
        return self._vertices

    @property
    def medium(self) -> Medium:
        return self._medium

    @medium.setter
    def medium(self, value: Medium) -> None:
        if not isinstance(value, Medium):
            raise ValueError(f"medium must be a Medium, got {type(value).__name__}")
        self._medium = value

    def edges(self) -> List[Line]:
        """Edges as segments, in vertex order."""
        n = len(self._vertices)
        return [geometry.line(self._vertices[i], self._vertices[(i + 1) % n]) for i in range(n)]

    def to_shapely(self) -> Polygon:
        """Shapely polygon of the outline (cached until the next mutation)."""
        if self._polygon is None:
            self._polygon = geometry.polygon(self._vertices)
        return self._polygon

    def contains(self, point: Point) -> bool:
        """True if the point lies strictly inside the prism."""
        return self.to_shapely().contains(point.to_shapely())

    def signed_area(self) -> float:
        return geometry.signed_area(self._vertices)

    def get_centroid(self) -> Point:
        return Point.from_shapely(self.to_shapely().centroid)

    def get_default_center(self) -> Point:
        """
        Get the default center for rotation: the average of all vertices.
        """
        n = len(self._vertices)
        return Point(sum(p.x for p in self._vertices) / n, sum(p.y for p in self._vertices) / n)

    def get_edge_length(self, edge_index: int) -> float:
        return geometry.segment_length(self.edges()[edge_index])

    def get_interior_angle(self, vertex_index: int) -> float:
        """Interior angle at a vertex, in degrees."""
        n = len(self._vertices)
        prev = self._vertices[(vertex_index - 1) % n]
        curr = self._vertices[vertex_index]
        nxt = self._vertices[(vertex_index + 1) % n]
        v1 = geometry.subtract(prev, curr)
        v2 = geometry.subtract(nxt, curr)
        angle = math.degrees(math.atan2(geometry.cross(v2, v1), geometry.dot(v2, v1)))
        return angle % 360

    def translate(self, diff_x: float, diff_y: float) -> None:
        """
        Move the prism.

        Args:
            diff_x: X displacement.
            diff_y: Y displacement.
        """
        self._set_vertices(Point(p.x + diff_x, p.y + diff_y) for p in self._vertices)

    def rotate(self, angle: float, center: Optional[PointLike] = None) -> None:
        """
        Rotate the prism around a center.

        Args:
            angle: Rotation angle in radians (counterclockwise).
            center: Center of rotation (defaults to the vertex average).
        """
        pivot = self.get_default_center() if center is None else _as_point(center)
        self._set_vertices(geometry.rotate_about(p, pivot, angle) for p in self._vertices)

    def _set_vertices(self, vertices: Iterable[Point]) -> None:
        self._vertices = tuple(vertices)
        self._polygon = None

    def signature(self) -> Tuple:
        """Hashable description of everything the ray tracer reads."""
        return (tuple(p.to_tuple() for p in self._vertices), self._medium)

    def __repr__(self) -> str:
        label = f"'{self.name}', " if self.name else ''
        return f"Prism({label}{len(self._vertices)} vertices, medium={self._medium.name})"
