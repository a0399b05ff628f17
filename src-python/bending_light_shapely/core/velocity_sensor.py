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

from typing import TYPE_CHECKING, Tuple, Union

from .constants import CAPABILITY_DRAGGABLE, DEFAULT_BEAM_WIDTH, SPEED_OF_LIGHT
from .geometry import Point, geometry
from .wave_sampler import covering_segment

if TYPE_CHECKING:
    from .scene import Scene
    from .simulator import TraceResult


class VelocitySensor:
    """
    Reads the phase velocity of light at a point.

    Readings are computed on demand from the scene; the sensor stores only its
    position.

    Attributes:
        position (Point): Sensor location
        beam_width (float): Width of a ray for read_vector coverage tests
        capabilities (frozenset): Interactions the host may offer
    """

    def __init__(
        self,
        position: Union[Point, Tuple[float, float]] = Point(0.0, 0.0),
        beam_width: float = DEFAULT_BEAM_WIDTH
    ) -> None:
        if beam_width <= 0:
            raise ValueError(f"beam_width must be positive, got {beam_width}")
        self.position = position
        self.beam_width = float(beam_width)
        self.capabilities = frozenset({CAPABILITY_DRAGGABLE})

    @property
    def position(self) -> Point:
        return self._position

    @position.setter
    def position(self, value: Union[Point, Tuple[float, float]]) -> None:
        if not isinstance(value, Point):
            value = Point(float(value[0]), float(value[1]))
        self._position = value

    def translate(self, diff_x: float, diff_y: float) -> None:
        self._position = Point(self._position.x + diff_x, self._position.y + diff_y)

    def read(self, scene: 'Scene') -> float:
        """
        Phase velocity c/n in m/s of the medium under the sensor, at the laser
        wavelength.
        """
        medium = scene.medium_at(self._position)
        return medium.phase_velocity(scene.laser.wavelength)

    def read_vector(self, trace_result: 'TraceResult') -> Point:
        """
        Velocity vector of the light under the sensor: the phase velocity of
        the brightest covering segment (c over the index it travels in) along
        that segment's direction.

        Returns:
            The velocity in m/s, or Point(0, 0) where no light passes.
        """
        segment = covering_segment(trace_result.segments, self._position, self.beam_width)
        if segment is None:
            return Point(0.0, 0.0)
        speed = SPEED_OF_LIGHT / segment.medium_index
        return geometry.scale_vec(segment.direction, speed)

    def __repr__(self) -> str:
        return f"VelocitySensor(at=({self._position.x:.3f}, {self._position.y:.3f}))"
