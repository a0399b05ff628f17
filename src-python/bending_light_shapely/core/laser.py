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
from typing import List, Optional, Tuple, Union

from .constants import (
    CAPABILITY_DRAGGABLE,
    CAPABILITY_ROTATABLE,
    GREEN_WAVELENGTH,
    INFRARED_WAVELENGTH,
    UV_WAVELENGTH,
)
from .geometry import Point, geometry


class Laser:
    """
    The light source: a laser pointer emitting from its tip.

    The laser emits along `angle` from `emission_point`. In 'monochromatic'
    mode it emits its selected wavelength; in 'white' mode the simulator traces
    the scene's white-light palette instead. A laser with beam_count > 1 emits
    parallel beams spread perpendicular to the emission direction, centred on
    the emission point.

    Attributes:
        emission_point (Point): Position of the laser tip
        angle (float): Emission direction in radians from the +x axis
        wavelength (float): Selected wavelength in nm (380 to 700)
        on (bool): Whether the laser emits
        color_mode (str): 'monochromatic' or 'white'
        beam_count (int): Number of parallel beams
        beam_spacing (float): Distance between neighbouring beams
        capabilities (frozenset): Interactions the host may offer
    """

    VALID_COLOR_MODES = ('monochromatic', 'white')

    def __init__(
        self,
        emission_point: Union[Point, Tuple[float, float]] = Point(0.0, 0.0),
        angle: float = 0.0,
        wavelength: float = GREEN_WAVELENGTH,
        on: bool = True,
        color_mode: str = 'monochromatic',
        beam_count: int = 1,
        beam_spacing: float = 1.0
    ) -> None:
        self.emission_point = emission_point
        self.angle = angle
        self.wavelength = wavelength
        self.on = on
        self.color_mode = color_mode
        self.beam_count = beam_count
        self.beam_spacing = beam_spacing
        self.capabilities = frozenset({CAPABILITY_DRAGGABLE, CAPABILITY_ROTATABLE})

    @property
    def emission_point(self) -> Point:
        return self._emission_point

    @emission_point.setter
    def emission_point(self, value: Union[Point, Tuple[float, float]]) -> None:
        if not isinstance(value, Point):
            value = Point(float(value[0]), float(value[1]))
        self._emission_point = value

    @property
    def wavelength(self) -> float:
        return self._wavelength

    @wavelength.setter
    def wavelength(self, value: float) -> None:
        """
        Set the wavelength with validation.

        Raises:
            ValueError: If the wavelength is outside the visible range.
        """
        if not UV_WAVELENGTH <= value <= INFRARED_WAVELENGTH:
            raise ValueError(
                f"wavelength must be within [{UV_WAVELENGTH}, {INFRARED_WAVELENGTH}] nm, got {value}"
            )
        self._wavelength = float(value)

    @property
    def color_mode(self) -> str:
        return self._color_mode

    @color_mode.setter
    def color_mode(self, value: str) -> None:
        if value not in self.VALID_COLOR_MODES:
            raise ValueError(
                f"Invalid color_mode '{value}'. "
                f"Valid options: {self.VALID_COLOR_MODES}"
            )
        self._color_mode = value

    @property
    def beam_count(self) -> int:
        return self._beam_count

    @beam_count.setter
    def beam_count(self, value: int) -> None:
        if not isinstance(value, int) or value < 1:
            raise ValueError(f"beam_count must be a positive integer, got {value}")
        self._beam_count = value

    @property
    def beam_spacing(self) -> float:
        return self._beam_spacing

    @beam_spacing.setter
    def beam_spacing(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"beam_spacing must be positive, got {value}")
        self._beam_spacing = float(value)

    @property
    def direction(self) -> Point:
        """Unit emission direction."""
        return geometry.direction_from_angle(self.angle)

    @property
    def is_white(self) -> bool:
        return self._color_mode == 'white'

    def translate(self, diff_x: float, diff_y: float) -> None:
        p = self._emission_point
        self._emission_point = Point(p.x + diff_x, p.y + diff_y)

    def rotate(self, angle: float, center: Optional[Point] = None) -> None:
        """
        Rotate the laser.

        Args:
            angle: Rotation angle in radians (counterclockwise).
            center: Pivot point (defaults to the emission point, which then
                    stays fixed).
        """
        if center is not None:
            self._emission_point = geometry.rotate_about(self._emission_point, center, angle)
        self.angle = self.angle + angle

    def point_at(self, target: Union[Point, Tuple[float, float]]) -> None:
        """Aim the laser so that it emits toward `target`."""
        if not isinstance(target, Point):
            target = Point(float(target[0]), float(target[1]))
        self.angle = math.atan2(target.y - self._emission_point.y, target.x - self._emission_point.x)

    def beam_origins(self) -> List[Point]:
        """
        Origins of the emitted beams, ordered from the left-hand side of the
        emission direction to the right-hand side.
        """
        if self._beam_count == 1:
            return [self._emission_point]
        d = self.direction
        left = Point(-d.y, d.x)
        half_width = (self._beam_count - 1) * self._beam_spacing / 2
        return [
            geometry.along(self._emission_point, left, half_width - i * self._beam_spacing)
            for i in range(self._beam_count)
        ]

    def signature(self) -> Tuple:
        """Hashable description of everything the ray tracer reads."""
        return (
            self._emission_point.to_tuple(), self.angle, self._wavelength, self.on,
            self._color_mode, self._beam_count, self._beam_spacing,
        )

    def __repr__(self) -> str:
        p = self._emission_point
        return (f"Laser(at=({p.x:.3f}, {p.y:.3f}), angle={math.degrees(self.angle):.2f} deg, "
                f"wavelength={self._wavelength}, on={self.on}, color_mode='{self._color_mode}')")
