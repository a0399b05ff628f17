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
import uuid as uuid_module
from typing import List, Optional, Sequence, Tuple

from .constants import (
    DEFAULT_ESCAPE_DISTANCE,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_SEGMENTS,
    DEFAULT_MIN_POWER_FRACTION,
    WHITE_LIGHT_WAVELENGTHS,
)
from .geometry import Point
from .laser import Laser
from .medium import AIR, Medium
from .prism import Prism


class Scene:
    """
    Simulation context: the environment medium, the prisms, the laser and the
    settings that bound the ray tracer.

    The scene is owned by the host loop and passed explicitly to the
    simulator and the sensors. Nothing is recomputed implicitly when it
    changes; Simulator.is_dirty compares signature() against the snapshot.

    Attributes:
        environment (Medium): Ambient medium outside every prism
        prisms (list): Prisms in drawing order (later prisms are on top)
        laser (Laser): The light source
        max_depth (int): Maximum number of interfaces a ray lineage may cross
        min_power_fraction (float): Rays dimmer than this fraction of their
            source power are discarded
        escape_distance (float): Length of segments that leave the play area,
            and the farthest intersection that is considered
        max_segments (int): Budget of segments per trace, a safety bound
        white_light_wavelengths (tuple): Wavelengths traced in white mode
        error (str or None): Error message if the last run hit an error
        warning (str or None): Warning message if the last run was truncated
        name (str or None): Optional name for the scene
    """

    def __init__(
        self,
        environment: Medium = AIR,
        laser: Optional[Laser] = None
    ) -> None:
        self.environment = environment
        self.prisms: List[Prism] = []
        self.laser = laser if laser is not None else Laser()
        self._max_depth = DEFAULT_MAX_DEPTH
        self._min_power_fraction = DEFAULT_MIN_POWER_FRACTION
        self._escape_distance = DEFAULT_ESCAPE_DISTANCE
        self._max_segments = DEFAULT_MAX_SEGMENTS
        self._white_light_wavelengths: Tuple[float, ...] = WHITE_LIGHT_WAVELENGTHS
        self.error: Optional[str] = None
        self.warning: Optional[str] = None
        self.name: Optional[str] = None
        self._uuid: str = str(uuid_module.uuid4())

    @property
    def uuid(self) -> str:
        """Unique identifier of the scene."""
        return self._uuid

    @property
    def environment(self) -> Medium:
        return self._environment

    @environment.setter
    def environment(self, value: Medium) -> None:
        if not isinstance(value, Medium):
            raise ValueError(f"environment must be a Medium, got {type(value).__name__}")
        self._environment = value

    def set_environment_index(self, refractive_index: float) -> None:
        """
        Change the refractive index of the environment medium.

        Raises:
            ValueError: If refractive_index < 1.
        """
        self.environment = self._environment.with_index(refractive_index)

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        if not isinstance(value, int) or value < 0:
            raise ValueError(f"max_depth must be a non-negative integer, got {value}")
        self._max_depth = value

    @property
    def min_power_fraction(self) -> float:
        return self._min_power_fraction

    @min_power_fraction.setter
    def min_power_fraction(self, value: float) -> None:
        if not 0 < value < 1:
            raise ValueError(f"min_power_fraction must be in (0, 1), got {value}")
        self._min_power_fraction = float(value)

    @property
    def escape_distance(self) -> float:
        return self._escape_distance

    @escape_distance.setter
    def escape_distance(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"escape_distance must be positive, got {value}")
        self._escape_distance = float(value)

    @property
    def max_segments(self) -> int:
        return self._max_segments

    @max_segments.setter
    def max_segments(self, value: int) -> None:
        if not isinstance(value, int) or value < 1:
            raise ValueError(f"max_segments must be a positive integer, got {value}")
        self._max_segments = value

    @property
    def white_light_wavelengths(self) -> Tuple[float, ...]:
        return self._white_light_wavelengths

    @white_light_wavelengths.setter
    def white_light_wavelengths(self, value: Sequence[float]) -> None:
        wavelengths = tuple(float(w) for w in value)
        if not wavelengths or any(w <= 0 for w in wavelengths):
            raise ValueError(
                f"white_light_wavelengths must be a non-empty sequence of positive values, got {value}"
            )
        self._white_light_wavelengths = wavelengths

    def emitted_wavelengths(self) -> Tuple[float, ...]:
        """Wavelengths the laser currently emits."""
        if self.laser.is_white:
            return self._white_light_wavelengths
        return (self.laser.wavelength,)

    def add_prism(self, prism: Prism) -> Prism:
        """
        Add a prism on top of the existing ones.

        Returns:
            The prism, for chaining.
        """
        self.prisms.append(prism)
        return prism

    def remove_prism(self, prism: Prism) -> None:
        if prism in self.prisms:
            self.prisms.remove(prism)

    def clear(self) -> None:
        """Remove all prisms."""
        self.prisms = []

    def prism_at(self, point: Point) -> Optional[Prism]:
        """
        The top-most prism containing a point, or None.
        """
        for prism in reversed(self.prisms):
            if prism.contains(point):
                return prism
        return None

    def medium_at(self, point: Point) -> Medium:
        """
        The medium at a point: the top-most containing prism's medium, or
        the environment.
        """
        prism = self.prism_at(point)
        return prism.medium if prism is not None else self._environment

    def signature(self) -> Tuple:
        """
        Hashable description of every input of a trace. Two scenes with equal
        signatures produce equal trace results.
        """
        return (
            self._environment,
            tuple(prism.signature() for prism in self.prisms),
            self.laser.signature(),
            self._max_depth,
            self._min_power_fraction,
            self._escape_distance,
            self._max_segments,
            self._white_light_wavelengths,
        )

    def reset(self) -> None:
        """
        Restore the initial state: air environment, no prisms, default laser
        and default bounds.
        """
        self.environment = AIR
        self.prisms = []
        self.laser = Laser()
        self._max_depth = DEFAULT_MAX_DEPTH
        self._min_power_fraction = DEFAULT_MIN_POWER_FRACTION
        self._escape_distance = DEFAULT_ESCAPE_DISTANCE
        self._max_segments = DEFAULT_MAX_SEGMENTS
        self._white_light_wavelengths = WHITE_LIGHT_WAVELENGTHS
        self.error = None
        self.warning = None

    def get_display_name(self) -> str:
        """Scene name, or a short form of its UUID."""
        if self.name:
            return self.name
        return f"Scene-{self._uuid[:8]}"

    def __repr__(self) -> str:
        return (f"Scene({self.get_display_name()}, environment={self._environment.name}, "
                f"prisms={len(self.prisms)}, {self.laser!r})")
