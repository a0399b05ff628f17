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
Wave sensor sampling
===============================================================================
A wave sensor has probes that record the oscillating field of the light
passing over them. Each step advances a phase per probe at the optical
frequency of the light (slowed down by a time scale so it is visible) and
appends (time, sin(phase) * power) to a bounded window, oldest samples first
out. The windows feed a time-series chart.
===============================================================================
"""

import math
from collections import deque
from typing import TYPE_CHECKING, Deque, Iterable, List, NamedTuple, Optional, Tuple, Union

import numpy as np

from .constants import (
    CAPABILITY_DRAGGABLE,
    CAPABILITY_HAS_CHART,
    DEFAULT_BEAM_WIDTH,
    DEFAULT_WAVE_CAPACITY,
    SPEED_OF_LIGHT,
    WAVE_TIME_SCALE,
)
from .geometry import Point
from .ray import RaySegment

if TYPE_CHECKING:
    from .scene import Scene
    from .simulator import TraceResult


class WaveSample(NamedTuple):
    time: float
    amplitude: float


class WaveProbe:
    """
    One probe of a wave sensor.

    Attributes:
        position (Point): Probe location
        capacity (int): Maximum number of samples kept
        phase (float): Accumulated phase in radians
        capabilities (frozenset): Interactions the host may offer
    """

    def __init__(
        self,
        position: Union[Point, Tuple[float, float]],
        capacity: int = DEFAULT_WAVE_CAPACITY
    ) -> None:
        if not isinstance(capacity, int) or capacity < 1:
            raise ValueError(f"capacity must be a positive integer, got {capacity}")
        self.position = position
        self.capacity = capacity
        self.phase = 0.0
        self._samples: Deque[WaveSample] = deque(maxlen=capacity)
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

    @property
    def samples(self) -> Tuple[WaveSample, ...]:
        """Recorded samples, oldest first."""
        return tuple(self._samples)

    def record(self, time: float, amplitude: float) -> WaveSample:
        sample = WaveSample(time, amplitude)
        self._samples.append(sample)
        return sample

    def clear(self) -> None:
        self._samples.clear()

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Samples as (times, amplitudes) numpy arrays, for charting.
        """
        if not self._samples:
            return np.empty(0), np.empty(0)
        data = np.array(self._samples, dtype=float)
        return data[:, 0], data[:, 1]

    def __len__(self) -> int:
        return len(self._samples)

    def __repr__(self) -> str:
        return (f"WaveProbe(at=({self._position.x:.3f}, {self._position.y:.3f}), "
                f"samples={len(self._samples)}/{self.capacity})")


def covering_segment(
    segments: Iterable[RaySegment],
    point: Point,
    beam_width: float
) -> Optional[RaySegment]:
    """
    The brightest segment passing within beam_width / 2 of a point.

    Ties in power go to the earliest segment.
    """
    half_width = beam_width / 2
    best: Optional[RaySegment] = None
    for segment in segments:
        if segment.distance_to(point) > half_width:
            continue
        if best is None or segment.power > best.power:
            best = segment
    return best


class WaveSampler:
    """
    Wave sensor: a set of probes sampled together on each simulation step.

    Sampling only happens while `visible` is True. Hiding the sensor clears
    every window; reset() also rewinds time and phases.

    Attributes:
        probes (list): The WaveProbes
        beam_width (float): Width of a ray for coverage tests
        time_scale (float): Physical seconds per unit of simulation time
        time (float): Current simulation time
        capabilities (frozenset): Interactions the host may offer
    """

    def __init__(
        self,
        probes: Optional[Iterable[WaveProbe]] = None,
        beam_width: float = DEFAULT_BEAM_WIDTH,
        time_scale: float = WAVE_TIME_SCALE
    ) -> None:
        if beam_width <= 0:
            raise ValueError(f"beam_width must be positive, got {beam_width}")
        if time_scale <= 0:
            raise ValueError(f"time_scale must be positive, got {time_scale}")
        if probes is None:
            # A dark and a light probe, like the hand-held sensor
            probes = [WaveProbe(Point(0.0, 0.0)), WaveProbe(Point(0.0, -1.0))]
        self.probes: List[WaveProbe] = list(probes)
        self.beam_width = float(beam_width)
        self.time_scale = float(time_scale)
        self.time = 0.0
        self._visible = True
        self.capabilities = frozenset({CAPABILITY_DRAGGABLE, CAPABILITY_HAS_CHART})

    @property
    def visible(self) -> bool:
        return self._visible

    @visible.setter
    def visible(self, value: bool) -> None:
        if self._visible and not value:
            for probe in self.probes:
                probe.clear()
        self._visible = bool(value)

    def phase_increment(self, wavelength: float, dt: float) -> float:
        """Phase advance in radians over dt for light of a wavelength in nm."""
        frequency = SPEED_OF_LIGHT / (wavelength * 1e-9)
        return 2 * math.pi * frequency * dt * self.time_scale

    def step(self, dt: float, trace_result: 'TraceResult', scene: 'Scene') -> List[WaveSample]:
        """
        Advance time by dt and record one sample per probe.

        Args:
            dt: Simulation time step
            trace_result: The current TraceResult
            scene: The Scene (its laser wavelength is used for uncovered probes)

        Returns:
            The sample recorded for each probe, or an empty list when hidden.

        Raises:
            ValueError: If dt is negative.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if not self._visible:
            return []

        self.time += dt
        recorded = []
        for probe in self.probes:
            segment = covering_segment(trace_result.segments, probe.position, self.beam_width)
            wavelength = segment.wavelength if segment is not None else scene.laser.wavelength
            probe.phase += self.phase_increment(wavelength, dt)
            amplitude = math.sin(probe.phase) * segment.power if segment is not None else 0.0
            recorded.append(probe.record(self.time, amplitude))
        return recorded

    def reset(self) -> None:
        """Clear all samples and rewind time and phases."""
        self.time = 0.0
        for probe in self.probes:
            probe.phase = 0.0
            probe.clear()
