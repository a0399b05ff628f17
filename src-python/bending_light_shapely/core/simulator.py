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

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from .fresnel import split_ray
from .intersection import Intersection, find_nearest_intersection
from .ray import ROLE_INCIDENT, Ray, RaySegment
from .scene import Scene


@dataclass(frozen=True)
class TraceResult:
    """
    Immutable snapshot of one propagation run.

    Attributes:
        segments (tuple): RaySegments in seed order, then queue order
        intersections (tuple): Intersections in the order they were met, for
            drawing surface normals
        truncated_power (float): Power discarded by the power threshold and
            the depth and segment bounds
        depth_limited (int): Rays not traced because of the depth bound
        budget_limited (int): Rays not traced because the segment budget ran out
        generation (int): Number of the run that produced this snapshot
        signature (tuple or None): Scene signature the snapshot was computed
            from (None before the first run)
    """
    segments: Tuple[RaySegment, ...] = ()
    intersections: Tuple[Intersection, ...] = ()
    truncated_power: float = 0.0
    depth_limited: int = 0
    budget_limited: int = 0
    generation: int = 0
    signature: Optional[Tuple] = None

    @property
    def is_truncated(self) -> bool:
        """True if a depth or segment bound stopped part of the trace."""
        return self.depth_limited > 0 or self.budget_limited > 0

    def __len__(self) -> int:
        return len(self.segments)


class Simulator:
    """
    Ray propagation engine.

    Each seed ray emitted by the laser is traced through the scene with a FIFO
    work queue: the nearest intersection ends the current segment, the
    interface splits the ray into reflected and refracted children, and the
    children that are bright enough and shallow enough are queued. Seeds are
    traced one after the other and their segments concatenated, so white light
    shows one fan of segments per wavelength.

    A run never reads state from a previous run. The published snapshot is a
    new frozen TraceResult, so consumers holding the old one are unaffected.

    Attributes:
        scene (Scene): The scene to simulate
        verbose (int): Verbosity level
            0 = silent (no debug output)
            1 = verbose (show ray processing info)
            2 = very verbose/debug (show detailed interface calculations)
    """

    def __init__(self, scene: Scene, verbose: int = 0) -> None:
        self.scene: Scene = scene
        self.verbose: int = verbose
        self._result: TraceResult = TraceResult()
        self._generation: int = 0

    @property
    def result(self) -> TraceResult:
        """The current snapshot."""
        return self._result

    @property
    def is_dirty(self) -> bool:
        """True if the scene changed since the current snapshot was computed."""
        return self._result.signature != self.scene.signature()

    def update(self) -> TraceResult:
        """
        Recompute only if the scene changed.

        Returns:
            The current snapshot.
        """
        if self.is_dirty:
            return self.run()
        return self._result

    def seed_rays(self) -> List[Ray]:
        """
        Rays emitted by the laser: one per (wavelength, beam) pair, wavelengths
        in palette order and beams from left to right.
        """
        laser = self.scene.laser
        if not laser.on:
            return []

        wavelengths = self.scene.emitted_wavelengths()
        origins = laser.beam_origins()
        power = 1.0 / (len(wavelengths) * len(origins))
        direction = laser.direction

        seeds = []
        for wavelength in wavelengths:
            for origin in origins:
                medium = self.scene.medium_at(origin)
                seeds.append(Ray(
                    origin=origin,
                    direction=direction,
                    wavelength=wavelength,
                    power=power,
                    medium_index=medium.index_at(wavelength),
                    role=ROLE_INCIDENT,
                ))
        return seeds

    def run(self) -> TraceResult:
        """
        Trace the scene from scratch and publish a new snapshot.

        Returns:
            The new TraceResult.
        """
        scene = self.scene
        scene.error = None
        scene.warning = None
        self._generation += 1

        segments: List[RaySegment] = []
        intersections: List[Intersection] = []
        truncated_power = 0.0
        depth_limited = 0
        budget_limited = 0
        next_id = 0

        seeds = self.seed_rays()
        if self.verbose >= 1:
            print(f"\n### SIMULATOR run {self._generation}: {len(seeds)} seed rays")

        for seed in seeds:
            min_power = scene.min_power_fraction * seed.power
            pending: Deque[Ray] = deque([seed.with_id(next_id)])
            next_id += 1

            while pending:
                ray = pending.popleft()

                if len(segments) >= scene.max_segments:
                    # Budget exhausted: account for everything left in this queue
                    budget_limited += 1 + len(pending)
                    truncated_power += ray.power + sum(r.power for r in pending)
                    pending.clear()
                    break

                if self.verbose >= 1:
                    print(f"  ray {ray.ray_id} ({ray.role}, depth {ray.depth}) "
                          f"at ({ray.origin.x:.4f}, {ray.origin.y:.4f}), "
                          f"wavelength={ray.wavelength}, power={ray.power:.6f}")

                hit = find_nearest_intersection(
                    ray, scene.prisms, scene.environment, scene.escape_distance,
                    verbose=self.verbose
                )

                if hit is None:
                    segments.append(RaySegment.from_ray(
                        ray, ray.point_at(scene.escape_distance), escaped=True
                    ))
                    if self.verbose >= 1:
                        print("  -> escaped")
                    continue

                segments.append(RaySegment.from_ray(ray, hit.point))
                intersections.append(hit)

                children, dropped = split_ray(ray, hit, min_power, verbose=self.verbose)
                truncated_power += dropped

                for child in children:
                    if child.depth > scene.max_depth:
                        depth_limited += 1
                        truncated_power += child.power
                        continue
                    pending.append(child.with_id(next_id))
                    next_id += 1

        if budget_limited:
            scene.warning = f"Simulation stopped: maximum segment count ({scene.max_segments}) reached"
        elif depth_limited:
            scene.warning = f"Ray splitting stopped at maximum depth ({scene.max_depth}) for {depth_limited} rays"

        self._result = TraceResult(
            segments=tuple(segments),
            intersections=tuple(intersections),
            truncated_power=truncated_power,
            depth_limited=depth_limited,
            budget_limited=budget_limited,
            generation=self._generation,
            signature=scene.signature(),
        )

        if self.verbose >= 1:
            print(f"### SIMULATOR done: {len(segments)} segments, "
                  f"{len(intersections)} intersections, truncated power={truncated_power:.6g}")
            if scene.warning:
                print(f"  Warning: {scene.warning}")

        return self._result
