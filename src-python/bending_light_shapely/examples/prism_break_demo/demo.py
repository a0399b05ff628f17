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

"""
Prism Break Demo - White Light Through an Equilateral Prism

White light enters the left face of a glass equilateral prism at 50 degrees
of incidence. Each wavelength of the palette is bent by a different amount,
so the beam leaves the right face as a fan of colors.

Setup:
- Equilateral glass prism (side 100) centred on the origin
- White laser aimed at the middle of the left face
- Velocity sensor inside the prism, wave sensor probes on the incoming beam

Expected behavior:
- Traced deviations match the closed-form prism formula per wavelength
- Violet is deviated more than red
- The velocity sensor reads c/n of glass at the laser wavelength
"""

import math
import os
import sys

# Add parent directories to path to import bending_light_shapely
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from bending_light_shapely.core.geometry import geometry
from bending_light_shapely.core.laser import Laser
from bending_light_shapely.core.scene import Scene
from bending_light_shapely.core.simulator import Simulator
from bending_light_shapely.core.svg_renderer import SVGRenderer
from bending_light_shapely.core.velocity_sensor import VelocitySensor
from bending_light_shapely.core.wave_sampler import WaveProbe, WaveSampler
from bending_light_shapely.optical_elements.prisms import equilateral_prism, prism_utils
from bending_light_shapely.analysis import (
    brightest_exit,
    check_power_conservation,
    deviation_deg,
    dispersion_spread,
)

INCIDENCE_DEG = 50.0
ENTRANCE_EDGE = 2


def build_scene() -> Scene:
    """A white laser aimed at the entrance face of an equilateral prism."""
    scene = Scene()
    scene.name = 'prism-break'
    prism = scene.add_prism(equilateral_prism(100.0, name='Prism'))

    entrance = prism.edges()[ENTRANCE_EDGE]
    target = geometry.midpoint(entrance.p1, entrance.p2)
    outward = geometry.edge_normal(entrance)
    inward_angle = math.atan2(-outward.y, -outward.x)
    angle = inward_angle + math.radians(INCIDENCE_DEG)

    laser = Laser(color_mode='white')
    laser.emission_point = geometry.along(target, geometry.direction_from_angle(angle), -150.0)
    laser.angle = angle
    scene.laser = laser
    return scene


def main():
    """Run the prism break demonstration."""

    print("Prism Break Demo - White Light Through an Equilateral Prism")
    print("=" * 60)

    scene = build_scene()
    prism = scene.prisms[0]

    simulator = Simulator(scene, verbose=0)
    result = simulator.run()

    print(f"\nTraced {len(result.segments)} segments, {len(result.intersections)} intersections")
    if scene.warning:
        print(f"Warning: {scene.warning}")

    print(f"\n{'wavelength':>10}  {'n':>8}  {'traced':>8}  {'formula':>8}")
    for wavelength in scene.white_light_wavelengths:
        exit_segment = brightest_exit(result, wavelength)
        n = prism_utils.relative_index(prism.medium, wavelength, scene.environment)
        expected = prism_utils.deviation_at_incidence(60.0, n, INCIDENCE_DEG)
        traced = deviation_deg(exit_segment, scene.laser.angle) if exit_segment else float('nan')
        print(f"{wavelength:>8.0f}nm  {n:8.5f}  {traced:8.3f}  {expected:8.3f}")

    print(f"\nDispersion spread: {dispersion_spread(result):.3f} deg")

    conservation = check_power_conservation(result)
    print(f"Escaped power: {conservation['escaped']:.6f}, truncated: {conservation['truncated']:.6f}")

    sensor = VelocitySensor(prism.get_centroid())
    print(f"\nVelocity inside the prism: {sensor.read(scene):.6e} m/s")

    probes = [WaveProbe(scene.laser.emission_point), WaveProbe(prism.get_centroid())]
    sampler = WaveSampler(probes)
    for _ in range(50):
        sampler.step(1.0, result, scene)
    times, amplitudes = probes[0].as_arrays()
    print(f"Wave probe: {len(times)} samples, peak amplitude {abs(amplitudes).max():.4f}")

    renderer = SVGRenderer(width=800, height=600, viewbox=(-200, -150, 400, 300))
    renderer.draw_trace(scene, result, draw_normals=True)
    output_file = os.path.join(os.path.dirname(__file__), 'prism_break.svg')
    renderer.save(output_file)
    print(f"\nSVG saved to: {output_file}")


if __name__ == "__main__":
    main()
