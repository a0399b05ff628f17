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

from .geometry import geometry, Point, Line, Geometry
from . import constants
from .medium import Medium, VACUUM, AIR, WATER, GLASS, DIAMOND, PRESETS
from .prism import Prism
from .laser import Laser
from .ray import Ray, RaySegment
from .intersection import Intersection, find_nearest_intersection
from .fresnel import InterfaceSolution, solve_interface, split_ray
from .scene import Scene
from .simulator import Simulator, TraceResult
from .wave_sampler import WaveSample, WaveProbe, WaveSampler
from .velocity_sensor import VelocitySensor
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Point', 'Line', 'Geometry',
    'constants',
    'Medium', 'VACUUM', 'AIR', 'WATER', 'GLASS', 'DIAMOND', 'PRESETS',
    'Prism',
    'Laser',
    'Ray', 'RaySegment',
    'Intersection', 'find_nearest_intersection',
    'InterfaceSolution', 'solve_interface', 'split_ray',
    'Scene',
    'Simulator', 'TraceResult',
    'WaveSample', 'WaveProbe', 'WaveSampler',
    'VelocitySensor',
    'SVGRenderer'
]
