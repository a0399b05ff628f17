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

Bending Light Shapely
=====================

A 2-D light bending simulation: a laser shining through polygonal prisms,
with reflection, refraction, total internal reflection, Fresnel power split
and dispersion. Geometry is backed by Shapely.

Main modules:
- core: Simulation engine (Medium, Prism, Laser, Scene, Simulator, sensors)
- optical_elements: Prism shape factories and prism analytics
- analysis: Queries over a trace result
- examples: Example simulations and demonstrations

Quick start:
    from bending_light_shapely.core.scene import Scene
    from bending_light_shapely.optical_elements.prisms import equilateral_prism
    from bending_light_shapely.core.simulator import Simulator
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.simulator import Simulator, TraceResult
from .core.laser import Laser
from .core.prism import Prism
from .core.medium import Medium

__all__ = [
    'Scene',
    'Simulator',
    'TraceResult',
    'Laser',
    'Prism',
    'Medium',
    '__version__',
]
