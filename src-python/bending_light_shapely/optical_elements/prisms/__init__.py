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
Prisms
===============================================================================
Factory Functions:
- equilateral_prism(): 60-60-60 dispersing prism
- right_angle_prism(): 45-90-45 prism (TIR at the hypotenuse)
- rectangle_slab(): Rectangular block
- trapezoid_prism(): Isosceles trapezoid
- polygon_prism(): Arbitrary simple polygon

Utility Modules:
- prism_utils: Deviation calculations
===============================================================================
"""

from .shapes import (
    equilateral_prism,
    right_angle_prism,
    rectangle_slab,
    trapezoid_prism,
    polygon_prism,
)
from . import prism_utils

__all__ = [
    'equilateral_prism',
    'right_angle_prism',
    'rectangle_slab',
    'trapezoid_prism',
    'polygon_prism',
    'prism_utils',
]
