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
Optical elements
===============================================================================
Sub-modules:
- prisms: Prism shapes built from physical parameters

Convenience constructors that compute vertex geometry from physical
parameters, so users never have to specify raw vertex coordinates for
standard prism shapes.
===============================================================================
"""

from .prisms import (
    equilateral_prism,
    right_angle_prism,
    rectangle_slab,
    trapezoid_prism,
    polygon_prism,
    prism_utils,
)

__all__ = [
    'equilateral_prism',
    'right_angle_prism',
    'rectangle_slab',
    'trapezoid_prism',
    'polygon_prism',
    'prism_utils',
]
