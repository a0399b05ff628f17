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
Constants used throughout the light bending simulation.

Kept in one module so that the medium model, the interface solver, the
propagation engine and the sensors can share them without circular imports.
"""

# Minimum parametric distance for a valid intersection ahead of a ray origin.
# A ray leaving an interface must not hit the same interface again.
MIN_RAY_SEGMENT_LENGTH = 1e-6

# Cross products below this are treated as parallel lines
PARALLEL_THRESHOLD = 1e-12

# Edges shorter than this are degenerate and never intersected
DEGENERATE_EDGE_LENGTH = 1e-12

# Slack on the edge parameter so a ray through a shared vertex hits both edges
EDGE_PARAMETER_EPSILON = 1e-9

# Distance past an interface, along the ray, at which the far-side medium is probed
SURFACE_PROBE_OFFSET = 1e-6

# sin(theta1) tolerance when comparing against the critical angle.
# Cases within this margin are classified as total internal reflection.
TIR_EPSILON = 1e-9

# Below this sin(theta1) the incidence is treated as exactly normal
NORMAL_INCIDENCE_EPSILON = 1e-12

# Propagation bounds
DEFAULT_MAX_DEPTH = 50
DEFAULT_MIN_POWER_FRACTION = 1e-3
DEFAULT_ESCAPE_DISTANCE = 10000.0
DEFAULT_MAX_SEGMENTS = 10000

# Wavelengths (in nanometers)
UV_WAVELENGTH = 380          # Ultraviolet wavelength boundary
INFRARED_WAVELENGTH = 700    # Infrared wavelength boundary
GREEN_WAVELENGTH = 532
RED_WAVELENGTH = 650

# Wavelength at which a medium's nominal refractive index is defined
REFERENCE_WAVELENGTH = RED_WAVELENGTH

# Representative wavelengths traced in white-light mode, violet to red
WHITE_LIGHT_WAVELENGTHS = (380.0, 440.0, 490.0, 540.0, 590.0, 640.0, 700.0)

# Cauchy B coefficient (um^2) per unit of (n - 1) when none is given
DEFAULT_DISPERSION_STRENGTH = 0.008

# Speed of light in vacuum (m/s)
SPEED_OF_LIGHT = 2.99792458e8

# Wave sampler defaults.
# The time scale slows optical frequencies (~5e14 Hz) down to a visible
# oscillation: one unit of simulation time is this many physical seconds.
WAVE_TIME_SCALE = 2.0e-15
DEFAULT_WAVE_CAPACITY = 200
DEFAULT_BEAM_WIDTH = 1.0

# Capability names for scene entities
CAPABILITY_DRAGGABLE = 'draggable'
CAPABILITY_ROTATABLE = 'rotatable'
CAPABILITY_HAS_CHART = 'has_chart'
