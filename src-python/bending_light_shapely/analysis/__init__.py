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
Analysis Utilities
===============================================================================
Queries over a completed trace:

- Power accounting (by role, escaped, conservation check)
- Exit directions per wavelength and white-light dispersion spread
- Ray tree (children by parent id)
- CSV export of the segments
===============================================================================
"""

from .trace_analysis import (
    power_by_role,
    escaped_segments,
    escaped_power,
    check_power_conservation,
    brightest_exit,
    deviation_deg,
    exit_angles_by_wavelength,
    dispersion_spread,
    segment_tree,
    save_segments_csv,
)

__all__ = [
    'power_by_role',
    'escaped_segments',
    'escaped_power',
    'check_power_conservation',
    'brightest_exit',
    'deviation_deg',
    'exit_angles_by_wavelength',
    'dispersion_spread',
    'segment_tree',
    'save_segments_csv',
]
