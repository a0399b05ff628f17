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
Trace analysis
===============================================================================
Queries over a TraceResult: where the power went, which directions the light
leaves the scene in, how far white light is spread, and the parent/child
structure of the ray tree.

All functions take a TraceResult and return plain dicts/lists, with the
exception of save_segments_csv() which writes a file.
===============================================================================
"""

import csv
import math
from collections import defaultdict
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from ..core.ray import ROLE_REFRACTED, ROLES, RaySegment

if TYPE_CHECKING:
    from ..core.simulator import TraceResult


def power_by_role(result: 'TraceResult') -> Dict[str, float]:
    """
    Total power of the segments of each role.

    Returns:
        Dict keyed by every role name (0.0 for roles that do not occur).
    """
    totals = {role: 0.0 for role in ROLES}
    for segment in result.segments:
        totals[segment.role] += segment.power
    return totals


def escaped_segments(result: 'TraceResult') -> List[RaySegment]:
    """Segments that leave the play area, in trace order."""
    return [s for s in result.segments if s.escaped]


def escaped_power(result: 'TraceResult') -> float:
    """
    Power leaving the scene. Without absorption this plus the truncated
    power equals the emitted power.
    """
    return sum(s.power for s in result.segments if s.escaped)


def check_power_conservation(result: 'TraceResult', emitted_power: float = 1.0,
                             tolerance: float = 1e-9) -> Dict[str, Any]:
    """
    Verify that escaped plus truncated power accounts for the emitted power.

    Returns:
        Dict with 'escaped', 'truncated', 'total', 'error' and 'is_valid'.
    """
    escaped = escaped_power(result)
    total = escaped + result.truncated_power
    error = total - emitted_power
    return {
        'escaped': escaped,
        'truncated': result.truncated_power,
        'total': total,
        'error': error,
        'is_valid': abs(error) <= tolerance,
    }


def brightest_exit(result: 'TraceResult', wavelength: float,
                   role: Optional[str] = ROLE_REFRACTED) -> Optional[RaySegment]:
    """
    The brightest escaped segment of a wavelength (earliest on ties).

    Args:
        result: The trace
        wavelength: Wavelength in nm
        role: Only consider segments of this role (None for any role)
    """
    best = None
    for segment in result.segments:
        if not segment.escaped or segment.wavelength != wavelength:
            continue
        if role is not None and segment.role != role:
            continue
        if best is None or segment.power > best.power:
            best = segment
    return best


def deviation_deg(segment: RaySegment, reference_angle: float) -> float:
    """
    Angle in degrees between a segment's direction and a reference direction
    (radians), folded into [0, 180].
    """
    diff = math.degrees(segment.angle - reference_angle) % 360
    return 360 - diff if diff > 180 else diff


def exit_angles_by_wavelength(result: 'TraceResult',
                              min_power: float = 0.0) -> Dict[float, List[float]]:
    """
    Directions (degrees from +x) of the escaped segments of each wavelength.

    Args:
        result: The trace
        min_power: Ignore escaped segments dimmer than this

    Returns:
        Dict keyed by wavelength, angles in trace order.
    """
    angles: Dict[float, List[float]] = defaultdict(list)
    for segment in result.segments:
        if segment.escaped and segment.power >= min_power:
            angles[segment.wavelength].append(math.degrees(segment.angle))
    return dict(angles)


def dispersion_spread(result: 'TraceResult') -> float:
    """
    Angular spread in degrees between the brightest refracted exit directions
    of the traced wavelengths. 0.0 with fewer than two exiting wavelengths.
    """
    wavelengths = sorted({s.wavelength for s in result.segments})
    exits = [brightest_exit(result, wl) for wl in wavelengths]
    exits = [s for s in exits if s is not None]
    if len(exits) < 2:
        return 0.0
    reference = exits[0].angle
    offsets = [math.degrees(math.remainder(s.angle - reference, 2 * math.pi)) for s in exits]
    return max(offsets) - min(offsets)


def segment_tree(result: 'TraceResult') -> Dict[Optional[int], List[RaySegment]]:
    """
    Children of each ray, keyed by parent ray id (None for the seed rays).
    """
    tree: Dict[Optional[int], List[RaySegment]] = defaultdict(list)
    for segment in result.segments:
        tree[segment.parent_id].append(segment)
    return dict(tree)


def save_segments_csv(
    result: 'TraceResult',
    output_path: Union[str, Path],
    filename: str = "segments.csv",
    precision_coords: int = 4,
    precision_power: int = 6,
) -> Path:
    """
    Export the segments of a trace to a CSV file.

    Args:
        result: The trace
        output_path: Directory where the CSV file will be saved (created if
            missing).
        filename: Name of the output CSV file (default: "segments.csv").
        precision_coords: Decimal places for coordinate values (default: 4).
        precision_power: Decimal places for power values (default: 6).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_file = output_dir / filename

    coord_fmt = f"{{:.{precision_coords}f}}"
    power_fmt = f"{{:.{precision_power}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow([
            'ray_id', 'parent_id', 'role', 'depth',
            'start_x', 'start_y', 'end_x', 'end_y',
            'wavelength', 'power', 'medium_index', 'escaped',
        ])
        for s in result.segments:
            writer.writerow([
                s.ray_id,
                '' if s.parent_id is None else s.parent_id,
                s.role,
                s.depth,
                coord_fmt.format(s.start.x),
                coord_fmt.format(s.start.y),
                coord_fmt.format(s.end.x),
                coord_fmt.format(s.end.y),
                s.wavelength,
                power_fmt.format(s.power),
                f'{s.medium_index:.6f}',
                s.escaped,
            ])

    return csv_file
