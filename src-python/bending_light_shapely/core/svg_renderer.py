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

from typing import TYPE_CHECKING, Optional, Tuple

import svgwrite
from shapely.geometry import LineString, box

from .constants import GREEN_WAVELENGTH
from .geometry import Point, geometry
from .intersection import Intersection
from .laser import Laser
from .prism import Prism
from .ray import RaySegment

if TYPE_CHECKING:
    from .scene import Scene
    from .simulator import TraceResult


# Display colors anchored on the white-light palette, violet to deep red
SPECTRUM_ANCHORS = (
    (380.0, (97, 0, 97)),
    (440.0, (0, 0, 255)),
    (490.0, (0, 255, 255)),
    (540.0, (129, 255, 0)),
    (590.0, (255, 223, 0)),
    (640.0, (255, 33, 0)),
    (700.0, (255, 0, 0)),
)


def wavelength_to_rgb(wavelength: Optional[float]) -> Tuple[int, int, int]:
    """
    Display color of a wavelength in nm, as an (r, g, b) tuple in 0-255.

    Linear interpolation between SPECTRUM_ANCHORS. Each white-light palette
    wavelength maps exactly onto its anchor, so the traced rays of a white
    beam are drawn in seven distinct colors. Wavelengths outside the
    anchors take the nearest end color; None draws as the default green.
    """
    if wavelength is None:
        wavelength = GREEN_WAVELENGTH

    first_wl, first_rgb = SPECTRUM_ANCHORS[0]
    if wavelength <= first_wl:
        return first_rgb
    for (wl_lo, rgb_lo), (wl_hi, rgb_hi) in zip(SPECTRUM_ANCHORS, SPECTRUM_ANCHORS[1:]):
        if wavelength <= wl_hi:
            f = (wavelength - wl_lo) / (wl_hi - wl_lo)
            return tuple(int(round(lo + (hi - lo) * f)) for lo, hi in zip(rgb_lo, rgb_hi))
    return SPECTRUM_ANCHORS[-1][1]


def power_to_opacity(power: float, scale: float = 1.0) -> float:
    """
    Opacity for a ray of a given power, clipped to [0, 1].

    Args:
        power: Fraction of the source power carried by the ray
        scale: Gain applied before clipping (seed powers shrink with the
               number of traced wavelengths and beams)
    """
    if power <= 0:
        return 0.0
    return min(1.0, power * scale)


def medium_fill(refractive_index: float) -> str:
    """Fill color for a medium: denser media are drawn in a deeper blue."""
    density = max(0.0, min(1.0, (refractive_index - 1.0) / 1.5))
    r = int(220 - 140 * density)
    g = int(235 - 110 * density)
    return f'rgb({r}, {g}, 255)'


class SVGRenderer:
    """
    SVG export of a traced scene.

    The SVG is organized into four layers, bottom to top: prisms, normals,
    rays and labels. Elements carry class and data-* attributes describing
    the simulation element they draw.

    Coordinate System:
        The renderer uses a Y-up coordinate system (positive Y points upward).
        This is achieved by applying a vertical flip transformation to every
        layer.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        user_viewbox (tuple): Visible region (min_x, min_y, width, height) in Y-up
        dwg (svgwrite.Drawing): The SVG drawing object
    """

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        viewbox: Optional[Tuple[float, float, float, float]] = None
    ) -> None:
        """
        Args:
            width: Canvas width in pixels (default: 800)
            height: Canvas height in pixels (default: 600)
            viewbox: Visible region as (min_x, min_y, width, height) in Y-up
                     coordinates. If None, uses (0, 0, width, height).
        """
        self.width = width
        self.height = height
        self.user_viewbox = viewbox if viewbox is not None else (0, 0, width, height)

        # SVG is Y-down: the flipped layers show min_y at the bottom
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)
        self._clip_box = box(min_x, min_y, min_x + vb_width, min_y + vb_height)

        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)

        self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill='white'
        ))

        self.layer_prisms = self.dwg.add(self.dwg.g(id='layer-prisms', transform='scale(1, -1)'))
        self.layer_normals = self.dwg.add(self.dwg.g(id='layer-normals', transform='scale(1, -1)'))
        self.layer_rays = self.dwg.add(self.dwg.g(id='layer-rays', transform='scale(1, -1)'))
        self.layer_labels = self.dwg.add(self.dwg.g(id='layer-labels', transform='scale(1, -1)'))

    @staticmethod
    def _normalize_coord(value: float) -> float:
        # Negative zero and tiny values become 0.0
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _xy(self, point: Point) -> Tuple[float, float]:
        return (self._normalize_coord(point.x), self._normalize_coord(point.y))

    def _clip(self, start: Point, end: Point) -> Optional[Tuple[Point, Point]]:
        """Clip a segment to the viewbox, or None if it lies outside."""
        clipped = LineString([start.to_tuple(), end.to_tuple()]).intersection(self._clip_box)
        if clipped.is_empty or not isinstance(clipped, LineString):
            return None
        coords = list(clipped.coords)
        return Point(*coords[0]), Point(*coords[-1])

    def draw_prism(self, prism: Prism, stroke: str = 'navy', stroke_width: float = 1.0,
                   fill_opacity: float = 0.4, label: Optional[str] = None) -> None:
        """
        Draw a prism outline filled according to its medium.

        Args:
            prism: The prism to draw
            stroke: Outline color
            stroke_width: Outline width
            fill_opacity: Fill opacity 0.0-1.0
            label: Optional text drawn at the centroid (defaults to the name)
        """
        polygon = self.dwg.polygon(
            points=[self._xy(p) for p in prism.vertices],
            fill=medium_fill(prism.medium.refractive_index),
            fill_opacity=fill_opacity,
            stroke=stroke,
            stroke_width=stroke_width,
        )
        polygon['class'] = 'prism'
        polygon['data-medium'] = prism.medium.name
        polygon['data-refractive-index'] = f'{prism.medium.refractive_index:.6f}'
        self.layer_prisms.add(polygon)

        text = label if label is not None else prism.name
        if text:
            self._draw_label(prism.get_centroid(), text, color=stroke)

    def draw_ray_segment(self, segment: RaySegment, color: Optional[str] = None,
                         opacity: Optional[float] = None, stroke_width: float = 1.5,
                         opacity_scale: float = 1.0) -> None:
        """
        Draw a ray segment, clipped to the viewbox.

        Args:
            segment: The segment to draw
            color: CSS color (defaults to the color of the segment's wavelength)
            opacity: Opacity 0.0-1.0 (defaults to the segment's power)
            stroke_width: Line width
            opacity_scale: Gain applied to the power when deriving opacity
        """
        clipped = self._clip(segment.start, segment.end)
        if clipped is None:
            return
        start, end = clipped

        if color is None:
            rgb = wavelength_to_rgb(segment.wavelength)
            color = f'rgb({rgb[0]}, {rgb[1]}, {rgb[2]})'
        if opacity is None:
            opacity = power_to_opacity(segment.power, opacity_scale)

        line = self.dwg.line(
            start=self._xy(start),
            end=self._xy(end),
            stroke=color,
            stroke_width=stroke_width,
            stroke_opacity=opacity,
        )
        line['class'] = f'ray {segment.role}'
        line['data-ray-id'] = str(segment.ray_id)
        if segment.parent_id is not None:
            line['data-parent-id'] = str(segment.parent_id)
        line['data-wavelength'] = f'{segment.wavelength:g}'
        line['data-power'] = f'{segment.power:.6f}'
        self.layer_rays.add(line)

    def draw_intersection(self, intersection: Intersection, length: float = 20.0,
                          color: str = 'gray', stroke_width: float = 0.75) -> None:
        """
        Draw the surface normal at an intersection as a dashed line centred on
        the point.
        """
        half = length / 2
        start = geometry.along(intersection.point, intersection.normal, half)
        end = geometry.along(intersection.point, intersection.normal, -half)
        line = self.dwg.line(
            start=self._xy(start),
            end=self._xy(end),
            stroke=color,
            stroke_width=stroke_width,
            stroke_dasharray='4, 3',
        )
        line['class'] = 'normal'
        line['data-n1'] = f'{intersection.n1:.6f}'
        line['data-n2'] = f'{intersection.n2:.6f}'
        self.layer_normals.add(line)

    def draw_laser(self, laser: Laser, length: float = 30.0, color: str = 'dimgray') -> None:
        """Draw the laser body behind its emission point."""
        tail = geometry.along(laser.emission_point, laser.direction, -length)
        body = self.dwg.line(
            start=self._xy(tail),
            end=self._xy(laser.emission_point),
            stroke=color,
            stroke_width=6,
            stroke_linecap='round',
        )
        body['class'] = 'laser'
        self.layer_prisms.add(body)

    def _draw_label(self, point: Point, text: str, color: str = 'black',
                    font_size: str = '8px') -> None:
        x, y = self._xy(point)
        label = self.dwg.text(
            text,
            insert=(x, -y),
            fill=color,
            font_size=font_size,
            font_family='sans-serif',
            text_anchor='middle',
            transform='scale(1, -1)'  # Flip text back to be readable
        )
        self.layer_labels.add(label)

    def draw_trace(self, scene: 'Scene', result: 'TraceResult', draw_normals: bool = False,
                   stroke_width: float = 1.5) -> None:
        """
        Draw a whole scene: prisms, laser and the segments of a trace.

        Ray opacity is scaled by the number of seed rays, so that each seed
        draws at full opacity regardless of how many wavelengths and beams
        share the source power.

        Args:
            scene: The traced scene
            result: Its TraceResult
            draw_normals: If True, draw the surface normal at every intersection
            stroke_width: Ray line width
        """
        for prism in scene.prisms:
            self.draw_prism(prism)
        self.draw_laser(scene.laser)

        if draw_normals:
            for intersection in result.intersections:
                self.draw_intersection(intersection)

        seed_count = len(scene.emitted_wavelengths()) * scene.laser.beam_count
        for segment in result.segments:
            self.draw_ray_segment(segment, stroke_width=stroke_width, opacity_scale=seed_count)

    def save(self, filename: Optional[str] = None) -> None:
        """
        Save the SVG to a file.

        Args:
            filename: Output filename (default: 'output.svg')
        """
        if filename is None:
            filename = "output.svg"
        self.dwg.saveas(filename)

    def to_string(self) -> str:
        """Get the SVG as a string."""
        return self.dwg.tostring()
