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

import math
from dataclasses import dataclass, replace
from typing import Optional

from .constants import (
    DEFAULT_DISPERSION_STRENGTH,
    REFERENCE_WAVELENGTH,
    SPEED_OF_LIGHT,
)


@dataclass(frozen=True)
class Medium:
    """
    An optical medium with wavelength-dependent refractive index.

    Dispersion follows Cauchy's equation, anchored so that the reference
    wavelength returns the nominal index exactly:

        n(l) = n_ref + B * (1/l^2 - 1/l_ref^2) + C * (1/l^4 - 1/l_ref^4)

    with l in micrometers. Longer wavelengths give lower indices.

    Attributes:
        name: Semantic identifier ('air', 'glass', ...)
        refractive_index: Nominal index at `reference_wavelength`
        cauchy_b: Cauchy coefficient B in um^2. If None, derived from the
                  index as DEFAULT_DISPERSION_STRENGTH * (n_ref - 1), so a
                  medium with n=1 has no dispersion.
        cauchy_c: Cauchy coefficient C in um^4
        reference_wavelength: Wavelength in nm at which refractive_index holds

    Raises:
        ValueError: If the index is below 1, a coefficient is negative or
                    the reference wavelength is not positive.
    """
    name: str
    refractive_index: float
    cauchy_b: Optional[float] = None
    cauchy_c: float = 0.0
    reference_wavelength: float = REFERENCE_WAVELENGTH

    def __post_init__(self) -> None:
        if not math.isfinite(self.refractive_index) or self.refractive_index < 1:
            raise ValueError(
                f"refractive_index must be a finite number >= 1, got {self.refractive_index}"
            )
        if self.cauchy_b is None:
            object.__setattr__(
                self, 'cauchy_b',
                DEFAULT_DISPERSION_STRENGTH * (self.refractive_index - 1)
            )
        if self.cauchy_b < 0 or self.cauchy_c < 0:
            raise ValueError(
                f"Cauchy coefficients must be non-negative, got B={self.cauchy_b}, C={self.cauchy_c}"
            )
        if self.reference_wavelength <= 0:
            raise ValueError(
                f"reference_wavelength must be positive, got {self.reference_wavelength}"
            )

    def index_at(self, wavelength: float) -> float:
        """
        Refractive index at a wavelength.

        Args:
            wavelength: Wavelength in nm

        Returns:
            The refractive index, never below 1.
        """
        l2 = (wavelength * 0.001) ** 2
        ref2 = (self.reference_wavelength * 0.001) ** 2
        n = (self.refractive_index
             + self.cauchy_b * (1 / l2 - 1 / ref2)
             + self.cauchy_c * (1 / (l2 * l2) - 1 / (ref2 * ref2)))
        return max(1.0, n)

    def phase_velocity(self, wavelength: float) -> float:
        """Phase velocity c/n in m/s at a wavelength in nm."""
        return SPEED_OF_LIGHT / self.index_at(wavelength)

    def with_index(self, refractive_index: float) -> 'Medium':
        """
        Copy of this medium with a new nominal index.
        A derived dispersion coefficient is derived again for the new index.
        """
        cauchy_b = None if self._has_derived_dispersion() else self.cauchy_b
        return replace(self, refractive_index=refractive_index, cauchy_b=cauchy_b)

    def _has_derived_dispersion(self) -> bool:
        return math.isclose(
            self.cauchy_b,
            DEFAULT_DISPERSION_STRENGTH * (self.refractive_index - 1),
            rel_tol=1e-12, abs_tol=1e-15
        )

    @classmethod
    def custom(cls, refractive_index: float, name: str = 'custom') -> 'Medium':
        return cls(name=name, refractive_index=refractive_index)


VACUUM = Medium('vacuum', 1.0)
AIR = Medium('air', 1.000293)
WATER = Medium('water', 1.333)
GLASS = Medium('glass', 1.5)
DIAMOND = Medium('diamond', 2.419)

PRESETS = {m.name: m for m in (VACUUM, AIR, WATER, GLASS, DIAMOND)}
