from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class BoundedVolume:
    """Cube centered at the origin; only used as an exit test for the ray."""

    half_extent: float

    def __post_init__(self) -> None:
        if self.half_extent < 0.0:
            raise ValueError("half_extent must not be negative, got {}".format(self.half_extent))

    @classmethod
    def from_grid(cls, grid_size: int, cell_size: float) -> BoundedVolume:
        return cls(half_extent=(grid_size * cell_size) / 2.0)

    def is_outside(self, point: np.ndarray) -> bool:
        x, y, z = (abs(float(c)) for c in point)
        return x > self.half_extent or y > self.half_extent or z > self.half_extent
