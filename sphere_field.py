from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

import numpy as np

from surfaces.sphere import Sphere
from utils.uniform_grid import GridConfig, SphereGrid

Placement = Tuple[float, float, float, float]  # x, y, z, radius


def lattice_placements(
    xs: Sequence[float],
    ys: Sequence[float],
    zs: Sequence[float],
    radius: float,
) -> List[Placement]:
    """Spheres on a lattice, ordered y first, then x, then z."""
    return [(float(x), float(y), float(z), float(radius)) for y in ys for x in xs for z in zs]


# -0.4 appears twice in the column; the duplicate sphere is part of the layout.
_LATTICE_Z: Tuple[float, ...] = (
    0.4, -0.4, 0.35, 0.30, 0.25, 0.20, 0.15, 0.10, 0.05,
    0.00, -0.05, -0.10, -0.15, -0.2, -0.25, -0.30, -0.35, -0.40,
)

DEFAULT_PLACEMENTS: List[Placement] = lattice_placements(
    xs=(0.1, 0.2, 0.3, 0.4),
    ys=(-0.1, 0.0, 0.1, 0.2, 0.3, 0.4),
    zs=_LATTICE_Z,
    radius=0.02,
)


class SphereField:
    """Ordered, read-only collection of spherical obstacles.

    Order matters only when several spheres contain the same point: the lowest index is the
    one reported. The optional grid index answers the same queries as the linear scan.
    """

    __slots__ = ("spheres", "_grid")

    def __init__(self, spheres: Iterable[Sphere], grid_config: GridConfig | None = None) -> None:
        self.spheres: Tuple[Sphere, ...] = tuple(spheres)
        self._grid: SphereGrid | None = None
        if grid_config is not None and self.spheres:
            self._grid = SphereGrid(self.spheres, grid_config)

    @classmethod
    def from_placements(
        cls,
        placements: Iterable[Placement],
        grid_config: GridConfig | None = None,
    ) -> SphereField:
        spheres = [Sphere(np.array([x, y, z], dtype=float), radius) for x, y, z, radius in placements]
        return cls(spheres, grid_config)

    @classmethod
    def default(cls, grid_config: GridConfig | None = None) -> SphereField:
        return cls.from_placements(DEFAULT_PLACEMENTS, grid_config)

    def __len__(self) -> int:
        return len(self.spheres)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self.spheres)

    def __getitem__(self, index: int) -> Sphere:
        return self.spheres[index]

    @property
    def is_indexed(self) -> bool:
        return self._grid is not None

    def first_hit(self, point: np.ndarray) -> int | None:
        if self._grid is not None:
            return self._grid.first_hit(point)
        for index, sphere in enumerate(self.spheres):
            if sphere.contains(point):
                return index
        return None
