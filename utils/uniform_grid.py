from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from surfaces.sphere import Sphere
from utils.aabb import AABB
from utils.vector_operations import EPSILON


@dataclass(slots=True)
class GridConfig:
    max_cells_per_axis: int = 64


class SphereGrid:
    """
    Regular grid (voxel) index over a sphere field. Every sphere index is stored in each
    voxel its bounds overlap, so a point query only tests the spheres of the voxel that
    holds the point. Queries return the smallest matching index, the same sphere a linear
    scan in field order would report.
    """

    def __init__(self, spheres: Sequence[Sphere], config: GridConfig | None = None) -> None:
        if not spheres:
            raise ValueError("SphereGrid requires at least one sphere")
        self.config = config or GridConfig()
        self.spheres: Tuple[Sphere, ...] = tuple(spheres)
        self.bounds = AABB.from_boxes([sphere.aabb() for sphere in self.spheres])
        self.resolution = self._compute_resolution()
        self.cell_size = self._compute_cell_size()
        self.cells: List[List[int]] = [
            [] for _ in range(int(self.resolution[0] * self.resolution[1] * self.resolution[2]))
        ]
        self._populate()

    def first_hit(self, point: np.ndarray) -> int | None:
        if not self.bounds.contains_point(point):
            return None
        cell = self.cells[self._flatten_index(self._point_to_cell_indices(point))]
        # cells are filled in ascending index order
        for sphere_index in cell:
            if self.spheres[sphere_index].contains(point):
                return sphere_index
        return None

    # === Build helpers ===

    def _compute_resolution(self) -> np.ndarray:
        sphere_count = max(len(self.spheres), 1)
        base_resolution = max(int(round(sphere_count ** (1.0 / 3.0))), 1)
        max_axis_cells = max(1, int(self.config.max_cells_per_axis))
        extent = self.bounds.extent
        longest_extent = float(np.max(extent))
        if longest_extent < EPSILON:
            return np.ones(3, dtype=int)
        axis_ratios = extent / longest_extent
        resolution = np.maximum(1, np.round(axis_ratios * base_resolution).astype(int))
        resolution = np.minimum(resolution, max_axis_cells)
        return resolution

    def _compute_cell_size(self) -> np.ndarray:
        extent = self.bounds.extent
        resolution = np.maximum(self.resolution, 1)
        cell_size = np.divide(extent, resolution, out=np.zeros_like(extent), where=resolution != 0)
        cell_size[cell_size < EPSILON] = EPSILON
        return cell_size

    def _populate(self) -> None:
        for sphere_index, sphere in enumerate(self.spheres):
            bounds = sphere.aabb()
            min_indices = self._point_to_cell_indices(bounds.min)
            max_indices = self._point_to_cell_indices(bounds.max)
            for ix in range(min_indices[0], max_indices[0] + 1):
                for iy in range(min_indices[1], max_indices[1] + 1):
                    for iz in range(min_indices[2], max_indices[2] + 1):
                        flat_index = self._flatten_index((ix, iy, iz))
                        self.cells[flat_index].append(sphere_index)

    # === Lookup helpers ===

    def _point_to_cell_indices(self, point: np.ndarray) -> np.ndarray:
        indices = np.zeros(3, dtype=int)
        for axis in range(3):
            size = float(self.cell_size[axis])
            normalized = (float(point[axis]) - self.bounds.min[axis]) / size
            indices[axis] = int(np.clip(np.floor(normalized), 0, self.resolution[axis] - 1))
        return indices

    def _flatten_index(self, indices: Tuple[int, int, int] | np.ndarray) -> int:
        ix, iy, iz = int(indices[0]), int(indices[1]), int(indices[2])
        return ix + int(self.resolution[0]) * (iy + int(self.resolution[1]) * iz)
