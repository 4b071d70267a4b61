from __future__ import annotations

import numpy as np

from utils.aabb import AABB
from utils.vector_operations import squared_distance


class Sphere:
    def __init__(self, center: np.ndarray, radius: float) -> None:
        if radius <= 0.0:
            raise ValueError("Sphere radius must be positive, got {}".format(radius))
        self.center: np.ndarray = np.array(center, dtype=float)
        self.center.setflags(write=False)
        self.radius: float = float(radius)

    def __repr__(self) -> str:
        x, y, z = (float(c) for c in self.center)
        return f"Sphere(center=({x:g}, {y:g}, {z:g}), radius={self.radius:g})"

    def contains(self, point: np.ndarray) -> bool:
        # boundary counts as a hit
        return squared_distance(point, self.center) <= self.radius * self.radius

    def aabb(self) -> AABB:
        return AABB(self.center - self.radius, self.center + self.radius)

    def tessellate(self, segments: int = 16, rings: int = 16) -> np.ndarray:
        """Latitude/longitude mesh of the sphere surface.

        Returns a fresh ((rings + 1) * (segments + 1), 3) array of vertices, ring by ring,
        laid out the way a triangle strip over the sphere expects them.
        """
        phi = np.pi * np.arange(rings + 1, dtype=float) / float(rings)
        theta = 2.0 * np.pi * np.arange(segments + 1, dtype=float) / float(segments)
        phi_grid, theta_grid = np.meshgrid(phi, theta, indexing="ij")

        vertices = np.empty((rings + 1, segments + 1, 3), dtype=float)
        vertices[..., 0] = self.center[0] + self.radius * np.sin(phi_grid) * np.cos(theta_grid)
        vertices[..., 1] = self.center[1] + self.radius * np.sin(phi_grid) * np.sin(theta_grid)
        vertices[..., 2] = self.center[2] + self.radius * np.cos(phi_grid)
        return vertices.reshape(-1, 3)
