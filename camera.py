from __future__ import annotations

from typing import Tuple

import numpy as np

from utils.vector_operations import normalize_vector, spherical_to_cartesian, vector_cross

NEAR_PLANE: float = 0.1
ROTATION_SPEED_DEG: float = 2.0


class OrbitCamera:
    """Camera on a sphere around the origin, always looking at the origin with +y up."""

    def __init__(
        self,
        radius: float = 3.0,
        theta_deg: float = 45.0,
        phi_deg: float = 45.0,
        fov_deg: float = 45.0,
    ) -> None:
        self.radius = float(radius)
        self.theta_deg = float(theta_deg) # horizontal angle
        self.phi_deg = float(np.clip(phi_deg, 1.0, 179.0)) # vertical angle, kept off the poles
        self.fov_deg = float(fov_deg)
        self.look_at = np.zeros(3, dtype=float)
        self.up_vector = np.array([0.0, 1.0, 0.0])
        # unit distance to the image plane, its height follows from the field of view
        self.screen_distance = 1.0
        self.screen_height = 2.0 * self.screen_distance * float(np.tan(np.radians(self.fov_deg) / 2.0))

        self._recompute_basis()

    def rotate(self, delta_theta_deg: float = 0.0, delta_phi_deg: float = 0.0) -> None:
        self.theta_deg += delta_theta_deg
        self.phi_deg = float(np.clip(self.phi_deg + delta_phi_deg, 1.0, 179.0))
        self._recompute_basis()

    def _recompute_basis(self) -> None:
        """right (perpendicular to) forward (perpendicular to) true_up, all unit length."""
        self.position = spherical_to_cartesian(self.radius, self.phi_deg, self.theta_deg)
        forward = normalize_vector(self.look_at - self.position)
        right = normalize_vector(vector_cross(forward, self.up_vector)) # horizontal axis
        true_up = vector_cross(right, forward) # vertical axis

        self.forward: np.ndarray = forward
        self.right: np.ndarray = right
        self.true_up: np.ndarray = true_up

    def project(self, points: np.ndarray, width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Perspective projection of world points onto the image.
        Returns (pixels, visible): pixels is an (N, 2) array of (row, col) floats and visible
        flags the points in front of the near plane.
        """
        world = np.atleast_2d(np.asarray(points, dtype=float))
        relative = world - self.position
        depth = relative @ self.forward
        visible = depth > NEAR_PLANE
        safe_depth = np.where(visible, depth, 1.0)

        screen_width = self.screen_height * (float(width) / float(height))
        u = (relative @ self.right) * self.screen_distance / safe_depth
        v = (relative @ self.true_up) * self.screen_distance / safe_depth

        col = (u / screen_width + 0.5) * float(width) - 0.5
        row = (0.5 - v / self.screen_height) * float(height) - 0.5
        return np.stack([row, col], axis=1), visible
