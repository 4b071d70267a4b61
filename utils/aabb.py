from __future__ import annotations

from typing import Sequence

import numpy as np


class AABB:
    """Axis-aligned bounding box."""

    __slots__ = ("min", "max")

    def __init__(self, min_point: np.ndarray, max_point: np.ndarray) -> None:
        self.min = np.asarray(min_point, dtype=float)
        self.max = np.asarray(max_point, dtype=float)

    @staticmethod
    def from_boxes(boxes: Sequence["AABB"]) -> "AABB":
        min_points = np.array([box.min for box in boxes])
        max_points = np.array([box.max for box in boxes])
        return AABB(np.min(min_points, axis=0), np.max(max_points, axis=0))

    @property
    def extent(self) -> np.ndarray:
        return self.max - self.min

    def contains_point(self, point: np.ndarray) -> bool:
        point_array = np.asarray(point, dtype=float)
        return bool(np.all(point_array >= self.min) and np.all(point_array <= self.max))
