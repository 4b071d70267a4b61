from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from sphere_field import SphereField
from typings.bounded_volume import BoundedVolume
from typings.step_outcome import Point, StepOutcome
from utils.vector_operations import spherical_to_cartesian

DEFAULT_SPEED: float = 0.005
DEFAULT_ZENITH_DEG: float = 45.0
DEFAULT_AZIMUTH_DEG: float = 45.0

ZENITH_RANGE_DEG: int = 180
AZIMUTH_RANGE_DEG: int = 360


@dataclass(slots=True)
class RayState:
    """
    A ray growing out of the origin along (zenith, azimuth).

    Each call to advance() extends the ray by `speed`, then tests the new endpoint against
    the sphere field (lowest index first) and, if nothing was hit, against the volume
    boundary. Either event sends the ray back to the origin with a new random direction.
    The field is borrowed per call; the volume is fixed for the lifetime of the ray.
    """

    volume: BoundedVolume = field(default_factory=lambda: BoundedVolume.from_grid(5, 0.2))
    speed: float = DEFAULT_SPEED
    zenith_deg: float = DEFAULT_ZENITH_DEG
    azimuth_deg: float = DEFAULT_AZIMUTH_DEG
    traveled: float = 0.0
    rng: np.random.Generator = field(default_factory=np.random.default_rng, repr=False)
    position: np.ndarray = field(init=False)

    def __post_init__(self) -> None:
        if self.speed <= 0.0:
            raise ValueError("Ray speed must be positive, got {}".format(self.speed))
        if self.traveled < 0.0:
            raise ValueError("Traveled distance must not be negative, got {}".format(self.traveled))
        self.speed = float(self.speed)
        self.traveled = float(self.traveled)
        self.position = spherical_to_cartesian(self.traveled, self.zenith_deg, self.azimuth_deg)

    def advance(self, sphere_field: SphereField) -> StepOutcome:
        self.traveled += self.speed
        self.position = spherical_to_cartesian(self.traveled, self.zenith_deg, self.azimuth_deg)
        reached = self.endpoint()

        sphere_index = sphere_field.first_hit(self.position)
        if sphere_index is not None:
            self.reseed()
            return StepOutcome.hit_sphere(sphere_index, reached)

        if self.volume.is_outside(self.position):
            self.reseed()
            return StepOutcome.exited_volume(reached)

        return StepOutcome.advanced(reached)

    def reseed(self) -> None:
        """Back to the origin with a direction drawn uniformly from the integer degrees."""
        self.traveled = 0.0
        self.position = np.zeros(3, dtype=float)
        self.zenith_deg = float(self.rng.integers(0, ZENITH_RANGE_DEG))
        self.azimuth_deg = float(self.rng.integers(0, AZIMUTH_RANGE_DEG))

    def endpoint(self) -> Point:
        x, y, z = self.position
        return float(x), float(y), float(z)

    def segment(self) -> tuple[Point, Point]:
        return (0.0, 0.0, 0.0), self.endpoint()
