from __future__ import annotations

import numpy as np

from ray_state import DEFAULT_AZIMUTH_DEG, DEFAULT_SPEED, DEFAULT_ZENITH_DEG, RayState
from typings.bounded_volume import BoundedVolume


class SimulationSettings:
    def __init__(
        self,
        grid_size: int = 5,
        cell_size: float = 0.2,
        speed: float = DEFAULT_SPEED,
        zenith_deg: float = DEFAULT_ZENITH_DEG,
        azimuth_deg: float = DEFAULT_AZIMUTH_DEG,
        seed: int | None = None,
    ) -> None:
        self.grid_size: int = int(grid_size)
        self.cell_size: float = float(cell_size)
        self.speed: float = float(speed)
        self.zenith_deg: float = float(zenith_deg)
        self.azimuth_deg: float = float(azimuth_deg)
        self.seed: int | None = None if seed is None else int(seed)

    @property
    def half_extent(self) -> float:
        return (self.grid_size * self.cell_size) / 2.0

    def bounded_volume(self) -> BoundedVolume:
        return BoundedVolume.from_grid(self.grid_size, self.cell_size)

    def create_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)

    def create_ray(self, rng: np.random.Generator | None = None) -> RayState:
        return RayState(
            volume=self.bounded_volume(),
            speed=self.speed,
            zenith_deg=self.zenith_deg,
            azimuth_deg=self.azimuth_deg,
            rng=rng if rng is not None else self.create_rng(),
        )
