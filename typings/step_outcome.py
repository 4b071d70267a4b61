from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Point = Tuple[float, float, float]


class OutcomeKind(str, Enum):
    ADVANCED = "advanced"
    HIT_SPHERE = "hit_sphere"
    EXITED_VOLUME = "exited_volume"


@dataclass(frozen=True, slots=True)
class StepOutcome:
    kind: OutcomeKind
    position: Point  # endpoint computed this step, before any reset
    sphere_index: int | None = None

    @classmethod
    def advanced(cls, position: Point) -> StepOutcome:
        return cls(OutcomeKind.ADVANCED, position)

    @classmethod
    def hit_sphere(cls, sphere_index: int, position: Point) -> StepOutcome:
        return cls(OutcomeKind.HIT_SPHERE, position, sphere_index)

    @classmethod
    def exited_volume(cls, position: Point) -> StepOutcome:
        return cls(OutcomeKind.EXITED_VOLUME, position)

    @property
    def is_reset(self) -> bool:
        return self.kind is not OutcomeKind.ADVANCED
