from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """What a card mainly does for a deck."""

    RAMP = "Ramp"
    REMOVAL = "Removal"
    DRAW = "Draw"
    THREAT = "Threat"
    ENGINE = "Engine"
    PROTECTION = "Protection"
    TUTOR = "Tutor"
    UTILITY = "Utility"
    DISRUPTION = "Disruption"


class Speed(str, Enum):
    """When in the game a card usually gets cast."""

    EARLY = "Early"
    MID = "Mid"
    LATE = "Late"


@dataclass(frozen=True, slots=True)
class RoleBadge:
    """Exactly one role and one speed for a card."""

    role: Role
    speed: Speed

    @property
    def label(self) -> str:
        return f"{self.role.value} · {self.speed.value}"
