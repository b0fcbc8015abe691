"""Per-game parameters for the otherwise game-agnostic helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from .experience import BREAKTHROUGH_LEVELS
from .phases import GENSHIN_PHASES, HSR_PHASES, PhaseTable


@dataclass(frozen=True, slots=True)
class GameVariant:
    slug: str
    label: str
    phases: PhaseTable
    stat_keys: Tuple[str, ...]
    skill_max_levels: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    uses_exp_books: bool = False
    breakthrough_levels: Tuple[int, ...] = ()

    @property
    def max_level(self) -> int:
        return self.phases.max_level

    @property
    def level_cap(self) -> int:
        """Highest selectable level, breakthrough levels included."""

        if self.breakthrough_levels:
            return self.breakthrough_levels[-1]
        return self.max_level

    @property
    def selectable_levels(self) -> Tuple[int, ...]:
        return self.phases.milestones + self.breakthrough_levels


GENSHIN_CHARACTER = GameVariant(
    slug="genshin-character",
    label="Genshin Impact character",
    phases=GENSHIN_PHASES,
    stat_keys=("hp", "atk", "def", "specialized"),
    skill_max_levels=MappingProxyType({"normal": 10, "skill": 10, "burst": 10}),
    uses_exp_books=True,
    breakthrough_levels=BREAKTHROUGH_LEVELS,
)

GENSHIN_WEAPON = GameVariant(
    slug="genshin-weapon",
    label="Genshin Impact weapon",
    phases=GENSHIN_PHASES,
    stat_keys=("atk", "specialized"),
)

HSR_CHARACTER = GameVariant(
    slug="hsr-character",
    label="Honkai: Star Rail character",
    phases=HSR_PHASES,
    stat_keys=("hp", "atk", "def", "spd"),
    skill_max_levels=MappingProxyType({"basicAtk": 6, "skill": 10, "ultimate": 10, "talent": 10}),
)

HSR_LIGHT_CONE = GameVariant(
    slug="hsr-light-cone",
    label="Honkai: Star Rail light cone",
    phases=HSR_PHASES,
    stat_keys=("hp", "atk", "def"),
)

VARIANTS: Mapping[str, GameVariant] = MappingProxyType(
    {
        variant.slug: variant
        for variant in (GENSHIN_CHARACTER, GENSHIN_WEAPON, HSR_CHARACTER, HSR_LIGHT_CONE)
    }
)


def get_variant(slug: str) -> GameVariant:
    if slug not in VARIANTS:
        raise KeyError(f"Unknown game variant: {slug}")
    return VARIANTS[slug]
