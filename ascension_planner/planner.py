"""Folds ascension, EXP, breakthrough and skill costs into one breakdown."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging
from typing import Any, Dict, List, Mapping, Optional

from .experience import breakthrough_materials_for, exp_materials_for
from .materials import (
    MaterialCostEntry,
    MaterialKey,
    SparseCostMap,
    ascension_materials,
    by_name,
    merge_all,
    skill_materials,
    sort_materials,
)
from .phases import level_to_phase
from .variants import GameVariant

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CostBreakdown:
    variant: str
    level: int
    phase: int
    milestone: int
    breakthrough: bool
    skill_levels: Dict[str, int]
    ascension: List[MaterialCostEntry]
    experience: List[MaterialCostEntry]
    breakthrough_materials: List[MaterialCostEntry]
    skills: Dict[str, List[MaterialCostEntry]] = field(default_factory=dict)
    skills_total: List[MaterialCostEntry] = field(default_factory=list)
    total: List[MaterialCostEntry] = field(default_factory=list)

    @property
    def is_free(self) -> bool:
        return not self.total

    def sorted(self) -> "CostBreakdown":
        """Return a copy with every list ordered by descending count, then name."""

        return replace(
            self,
            ascension=sort_materials(self.ascension),
            experience=sort_materials(self.experience),
            breakthrough_materials=sort_materials(self.breakthrough_materials),
            skills={name: sort_materials(entries) for name, entries in self.skills.items()},
            skills_total=sort_materials(self.skills_total),
            total=sort_materials(self.total),
        )

    def to_dict(self) -> Dict[str, Any]:
        def dump(entries: List[MaterialCostEntry]) -> List[Dict[str, Any]]:
            return [entry.to_dict() for entry in entries]

        return {
            "variant": self.variant,
            "level": self.level,
            "phase": self.phase,
            "milestone": self.milestone,
            "breakthrough": self.breakthrough,
            "skill_levels": dict(self.skill_levels),
            "ascension": dump(self.ascension),
            "experience": dump(self.experience),
            "breakthrough_materials": dump(self.breakthrough_materials),
            "skills": {name: dump(entries) for name, entries in self.skills.items()},
            "skills_total": dump(self.skills_total),
            "total": dump(self.total),
        }


def _is_shared_cost_map(skill_costs: Mapping[str, Any]) -> bool:
    return any(key.startswith("lvl") for key in skill_costs)


def _skill_cost_map(
    skill_costs: Optional[Mapping[str, Any]], skill: str
) -> Optional[SparseCostMap]:
    if not skill_costs:
        return None
    if _is_shared_cost_map(skill_costs):
        return skill_costs
    return skill_costs.get(skill)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(int(value), high))


def build_breakdown(
    variant: GameVariant,
    level: int,
    ascension_costs: Optional[SparseCostMap] = None,
    skill_costs: Optional[Mapping[str, Any]] = None,
    skill_levels: Optional[Mapping[str, int]] = None,
    key: MaterialKey = by_name,
) -> CostBreakdown:
    """Return every cost category for reaching ``level`` and ``skill_levels``.

    ``skill_costs`` is either one ``lvl``-keyed map shared by every skill
    (Genshin talents) or a mapping of skill name to its own map (Star Rail
    traces). Levels are clamped to what the variant supports.
    """

    level = clamp(level, 1, variant.level_cap)
    breakthrough = level > variant.max_level
    phase = variant.phases.last_phase if breakthrough else level_to_phase(level, variant.phases)

    ascension = ascension_materials(ascension_costs, phase, key=key)
    experience = exp_materials_for(level) if variant.uses_exp_books else []
    breakthrough_cost = breakthrough_materials_for(level) if variant.breakthrough_levels else []

    requested = skill_levels or {}
    resolved_levels: Dict[str, int] = {}
    skills: Dict[str, List[MaterialCostEntry]] = {}
    for skill, max_skill_level in variant.skill_max_levels.items():
        skill_level = clamp(requested.get(skill, 1), 1, max_skill_level)
        resolved_levels[skill] = skill_level
        skills[skill] = skill_materials(_skill_cost_map(skill_costs, skill), skill_level, key=key)

    skills_total = merge_all(*skills.values(), key=key)
    total = merge_all(ascension, experience, breakthrough_cost, *skills.values(), key=key)

    logger.debug(
        "Built %s breakdown for level %s (phase %s): %s materials",
        variant.slug,
        level,
        phase,
        len(total),
    )
    return CostBreakdown(
        variant=variant.slug,
        level=level,
        phase=phase,
        milestone=variant.phases.milestone_for(level),
        breakthrough=breakthrough,
        skill_levels=resolved_levels,
        ascension=ascension,
        experience=experience,
        breakthrough_materials=breakthrough_cost,
        skills=skills,
        skills_total=skills_total,
        total=total,
    )
