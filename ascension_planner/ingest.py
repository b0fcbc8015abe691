"""Builds Star Rail entity records with cost tables and precomputed stats."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .catalog import ItemCatalog
from .data_loader import RemoteDataLoader
from .materials import MaterialCostEntry
from .stats import StatTable, compute_stats
from .variants import HSR_CHARACTER, HSR_LIGHT_CONE, GameVariant

logger = logging.getLogger(__name__)

SKILL_KEY_MAP = {
    "Basic ATK": "basicAtk",
    "Skill": "skill",
    "Ultimate": "ultimate",
    "Talent": "talent",
}
"""Skill ``type_text`` to the trace cost key; techniques have no levels."""

CostTable = Dict[str, List[MaterialCostEntry]]


@dataclass(slots=True)
class EntityRecord:
    entity_id: int
    name: str
    rarity: int
    variant: str
    stats: StatTable
    costs: CostTable
    skill_costs: Dict[str, CostTable] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        def dump(table: CostTable) -> Dict[str, List[Dict[str, Any]]]:
            return {key: [entry.to_dict() for entry in entries] for key, entries in table.items()}

        return {
            "sourceId": self.entity_id,
            "name": self.name,
            "rarity": self.rarity,
            "variant": self.variant,
            "stats": self.stats,
            "costs": dump(self.costs),
            "skillCosts": {skill: dump(table) for skill, table in self.skill_costs.items()},
        }


def _cost_entries(materials: Sequence[Mapping[str, Any]] | None, items: ItemCatalog) -> List[MaterialCostEntry]:
    return [
        MaterialCostEntry(
            id=int(material["id"]),
            name=items.item_name(material["id"]),
            count=int(material.get("num", 0)),
        )
        for material in materials or []
    ]


def build_ascension_costs(
    materials: Sequence[Sequence[Mapping[str, Any]]] | None,
    items: ItemCatalog,
    phases: int = 6,
) -> CostTable:
    """Map ``materials[1..phases]`` to ``ascend1..ascend{phases}``.

    ``materials[0]`` is the free phase 0 entry and is ignored.
    """

    materials = materials or []
    costs: CostTable = {}
    for phase in range(1, phases + 1):
        phase_items = materials[phase] if phase < len(materials) else []
        costs[f"ascend{phase}"] = _cost_entries(phase_items, items)
    return costs


def build_skill_costs(node: Mapping[str, Any] | None, items: ItemCatalog) -> CostTable:
    """Map skill tree ``levels[i]`` to ``lvl{i + 1}``, skipping the free level 1."""

    levels = (node or {}).get("levels") or []
    costs: CostTable = {}
    for index in range(1, len(levels)):
        costs[f"lvl{index + 1}"] = _cost_entries((levels[index] or {}).get("materials"), items)
    return costs


class HsrIngestor:
    """Stitches the StarRailRes datasets into entity records."""

    def __init__(self, loader: RemoteDataLoader) -> None:
        self._loader = loader
        self.items = ItemCatalog(loader.fetch_json("items"))

    def _records(
        self,
        entities: Mapping[str, Mapping[str, Any]],
        promotions: Mapping[str, Mapping[str, Any]],
        variant: GameVariant,
    ) -> List[EntityRecord]:
        records: List[EntityRecord] = []
        for entity_id, entity in entities.items():
            promotion = promotions.get(entity_id)
            if not promotion:
                logger.warning("Skipping %s %s: no promotion data", variant.slug, entity_id)
                continue
            stats = compute_stats(
                promotion.get("values") or [],
                variant.max_level,
                variant.stat_keys,
                variant.phases,
            )
            records.append(
                EntityRecord(
                    entity_id=int(entity_id),
                    name=entity.get("name") or f"Entity {entity_id}",
                    rarity=int(entity.get("rarity") or 0),
                    variant=variant.slug,
                    stats=stats,
                    costs=build_ascension_costs(
                        promotion.get("materials"), self.items, variant.phases.last_phase
                    ),
                )
            )
        return records

    def light_cones(self) -> List[EntityRecord]:
        return self._records(
            self._loader.fetch_json("light_cones"),
            self._loader.fetch_json("light_cone_promotions"),
            HSR_LIGHT_CONE,
        )

    def characters(self) -> List[EntityRecord]:
        characters = self._loader.fetch_json("characters")
        records = self._records(
            characters,
            self._loader.fetch_json("character_promotions"),
            HSR_CHARACTER,
        )
        for record in records:
            record.skill_costs = self.trace_costs(characters[str(record.entity_id)])
        return records

    def trace_costs(self, character: Mapping[str, Any]) -> Dict[str, CostTable]:
        """Return per-skill level costs keyed by ``basicAtk``/``skill``/``ultimate``/``talent``."""

        skill_trees = self._loader.fetch_json("character_skill_trees")
        skills = self._loader.fetch_json("character_skills")
        costs: Dict[str, CostTable] = {}
        for node_id in character.get("skill_trees") or []:
            node: Optional[Mapping[str, Any]] = skill_trees.get(node_id)
            if not node or not node.get("level_up_skills"):
                continue
            skill = skills.get(node["level_up_skills"][0].get("id"))
            if not skill:
                continue
            key = SKILL_KEY_MAP.get(skill.get("type_text"))
            if key is None:
                continue
            costs[key] = build_skill_costs(node, self.items)
        return costs
