"""FastAPI backend exposing the ascension planner to the browsing front-end."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, field_validator

from ascension_planner.experience import (
    breakthrough_materials_for,
    exp_materials_for,
    is_breakthrough_level,
    total_exp_for,
)
from ascension_planner.planner import build_breakdown
from ascension_planner.stats import compute_stats
from ascension_planner.variants import VARIANTS, GameVariant, get_variant

app = FastAPI(title="Ascension Planner API")


def _variant_or_404(slug: str) -> GameVariant:
    try:
        return get_variant(slug)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown variant: {slug}") from None


class MaterialModel(BaseModel):
    id: int = 0
    name: str = ""
    count: int = Field(0, ge=0)
    icon: str | None = None


class VariantModel(BaseModel):
    slug: str
    label: str
    stat_keys: List[str]
    milestones: List[int]
    selectable_levels: List[int]
    max_level: int
    level_cap: int
    skills: Dict[str, int]


CostTableModel = Dict[str, List[MaterialModel]]


class PlanRequest(BaseModel):
    variant: str
    level: int = Field(1, ge=1)
    ascension_costs: Dict[str, List[MaterialModel]] = Field(default_factory=dict)
    skill_costs: Union[CostTableModel, Dict[str, CostTableModel]] = Field(default_factory=dict)
    skill_levels: Dict[str, int] = Field(default_factory=dict)
    sort_by_count: bool = False

    @field_validator("skill_costs", mode="before")
    def _check_skill_costs_shape(cls, value):
        # Either one shared lvl-keyed table or one table per skill, never a mix.
        if isinstance(value, dict):
            shared = [key for key in value if str(key).startswith("lvl")]
            if shared and len(shared) != len(value):
                raise ValueError("skill_costs mixes lvl keys with skill names")
            if not shared and not all(isinstance(table, dict) for table in value.values()):
                raise ValueError("per-skill costs must map each skill to a lvl-keyed table")
        return value

    @field_validator("skill_levels", mode="before")
    def _convert_skill_levels(cls, value):
        if isinstance(value, dict):
            return {str(key): int(level) for key, level in value.items()}
        return value


class PlanResponse(BaseModel):
    variant: str
    level: int
    phase: int
    milestone: int
    breakthrough: bool
    skill_levels: Dict[str, int]
    ascension: List[MaterialModel]
    experience: List[MaterialModel]
    breakthrough_materials: List[MaterialModel]
    skills: Dict[str, List[MaterialModel]]
    skills_total: List[MaterialModel]
    total: List[MaterialModel]


class GrowthModel(BaseModel):
    base: float
    step: float = 0.0


class StatsRequest(BaseModel):
    variant: str
    phase_values: List[Optional[Dict[str, GrowthModel]]] = Field(default_factory=list)
    max_level: Optional[int] = Field(None, ge=1)


class StatsResponse(BaseModel):
    variant: str
    max_level: int
    stats: Dict[str, Dict[str, float]]


class ExpResponse(BaseModel):
    level: int
    total_exp: int
    breakthrough: bool
    experience: List[MaterialModel]
    breakthrough_materials: List[MaterialModel]


def _variant_dict(variant: GameVariant) -> Dict[str, object]:
    return {
        "slug": variant.slug,
        "label": variant.label,
        "stat_keys": list(variant.stat_keys),
        "milestones": list(variant.phases.milestones),
        "selectable_levels": list(variant.selectable_levels),
        "max_level": variant.max_level,
        "level_cap": variant.level_cap,
        "skills": dict(variant.skill_max_levels),
    }


def _dump_costs(table: Mapping[str, List[MaterialModel]]) -> Dict[str, List[Dict[str, object]]]:
    return {key: [material.model_dump() for material in materials] for key, materials in table.items()}


@app.get("/api/variants", response_model=List[VariantModel])
async def api_variants() -> List[VariantModel]:
    return [VariantModel(**_variant_dict(variant)) for variant in VARIANTS.values()]


@app.post("/api/plan", response_model=PlanResponse)
async def api_plan(payload: PlanRequest) -> PlanResponse:
    variant = _variant_or_404(payload.variant)
    skill_costs = {
        key: _dump_costs(table) if isinstance(table, dict) else [material.model_dump() for material in table]
        for key, table in payload.skill_costs.items()
    }
    breakdown = build_breakdown(
        variant,
        payload.level,
        _dump_costs(payload.ascension_costs),
        skill_costs,
        payload.skill_levels,
    )
    if payload.sort_by_count:
        breakdown = breakdown.sorted()
    return PlanResponse(**breakdown.to_dict())


@app.post("/api/stats", response_model=StatsResponse)
async def api_stats(payload: StatsRequest) -> StatsResponse:
    variant = _variant_or_404(payload.variant)
    max_level = min(payload.max_level or variant.max_level, variant.max_level)
    phase_values = [
        {key: growth.model_dump() for key, growth in phase.items()} if phase else None
        for phase in payload.phase_values
    ]
    stats = compute_stats(phase_values, max_level, variant.stat_keys, variant.phases)
    return StatsResponse(variant=variant.slug, max_level=max_level, stats=stats)


@app.get("/api/exp/{level}", response_model=ExpResponse)
async def api_exp(level: int) -> ExpResponse:
    if level < 1:
        raise HTTPException(status_code=422, detail="Level must be at least 1")
    return ExpResponse(
        level=level,
        total_exp=total_exp_for(level),
        breakthrough=is_breakthrough_level(level),
        experience=[entry.to_dict() for entry in exp_materials_for(level)],
        breakthrough_materials=[entry.to_dict() for entry in breakthrough_materials_for(level)],
    )
