"""Ascension, skill and stat planning helpers for gacha reference data."""

from .config import DATA_URLS
from .data_loader import RemoteDataLoader
from .experience import breakthrough_materials_for, exp_materials_for
from .ingest import EntityRecord, HsrIngestor
from .materials import MaterialCostEntry, ascension_materials, merge_all, skill_materials
from .phases import GENSHIN_PHASES, HSR_PHASES, level_to_phase
from .planner import CostBreakdown, build_breakdown
from .stats import compute_stats
from .variants import VARIANTS, get_variant

__all__ = [
    "CostBreakdown",
    "DATA_URLS",
    "EntityRecord",
    "GENSHIN_PHASES",
    "HSR_PHASES",
    "HsrIngestor",
    "MaterialCostEntry",
    "RemoteDataLoader",
    "VARIANTS",
    "ascension_materials",
    "breakthrough_materials_for",
    "build_breakdown",
    "compute_stats",
    "exp_materials_for",
    "get_variant",
    "level_to_phase",
    "merge_all",
    "skill_materials",
]
