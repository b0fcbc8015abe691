"""Configuration for remote Star Rail data sources."""

from __future__ import annotations

STARRAILRES_BASE = "https://raw.githubusercontent.com/Mar-7th/StarRailRes/master"
"""Root of the StarRailRes repository; icon paths in the data are relative to it."""

DATA_BASE = f"{STARRAILRES_BASE}/index_new/en"

DATA_URLS = {
    "characters": f"{DATA_BASE}/characters.json",
    "character_promotions": f"{DATA_BASE}/character_promotions.json",
    "character_skills": f"{DATA_BASE}/character_skills.json",
    "character_skill_trees": f"{DATA_BASE}/character_skill_trees.json",
    "light_cones": f"{DATA_BASE}/light_cones.json",
    "light_cone_promotions": f"{DATA_BASE}/light_cone_promotions.json",
    "items": f"{DATA_BASE}/items.json",
}
"""Mapping of dataset name to the corresponding raw GitHub URL."""

REQUEST_TIMEOUT = 30
