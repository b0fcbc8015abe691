import pytest

from ascension_planner.planner import build_breakdown
from ascension_planner.variants import (
    GENSHIN_CHARACTER,
    GENSHIN_WEAPON,
    HSR_CHARACTER,
    HSR_LIGHT_CONE,
    VARIANTS,
    get_variant,
)

ASCENSION_COSTS = {
    f"ascend{phase}": [
        {"id": 104111, "name": "Agnidus Agate Sliver", "count": phase},
        {"id": 202, "name": "Mora", "count": 20000 * phase},
    ]
    for phase in range(1, 7)
}

TALENT_COSTS = {
    f"lvl{level}": [
        {"id": 104301, "name": "Teachings of Freedom", "count": level},
        {"id": 202, "name": "Mora", "count": 1000 * level},
    ]
    for level in range(2, 11)
}

TRACE_COSTS = {
    "basicAtk": {f"lvl{level}": [{"id": 110131, "name": "Thief's Instinct", "count": 2}] for level in range(2, 7)},
    "skill": {f"lvl{level}": [{"id": 110132, "name": "Usurper's Scheme", "count": 3}] for level in range(2, 11)},
}


def _counts(entries):
    return {entry.name: entry.count for entry in entries}


def test_genshin_character_breakdown_folds_every_category():
    breakdown = build_breakdown(
        GENSHIN_CHARACTER,
        20,
        ASCENSION_COSTS,
        TALENT_COSTS,
        {"normal": 2, "skill": 3, "burst": 1},
    )

    assert breakdown.phase == 0
    assert breakdown.ascension == []
    assert _counts(breakdown.experience) == {"Hero's Wit": 6, "Wanderer's Advice": 1, "Mora": 24200}
    assert breakdown.skills["burst"] == []
    assert _counts(breakdown.skills_total) == {"Teachings of Freedom": 2 + 2 + 3, "Mora": 2000 + 2000 + 3000}
    assert _counts(breakdown.total)["Mora"] == 24200 + 7000


def test_level_forty_pays_one_phase():
    breakdown = build_breakdown(GENSHIN_CHARACTER, 40, ASCENSION_COSTS)
    assert breakdown.phase == 1
    assert breakdown.milestone == 40
    assert _counts(breakdown.ascension) == {"Agnidus Agate Sliver": 1, "Mora": 20000}


def test_breakthrough_levels_pin_phase_and_exp():
    at_ninety = build_breakdown(GENSHIN_CHARACTER, 90, ASCENSION_COSTS)
    at_hundred = build_breakdown(GENSHIN_CHARACTER, 100, ASCENSION_COSTS)

    assert not at_ninety.breakthrough
    assert at_hundred.breakthrough
    assert at_hundred.phase == 6
    assert at_hundred.ascension == at_ninety.ascension
    assert at_hundred.experience == at_ninety.experience
    assert at_ninety.breakthrough_materials == []
    assert _counts(at_hundred.breakthrough_materials) == {"Masterless Stella Fortuna": 3}
    assert _counts(at_hundred.total)["Masterless Stella Fortuna"] == 3


def test_levels_and_skill_levels_are_clamped():
    breakdown = build_breakdown(GENSHIN_CHARACTER, 250, ASCENSION_COSTS, TALENT_COSTS, {"normal": 99, "skill": -4})
    assert breakdown.level == 100
    assert breakdown.skill_levels == {"normal": 10, "skill": 1, "burst": 1}

    low = build_breakdown(GENSHIN_CHARACTER, 0, ASCENSION_COSTS)
    assert low.level == 1
    assert low.is_free


def test_weapons_have_no_exp_or_breakthrough():
    breakdown = build_breakdown(GENSHIN_WEAPON, 100, ASCENSION_COSTS)
    assert breakdown.level == 90
    assert breakdown.experience == []
    assert breakdown.breakthrough_materials == []
    assert breakdown.skills == {}


def test_star_rail_traces_use_per_skill_tables():
    breakdown = build_breakdown(HSR_CHARACTER, 80, ASCENSION_COSTS, TRACE_COSTS, {"basicAtk": 6, "skill": 10})

    assert breakdown.phase == 6
    assert breakdown.experience == []
    assert _counts(breakdown.skills["basicAtk"]) == {"Thief's Instinct": 10}
    assert _counts(breakdown.skills["skill"]) == {"Usurper's Scheme": 27}
    assert breakdown.skills["ultimate"] == []
    assert _counts(breakdown.total)["Agnidus Agate Sliver"] == 21


def test_light_cone_phase_uses_star_rail_breakpoints():
    breakdown = build_breakdown(HSR_LIGHT_CONE, 30, ASCENSION_COSTS)
    assert breakdown.phase == 1
    assert build_breakdown(HSR_LIGHT_CONE, 31, ASCENSION_COSTS).phase == 2


def test_breakdown_is_idempotent_and_serialisable():
    args = (GENSHIN_CHARACTER, 95, ASCENSION_COSTS, TALENT_COSTS, {"normal": 9, "skill": 9, "burst": 9})
    first = build_breakdown(*args)
    second = build_breakdown(*args)

    assert first == second
    data = first.to_dict()
    assert data["breakthrough"] is True
    assert data["breakthrough_materials"] == [{"id": 0, "name": "Masterless Stella Fortuna", "count": 1}]
    assert set(data["skills"]) == {"normal", "skill", "burst"}


def test_unknown_variant():
    assert get_variant("hsr-light-cone") is HSR_LIGHT_CONE
    with pytest.raises(KeyError):
        get_variant("wuwa-character")


def test_per_skill_values_that_are_not_tables_cost_nothing():
    breakdown = build_breakdown(
        HSR_CHARACTER, 20, None, {"basicAtk": [{"name": "Thief's Instinct", "count": 1}]}, {"basicAtk": 3}
    )
    assert breakdown.skills["basicAtk"] == []
    assert breakdown.is_free


def test_sorted_breakdown_orders_by_count_then_name():
    breakdown = build_breakdown(GENSHIN_CHARACTER, 40, ASCENSION_COSTS, TALENT_COSTS, {"normal": 3})
    ordered = breakdown.sorted()

    assert [entry.name for entry in ordered.total] == [
        "Mora",
        "Hero's Wit",
        "Teachings of Freedom",
        "Wanderer's Advice",
        "Adventurer's Experience",
        "Agnidus Agate Sliver",
    ]
    assert sorted(_counts(ordered.total).items()) == sorted(_counts(breakdown.total).items())
    assert ordered.level == breakdown.level


def test_variant_reference_data_is_read_only():
    with pytest.raises(TypeError):
        GENSHIN_CHARACTER.skill_max_levels["normal"] = 15
    with pytest.raises(TypeError):
        HSR_CHARACTER.skill_max_levels["skill"] = 1
    with pytest.raises(TypeError):
        VARIANTS["genshin-weapon"] = HSR_LIGHT_CONE
