import copy
from collections import Counter

from ascension_planner.materials import (
    MaterialCostEntry,
    ascension_materials,
    by_id,
    cumulative_cost,
    merge_all,
    skill_materials,
    sort_materials,
)

ASCENSION_COSTS = {
    "ascend1": [
        {"id": 104111, "name": "Agnidus Agate Sliver", "count": 1},
        {"id": 101201, "name": "Cecilia", "count": 3},
        {"id": 202, "name": "Mora", "count": 20000},
    ],
    "ascend2": [
        {"id": 104112, "name": "Agnidus Agate Fragment", "count": 3},
        {"id": 101201, "name": "Cecilia", "count": 10},
        {"id": 202, "name": "Mora", "count": 40000},
    ],
    "ascend3": [
        {"id": 101201, "name": "Cecilia", "count": 20},
        {"id": 202, "name": "Mora", "count": 60000},
    ],
}

TALENT_COSTS = {
    "lvl2": [{"id": 104301, "name": "Teachings of Freedom", "count": 3}, {"id": 202, "name": "Mora", "count": 12500}],
    "lvl3": [{"id": 104302, "name": "Guide to Freedom", "count": 2}, {"id": 202, "name": "Mora", "count": 17500}],
}


def _counts(entries):
    return Counter({entry.name: entry.count for entry in entries})


def test_ascension_materials_sum_by_name_in_first_seen_order():
    result = ascension_materials(ASCENSION_COSTS, 2)

    assert [entry.name for entry in result] == [
        "Agnidus Agate Sliver",
        "Cecilia",
        "Mora",
        "Agnidus Agate Fragment",
    ]
    assert _counts(result) == {
        "Agnidus Agate Sliver": 1,
        "Cecilia": 13,
        "Mora": 60000,
        "Agnidus Agate Fragment": 3,
    }


def test_phase_zero_and_missing_maps_are_free():
    assert ascension_materials(ASCENSION_COSTS, 0) == []
    assert ascension_materials(None, 5) == []
    assert cumulative_cost(None, 5, start=1, prefix="ascend") == []
    assert skill_materials(TALENT_COSTS, 1) == []


def test_missing_keys_are_treated_as_zero_cost():
    result = ascension_materials(ASCENSION_COSTS, 6)
    assert _counts(result)["Mora"] == 120000


def test_skill_materials_start_at_level_two():
    result = skill_materials(TALENT_COSTS, 3)
    assert _counts(result) == {"Teachings of Freedom": 3, "Mora": 30000, "Guide to Freedom": 2}


def test_entries_without_names_are_skipped():
    costs = {"ascend1": [{"id": 1, "name": "", "count": 5}, {"id": 2, "count": 1}, {"id": 3, "name": "Ore", "count": 2}]}
    assert ascension_materials(costs, 1) == [MaterialCostEntry(id=3, name="Ore", count=2)]


def test_aggregation_is_deterministic_and_leaves_inputs_untouched():
    snapshot = copy.deepcopy(ASCENSION_COSTS)
    first = ascension_materials(ASCENSION_COSTS, 3)
    second = ascension_materials(ASCENSION_COSTS, 3)

    assert first == second
    assert ASCENSION_COSTS == snapshot


def test_cumulative_cost_is_monotonic():
    previous = Counter()
    for phase in range(0, 7):
        current = _counts(ascension_materials(ASCENSION_COSTS, phase))
        for name, count in previous.items():
            assert current[name] >= count
        previous = current


def test_merge_all_is_associative():
    lists = [
        ascension_materials(ASCENSION_COSTS, 3),
        skill_materials(TALENT_COSTS, 3),
        skill_materials(TALENT_COSTS, 2),
        [MaterialCostEntry(id=0, name="Masterless Stella Fortuna", count=1)],
    ]
    flat = merge_all(*lists)
    grouped = merge_all(merge_all(lists[0], lists[3]), merge_all(lists[2], lists[1]))

    assert _counts(flat) == _counts(grouped)
    assert _counts(flat)["Mora"] == 120000 + 30000 + 12500


def test_merge_all_does_not_mutate_its_inputs():
    first = [MaterialCostEntry(id=202, name="Mora", count=5)]
    second = [{"id": 202, "name": "Mora", "count": 7}]

    assert merge_all(first, second) == [MaterialCostEntry(id=202, name="Mora", count=12)]
    assert first[0].count == 5
    assert second[0]["count"] == 7


def test_merge_all_with_no_input():
    assert merge_all() == []
    assert merge_all([], []) == []


def test_id_key_keeps_same_named_materials_apart():
    lists = [[{"id": 1, "name": "Crown", "count": 1}], [{"id": 2, "name": "Crown", "count": 1}]]

    assert len(merge_all(*lists)) == 1
    assert [entry.count for entry in merge_all(*lists, key=by_id)] == [1, 1]


def test_sort_and_serialise():
    entries = [
        MaterialCostEntry(id=1, name="B", count=2),
        MaterialCostEntry(id=2, name="A", count=2),
        MaterialCostEntry(id=3, name="C", count=9, icon="c.png"),
    ]
    assert [entry.name for entry in sort_materials(entries)] == ["C", "A", "B"]
    assert entries[2].to_dict() == {"id": 3, "name": "C", "count": 9, "icon": "c.png"}
    assert "icon" not in entries[0].to_dict()


def test_nameless_entries_with_junk_fields_are_skipped():
    costs = {"ascend1": [{"id": "not-a-number", "count": "?"}, {"id": 3, "name": "Ore", "count": 2}]}
    assert ascension_materials(costs, 1) == [MaterialCostEntry(id=3, name="Ore", count=2)]
    assert merge_all([{"name": None, "count": "x"}]) == []


def test_non_mapping_cost_tables_are_free():
    assert skill_materials([{"name": "Ore", "count": 1}], 10) == []
    assert ascension_materials("ascend1", 3) == []
