"""Material cost entries and the helpers that sum them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence

MaterialKey = Callable[["MaterialCostEntry"], Hashable]


@dataclass(frozen=True, slots=True)
class MaterialCostEntry:
    id: int
    name: str
    count: int
    icon: Optional[str] = None

    @classmethod
    def from_raw(cls, raw: "MaterialCostEntry | Mapping[str, Any]") -> "MaterialCostEntry":
        """Accept either an entry or the ``{id, name, count}`` dict stored on documents."""

        if isinstance(raw, MaterialCostEntry):
            return raw
        return cls(
            id=int(raw.get("id") or 0),
            name=raw.get("name") or "",
            count=int(raw.get("count") or 0),
            icon=raw.get("icon"),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "name": self.name, "count": self.count}
        if self.icon is not None:
            data["icon"] = self.icon
        return data


SparseCostMap = Mapping[str, Sequence["MaterialCostEntry | Mapping[str, Any]"]]


def by_name(entry: MaterialCostEntry) -> Hashable:
    return entry.name


def by_id(entry: MaterialCostEntry) -> Hashable:
    return entry.id


class _Accumulator:
    """Sums counts per key while remembering first-seen order."""

    def __init__(self, key: MaterialKey) -> None:
        self._key = key
        self._entries: Dict[Hashable, MaterialCostEntry] = {}

    def add(self, raw: "MaterialCostEntry | Mapping[str, Any]") -> None:
        if isinstance(raw, Mapping) and not raw.get("name"):
            return
        entry = MaterialCostEntry.from_raw(raw)
        if not entry.name:
            return
        key = self._key(entry)
        existing = self._entries.get(key)
        if existing is None:
            self._entries[key] = entry
        else:
            self._entries[key] = replace(existing, count=existing.count + entry.count)

    def extend(self, items: Iterable["MaterialCostEntry | Mapping[str, Any]"]) -> None:
        for item in items:
            self.add(item)

    def result(self) -> List[MaterialCostEntry]:
        return list(self._entries.values())


def cumulative_cost(
    costs: Optional[SparseCostMap],
    target: int,
    *,
    start: int,
    prefix: str,
    key: MaterialKey = by_name,
) -> List[MaterialCostEntry]:
    """Return the summed cost of keys ``{prefix}{start}`` through ``{prefix}{target}``."""

    if not isinstance(costs, Mapping) or target < start:
        return []
    accumulator = _Accumulator(key)
    for step in range(start, target + 1):
        items = costs.get(f"{prefix}{step}")
        if not isinstance(items, (list, tuple)):
            continue
        accumulator.extend(items)
    return accumulator.result()


def ascension_materials(
    costs: Optional[SparseCostMap], target_phase: int, key: MaterialKey = by_name
) -> List[MaterialCostEntry]:
    """Sum ``ascend1`` .. ``ascend{target_phase}``."""

    return cumulative_cost(costs, target_phase, start=1, prefix="ascend", key=key)


def skill_materials(
    costs: Optional[SparseCostMap], target_level: int, key: MaterialKey = by_name
) -> List[MaterialCostEntry]:
    """Sum ``lvl2`` .. ``lvl{target_level}``; level 1 is free."""

    return cumulative_cost(costs, target_level, start=2, prefix="lvl", key=key)


def merge_all(
    *lists: Iterable["MaterialCostEntry | Mapping[str, Any]"], key: MaterialKey = by_name
) -> List[MaterialCostEntry]:
    accumulator = _Accumulator(key)
    for items in lists:
        accumulator.extend(items)
    return accumulator.result()


def sort_materials(entries: Iterable[MaterialCostEntry]) -> List[MaterialCostEntry]:
    return sorted(entries, key=lambda entry: (-entry.count, entry.name))
