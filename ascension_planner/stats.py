"""Dense per-level stat tables from per-phase growth parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from .phases import HSR_PHASES, PhaseTable

StatTable = Dict[str, Dict[str, float]]


@dataclass(frozen=True, slots=True)
class StatGrowth:
    base: float
    step: float

    @classmethod
    def from_raw(cls, raw: "StatGrowth | Mapping[str, Any]") -> "StatGrowth":
        if isinstance(raw, StatGrowth):
            return raw
        return cls(base=raw.get("base", 0), step=raw.get("step", 0))

    def value_at(self, offset: int) -> float:
        return self.base + self.step * offset


PhaseGrowth = Mapping[str, "StatGrowth | Mapping[str, Any]"]


def compute_stats(
    phase_values: Sequence[Optional[PhaseGrowth]],
    max_level: int,
    stat_keys: Iterable[str],
    table: PhaseTable = HSR_PHASES,
) -> StatTable:
    """Materialise ``base + step * (level - phase start)`` for every level.

    ``phase_values[n]`` holds the growth parameters for phase ``n``. Phases
    without data and levels above ``max_level`` are skipped; stat keys that a
    phase does not define are omitted rather than zero filled. Values are left
    unrounded.
    """

    keys = tuple(stat_keys)
    stats: StatTable = {}
    for phase, (start, end) in enumerate(table.ranges):
        if start > max_level:
            break
        if phase >= len(phase_values):
            break
        phase_data = phase_values[phase]
        if not phase_data:
            continue
        growth = {
            key: StatGrowth.from_raw(phase_data[key])
            for key in keys
            if phase_data.get(key)
        }
        for level in range(start, min(end, max_level) + 1):
            offset = level - start
            stats[str(level)] = {key: value.value_at(offset) for key, value in growth.items()}
    return stats
