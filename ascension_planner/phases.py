"""Ascension phase tables and the level to phase resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True, slots=True)
class PhaseTable:
    """Inclusive ``(start, end)`` level ranges, one per ascension phase."""

    ranges: Tuple[Tuple[int, int], ...]

    def __post_init__(self) -> None:
        if not self.ranges:
            raise ValueError("A phase table needs at least one range")
        previous_end = None
        for start, end in self.ranges:
            if start > end:
                raise ValueError(f"Phase range {start}-{end} is inverted")
            if previous_end is not None and start != previous_end + 1:
                raise ValueError(f"Phase range starting at {start} does not follow {previous_end}")
            previous_end = end

    @classmethod
    def from_milestones(cls, milestones: Sequence[int]) -> "PhaseTable":
        """Build a table from milestone levels such as ``(1, 20, 40, ..., 90)``.

        The first milestone is the starting level; each later milestone closes
        one phase.
        """

        if len(milestones) < 2:
            raise ValueError("At least a start level and one breakpoint are required")
        ranges = [(milestones[0], milestones[1])]
        for previous, current in zip(milestones[1:], milestones[2:]):
            ranges.append((previous + 1, current))
        return cls(tuple(ranges))

    def __len__(self) -> int:
        return len(self.ranges)

    @property
    def last_phase(self) -> int:
        return len(self.ranges) - 1

    @property
    def max_level(self) -> int:
        return self.ranges[-1][1]

    @property
    def milestones(self) -> Tuple[int, ...]:
        return (self.ranges[0][0],) + tuple(end for _, end in self.ranges)

    def phase_range(self, phase: int) -> Tuple[int, int]:
        return self.ranges[phase]

    def milestone_for(self, level: int) -> int:
        """Return the first milestone at or above ``level``, capped at the maximum."""

        for milestone in self.milestones:
            if milestone >= level:
                return milestone
        return self.max_level


GENSHIN_ASCENSION_LEVELS = (1, 20, 40, 50, 60, 70, 80, 90)
HSR_ASCENSION_LEVELS = (1, 20, 30, 40, 50, 60, 70, 80)

GENSHIN_PHASES = PhaseTable.from_milestones(GENSHIN_ASCENSION_LEVELS)
HSR_PHASES = PhaseTable.from_milestones(HSR_ASCENSION_LEVELS)

CHARACTER_LEVELS = GENSHIN_ASCENSION_LEVELS + (95, 100)
"""Selectable Genshin character levels, including the two breakthrough levels."""


def level_to_phase(level: int, table: PhaseTable = GENSHIN_PHASES) -> int:
    """Return the zero-based ascension phase that ``level`` belongs to.

    Levels past the last breakpoint clamp to the final phase.
    """

    for phase, (_, end) in enumerate(table.ranges):
        if level <= end:
            return phase
    return table.last_phase
