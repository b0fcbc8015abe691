"""Character EXP book, Mora and breakthrough costs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from .materials import MaterialCostEntry

MAX_EXP_LEVEL = 90
BREAKTHROUGH_LEVELS = (95, 100)

# Cumulative EXP required to reach level N from level 1.
CHAR_EXP_CUMULATIVE: Dict[int, int] = {
    1: 0, 2: 1_000, 3: 2_325, 4: 4_025, 5: 6_175,
    6: 8_800, 7: 11_950, 8: 15_675, 9: 20_025, 10: 25_025,
    11: 30_725, 12: 37_175, 13: 44_400, 14: 52_450, 15: 61_375,
    16: 71_200, 17: 81_950, 18: 93_675, 19: 106_400, 20: 120_175,
    21: 135_050, 22: 151_850, 23: 169_850, 24: 189_100, 25: 209_650,
    26: 231_525, 27: 254_775, 28: 279_425, 29: 305_525, 30: 333_100,
    31: 362_200, 32: 392_850, 33: 425_100, 34: 458_975, 35: 494_525,
    36: 531_775, 37: 570_750, 38: 611_500, 39: 654_075, 40: 698_500,
    41: 744_800, 42: 795_425, 43: 848_125, 44: 902_900, 45: 959_800,
    46: 1_018_875, 47: 1_080_150, 48: 1_143_675, 49: 1_209_475, 50: 1_277_600,
    51: 1_348_075, 52: 1_424_575, 53: 1_503_625, 54: 1_585_275, 55: 1_669_550,
    56: 1_756_500, 57: 1_846_150, 58: 1_938_550, 59: 2_033_725, 60: 2_131_725,
    61: 2_232_600, 62: 2_341_550, 63: 2_453_600, 64: 2_568_775, 65: 2_687_100,
    66: 2_808_625, 67: 2_933_400, 68: 3_061_475, 69: 3_192_875, 70: 3_327_650,
    71: 3_465_825, 72: 3_614_525, 73: 3_766_900, 74: 3_922_975, 75: 4_082_800,
    76: 4_246_400, 77: 4_413_825, 78: 4_585_125, 79: 4_760_350, 80: 4_939_525,
    81: 5_122_700, 82: 5_338_925, 83: 5_581_950, 84: 5_855_050, 85: 6_161_850,
    86: 6_506_450, 87: 6_893_400, 88: 7_327_825, 89: 7_815_450, 90: 8_362_650,
}


@dataclass(frozen=True, slots=True)
class ExpBook:
    id: int
    name: str
    exp: int


HEROS_WIT = ExpBook(id=104003, name="Hero's Wit", exp=20_000)
ADVENTURERS_EXPERIENCE = ExpBook(id=104002, name="Adventurer's Experience", exp=5_000)
WANDERERS_ADVICE = ExpBook(id=104001, name="Wanderer's Advice", exp=1_000)

EXP_BOOKS: Tuple[ExpBook, ...] = (HEROS_WIT, ADVENTURERS_EXPERIENCE, WANDERERS_ADVICE)
"""Book denominations in strictly descending EXP value."""

MORA_ID = 202
MORA_NAME = "Mora"
EXP_PER_MORA = 5

# Placeholder id 0: the material has no catalogue entry.
MASTERLESS_STELLA_FORTUNA = MaterialCostEntry(id=0, name="Masterless Stella Fortuna", count=1)


@dataclass(slots=True)
class ExpDecomposition:
    counts: List[Tuple[ExpBook, int]]
    consumed_exp: int
    mora: int


def decompose_exp(total_exp: int, books: Sequence[ExpBook] = EXP_BOOKS) -> ExpDecomposition:
    """Greedily split ``total_exp`` into ``books``.

    Every tier but the last uses floor division; the last rounds up, so the
    books may overshoot the requirement by less than one small book.
    """

    remaining = max(total_exp, 0)
    counts: List[Tuple[ExpBook, int]] = []
    for index, book in enumerate(books):
        if index == len(books) - 1:
            count = -(-remaining // book.exp)
        else:
            count = remaining // book.exp
        remaining -= count * book.exp
        counts.append((book, count))

    consumed = sum(book.exp * count for book, count in counts)
    return ExpDecomposition(counts=counts, consumed_exp=consumed, mora=consumed // EXP_PER_MORA)


def total_exp_for(target_level: int) -> int:
    return CHAR_EXP_CUMULATIVE.get(min(target_level, MAX_EXP_LEVEL), 0)


def exp_materials_for(target_level: int) -> List[MaterialCostEntry]:
    """EXP books and Mora needed to reach ``target_level`` from level 1."""

    total_exp = total_exp_for(target_level)
    if total_exp <= 0:
        return []

    decomposition = decompose_exp(total_exp)
    entries = [
        MaterialCostEntry(id=book.id, name=book.name, count=count)
        for book, count in decomposition.counts
        if count > 0
    ]
    if decomposition.mora > 0:
        entries.append(MaterialCostEntry(id=MORA_ID, name=MORA_NAME, count=decomposition.mora))
    return entries


def is_breakthrough_level(level: int) -> bool:
    return level > MAX_EXP_LEVEL


def breakthrough_materials_for(target_level: int) -> List[MaterialCostEntry]:
    """Masterless Stella Fortuna needed from level 90: one for 95, three for 100."""

    if target_level < BREAKTHROUGH_LEVELS[0]:
        return []
    count = 3 if target_level >= BREAKTHROUGH_LEVELS[1] else 1
    return [MaterialCostEntry(id=MASTERLESS_STELLA_FORTUNA.id, name=MASTERLESS_STELLA_FORTUNA.name, count=count)]
