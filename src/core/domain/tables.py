"""Static pricing and partition tables."""

from __future__ import annotations

from decimal import Decimal

from core.domain.language import LanguageGroup
from core.domain.models import MarginBand, Partition

# Several markets share board 2698281907; the aliases are intentional.
_BOARD_IDS: dict[str, int] = {
    "ES": 169441688,
    "IT": 166197610,
    "EN": 391082834,
    "FR": 307948771,
    "DE": 307949567,
    "PT": 168436762,
    "PL": 256668264,
    "NL": 485360488,
    "RU": 2698281907,
    "LT": 2698281907,
    "FI": 2698281907,
    "SE": 2698281907,
    "CZ": 2698281907,
    "SK": 2698281907,
    "GR": 2698281907,
    "HU": 2698281907,
}

PARTITION_TABLE: tuple[Partition, ...] = tuple(
    Partition(language_code=code, partition_id=board_id) for code, board_id in _BOARD_IDS.items()
)

LANGUAGE_GROUPS: dict[LanguageGroup, frozenset[str]] = {
    LanguageGroup.GROUP_1: frozenset({"IT", "PT", "RU"}),
    LanguageGroup.GROUP_2: frozenset({"EN", "FR", "DE", "PL", "ES", "LT"}),
    LanguageGroup.GROUP_3: frozenset({"NL", "FI", "SE", "CZ", "SK", "HU", "GR"}),
}

MARGIN_BANDS: dict[LanguageGroup, MarginBand] = {
    LanguageGroup.GROUP_1: MarginBand(low=Decimal("87"), mid=Decimal("107")),
    LanguageGroup.GROUP_2: MarginBand(low=Decimal("97"), mid=Decimal("117")),
    LanguageGroup.GROUP_3: MarginBand(low=Decimal("107"), mid=Decimal("127")),
}

# Per-word copywriting rate (EUR).
COPY_RATES: dict[str, Decimal] = {
    "IT": Decimal("0.04"),
    "EN": Decimal("0.04"),
    "FR": Decimal("0.04"),
    "DE": Decimal("0.08"),
    "PT": Decimal("0.04"),
    "PL": Decimal("0.04"),
    "ES": Decimal("0.04"),
    "LT": Decimal("0.02"),
    "NL": Decimal("0.08"),
    "FI": Decimal("0.08"),
    "SE": Decimal("0.08"),
    "CZ": Decimal("0.06"),
    "SK": Decimal("0.06"),
    "HU": Decimal("0.06"),
    "GR": Decimal("0.08"),
    "RU": Decimal("0.04"),
}

LOW_BAND_LIMIT = Decimal("300")
MID_BAND_LIMIT = Decimal("500")

MAX_WORD_COUNT = 1_000_000


def group_for(language_code: str) -> LanguageGroup | None:
    for group, codes in LANGUAGE_GROUPS.items():
        if language_code in codes:
            return group
    return None
