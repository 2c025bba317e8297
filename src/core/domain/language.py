"""Language codes and margin groups.

Language codes are the market identifiers used by the partition table
(`IT`, `EN`, `DE`, ...). They are compared upper-cased and trimmed
everywhere, so this module is the single place that normalizes them.
"""

from __future__ import annotations

from enum import Enum


class LanguageGroup(str, Enum):
    """Margin groups: languages in the same group share flat margin bands."""

    GROUP_1 = "group_1"
    GROUP_2 = "group_2"
    GROUP_3 = "group_3"

    def label(self) -> str:
        """Human readable label for tables and logging."""

        return self.value.replace("_", " ").title()


def normalize_language_code(value: str) -> str:
    """Return `value` trimmed and upper-cased (`" it "` -> `"IT"`)."""

    return value.strip().upper()
