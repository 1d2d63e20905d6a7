"""Constants for tdreport.

This module centralizes the fixed lookup tables used when preparing a report:
the raw-to-display priority inversion and the Todoist color palette.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Union

# Parent key for top-level projects
ROOT_PROJECT_ID = ""

# Substituted for a missing due date so undated tasks sort after dated ones
MISSING_DUE_DATE = "9999-99-99"

# Todoist stores priority 1 (normal) .. 4 (urgent); users see P1 (urgent) .. P4 (normal)
RAW_TO_DISPLAY_PRIORITY: Mapping[int, int] = MappingProxyType({1: 4, 2: 3, 3: 2, 4: 1})
DISPLAY_PRIORITIES = frozenset(RAW_TO_DISPLAY_PRIORITY.values())

# (REST v2 color name, REST v1 color id, hex value)
_TODOIST_COLORS = (
    ("berry_red", 30, "#b8256f"),
    ("red", 31, "#db4035"),
    ("orange", 32, "#ff9933"),
    ("yellow", 33, "#fad000"),
    ("olive_green", 34, "#afb83b"),
    ("lime_green", 35, "#7ecc49"),
    ("green", 36, "#299438"),
    ("mint_green", 37, "#6accbc"),
    ("teal", 38, "#158fad"),
    ("sky_blue", 39, "#14aaf5"),
    ("light_blue", 40, "#96c3eb"),
    ("blue", 41, "#4073ff"),
    ("grape", 42, "#884dff"),
    ("violet", 43, "#af38eb"),
    ("lavender", 44, "#eb96eb"),
    ("magenta", 45, "#e05194"),
    ("salmon", 46, "#ff8d85"),
    ("charcoal", 47, "#808080"),
    ("grey", 48, "#b8b8b8"),
    ("taupe", 49, "#ccac93"),
)


def _build_color_table() -> Mapping[Union[int, str], str]:
    table = {}
    for name, color_id, hex_value in _TODOIST_COLORS:
        table[name] = hex_value
        table[color_id] = hex_value
    return MappingProxyType(table)


DISPLAY_PRIORITY_TO_HEX: Mapping[int, str] = MappingProxyType({
    1: "#d1453b",
    2: "#eb8909",
    3: "#246fe0",
    4: "#000000",
})


def display_priority(raw_priority: int) -> int:
    """Map a stored Todoist priority to the user-facing P1..P4 value.

    Args:
        raw_priority: Priority as stored by Todoist (1=normal .. 4=urgent)

    Returns:
        Display priority (1=urgent .. 4=normal)

    Raises:
        ValueError: If raw_priority is not one of 1, 2, 3, 4
    """
    try:
        return RAW_TO_DISPLAY_PRIORITY[raw_priority]
    except KeyError:
        raise ValueError(f"Unknown Todoist priority: {raw_priority!r}") from None


@dataclass(frozen=True)
class Palette:
    """Read-only color lookups used by the display projection.

    Unknown keys resolve to an empty string rather than raising, so a color the
    palette does not know simply renders uncolored.
    """

    colors: Mapping[Union[int, str], str] = field(default_factory=_build_color_table)
    priorities: Mapping[int, str] = field(default_factory=lambda: DISPLAY_PRIORITY_TO_HEX)

    def color_hex(self, color: Optional[Union[int, str]]) -> str:
        if color is None:
            return ""
        if isinstance(color, str) and color.isdigit():
            color = int(color)
        return self.colors.get(color, "")

    def priority_hex(self, priority: int) -> str:
        return self.priorities.get(priority, "")


DEFAULT_PALETTE = Palette()
