"""Position vocabulary and formation lines."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple


POSITION_CODES: Tuple[str, ...] = (
    "GK",
    "CB",
    "LB",
    "RB",
    "CDM",
    "CM",
    "CAM",
    "LM",
    "RM",
    "LW",
    "RW",
    "ST",
)

GOALKEEPER_CODE = "GK"


class Line(str, Enum):
    GOALKEEPER = "goalkeeper"
    DEFENDER = "defender"
    MIDFIELDER = "midfielder"
    FORWARD = "forward"


# Priority order used whenever a player can go to more than one line.
OUTFIELD_LINES: Tuple[Line, ...] = (Line.DEFENDER, Line.MIDFIELDER, Line.FORWARD)

# First code of each tuple is the line's default when a player holds none.
LINE_POSITIONS: Dict[Line, Tuple[str, ...]] = {
    Line.GOALKEEPER: ("GK",),
    Line.DEFENDER: ("CB", "LB", "RB"),
    Line.MIDFIELDER: ("CDM", "CM", "CAM", "LM", "RM"),
    Line.FORWARD: ("LW", "RW", "ST"),
}

_ROLE_CATEGORIES: Dict[Line, str] = {
    Line.GOALKEEPER: "GK",
    Line.DEFENDER: "DEF",
    Line.MIDFIELDER: "MID",
    Line.FORWARD: "ATT",
}

def line_for_position(code: str) -> Line:
    """Return the formation line a position code belongs to."""

    for line, codes in LINE_POSITIONS.items():
        if code in codes:
            return line
    raise KeyError(f"Unknown position code {code!r}")


def role_category(line: Optional[Line]) -> str:
    if line is None:
        return "ATT"
    return _ROLE_CATEGORIES[line]


def role_category_for_position(code: Optional[str]) -> str:
    # Unknown or missing codes render as attackers.
    if not code or code not in POSITION_CODES:
        return "ATT"
    return role_category(line_for_position(code))
