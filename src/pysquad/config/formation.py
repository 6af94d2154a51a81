"""Formation rules: how many players each outfield line can hold."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Tuple

from pysquad.models.positions import LINE_POSITIONS, OUTFIELD_LINES, Line


@dataclass(frozen=True)
class FormationRules:
    key: str
    name: str
    capacities: Mapping[Line, int]
    line_positions: Mapping[Line, Tuple[str, ...]]

    def capacity(self, line: Line) -> int:
        if line is Line.GOALKEEPER:
            return 1
        return self.capacities.get(line, 0)

    def default_position(self, line: Line) -> str:
        return self.line_positions[line][0]

    @property
    def slot_count(self) -> int:
        """Formation slots including the goalkeeper."""

        return 1 + sum(self.capacity(line) for line in OUTFIELD_LINES)


def _rules(key: str, name: str, defenders: int, midfielders: int, forwards: int) -> FormationRules:
    return FormationRules(
        key=key,
        name=name,
        capacities={
            Line.DEFENDER: defenders,
            Line.MIDFIELDER: midfielders,
            Line.FORWARD: forwards,
        },
        line_positions=LINE_POSITIONS,
    )


DEFAULT_FORMATION = "4-4-3"

_FORMATIONS: Dict[str, FormationRules] = {
    "4-4-3": _rules("4-4-3", "4-3-3 with a spare midfield slot", 4, 4, 3),
    "4-3-3": _rules("4-3-3", "4-3-3", 4, 3, 3),
    "4-4-2": _rules("4-4-2", "4-4-2", 4, 4, 2),
    "3-5-2": _rules("3-5-2", "3-5-2", 3, 5, 2),
}


def iter_formations() -> Iterable[FormationRules]:
    """Return an iterator of all configured formations."""

    return _FORMATIONS.values()


def get_formation(key: str | None = None) -> FormationRules:
    """Fetch rules by key (default formation when ``None``), raising KeyError if missing."""

    lookup = (key or DEFAULT_FORMATION).strip().upper()
    if lookup not in _FORMATIONS:
        raise KeyError(f"No formation configured for key={key!r}")
    return _FORMATIONS[lookup]
