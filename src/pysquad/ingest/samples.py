"""Bundled demo roster: 22 players including two dual-role players."""

from __future__ import annotations

from typing import Any, Dict, List
from uuid import uuid4

from pysquad.models import PlayerRecord, parse_player


def _outfield(pace, shooting, passing, dribbling, defending, physical, overall) -> Dict[str, int]:
    return {
        "pace": pace,
        "shooting": shooting,
        "passing": passing,
        "dribbling": dribbling,
        "defending": defending,
        "physical": physical,
        "overall": overall,
    }


def _keeper(diving, handling, kicking, reflexes, speed, positioning, overall) -> Dict[str, int]:
    return {
        "diving": diving,
        "handling": handling,
        "kicking": kicking,
        "reflexes": reflexes,
        "speed": speed,
        "positioning": positioning,
        "overall": overall,
    }


_SAMPLE_ROSTER: List[Dict[str, Any]] = [
    {"name": "Alisson Becker", "positions": ["GK"], "gk_stats": _keeper(89, 90, 86, 85, 54, 87, 89)},
    {
        "name": "Manuel Neuer",
        "positions": ["GK", "CB"],
        "preferred_position": "GK",
        "gk_stats": _keeper(91, 88, 95, 89, 61, 91, 90),
        "outfield_stats": _outfield(58, 65, 91, 82, 75, 85, 78),
    },
    {"name": "Andrew Robertson", "positions": ["LB", "LM"], "outfield_stats": _outfield(81, 59, 81, 73, 85, 77, 87)},
    {"name": "Alphonso Davies", "positions": ["LB", "LW"], "outfield_stats": _outfield(96, 68, 77, 82, 76, 77, 84)},
    {"name": "Virgil van Dijk", "positions": ["CB", "CDM"], "outfield_stats": _outfield(77, 60, 71, 72, 91, 86, 90)},
    {"name": "Rúben Dias", "positions": ["CB", "RB"], "outfield_stats": _outfield(61, 47, 65, 61, 88, 85, 88)},
    {
        "name": "Sergio Ramos",
        "positions": ["CB", "GK", "RB"],
        "preferred_position": "CB",
        "outfield_stats": _outfield(58, 64, 68, 71, 88, 83, 84),
        "gk_stats": _keeper(45, 42, 68, 48, 58, 52, 55),
    },
    {"name": "Thiago Silva", "positions": ["CB", "CDM"], "outfield_stats": _outfield(50, 38, 68, 62, 85, 76, 83)},
    {"name": "Trent Alexander-Arnold", "positions": ["RB", "RM", "CM"], "outfield_stats": _outfield(76, 66, 89, 73, 78, 71, 87)},
    {"name": "João Cancelo", "positions": ["RB", "LB", "RM", "LM"], "outfield_stats": _outfield(85, 77, 86, 90, 74, 78, 86)},
    {"name": "N'Golo Kanté", "positions": ["CDM", "CM", "CB"], "outfield_stats": _outfield(77, 66, 75, 82, 87, 82, 89)},
    {"name": "Casemiro", "positions": ["CDM", "CB", "CM"], "outfield_stats": _outfield(62, 72, 75, 72, 88, 90, 85)},
    {"name": "Kevin De Bruyne", "positions": ["CM", "CAM", "RM"], "outfield_stats": _outfield(76, 86, 93, 88, 64, 78, 91)},
    {"name": "Luka Modrić", "positions": ["CM", "CAM", "CDM"], "outfield_stats": _outfield(74, 76, 89, 90, 72, 65, 87)},
    {"name": "Bruno Fernandes", "positions": ["CM", "CAM", "RW"], "outfield_stats": _outfield(75, 85, 89, 84, 69, 77, 86)},
    {"name": "Paul Pogba", "positions": ["CM", "CDM", "CAM"], "outfield_stats": _outfield(73, 79, 86, 85, 59, 87, 85)},
    {"name": "Sadio Mané", "positions": ["LW", "ST", "RW"], "outfield_stats": _outfield(94, 83, 76, 89, 44, 76, 89)},
    {"name": "Son Heung-min", "positions": ["LW", "ST", "RW", "CAM"], "outfield_stats": _outfield(88, 89, 82, 86, 42, 69, 89)},
    {"name": "Robert Lewandowski", "positions": ["ST", "CAM"], "outfield_stats": _outfield(78, 91, 79, 86, 44, 82, 91)},
    {"name": "Erling Haaland", "positions": ["ST", "RW"], "outfield_stats": _outfield(89, 94, 65, 80, 45, 88, 88)},
    {"name": "Mohamed Salah", "positions": ["RW", "ST", "RM"], "outfield_stats": _outfield(90, 87, 81, 90, 45, 75, 90)},
    {"name": "Lionel Messi", "positions": ["RW", "CAM", "ST"], "outfield_stats": _outfield(85, 92, 91, 95, 35, 68, 94)},
]


def sample_players() -> List[PlayerRecord]:
    """Fresh copies of the demo roster, all selected, with new ids."""

    return [
        parse_player({**entry, "player_id": uuid4().hex, "selected": True})
        for entry in _SAMPLE_ROSTER
    ]
