"""Input adapters that turn roster files into player records."""

from .roster import (
    ImportReport,
    RosterImportError,
    export_roster,
    load_roster_json,
    merge_rosters,
    player_to_payload,
    players_from_payload,
    save_roster_json,
)
from .samples import sample_players

__all__ = [
    "ImportReport",
    "RosterImportError",
    "export_roster",
    "load_roster_json",
    "merge_rosters",
    "player_to_payload",
    "players_from_payload",
    "save_roster_json",
    "sample_players",
]
