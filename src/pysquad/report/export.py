"""CSV export for generated teams."""

from __future__ import annotations

import csv
from io import StringIO
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from pysquad.api.schemas.team import TeamPlayerResponse, TeamResponse


EXPORT_HEADERS = (
    "team_id",
    "team_name",
    "slot",
    "position",
    "player_id",
    "name",
    "rating",
)


class TeamExportError(RuntimeError):
    """Raised when a team's formation references a player it does not list."""


def _ordered_entries(team: "TeamResponse") -> list[tuple[str, "TeamPlayerResponse"]]:
    """Goalkeeper, defenders, midfielders, forwards, then the bench."""

    by_id = {player.player_id: player for player in team.players}
    formation = team.formation
    slots: list[tuple[str, str]] = []
    if formation.goalkeeper is not None:
        slots.append(("GK", formation.goalkeeper))
    slots.extend(("DEF", pid) for pid in formation.defenders)
    slots.extend(("MID", pid) for pid in formation.midfielders)
    slots.extend(("ATT", pid) for pid in formation.forwards)
    slots.extend(("SUB", pid) for pid in formation.substitutes)

    rows: list[tuple[str, TeamPlayerResponse]] = []
    for slot, player_id in slots:
        if player_id not in by_id:
            raise TeamExportError(f"{team.name} formation lists unknown player {player_id}")
        rows.append((slot, by_id[player_id]))
    return rows


def export_teams_to_csv(teams: Sequence["TeamResponse"]) -> str:
    """Render teams as one CSV row per player in formation order."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)

    for team in teams:
        for slot, player in _ordered_entries(team):
            writer.writerow([
                team.team_id,
                team.name,
                slot,
                player.assigned_position or player.preferred_position,
                player.player_id,
                player.name,
                player.role_rating,
            ])

    return buffer.getvalue()


__all__ = [
    "EXPORT_HEADERS",
    "TeamExportError",
    "export_teams_to_csv",
]
