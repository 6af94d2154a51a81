"""Balance statistics across a set of generated teams."""

from __future__ import annotations

from dataclasses import dataclass
from statistics import fmean, pstdev
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from pysquad.api.schemas.team import TeamResponse


@dataclass(frozen=True)
class BalanceSummary:
    """How evenly ratings and players ended up spread."""

    team_count: int
    player_count: int
    average_mean: float | None
    average_min: float | None
    average_max: float | None
    average_std: float | None
    rating_spread: float | None
    size_spread: int
    teams_without_goalkeeper: int
    substitutes: int


def summarize_teams(teams: Sequence["TeamResponse"]) -> BalanceSummary:
    # Empty teams carry a 0.0 average and would skew the spread.
    averages = [team.average_rating for team in teams if team.players]
    sizes = [len(team.players) for team in teams]
    if len(averages) > 1:
        std = round(pstdev(averages), 2)
    else:
        std = 0.0 if averages else None
    return BalanceSummary(
        team_count=len(teams),
        player_count=sum(sizes),
        average_mean=round(fmean(averages), 2) if averages else None,
        average_min=min(averages) if averages else None,
        average_max=max(averages) if averages else None,
        average_std=std,
        rating_spread=round(max(averages) - min(averages), 1) if averages else None,
        size_spread=(max(sizes) - min(sizes)) if sizes else 0,
        teams_without_goalkeeper=sum(1 for team in teams if team.formation.goalkeeper is None),
        substitutes=sum(len(team.formation.substitutes) for team in teams),
    )
