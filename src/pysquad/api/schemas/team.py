from __future__ import annotations

from dataclasses import asdict
from typing import List, Literal

from pydantic import BaseModel, Field

from pysquad.config import DEFAULT_FORMATION
from pysquad.engine import TeamPlayer, TeamResult
from pysquad.report import BalanceSummary


class TeamPlayerResponse(BaseModel):
    player_id: str
    name: str
    positions: List[str]
    preferred_position: str
    assigned_position: str | None
    line: str | None
    rating: int
    role_rating: int

    @classmethod
    def from_member(cls, member: TeamPlayer) -> "TeamPlayerResponse":
        return cls(
            player_id=member.player_id,
            name=member.name,
            positions=list(member.player.positions),
            preferred_position=member.player.preferred_position,
            assigned_position=member.assigned_position,
            line=member.line.value if member.line is not None else None,
            rating=member.rating,
            role_rating=member.role_rating,
        )


class FormationResponse(BaseModel):
    goalkeeper: str | None
    defenders: List[str]
    midfielders: List[str]
    forwards: List[str]
    substitutes: List[str]


class TeamResponse(BaseModel):
    team_id: int
    name: str
    target_size: int
    total_rating: int
    average_rating: float
    players: List[TeamPlayerResponse]
    formation: FormationResponse

    @classmethod
    def from_result(cls, team: TeamResult) -> "TeamResponse":
        formation = team.formation
        return cls(
            team_id=team.team_id,
            name=team.name,
            target_size=team.target_size,
            total_rating=team.total_rating,
            average_rating=team.average_rating,
            players=[TeamPlayerResponse.from_member(member) for member in team.players],
            formation=FormationResponse(
                goalkeeper=formation.goalkeeper.player_id if formation.goalkeeper else None,
                defenders=[member.player_id for member in formation.defenders],
                midfielders=[member.player_id for member in formation.midfielders],
                forwards=[member.player_id for member in formation.forwards],
                substitutes=[member.player_id for member in team.substitutes],
            ),
        )


class TeamRequest(BaseModel):
    num_teams: int = Field(default=2, ge=1, le=64)
    selection: Literal["all", "selected"] = "all"
    formation: str = Field(default=DEFAULT_FORMATION)
    seed: int | None = Field(default=None, ge=0)


class RegenerateRequest(BaseModel):
    seed: int | None = Field(default=None, ge=0)
    jitter: float | None = Field(default=None, ge=0.0, le=50.0)


class BalanceSummaryResponse(BaseModel):
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

    @classmethod
    def from_summary(cls, summary: BalanceSummary) -> "BalanceSummaryResponse":
        return cls(**asdict(summary))


class TeamBatchResponse(BaseModel):
    run_id: str
    created_at: str
    num_teams: int
    selection: str
    formation: str
    seed: int
    sizes: List[int]
    teams: List[TeamResponse]
    unassigned_player_ids: List[str]
    summary: BalanceSummaryResponse | None = None
    regenerated_from: str | None = None
