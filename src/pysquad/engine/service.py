"""Team generation entry points and result types."""

from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Optional, Sequence, Tuple

from pysquad.config import DEFAULT_FORMATION, FormationRules, get_formation
from pysquad.models import (
    Line,
    PlayerRecord,
    overall_rating,
    rating_for_assigned_role,
    role_category,
    role_category_for_position,
)

from .draft import (
    DraftState,
    TeamSlate,
    assign_goalkeepers,
    build_draft_pool,
    rank_players,
    snake_draft,
    sweep_leftovers,
)
from .sizes import plan_sizes


logger = logging.getLogger(__name__)

_JITTER_ENV = "PYSQUAD_REGENERATE_JITTER"
_JITTER_DEFAULT = 5.0

Selection = Literal["all", "selected"]
SELECTION_MODES: Tuple[str, ...] = ("all", "selected")


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _regenerate_jitter() -> float:
    return _env_float(_JITTER_ENV, _JITTER_DEFAULT, clamp_min=0.0)


class TeamGenerationError(ValueError):
    """Raised when a generation request cannot be run."""


@dataclass(frozen=True)
class TeamPlayer:
    player: PlayerRecord
    assigned_position: Optional[str]
    line: Optional[Line]
    rating: int

    @property
    def player_id(self) -> str:
        return self.player.player_id

    @property
    def name(self) -> str:
        return self.player.name

    @property
    def is_substitute(self) -> bool:
        return self.line is None

    @property
    def role(self) -> str:
        if self.line is None:
            return role_category_for_position(self.player.preferred_position)
        return role_category(self.line)

    @property
    def display_position(self) -> str:
        return self.assigned_position or self.player.preferred_position

    @property
    def role_rating(self) -> int:
        return rating_for_assigned_role(self.player, self.role)


@dataclass(frozen=True)
class Formation:
    goalkeeper: Optional[TeamPlayer] = None
    defenders: Tuple[TeamPlayer, ...] = ()
    midfielders: Tuple[TeamPlayer, ...] = ()
    forwards: Tuple[TeamPlayer, ...] = ()


@dataclass(frozen=True)
class TeamResult:
    team_id: int
    name: str
    players: Tuple[TeamPlayer, ...]
    formation: Formation
    total_rating: int
    average_rating: float
    target_size: int

    @property
    def substitutes(self) -> Tuple[TeamPlayer, ...]:
        return tuple(player for player in self.players if player.is_substitute)

    @property
    def player_ids(self) -> Tuple[str, ...]:
        return tuple(player.player_id for player in self.players)


@dataclass(frozen=True)
class GenerationRequest:
    num_teams: int
    selection: Selection = "all"
    formation: str = DEFAULT_FORMATION


@dataclass
class GenerationOutput:
    request: GenerationRequest
    teams: List[TeamResult]
    sizes: List[int]
    seed: int
    unassigned_player_ids: List[str] = field(default_factory=list)
    regenerated: bool = False

    @property
    def player_count(self) -> int:
        return sum(len(team.players) for team in self.teams)


def aggregate_team(slate: TeamSlate, state: DraftState) -> TeamResult:
    """Freeze a filled slate into a :class:`TeamResult` with rating totals."""

    def entry(player_id: str) -> TeamPlayer:
        player = state.players[player_id]
        return TeamPlayer(
            player=player,
            assigned_position=state.assigned_positions.get(player_id),
            line=state.assigned_lines.get(player_id),
            rating=overall_rating(player),
        )

    players = tuple(entry(pid) for pid in slate.members)
    by_id = {member.player_id: member for member in players}
    formation = Formation(
        goalkeeper=by_id[slate.goalkeeper] if slate.goalkeeper else None,
        defenders=tuple(by_id[pid] for pid in slate.lines[Line.DEFENDER]),
        midfielders=tuple(by_id[pid] for pid in slate.lines[Line.MIDFIELDER]),
        forwards=tuple(by_id[pid] for pid in slate.lines[Line.FORWARD]),
    )
    total = sum(member.rating for member in players)
    average = round(total / len(players), 1) if players else 0.0
    return TeamResult(
        team_id=slate.index + 1,
        name=f"Team {slate.index + 1}",
        players=players,
        formation=formation,
        total_rating=total,
        average_rating=average,
        target_size=slate.target_size,
    )


def _resolve_rules(formation: FormationRules | str | None) -> FormationRules:
    if isinstance(formation, FormationRules):
        return formation
    return get_formation(formation)


def assign_teams(
    players: Sequence[PlayerRecord],
    num_teams: int,
    sizes: Optional[Sequence[int]] = None,
    *,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    jitter: float = 0.0,
    formation: FormationRules | str | None = None,
) -> List[TeamResult]:
    """Split ``players`` into ``num_teams`` balanced teams.

    Runs the goalkeeper phase, the snake draft and the leftover sweep, then
    aggregates ratings. ``sizes`` defaults to :func:`plan_sizes`. Pass ``rng``
    (or ``seed``) to make the result reproducible. Players left over once
    every team reached its size are not part of any returned team.
    """

    if num_teams < 1:
        raise ValueError(f"num_teams must be at least 1, got {num_teams}")
    if not players:
        raise ValueError("Cannot assign teams from an empty player pool")
    ids = [player.player_id for player in players]
    if len(set(ids)) != len(ids):
        raise ValueError("Player ids must be unique")

    if sizes is None:
        sizes = plan_sizes(len(players), num_teams)
    elif len(sizes) != num_teams:
        raise ValueError(f"Expected {num_teams} team sizes, got {len(sizes)}")
    rules = _resolve_rules(formation)
    rng = rng or random.Random(seed)

    logger.info(
        "Generating %s teams from %s players with target sizes %s (formation %s)",
        num_teams,
        len(players),
        ", ".join(str(size) for size in sizes),
        rules.key,
    )

    state = DraftState.create(players, sizes, rules)
    ordered_ids = rank_players(players, rng=rng, jitter=jitter)

    assign_goalkeepers(state, ordered_ids, rng)
    pool = build_draft_pool(state, ordered_ids, rng)
    placed = snake_draft(state, pool, rng)
    logger.info("Snake draft placed %s of %s pooled picks", placed, len(pool))
    sweep_leftovers(state, ordered_ids, rng)

    teams = [aggregate_team(slate, state) for slate in state.teams]
    logger.info(
        "Team generation complete: %s of %s players used, final sizes %s",
        sum(len(team.players) for team in teams),
        len(players),
        ", ".join(str(len(team.players)) for team in teams),
    )
    return teams


def select_players(players: Iterable[PlayerRecord], selection: str) -> List[PlayerRecord]:
    if selection not in SELECTION_MODES:
        raise TeamGenerationError(f"Unknown player selection {selection!r}")
    if selection == "selected":
        return [player for player in players if player.selected]
    return list(players)


def _draw_seed() -> int:
    return random.randint(1, 2 ** 31 - 1)


def _run(
    players: Sequence[PlayerRecord],
    request: GenerationRequest,
    *,
    seed: Optional[int],
    jitter: float,
    shuffle_input: bool,
) -> GenerationOutput:
    if request.num_teams < 1:
        raise TeamGenerationError("Number of teams must be at least 1")
    pool = select_players(players, request.selection)
    if not pool:
        if request.selection == "selected":
            raise TeamGenerationError("No players are selected")
        raise TeamGenerationError("No players available")
    try:
        rules = get_formation(request.formation)
    except KeyError as exc:
        raise TeamGenerationError(str(exc)) from exc

    seed = seed if seed is not None else _draw_seed()
    logger.info(
        "%s teams (seed=%s, selection=%s, jitter=%.1f)",
        "Regenerating" if shuffle_input else "Generating",
        seed,
        request.selection,
        jitter,
    )
    rng = random.Random(seed)
    if shuffle_input:
        rng.shuffle(pool)

    sizes = plan_sizes(len(pool), request.num_teams)
    teams = assign_teams(pool, request.num_teams, sizes, rng=rng, jitter=jitter, formation=rules)

    placed = {pid for team in teams for pid in team.player_ids}
    unassigned = [player.player_id for player in pool if player.player_id not in placed]
    return GenerationOutput(
        request=request,
        teams=teams,
        sizes=sizes,
        seed=seed,
        unassigned_player_ids=unassigned,
        regenerated=shuffle_input,
    )


def generate_teams(
    players: Sequence[PlayerRecord],
    num_teams: int,
    *,
    selection: Selection = "all",
    formation: str | None = None,
    seed: Optional[int] = None,
) -> GenerationOutput:
    """First generation for a roster: no rating jitter."""

    request = GenerationRequest(
        num_teams=num_teams,
        selection=selection,
        formation=formation or DEFAULT_FORMATION,
    )
    return _run(players, request, seed=seed, jitter=0.0, shuffle_input=False)


def regenerate_teams(
    players: Sequence[PlayerRecord],
    request: GenerationRequest,
    *,
    seed: Optional[int] = None,
    jitter: Optional[float] = None,
) -> GenerationOutput:
    """Re-run a previous request with a shuffled roster and rating jitter."""

    jitter = _regenerate_jitter() if jitter is None else max(0.0, jitter)
    return _run(players, request, seed=seed, jitter=jitter, shuffle_input=True)
