"""Placement phases of team generation.

All phases work on a :class:`DraftState`: immutable player records keyed by
id plus per-team slates that only hold player ids. Assigned positions are
tracked on the state, never on the players, so the same records can be fed
into any number of runs.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence, Set

from pysquad.config import FormationRules
from pysquad.models import (
    GOALKEEPER_CODE,
    OUTFIELD_LINES,
    Line,
    PlayerRecord,
    overall_rating,
)


logger = logging.getLogger(__name__)


@dataclass
class TeamSlate:
    index: int
    target_size: int
    goalkeeper: Optional[str] = None
    lines: Dict[Line, List[str]] = field(
        default_factory=lambda: {line: [] for line in OUTFIELD_LINES}
    )
    members: List[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def is_full(self) -> bool:
        return self.size >= self.target_size

    def has_room(self, line: Line, rules: FormationRules) -> bool:
        if line is Line.GOALKEEPER:
            return self.goalkeeper is None
        return len(self.lines[line]) < rules.capacity(line)


@dataclass(frozen=True)
class DraftPick:
    player_id: str
    priority: Line


@dataclass
class DraftState:
    players: Mapping[str, PlayerRecord]
    teams: List[TeamSlate]
    rules: FormationRules
    assigned_positions: Dict[str, Optional[str]] = field(default_factory=dict)
    assigned_lines: Dict[str, Optional[Line]] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        players: Sequence[PlayerRecord],
        sizes: Sequence[int],
        rules: FormationRules,
    ) -> "DraftState":
        return cls(
            players={player.player_id: player for player in players},
            teams=[TeamSlate(index=idx, target_size=size) for idx, size in enumerate(sizes)],
            rules=rules,
        )

    def is_assigned(self, player_id: str) -> bool:
        return player_id in self.assigned_positions

    def unassigned(self, ordered_ids: Sequence[str]) -> List[str]:
        return [pid for pid in ordered_ids if not self.is_assigned(pid)]

    def place(
        self,
        team: TeamSlate,
        player_id: str,
        line: Optional[Line],
        position: Optional[str],
    ) -> None:
        """Add a player to a team; ``line=None`` seats them on the bench."""

        if self.is_assigned(player_id):
            raise ValueError(f"Player {player_id} is already assigned")
        if line is Line.GOALKEEPER:
            if team.goalkeeper is not None:
                raise ValueError(f"Team {team.index + 1} already has a goalkeeper")
            team.goalkeeper = player_id
        elif line is not None:
            team.lines[line].append(player_id)
        team.members.append(player_id)
        self.assigned_positions[player_id] = position
        self.assigned_lines[player_id] = line


def holds_line(player: PlayerRecord, line: Line, rules: FormationRules) -> bool:
    return any(code in rules.line_positions[line] for code in player.positions)


def best_position(player: PlayerRecord, line: Line, rules: FormationRules) -> str:
    """Specific position code a player takes when slotted into ``line``."""

    if line is Line.GOALKEEPER:
        return GOALKEEPER_CODE
    codes = rules.line_positions[line]
    available = [code for code in player.positions if code in codes]
    if player.preferred_position in available:
        return player.preferred_position
    if available:
        return available[0]
    return rules.default_position(line)


def rank_players(
    players: Sequence[PlayerRecord],
    *,
    rng: random.Random,
    jitter: float = 0.0,
) -> List[str]:
    """Player ids by effective rating, best first.

    Effective rating is the overall rating plus a uniform offset in
    ``[-jitter, jitter]``. Offsets only live for the duration of the sort.
    Ties keep input order.
    """

    effective: Dict[str, float] = {}
    for player in players:
        offset = rng.uniform(-jitter, jitter) if jitter > 0 else 0.0
        effective[player.player_id] = overall_rating(player) + offset
    ordered = sorted(players, key=lambda p: effective[p.player_id], reverse=True)
    return [player.player_id for player in ordered]


def assign_goalkeepers(
    state: DraftState,
    ordered_ids: Sequence[str],
    rng: random.Random,
) -> Set[str]:
    """Give each team at most one goalkeeper, in a random team order.

    Players who prefer GK go first; other GK-capable players fill teams left
    over. Teams with a zero quota are skipped. Returns the ids consumed.
    """

    candidates = [
        pid for pid in state.unassigned(ordered_ids) if state.players[pid].can_keep_goal
    ]
    preferred = [pid for pid in candidates if state.players[pid].preferred_position == GOALKEEPER_CODE]
    alternative = [pid for pid in candidates if state.players[pid].preferred_position != GOALKEEPER_CODE]
    rng.shuffle(preferred)
    rng.shuffle(alternative)
    keepers = preferred + alternative

    team_order = list(range(len(state.teams)))
    rng.shuffle(team_order)
    team_order = [idx for idx in team_order if state.teams[idx].target_size > 0]

    consumed: Set[str] = set()
    for player_id, team_idx in zip(keepers, team_order):
        team = state.teams[team_idx]
        state.place(team, player_id, Line.GOALKEEPER, GOALKEEPER_CODE)
        consumed.add(player_id)
        logger.debug("Assigned %s (GK) to Team %s", state.players[player_id].name, team_idx + 1)

    logger.info(
        "Goalkeeper phase placed %s of %s candidates (%s preferred)",
        len(consumed),
        len(keepers),
        len(preferred),
    )
    return consumed


def build_draft_pool(
    state: DraftState,
    ordered_ids: Sequence[str],
    rng: random.Random,
) -> List[DraftPick]:
    """Mix defenders, midfielders and forwards into one shuffled pick list.

    Each line contributes at most ``num_teams * capacity`` candidates. A
    player eligible for several lines may appear more than once; only the
    first pick that lands takes effect. Players beyond a line's cap are left
    for the leftover sweep.
    """

    remaining = state.unassigned(ordered_ids)
    num_teams = len(state.teams)
    pool: List[DraftPick] = []
    for line in OUTFIELD_LINES:
        group = [pid for pid in remaining if holds_line(state.players[pid], line, state.rules)]
        rng.shuffle(group)
        cap = num_teams * state.rules.capacity(line)
        if len(group) > cap:
            logger.debug(
                "Deferring %s %s candidates beyond pool cap %s",
                len(group) - cap,
                line.value,
                cap,
            )
        pool.extend(DraftPick(player_id=pid, priority=line) for pid in group[:cap])

    rng.shuffle(pool)
    return pool


def _choose_line(
    team: TeamSlate,
    player: PlayerRecord,
    priority: Line,
    rules: FormationRules,
) -> Optional[Line]:
    if team.has_room(priority, rules):
        return priority
    for line in OUTFIELD_LINES:
        if holds_line(player, line, rules) and team.has_room(line, rules):
            return line
    return None


def snake_draft(
    state: DraftState,
    pool: Sequence[DraftPick],
    rng: random.Random,
) -> int:
    """Deal the pool out in snake order (1→N, N→1, ...). Returns players placed.

    The cursor starts on a random team in a random direction. Full teams and
    teams with no open slot for the player are skipped; after ``num_teams``
    skips the player is left for the sweep.
    """

    num_teams = len(state.teams)
    current = rng.randrange(num_teams)
    direction = rng.choice((1, -1))
    logger.info(
        "Snake draft starting from Team %s, direction %s",
        current + 1,
        "forward" if direction > 0 else "reverse",
    )

    def advance(cursor: int, step: int) -> tuple[int, int]:
        cursor += step
        if cursor >= num_teams:
            return num_teams - 1, -1
        if cursor < 0:
            return 0, 1
        return cursor, step

    placed = 0
    for pick in pool:
        if state.is_assigned(pick.player_id):
            continue
        player = state.players[pick.player_id]
        attempts = 0
        assigned = False
        while attempts < num_teams and not assigned:
            team = state.teams[current]
            line = None if team.is_full else _choose_line(team, player, pick.priority, state.rules)
            if line is None:
                current, direction = advance(current, direction)
                attempts += 1
                continue
            state.place(team, player.player_id, line, best_position(player, line, state.rules))
            assigned = True
        if assigned:
            placed += 1
            current, direction = advance(current, direction)
    return placed


def sweep_leftovers(
    state: DraftState,
    ordered_ids: Sequence[str],
    rng: random.Random,
) -> List[str]:
    """Place whoever the earlier phases could not, smallest teams first.

    A player goes into the first free defender, midfielder or forward slot of
    the smallest team that has one; with no free slot anywhere they join the
    smallest team as a substitute. Once every team has met its quota the rest
    are dropped and their ids returned.
    """

    leftovers = state.unassigned(ordered_ids)
    rng.shuffle(leftovers)
    logger.info("Sweeping %s remaining players", len(leftovers))

    dropped: List[str] = []
    for position, player_id in enumerate(leftovers):
        open_teams = [team for team in state.teams if not team.is_full]
        if not open_teams:
            dropped = leftovers[position:]
            break
        open_teams.sort(key=lambda team: team.size)

        player = state.players[player_id]
        assigned = False
        for team in open_teams:
            line = next((ln for ln in OUTFIELD_LINES if team.has_room(ln, state.rules)), None)
            if line is not None:
                state.place(team, player_id, line, best_position(player, line, state.rules))
                assigned = True
                break
        if not assigned:
            smallest = open_teams[0]
            state.place(smallest, player_id, None, None)
            logger.debug("Assigned %s to Team %s as substitute", player.name, smallest.index + 1)

    if dropped:
        logger.warning(
            "All teams reached their target size; %s players left unassigned: %s",
            len(dropped),
            ", ".join(dropped),
        )
    return dropped
