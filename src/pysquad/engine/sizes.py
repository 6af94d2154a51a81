"""Per-team size quotas."""

from __future__ import annotations

from typing import List


def plan_sizes(total_players: int, num_teams: int) -> List[int]:
    """Split ``total_players`` into ``num_teams`` quotas differing by at most one.

    The first ``total_players % num_teams`` teams receive the extra player, so
    23 players over 3 teams plan as ``[8, 8, 7]``. When there are more teams
    than players the trailing quotas are 0.
    """

    if num_teams < 1:
        raise ValueError(f"num_teams must be at least 1, got {num_teams}")
    if total_players < 0:
        raise ValueError(f"total_players must not be negative, got {total_players}")

    base, extra = divmod(total_players, num_teams)
    return [base + (1 if index < extra else 0) for index in range(num_teams)]
