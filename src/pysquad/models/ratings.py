"""Rating lookups used by the engine and by anything rendering a team."""

from __future__ import annotations

from typing import Any, Union

from .player import DualRolePlayer, GoalkeeperPlayer, OutfieldPlayer
from .positions import GOALKEEPER_CODE, Line, role_category


DEFAULT_RATING = 75
GK_OUTFIELD_PENALTY = 20
GK_OUTFIELD_FLOOR = 40


def overall_rating(player: Any) -> int:
    """Return the rating a player is balanced on.

    Dual-role players are rated by the stat block matching their preferred
    position. Objects that are not one of the player models fall back to
    ``DEFAULT_RATING``.
    """

    if isinstance(player, DualRolePlayer):
        if player.preferred_position == GOALKEEPER_CODE:
            return player.gk_stats.overall
        return player.outfield_stats.overall
    if isinstance(player, GoalkeeperPlayer):
        return player.gk_stats.overall
    if isinstance(player, OutfieldPlayer):
        return player.outfield_stats.overall
    return DEFAULT_RATING


def rating_for_assigned_role(player: Any, role: Union[str, Line]) -> int:
    """Return the rating for the role a player actually occupies.

    ``role`` is a role category (``GK``, ``DEF``, ``MID``, ``ATT``) or a
    :class:`Line`. Outfield stats win for every non-goalkeeper role; a
    goalkeeper without outfield stats playing outfield is penalised.
    """

    category = role_category(role) if isinstance(role, Line) else str(role).upper()
    gk_stats = getattr(player, "gk_stats", None)
    outfield_stats = getattr(player, "outfield_stats", None)

    if category == GOALKEEPER_CODE and gk_stats is not None:
        return gk_stats.overall
    if outfield_stats is not None:
        return outfield_stats.overall
    if gk_stats is not None:
        return max(gk_stats.overall - GK_OUTFIELD_PENALTY, GK_OUTFIELD_FLOOR)
    return DEFAULT_RATING
