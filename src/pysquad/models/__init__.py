"""Player models, position vocabulary and rating helpers."""

from .player import (
    DualRolePlayer,
    GoalkeeperPlayer,
    GoalkeeperStats,
    OutfieldPlayer,
    OutfieldStats,
    PlayerRecord,
    infer_kind,
    parse_player,
)
from .positions import (
    GOALKEEPER_CODE,
    LINE_POSITIONS,
    OUTFIELD_LINES,
    POSITION_CODES,
    Line,
    line_for_position,
    role_category,
    role_category_for_position,
)
from .ratings import DEFAULT_RATING, overall_rating, rating_for_assigned_role

__all__ = [
    "DualRolePlayer",
    "GoalkeeperPlayer",
    "GoalkeeperStats",
    "OutfieldPlayer",
    "OutfieldStats",
    "PlayerRecord",
    "infer_kind",
    "parse_player",
    "GOALKEEPER_CODE",
    "LINE_POSITIONS",
    "OUTFIELD_LINES",
    "POSITION_CODES",
    "Line",
    "line_for_position",
    "role_category",
    "role_category_for_position",
    "DEFAULT_RATING",
    "overall_rating",
    "rating_for_assigned_role",
]
