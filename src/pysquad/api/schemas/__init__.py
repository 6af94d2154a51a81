"""Pydantic models for API I/O."""

from .player import ImportResponse, PlayerResponse
from .team import (
    BalanceSummaryResponse,
    FormationResponse,
    RegenerateRequest,
    TeamBatchResponse,
    TeamPlayerResponse,
    TeamRequest,
    TeamResponse,
)

__all__ = [
    "ImportResponse",
    "PlayerResponse",
    "BalanceSummaryResponse",
    "FormationResponse",
    "RegenerateRequest",
    "TeamBatchResponse",
    "TeamPlayerResponse",
    "TeamRequest",
    "TeamResponse",
]
