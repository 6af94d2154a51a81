"""Team generation engine."""

from .service import (
    Formation,
    GenerationOutput,
    GenerationRequest,
    TeamGenerationError,
    TeamPlayer,
    TeamResult,
    assign_teams,
    generate_teams,
    regenerate_teams,
)
from .sizes import plan_sizes

__all__ = [
    "Formation",
    "GenerationOutput",
    "GenerationRequest",
    "TeamGenerationError",
    "TeamPlayer",
    "TeamResult",
    "assign_teams",
    "generate_teams",
    "regenerate_teams",
    "plan_sizes",
]
