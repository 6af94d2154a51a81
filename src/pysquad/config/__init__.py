"""Configuration helpers for formation rules."""

from .formation import DEFAULT_FORMATION, FormationRules, get_formation, iter_formations

__all__ = [
    "DEFAULT_FORMATION",
    "FormationRules",
    "get_formation",
    "iter_formations",
]
