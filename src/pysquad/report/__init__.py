"""Team report utilities (export, balance summary)."""

from .export import EXPORT_HEADERS, TeamExportError, export_teams_to_csv
from .summary import BalanceSummary, summarize_teams

__all__ = [
    "EXPORT_HEADERS",
    "BalanceSummary",
    "TeamExportError",
    "export_teams_to_csv",
    "summarize_teams",
]
