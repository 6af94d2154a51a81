from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel

from pysquad.ingest import ImportReport
from pysquad.models import PlayerRecord, overall_rating


class PlayerResponse(BaseModel):
    player_id: str
    name: str
    kind: str
    positions: List[str]
    preferred_position: str
    selected: bool
    overall_rating: int
    outfield_stats: Dict[str, int] | None = None
    gk_stats: Dict[str, int] | None = None

    @classmethod
    def from_record(cls, player: PlayerRecord) -> "PlayerResponse":
        outfield = getattr(player, "outfield_stats", None)
        gk = getattr(player, "gk_stats", None)
        return cls(
            player_id=player.player_id,
            name=player.name,
            kind=player.kind,
            positions=list(player.positions),
            preferred_position=player.preferred_position,
            selected=player.selected,
            overall_rating=overall_rating(player),
            outfield_stats=outfield.model_dump() if outfield is not None else None,
            gk_stats=gk.model_dump() if gk is not None else None,
        )


class ImportResponse(BaseModel):
    imported: int
    replaced: bool
    total_players: int
    renamed: Dict[str, str]

    @classmethod
    def from_report(cls, report: ImportReport) -> "ImportResponse":
        return cls(
            imported=report.imported,
            replaced=report.replaced,
            total_players=report.total_players,
            renamed=dict(report.renamed),
        )
