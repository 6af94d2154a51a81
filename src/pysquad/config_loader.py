"""Persist and load CLI generation profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pysquad.config import DEFAULT_FORMATION


@dataclass
class GenerationProfile:
    num_teams: int = 2
    selection: str = "all"
    formation: str = DEFAULT_FORMATION
    seed: Optional[int] = None

    @classmethod
    def load(cls, path: Path) -> "GenerationProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(
            num_teams=int(data.get("num_teams", 2)),
            selection=data.get("selection", "all"),
            formation=data.get("formation", DEFAULT_FORMATION),
            seed=data.get("seed"),
        )

    def save(self, path: Path) -> None:
        payload = {
            "num_teams": self.num_teams,
            "selection": self.selection,
            "formation": self.formation,
            "seed": self.seed,
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
