"""Persistence layer for the roster and generated team runs."""

from __future__ import annotations

import json
import logging
import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from pysquad.models import PlayerRecord, parse_player


logger = logging.getLogger(__name__)

_DB_ENV = "PYSQUAD_DB_PATH"


@dataclass
class RunRecord:
    run_id: str
    created_at: datetime
    request: dict
    sizes: List[int]
    seed: int
    teams: List[dict]
    unassigned_player_ids: List[str]
    regenerated_from: Optional[str] = None


class SquadStore:
    """Simple SQLite-backed store for the roster and team runs."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        env_db = os.getenv(_DB_ENV)
        if env_db:
            if env_db.startswith("file:"):
                self.db_path: Path | str = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS players (
                    id TEXT PRIMARY KEY,
                    sort_order INTEGER NOT NULL,
                    payload_json TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS runs (
                    id TEXT PRIMARY KEY,
                    created_at TEXT NOT NULL,
                    request_json TEXT NOT NULL,
                    sizes_json TEXT NOT NULL,
                    seed INTEGER NOT NULL,
                    teams_json TEXT NOT NULL,
                    unassigned_json TEXT NOT NULL,
                    regenerated_from TEXT
                )
                """
            )
            conn.commit()

    # Roster

    def save_players(self, players: Iterable[PlayerRecord]) -> None:
        """Replace the stored roster with ``players`` in order."""

        rows = [
            (player.player_id, idx, player.model_dump_json())
            for idx, player in enumerate(players)
        ]
        with self._connect() as conn:
            conn.execute("DELETE FROM players")
            conn.executemany(
                "INSERT INTO players (id, sort_order, payload_json) VALUES (?, ?, ?)",
                rows,
            )
            conn.commit()
        logger.info("Saved %s players", len(rows))

    def load_players(self) -> List[PlayerRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT payload_json FROM players ORDER BY sort_order"
            ).fetchall()
        return [parse_player(json.loads(row["payload_json"])) for row in rows]

    def upsert_player(self, player: PlayerRecord) -> None:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT sort_order FROM players WHERE id = ?", (player.player_id,)
            ).fetchone()
            if row is None:
                order = conn.execute(
                    "SELECT COALESCE(MAX(sort_order) + 1, 0) FROM players"
                ).fetchone()[0]
            else:
                order = row["sort_order"]
            conn.execute(
                "INSERT OR REPLACE INTO players (id, sort_order, payload_json) VALUES (?, ?, ?)",
                (player.player_id, order, player.model_dump_json()),
            )
            conn.commit()

    def get_player(self, player_id: str) -> Optional[PlayerRecord]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT payload_json FROM players WHERE id = ?", (player_id,)
            ).fetchone()
        if row is None:
            return None
        return parse_player(json.loads(row["payload_json"]))

    def delete_player(self, player_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM players WHERE id = ?", (player_id,))
            conn.commit()
            return cursor.rowcount > 0

    # Runs

    def save_run(
        self,
        *,
        run_id: str,
        request: dict,
        sizes: Iterable[int],
        seed: int,
        teams: Iterable[dict],
        unassigned_player_ids: Iterable[str] = (),
        regenerated_from: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> RunRecord:
        created_at = created_at or datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO runs (
                    id, created_at, request_json, sizes_json, seed,
                    teams_json, unassigned_json, regenerated_from
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    run_id,
                    created_at.isoformat(),
                    json.dumps(request),
                    json.dumps(list(sizes)),
                    seed,
                    json.dumps(list(teams)),
                    json.dumps(list(unassigned_player_ids)),
                    regenerated_from,
                ),
            )
            conn.commit()
        run = self.get_run(run_id)
        if run is None:  # pragma: no cover
            raise KeyError(f"Run {run_id} not found after insert")
        return run

    def get_run(self, run_id: str) -> Optional[RunRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM runs WHERE id = ?", (run_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    def list_runs(self, limit: int = 50) -> List[RunRecord]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM runs ORDER BY datetime(created_at) DESC, rowid DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def latest_run(self) -> Optional[RunRecord]:
        runs = self.list_runs(limit=1)
        return runs[0] if runs else None

    def _row_to_record(self, row: sqlite3.Row) -> RunRecord:
        return RunRecord(
            run_id=row["id"],
            created_at=datetime.fromisoformat(row["created_at"]),
            request=json.loads(row["request_json"]),
            sizes=json.loads(row["sizes_json"]),
            seed=row["seed"],
            teams=json.loads(row["teams_json"]),
            unassigned_player_ids=json.loads(row["unassigned_json"]),
            regenerated_from=row["regenerated_from"],
        )
