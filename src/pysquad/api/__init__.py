"""REST API for the pysquad team generator."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List
from uuid import uuid4

from fastapi import Body, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from pysquad.api.schemas import (
    BalanceSummaryResponse,
    ImportResponse,
    PlayerResponse,
    RegenerateRequest,
    TeamBatchResponse,
    TeamRequest,
    TeamResponse,
)
from pysquad.config import iter_formations
from pysquad.engine import (
    GenerationOutput,
    GenerationRequest,
    TeamGenerationError,
    generate_teams,
    regenerate_teams,
)
from pysquad.ingest import (
    RosterImportError,
    export_roster,
    merge_rosters,
    players_from_payload,
    sample_players,
)
from pysquad.models import PlayerRecord
from pysquad.persistence import RunRecord, SquadStore
from pysquad.report import export_teams_to_csv, summarize_teams


logger = logging.getLogger("uvicorn.error")


def run_record_to_response(run: RunRecord) -> TeamBatchResponse:
    teams = [TeamResponse.model_validate(team) for team in run.teams]
    return TeamBatchResponse(
        run_id=run.run_id,
        created_at=run.created_at.isoformat(),
        num_teams=run.request["num_teams"],
        selection=run.request["selection"],
        formation=run.request["formation"],
        seed=run.seed,
        sizes=list(run.sizes),
        teams=teams,
        unassigned_player_ids=list(run.unassigned_player_ids),
        summary=BalanceSummaryResponse.from_summary(summarize_teams(teams)),
        regenerated_from=run.regenerated_from,
    )


def run_record_to_summary(run: RunRecord) -> dict[str, Any]:
    return {
        "run_id": run.run_id,
        "created_at": run.created_at.isoformat(),
        "num_teams": run.request.get("num_teams"),
        "selection": run.request.get("selection"),
        "formation": run.request.get("formation"),
        "seed": run.seed,
        "player_count": sum(run.sizes),
        "regenerated_from": run.regenerated_from,
    }


def create_app(db_path: Path | str | None = None) -> FastAPI:
    app = FastAPI(title="pysquad team generator")
    store = SquadStore(db_path or Path(__file__).resolve().parent.parent / "pysquad.sqlite")
    app.state.squad_store = store

    def _player_or_404(player_id: str) -> PlayerRecord:
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        return player

    def _run_or_404(run_id: str) -> RunRecord:
        run = store.get_run(run_id)
        if run is None:
            raise HTTPException(status_code=404, detail="Run not found")
        return run

    def _save_output(output: GenerationOutput, *, regenerated_from: str | None = None) -> TeamBatchResponse:
        teams_payload = [TeamResponse.from_result(team) for team in output.teams]
        run = store.save_run(
            run_id=uuid4().hex,
            request=asdict(output.request),
            sizes=output.sizes,
            seed=output.seed,
            teams=[team.model_dump() for team in teams_payload],
            unassigned_player_ids=output.unassigned_player_ids,
            regenerated_from=regenerated_from,
        )
        logger.info(
            "Stored run %s: %s teams, %s players, seed %s",
            run.run_id,
            len(teams_payload),
            output.player_count,
            output.seed,
        )
        return run_record_to_response(run)

    def _set_all_selected(selected: bool) -> dict[str, int]:
        players = [player.model_copy(update={"selected": selected}) for player in store.load_players()]
        store.save_players(players)
        return {"selected": sum(1 for player in players if player.selected), "total_players": len(players)}

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/formations")
    async def list_formations() -> list[dict[str, Any]]:
        return [
            {
                "key": rules.key,
                "name": rules.name,
                "capacities": {line.value: count for line, count in rules.capacities.items()},
                "slots": rules.slot_count,
            }
            for rules in iter_formations()
        ]

    # Roster

    @app.get("/players", response_model=List[PlayerResponse])
    async def list_players():
        return [PlayerResponse.from_record(player) for player in store.load_players()]

    @app.post("/players", response_model=PlayerResponse)
    async def create_player(payload: dict[str, Any] = Body(...)):
        try:
            (player,) = players_from_payload([payload], default_selected=True)
        except RosterImportError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if store.get_player(player.player_id) is not None:
            raise HTTPException(status_code=400, detail=f"Player {player.player_id} already exists")
        store.upsert_player(player)
        logger.info("Added player %s (%s)", player.name, player.player_id)
        return PlayerResponse.from_record(player)

    @app.delete("/players")
    async def clear_players():
        removed = len(store.load_players())
        store.save_players([])
        logger.info("Cleared %s players", removed)
        return {"deleted": removed}

    @app.put("/players/{player_id}", response_model=PlayerResponse)
    async def update_player(player_id: str, payload: dict[str, Any] = Body(...)):
        existing = _player_or_404(player_id)
        data = {key: value for key, value in payload.items() if key not in ("id", "player_id")}
        data["id"] = player_id
        try:
            (player,) = players_from_payload([data], default_selected=existing.selected)
        except RosterImportError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        store.upsert_player(player)
        logger.info("Updated player %s (%s)", player.name, player.player_id)
        return PlayerResponse.from_record(player)

    @app.delete("/players/{player_id}")
    async def delete_player(player_id: str):
        if not store.delete_player(player_id):
            raise HTTPException(status_code=404, detail="Player not found")
        return {"deleted": player_id}

    @app.post("/players/{player_id}/toggle", response_model=PlayerResponse)
    async def toggle_player(player_id: str):
        player = _player_or_404(player_id)
        updated = player.model_copy(update={"selected": not player.selected})
        store.upsert_player(updated)
        return PlayerResponse.from_record(updated)

    @app.post("/players/select-all")
    async def select_all():
        return _set_all_selected(True)

    @app.post("/players/deselect-all")
    async def deselect_all():
        return _set_all_selected(False)

    @app.post("/players/import", response_model=ImportResponse)
    async def import_players(
        file: UploadFile = File(...),
        replace: bool = Form(False),
    ):
        contents = await file.read()
        if not contents:
            raise HTTPException(status_code=400, detail="Roster file is empty")
        try:
            payload = json.loads(contents)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise HTTPException(status_code=400, detail=f"Invalid roster JSON: {exc}") from exc
        try:
            imported = players_from_payload(payload, default_selected=False)
        except RosterImportError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        roster, report = merge_rosters(store.load_players(), imported, replace=replace)
        store.save_players(roster)
        return ImportResponse.from_report(report)

    @app.get("/players/export")
    async def export_players():
        players = store.load_players()
        payload = export_roster(players)
        filename = f"soccer_players_{datetime.now(timezone.utc).date().isoformat()}.json"
        return Response(
            content=json.dumps(payload, indent=2),
            media_type="application/json",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.post("/players/sample", response_model=ImportResponse)
    async def load_sample(replace: bool = False):
        roster, report = merge_rosters(store.load_players(), sample_players(), replace=replace)
        store.save_players(roster)
        return ImportResponse.from_report(report)

    # Teams

    @app.post("/teams", response_model=TeamBatchResponse)
    async def create_teams(request: TeamRequest):
        players = store.load_players()
        try:
            output = generate_teams(
                players,
                request.num_teams,
                selection=request.selection,
                formation=request.formation,
                seed=request.seed,
            )
        except TeamGenerationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _save_output(output)

    @app.get("/runs")
    async def list_runs(limit: int = 50):
        return [run_record_to_summary(run) for run in store.list_runs(limit=limit)]

    @app.get("/runs/{run_id}", response_model=TeamBatchResponse)
    async def get_run(run_id: str):
        return run_record_to_response(_run_or_404(run_id))

    @app.post("/runs/{run_id}/regenerate", response_model=TeamBatchResponse)
    async def regenerate(run_id: str, payload: RegenerateRequest | None = None):
        run = _run_or_404(run_id)
        options = payload or RegenerateRequest()
        request = GenerationRequest(**run.request)
        try:
            output = regenerate_teams(
                store.load_players(),
                request,
                seed=options.seed,
                jitter=options.jitter,
            )
        except TeamGenerationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _save_output(output, regenerated_from=run.run_id)

    @app.get("/runs/{run_id}/export.csv")
    async def export_csv(run_id: str):
        run = _run_or_404(run_id)
        teams = [TeamResponse.model_validate(team) for team in run.teams]
        return Response(
            content=export_teams_to_csv(teams),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={run_id}.csv"},
        )

    return app
