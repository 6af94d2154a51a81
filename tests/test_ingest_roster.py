import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from pysquad.ingest import (
    RosterImportError,
    export_roster,
    load_roster_json,
    merge_rosters,
    players_from_payload,
    sample_players,
    save_roster_json,
)
from pysquad.models import DualRolePlayer, GoalkeeperPlayer, OutfieldPlayer


def _entry(**kwargs):
    entry = {
        "id": "p1",
        "name": "Kevin De Bruyne",
        "positions": ["CM", "CAM"],
        "preferredPosition": "CAM",
        "outfieldStats": {
            "pace": 76,
            "shooting": 86,
            "passing": 93,
            "dribbling": 88,
            "defending": 64,
            "physical": 78,
            "overall": 91,
        },
    }
    entry.update(kwargs)
    return entry


def test_players_from_payload_reads_export_format():
    payload = {"version": "1.0", "players": [_entry()]}

    players = players_from_payload(payload)

    assert len(players) == 1
    player = players[0]
    assert isinstance(player, OutfieldPlayer)
    assert player.player_id == "p1"
    assert player.preferred_position == "CAM"
    assert player.outfield_stats.overall == 91
    assert player.selected is False


def test_players_from_payload_accepts_bare_list_and_fills_ids():
    players = players_from_payload([_entry(id=None, selected=True)])

    assert players[0].player_id
    assert players[0].player_id != "None"
    assert players[0].selected is True


def test_players_from_payload_is_all_or_nothing():
    payload = {"players": [_entry(), _entry(name=""), _entry(positions="CM")]}

    with pytest.raises(RosterImportError, match="2 invalid"):
        players_from_payload(payload)


def test_players_from_payload_requires_players_list():
    with pytest.raises(RosterImportError):
        players_from_payload({"version": "1.0"})


def test_players_from_payload_wraps_validation_errors():
    with pytest.raises(RosterImportError, match="Player 1"):
        players_from_payload({"players": [_entry(positions=["XX"])]})


def test_merge_rosters_renames_collisions_and_assigns_fresh_ids():
    existing = players_from_payload([_entry()])
    imported = players_from_payload([_entry(), _entry(id="p2")])

    roster, report = merge_rosters(existing, imported, replace=False)

    assert [player.name for player in roster] == [
        "Kevin De Bruyne",
        "Kevin De Bruyne (1)",
        "Kevin De Bruyne (2)",
    ]
    assert len({player.player_id for player in roster}) == 3
    assert report.imported == 2
    assert report.total_players == 3
    assert report.renamed == {
        "Kevin De Bruyne (1)": "Kevin De Bruyne",
        "Kevin De Bruyne (2)": "Kevin De Bruyne",
    }


def test_merge_rosters_replace_discards_existing():
    existing = sample_players()
    imported = players_from_payload([_entry()])

    roster, report = merge_rosters(existing, imported, replace=True)

    assert [player.name for player in roster] == ["Kevin De Bruyne"]
    assert report.replaced is True
    assert report.renamed == {}


def test_export_roster_payload_shape():
    players = players_from_payload([_entry(selected=True)])
    stamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    payload = export_roster(players, exported_at=stamp)

    assert payload["version"] == "1.0"
    assert payload["application"] == "Soccer Team Generator"
    assert payload["playerCount"] == 1
    assert payload["exportDate"] == stamp.isoformat()
    exported = payload["players"][0]
    assert exported["id"] == "p1"
    assert exported["preferredPosition"] == "CAM"
    assert exported["selected"] is True
    assert "gkStats" not in exported


def test_save_and_load_roster_json(tmp_path: Path):
    path = tmp_path / "roster.json"
    players = sample_players()

    save_roster_json(path, players)
    loaded = load_roster_json(path)

    assert json.loads(path.read_text(encoding="utf-8"))["playerCount"] == 22
    assert [player.model_dump() for player in loaded] == [player.model_dump() for player in players]


def test_load_roster_json_rejects_invalid_json(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(RosterImportError):
        load_roster_json(path)


def test_sample_players_cover_every_kind():
    players = sample_players()

    assert len(players) == 22
    assert len({player.player_id for player in players}) == 22
    assert all(player.selected for player in players)
    by_name = {player.name: player for player in players}
    assert isinstance(by_name["Alisson Becker"], GoalkeeperPlayer)
    assert isinstance(by_name["Manuel Neuer"], DualRolePlayer)
    assert by_name["Manuel Neuer"].preferred_position == "GK"
    assert isinstance(by_name["Sergio Ramos"], DualRolePlayer)
    assert by_name["Sergio Ramos"].preferred_position == "CB"
