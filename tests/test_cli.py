import csv
import json
from pathlib import Path

import pytest

from pysquad.cli import main
from pysquad.config_loader import GenerationProfile
from pysquad.ingest import sample_players, save_roster_json


def test_cli_sample_run_writes_outputs(tmp_path: Path, capsys):
    output = tmp_path / "teams.csv"
    json_path = tmp_path / "teams.json"

    main(["--sample", "--teams", "3", "--seed", "7", "--output", str(output), "--json", str(json_path)])

    printed = capsys.readouterr().out
    assert "Loaded 22 sample players" in printed
    assert "Seed 7" in printed
    assert "Team 1:" in printed and "Team 3:" in printed
    assert "Balance:" in printed

    rows = list(csv.reader(output.open(encoding="utf-8")))
    assert len(rows) == 23
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["seed"] == 7
    assert payload["sizes"] == [8, 7, 7]
    assert payload["summary"]["player_count"] == 22
    assert payload["regenerated"] is False


def test_cli_same_seed_same_teams(tmp_path: Path, capsys):
    roster = tmp_path / "roster.json"
    save_roster_json(roster, sample_players())
    first = tmp_path / "first.csv"
    second = tmp_path / "second.csv"

    main([str(roster), "--teams", "2", "--seed", "99", "--output", str(first)])
    main([str(roster), "--teams", "2", "--seed", "99", "--output", str(second)])

    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")


def test_cli_regenerate_and_roster_export(tmp_path: Path, capsys):
    export_path = tmp_path / "export.json"
    json_path = tmp_path / "teams.json"

    main([
        "--sample",
        "--regenerate",
        "2",
        "--formation",
        "4-4-2",
        "--export-roster",
        str(export_path),
        "--output",
        str(tmp_path / "teams.csv"),
        "--json",
        str(json_path),
    ])

    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["regenerated"] is True
    assert payload["request"]["formation"] == "4-4-2"
    assert json.loads(export_path.read_text(encoding="utf-8"))["playerCount"] == 22


def test_cli_profiles(tmp_path: Path, capsys):
    profile_path = tmp_path / "profile.json"
    json_path = tmp_path / "teams.json"

    main([
        "--sample",
        "--teams",
        "4",
        "--formation",
        "3-5-2",
        "--save-profile",
        str(profile_path),
        "--output",
        str(tmp_path / "a.csv"),
    ])
    assert GenerationProfile.load(profile_path).num_teams == 4

    main([
        "--sample",
        "--load-profile",
        str(profile_path),
        "--output",
        str(tmp_path / "b.csv"),
        "--json",
        str(json_path),
    ])
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["request"] == {"num_teams": 4, "selection": "all", "formation": "3-5-2"}


def test_cli_requires_a_roster(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--teams", "2"])
    assert excinfo.value.code == 2


def test_cli_reports_generation_errors(tmp_path: Path):
    roster = tmp_path / "roster.json"
    save_roster_json(roster, [player.model_copy(update={"selected": False}) for player in sample_players()])

    with pytest.raises(SystemExit, match="No players are selected"):
        main([str(roster), "--selection", "selected", "--output", str(tmp_path / "teams.csv")])
