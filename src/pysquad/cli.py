"""Command-line interface for generating balanced teams from a roster."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

from pysquad.api.schemas import TeamResponse
from pysquad.config import iter_formations
from pysquad.config_loader import GenerationProfile
from pysquad.engine import (
    GenerationOutput,
    TeamGenerationError,
    TeamPlayer,
    TeamResult,
    generate_teams,
    regenerate_teams,
)
from pysquad.ingest import (
    RosterImportError,
    load_roster_json,
    sample_players,
    save_roster_json,
)
from pysquad.report import BalanceSummary, export_teams_to_csv, summarize_teams


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Split a soccer roster into balanced teams")
    parser.add_argument(
        "roster",
        type=Path,
        nargs="?",
        default=None,
        help="Path to a roster JSON export (omit with --sample)",
    )
    parser.add_argument("--sample", action="store_true", help="Use the bundled 22-player sample roster")
    parser.add_argument("--teams", type=int, default=None, help="Number of teams to build (default 2)")
    parser.add_argument(
        "--selection",
        choices=("all", "selected"),
        default=None,
        help="Use every player or only those marked selected",
    )
    parser.add_argument(
        "--formation",
        default=None,
        help="Formation key ({})".format(", ".join(rules.key for rules in iter_formations())),
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible split")
    parser.add_argument(
        "--regenerate",
        type=int,
        default=0,
        help="Regenerate this many times after the first split, keeping the last result",
    )
    parser.add_argument("--output", type=Path, default=Path("teams.csv"), help="Output CSV path")
    parser.add_argument("--json", type=Path, default=None, help="Optional path to write teams JSON")
    parser.add_argument(
        "--export-roster",
        type=Path,
        default=None,
        help="Write the loaded roster as a JSON export",
    )
    parser.add_argument("--load-profile", type=Path, help="Load generation settings JSON", default=None)
    parser.add_argument("--save-profile", type=Path, help="Save generation settings JSON", default=None)
    parser.add_argument("--verbose", action="store_true", help="Log each generation phase")
    args = parser.parse_args(argv)
    if args.roster is None and not args.sample:
        parser.error("a roster path or --sample is required")
    if args.regenerate < 0:
        parser.error("--regenerate must be zero or more")
    return args


def _format_member(slot: str, member: TeamPlayer) -> str:
    return f"  {slot:<4}{member.name} ({member.display_position}) {member.role_rating}"


def _print_team(team: TeamResult) -> None:
    print(
        f"{team.name}: {len(team.players)} players, "
        f"total {team.total_rating}, average {team.average_rating:.1f}"
    )
    formation = team.formation
    if formation.goalkeeper is not None:
        print(_format_member("GK", formation.goalkeeper))
    else:
        print("  GK  -")
    for slot, members in (
        ("DEF", formation.defenders),
        ("MID", formation.midfielders),
        ("ATT", formation.forwards),
        ("SUB", team.substitutes),
    ):
        for member in members:
            print(_format_member(slot, member))


def _print_summary(summary: BalanceSummary) -> None:
    if summary.average_mean is None:
        print("No players were placed")
        return
    print(
        "Balance: mean={:.2f} min={:.1f} max={:.1f} std={:.2f} spread={:.1f} size_spread={}".format(
            summary.average_mean,
            summary.average_min,
            summary.average_max,
            summary.average_std,
            summary.rating_spread,
            summary.size_spread,
        )
    )
    if summary.teams_without_goalkeeper:
        print(f"Teams without a goalkeeper: {summary.teams_without_goalkeeper}")
    if summary.substitutes:
        print(f"Substitutes: {summary.substitutes}")


def _output_payload(output: GenerationOutput, teams: list[TeamResponse], summary: BalanceSummary) -> dict:
    return {
        "request": asdict(output.request),
        "seed": output.seed,
        "sizes": output.sizes,
        "regenerated": output.regenerated,
        "teams": [team.model_dump() for team in teams],
        "unassigned_player_ids": output.unassigned_player_ids,
        "summary": asdict(summary),
    }


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    profile = GenerationProfile.load(args.load_profile) if args.load_profile else GenerationProfile()
    if args.teams is not None:
        profile.num_teams = args.teams
    if args.selection is not None:
        profile.selection = args.selection
    if args.formation is not None:
        profile.formation = args.formation
    if args.seed is not None:
        profile.seed = args.seed
    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved generation profile to {args.save_profile}")

    if args.sample:
        players = sample_players()
        print(f"Loaded {len(players)} sample players")
    else:
        try:
            players = load_roster_json(args.roster)
        except (OSError, RosterImportError) as exc:
            raise SystemExit(f"Could not load roster: {exc}") from exc
        print(f"Loaded {len(players)} players from {args.roster}")

    if args.export_roster:
        save_roster_json(args.export_roster, players)
        print(f"Wrote roster export to {args.export_roster}")

    try:
        output = generate_teams(
            players,
            profile.num_teams,
            selection=profile.selection,
            formation=profile.formation,
            seed=profile.seed,
        )
        for _ in range(args.regenerate):
            output = regenerate_teams(players, output.request)
    except TeamGenerationError as exc:
        raise SystemExit(f"Team generation failed: {exc}") from exc

    print(
        f"Seed {output.seed}, formation {output.request.formation}, "
        f"sizes {', '.join(str(size) for size in output.sizes)}"
    )
    for team in output.teams:
        _print_team(team)

    team_payload = [TeamResponse.from_result(team) for team in output.teams]
    summary = summarize_teams(team_payload)
    _print_summary(summary)
    if output.unassigned_player_ids:
        print(f"Unassigned players: {', '.join(output.unassigned_player_ids)}")

    args.output.write_text(export_teams_to_csv(team_payload), encoding="utf-8")
    print(f"Wrote teams CSV to {args.output}")
    if args.json:
        payload = _output_payload(output, team_payload, summary)
        args.json.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Wrote teams JSON to {args.json}")


if __name__ == "__main__":
    main()
