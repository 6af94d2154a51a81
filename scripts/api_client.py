"""Lightweight REST client for the pysquad API."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import httpx


def _print_teams(payload: dict) -> None:
    print(f"Run {payload['run_id']} (seed {payload['seed']}, sizes {payload['sizes']})")
    for team in payload["teams"]:
        names = ", ".join(player["name"] for player in team["players"])
        print(f"{team['name']}: total {team['total_rating']}, average {team['average_rating']} - {names}")
    summary = payload.get("summary")
    if summary:
        print("Summary:", json.dumps(summary, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the pysquad REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("roster", type=Path, nargs="?", help="Roster JSON to import before generating")
    parser.add_argument("--replace", action="store_true", help="Replace the stored roster instead of merging")
    parser.add_argument("--sample", action="store_true", help="Load the bundled sample roster first")
    parser.add_argument("--teams", type=int, default=2, help="Number of teams to request")
    parser.add_argument("--selection", choices=("all", "selected"), default="all")
    parser.add_argument("--formation", default=None, help="Formation key")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible split")
    parser.add_argument("--list-runs", action="store_true", help="List recent runs and exit")
    parser.add_argument("--get-run", metavar="RUN_ID", help="Fetch a specific run and exit")
    parser.add_argument("--regenerate", metavar="RUN_ID", help="Regenerate teams for a run and exit")
    parser.add_argument("--export-run", metavar="RUN_ID", help="Download team CSV for a run")
    parser.add_argument("--export-path", type=Path, help="Destination path for exported CSV")
    args = parser.parse_args()

    if args.list_runs or args.get_run or args.regenerate or args.export_run:
        with httpx.Client(base_url=args.base_url) as client:
            if args.list_runs:
                resp = client.get("/runs")
                resp.raise_for_status()
                print(json.dumps(resp.json(), indent=2))
            if args.get_run:
                resp = client.get(f"/runs/{args.get_run}")
                if resp.status_code == 404:
                    raise SystemExit(f"run {args.get_run} not found")
                resp.raise_for_status()
                _print_teams(resp.json())
            if args.regenerate:
                resp = client.post(f"/runs/{args.regenerate}/regenerate", json={"seed": args.seed})
                if resp.status_code == 404:
                    raise SystemExit(f"run {args.regenerate} not found")
                resp.raise_for_status()
                _print_teams(resp.json())
            if args.export_run:
                resp = client.get(f"/runs/{args.export_run}/export.csv")
                if resp.status_code == 404:
                    raise SystemExit(f"run {args.export_run} not found")
                resp.raise_for_status()
                if args.export_path:
                    args.export_path.write_text(resp.text)
                    print(f"CSV export saved to {args.export_path}")
                else:
                    print(resp.text)
        return

    with httpx.Client(base_url=args.base_url) as client:
        if args.sample:
            resp = client.post("/players/sample", params={"replace": args.replace})
            resp.raise_for_status()
            print("Sample import:", json.dumps(resp.json(), indent=2))
        if args.roster is not None:
            files = {"file": (args.roster.name, args.roster.read_bytes(), "application/json")}
            resp = client.post("/players/import", files=files, data={"replace": str(args.replace).lower()})
            if resp.status_code == 400:
                raise SystemExit(f"import rejected: {resp.json()['detail']}")
            resp.raise_for_status()
            print("Roster import:", json.dumps(resp.json(), indent=2))

        team_request = {"num_teams": args.teams, "selection": args.selection, "seed": args.seed}
        if args.formation:
            team_request["formation"] = args.formation
        resp = client.post("/teams", json=team_request)
        if resp.status_code == 400:
            raise SystemExit(f"generation failed: {resp.json()['detail']}")
        resp.raise_for_status()
        _print_teams(resp.json())


if __name__ == "__main__":
    main()
