"""Load, merge and export roster JSON files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple
from uuid import uuid4

from pydantic import ValidationError

from pysquad.models import PlayerRecord, parse_player


logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"
EXPORT_APPLICATION = "Soccer Team Generator"

# Export files use camelCase keys; models use snake_case.
_KEY_ALIASES: Mapping[str, str] = {
    "id": "player_id",
    "preferredPosition": "preferred_position",
    "outfieldStats": "outfield_stats",
    "gkStats": "gk_stats",
}


class RosterImportError(ValueError):
    """Raised when a roster payload cannot be imported."""


@dataclass
class ImportReport:
    imported: int
    replaced: bool
    total_players: int
    renamed: Dict[str, str] = field(default_factory=dict)


def _normalize_keys(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {_KEY_ALIASES.get(key, key): value for key, value in raw.items()}


def player_to_payload(player: PlayerRecord) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": player.player_id,
        "name": player.name,
        "positions": list(player.positions),
        "preferredPosition": player.preferred_position,
        "selected": player.selected,
    }
    outfield = getattr(player, "outfield_stats", None)
    if outfield is not None:
        payload["outfieldStats"] = outfield.model_dump()
    gk = getattr(player, "gk_stats", None)
    if gk is not None:
        payload["gkStats"] = gk.model_dump()
    return payload


def players_from_payload(payload: Any, *, default_selected: bool = False) -> List[PlayerRecord]:
    """Parse an export payload (or a bare list of player objects).

    The import is all-or-nothing: one player without a name or a positions
    list rejects the whole payload.
    """

    if isinstance(payload, Mapping):
        entries = payload.get("players")
    else:
        entries = payload
    if not isinstance(entries, list):
        raise RosterImportError("Invalid file format: expected a 'players' list")

    invalid = [
        entry
        for entry in entries
        if not isinstance(entry, Mapping)
        or not entry.get("name")
        or not isinstance(entry.get("positions"), list)
    ]
    if invalid:
        raise RosterImportError(f"Found {len(invalid)} invalid player(s); import cancelled")

    players: List[PlayerRecord] = []
    for index, entry in enumerate(entries):
        data = _normalize_keys(entry)
        if data.get("player_id") in (None, ""):
            data["player_id"] = uuid4().hex
        else:
            data["player_id"] = str(data["player_id"])
        data.setdefault("selected", default_selected)
        try:
            players.append(parse_player(data))
        except ValidationError as exc:
            raise RosterImportError(f"Player {index + 1} ({entry.get('name')}): {exc}") from exc
    return players


def _unique_name(name: str, taken: set[str]) -> str:
    candidate = name
    counter = 1
    while candidate in taken:
        candidate = f"{name} ({counter})"
        counter += 1
    return candidate


def merge_rosters(
    existing: Sequence[PlayerRecord],
    imported: Iterable[PlayerRecord],
    *,
    replace: bool,
) -> Tuple[List[PlayerRecord], ImportReport]:
    """Replace or extend ``existing`` with ``imported`` players.

    Imported names that collide with a name already on the roster get a
    `` (1)``, `` (2)``... suffix. Imported players always receive fresh ids so
    merging the same file twice never produces duplicate ids.
    """

    roster: List[PlayerRecord] = [] if replace else list(existing)
    taken = {player.name for player in roster}
    renamed: Dict[str, str] = {}
    count = 0
    for player in imported:
        name = _unique_name(player.name, taken)
        if name != player.name:
            renamed[name] = player.name
        roster.append(player.model_copy(update={"name": name, "player_id": uuid4().hex}))
        taken.add(name)
        count += 1

    report = ImportReport(
        imported=count,
        replaced=replace,
        total_players=len(roster),
        renamed=renamed,
    )
    logger.info(
        "Imported %s players (%s); roster now has %s",
        count,
        "replaced existing" if replace else "merged",
        len(roster),
    )
    return roster, report


def export_roster(players: Sequence[PlayerRecord], *, exported_at: datetime | None = None) -> Dict[str, Any]:
    exported_at = exported_at or datetime.now(timezone.utc)
    return {
        "version": EXPORT_VERSION,
        "exportDate": exported_at.isoformat(),
        "playerCount": len(players),
        "application": EXPORT_APPLICATION,
        "players": [player_to_payload(player) for player in players],
    }


def load_roster_json(path: Path, *, default_selected: bool = True) -> List[PlayerRecord]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RosterImportError(f"{path} is not valid JSON: {exc}") from exc
    players = players_from_payload(payload, default_selected=default_selected)
    logger.info("Loaded %s players from %s", len(players), path)
    return players


def save_roster_json(path: Path, players: Sequence[PlayerRecord]) -> None:
    path.write_text(json.dumps(export_roster(players), indent=2), encoding="utf-8")
