"""Canonical player models shared across ingestion, engine and API layers.

Players come in three shapes depending on which stat blocks they carry. The
shapes form a discriminated union on ``kind`` so rating lookups can branch on
the player type instead of probing for optional attributes.
"""

from __future__ import annotations

from typing import Any, Annotated, Literal, Mapping, Tuple, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator
from pydantic.config import ConfigDict

from .positions import GOALKEEPER_CODE, POSITION_CODES


StatValue = Annotated[int, Field(ge=1, le=99)]


class OutfieldStats(BaseModel):
    pace: StatValue
    shooting: StatValue
    passing: StatValue
    dribbling: StatValue
    defending: StatValue
    physical: StatValue
    overall: StatValue

    model_config = ConfigDict(frozen=True)


class GoalkeeperStats(BaseModel):
    diving: StatValue
    handling: StatValue
    kicking: StatValue
    reflexes: StatValue
    speed: StatValue
    positioning: StatValue
    overall: StatValue

    model_config = ConfigDict(frozen=True)


class _PlayerBase(BaseModel):
    player_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    positions: Tuple[str, ...] = Field(..., min_length=1)
    preferred_position: str
    selected: bool = True

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _default_preferred(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and not data.get("preferred_position"):
            positions = data.get("positions") or ()
            if isinstance(positions, str):
                positions = positions.replace(",", "/").split("/")
            if positions:
                data = dict(data)
                data["preferred_position"] = str(positions[0]).strip().upper()
        return data

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("positions", mode="before")
    @classmethod
    def _normalize_positions(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = [part for part in value.replace(",", "/").split("/")]
        if not isinstance(value, (list, tuple)):
            return value
        seen: list[str] = []
        for raw in value:
            code = str(raw).strip().upper()
            if not code:
                continue
            if code not in POSITION_CODES:
                raise ValueError(f"Unknown position code {code!r}")
            if code not in seen:
                seen.append(code)
        return tuple(seen)

    @field_validator("preferred_position", mode="before")
    @classmethod
    def _normalize_preferred(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_preferred(self) -> "_PlayerBase":
        if self.preferred_position not in self.positions:
            raise ValueError(
                f"preferred_position {self.preferred_position!r} is not one of {self.positions}"
            )
        return self

    @property
    def can_keep_goal(self) -> bool:
        return GOALKEEPER_CODE in self.positions

    @property
    def outfield_positions(self) -> Tuple[str, ...]:
        return tuple(code for code in self.positions if code != GOALKEEPER_CODE)


class OutfieldPlayer(_PlayerBase):
    kind: Literal["outfield"] = "outfield"
    outfield_stats: OutfieldStats

    @model_validator(mode="after")
    def _needs_outfield_position(self) -> "OutfieldPlayer":
        if not self.outfield_positions:
            raise ValueError("outfield players need at least one non-GK position")
        return self


class GoalkeeperPlayer(_PlayerBase):
    kind: Literal["goalkeeper"] = "goalkeeper"
    gk_stats: GoalkeeperStats

    @model_validator(mode="after")
    def _needs_goalkeeper_position(self) -> "GoalkeeperPlayer":
        if not self.can_keep_goal:
            raise ValueError("goalkeepers must list GK among their positions")
        return self


class DualRolePlayer(_PlayerBase):
    kind: Literal["dual"] = "dual"
    gk_stats: GoalkeeperStats
    outfield_stats: OutfieldStats

    @model_validator(mode="after")
    def _needs_both_roles(self) -> "DualRolePlayer":
        if not self.can_keep_goal or not self.outfield_positions:
            raise ValueError("dual-role players need GK and at least one outfield position")
        return self


PlayerRecord = Annotated[
    Union[OutfieldPlayer, GoalkeeperPlayer, DualRolePlayer],
    Field(discriminator="kind"),
]

_PLAYER_ADAPTER: TypeAdapter = TypeAdapter(PlayerRecord)


def infer_kind(data: Mapping[str, Any]) -> str:
    """Pick the union member from the stat blocks present in ``data``."""

    has_gk = data.get("gk_stats") is not None
    has_outfield = data.get("outfield_stats") is not None
    if has_gk and has_outfield:
        return "dual"
    if has_gk:
        return "goalkeeper"
    # Missing both blocks falls through to outfield so validation reports it.
    return "outfield"


def parse_player(data: Mapping[str, Any]) -> PlayerRecord:
    """Validate a snake_case mapping into the matching player model."""

    payload = dict(data)
    if not payload.get("kind"):
        payload["kind"] = infer_kind(payload)
    return _PLAYER_ADAPTER.validate_python(payload)
