import pytest
from pydantic import ValidationError

from pysquad.models import (
    DualRolePlayer,
    GoalkeeperPlayer,
    Line,
    OutfieldPlayer,
    infer_kind,
    line_for_position,
    parse_player,
    role_category_for_position,
)


OUTFIELD = {
    "pace": 80,
    "shooting": 75,
    "passing": 70,
    "dribbling": 78,
    "defending": 40,
    "physical": 66,
    "overall": 77,
}

KEEPER = {
    "diving": 85,
    "handling": 84,
    "kicking": 70,
    "reflexes": 88,
    "speed": 50,
    "positioning": 83,
    "overall": 86,
}


def test_player_record_is_frozen():
    record = OutfieldPlayer(
        player_id="p1",
        name="Test Player",
        positions=["ST"],
        preferred_position="ST",
        outfield_stats=OUTFIELD,
    )

    assert record.player_id == "p1"
    assert record.positions == ("ST",)
    assert record.kind == "outfield"

    with pytest.raises((TypeError, ValidationError)):
        record.player_id = "p2"  # type: ignore[attr-defined]


def test_positions_are_normalized_and_preferred_defaults_to_first():
    record = OutfieldPlayer(
        player_id="p1",
        name="  Winger  ",
        positions="lw/rw, lw",
        outfield_stats=OUTFIELD,
    )

    assert record.name == "Winger"
    assert record.positions == ("LW", "RW")
    assert record.preferred_position == "LW"
    assert record.selected is True


def test_unknown_position_rejected():
    with pytest.raises(ValidationError):
        OutfieldPlayer(player_id="p1", name="Nobody", positions=["SW"], outfield_stats=OUTFIELD)


def test_preferred_position_must_be_listed():
    with pytest.raises(ValidationError):
        OutfieldPlayer(
            player_id="p1",
            name="Mismatch",
            positions=["CB"],
            preferred_position="ST",
            outfield_stats=OUTFIELD,
        )


def test_blank_name_rejected():
    with pytest.raises(ValidationError):
        OutfieldPlayer(player_id="p1", name="   ", positions=["CB"], outfield_stats=OUTFIELD)


def test_goalkeeper_requires_gk_position():
    with pytest.raises(ValidationError):
        GoalkeeperPlayer(player_id="g1", name="Keeper", positions=["CB"], gk_stats=KEEPER)


def test_outfield_player_cannot_be_gk_only():
    with pytest.raises(ValidationError):
        OutfieldPlayer(player_id="p1", name="Keeper", positions=["GK"], outfield_stats=OUTFIELD)


def test_dual_role_requires_both_roles():
    with pytest.raises(ValidationError):
        DualRolePlayer(
            player_id="d1",
            name="Half",
            positions=["GK"],
            gk_stats=KEEPER,
            outfield_stats=OUTFIELD,
        )

    player = DualRolePlayer(
        player_id="d1",
        name="Sweeper Keeper",
        positions=["GK", "CB"],
        gk_stats=KEEPER,
        outfield_stats=OUTFIELD,
    )
    assert player.can_keep_goal
    assert player.outfield_positions == ("CB",)


def test_stat_values_are_bounded():
    with pytest.raises(ValidationError):
        OutfieldPlayer(
            player_id="p1",
            name="Too Good",
            positions=["ST"],
            outfield_stats={**OUTFIELD, "overall": 100},
        )


def test_parse_player_infers_kind_from_stat_blocks():
    keeper = parse_player({"player_id": "g1", "name": "Keeper", "positions": ["GK"], "gk_stats": KEEPER})
    dual = parse_player(
        {
            "player_id": "d1",
            "name": "Both",
            "positions": ["CB", "GK"],
            "gk_stats": KEEPER,
            "outfield_stats": OUTFIELD,
        }
    )
    outfield = parse_player({"player_id": "o1", "name": "Runner", "positions": ["CM"], "outfield_stats": OUTFIELD})

    assert isinstance(keeper, GoalkeeperPlayer)
    assert isinstance(dual, DualRolePlayer)
    assert dual.preferred_position == "CB"
    assert isinstance(outfield, OutfieldPlayer)
    assert infer_kind({}) == "outfield"


def test_parse_player_without_stats_fails_validation():
    with pytest.raises(ValidationError):
        parse_player({"player_id": "x", "name": "Bare", "positions": ["CM"]})


def test_position_lines():
    assert line_for_position("CDM") is Line.MIDFIELDER
    assert line_for_position("GK") is Line.GOALKEEPER
    assert role_category_for_position("LW") == "ATT"
    assert role_category_for_position("RB") == "DEF"
    assert role_category_for_position(None) == "ATT"
    with pytest.raises(KeyError):
        line_for_position("XX")
