import random

import pytest

from pysquad.engine import (
    GenerationRequest,
    TeamGenerationError,
    assign_teams,
    generate_teams,
    regenerate_teams,
)
from pysquad.engine.service import _regenerate_jitter
from pysquad.ingest import sample_players
from pysquad.models import GoalkeeperPlayer, Line, OutfieldPlayer, overall_rating


def _outfield_stats(overall: int) -> dict:
    return {
        "pace": 70,
        "shooting": 70,
        "passing": 70,
        "dribbling": 70,
        "defending": 70,
        "physical": 70,
        "overall": overall,
    }


def _sample_pool() -> list:
    pool = sample_players()
    # Stable ids keep failures readable.
    return [player.model_copy(update={"player_id": f"p{idx:02d}"}) for idx, player in enumerate(pool)]


def _partition(teams) -> list[tuple[str, ...]]:
    return [team.player_ids for team in teams]


@pytest.mark.parametrize("num_teams", [1, 2, 3, 4, 5, 7])
def test_assign_teams_invariants(num_teams: int):
    pool = _sample_pool()
    by_id = {player.player_id: player for player in pool}

    for seed in range(15):
        teams = assign_teams(pool, num_teams, rng=random.Random(seed))
        assert len(teams) == num_teams

        placed = [pid for team in teams for pid in team.player_ids]
        assert len(placed) == len(set(placed))
        assert set(placed) == set(by_id)

        for team in teams:
            assert len(team.players) <= team.target_size
            assert len(team.formation.defenders) <= 4
            assert len(team.formation.midfielders) <= 4
            assert len(team.formation.forwards) <= 3
            keepers = [member for member in team.players if member.line is Line.GOALKEEPER]
            assert len(keepers) <= 1
            if team.formation.goalkeeper is not None:
                assert keepers == [team.formation.goalkeeper]
                assert team.formation.goalkeeper.player.can_keep_goal

            expected_total = sum(overall_rating(by_id[pid]) for pid in team.player_ids)
            assert team.total_rating == expected_total
            if team.players:
                assert team.average_rating == round(expected_total / len(team.players), 1)
            else:
                assert team.average_rating == 0.0


def test_assign_teams_is_deterministic_for_a_seed():
    pool = _sample_pool()

    first = assign_teams(pool, 3, seed=1234)
    second = assign_teams(pool, 3, seed=1234)

    assert _partition(first) == _partition(second)
    assert [
        [member.assigned_position for member in team.players] for team in first
    ] == [[member.assigned_position for member in team.players] for team in second]


def test_assign_teams_does_not_mutate_players():
    pool = _sample_pool()
    snapshot = [player.model_dump() for player in pool]

    assign_teams(pool, 2, seed=9)
    assign_teams(pool, 2, seed=10)

    assert [player.model_dump() for player in pool] == snapshot


def test_two_natural_keepers_split_across_two_teams():
    pool = _sample_pool()

    for seed in range(10):
        teams = assign_teams(pool, 2, seed=seed)
        keepers = {team.formation.goalkeeper.name for team in teams}
        assert keepers == {"Alisson Becker", "Manuel Neuer"}


def test_more_teams_than_players_leaves_empty_teams():
    keepers = [
        GoalkeeperPlayer(
            player_id=f"g{idx}",
            name=f"Keeper {idx}",
            positions=["GK"],
            gk_stats={
                "diving": 70,
                "handling": 70,
                "kicking": 70,
                "reflexes": 70,
                "speed": 70,
                "positioning": 70,
                "overall": 70,
            },
        )
        for idx in range(2)
    ]

    teams = assign_teams(keepers, 3, seed=4)

    assert [len(team.players) for team in teams] == [1, 1, 0]
    assert teams[2].formation.goalkeeper is None
    assert teams[2].average_rating == 0.0
    assert teams[2].total_rating == 0


def test_explicit_sizes_short_of_pool_drop_players():
    # Quotas summing below the pool size: extra players end up in no team.
    pool = [
        OutfieldPlayer(player_id=f"p{idx}", name=f"Player {idx}", positions=["CM"], outfield_stats=_outfield_stats(70))
        for idx in range(8)
    ]

    teams = assign_teams(pool, 2, sizes=[3, 3], seed=6)

    assert [len(team.players) for team in teams] == [3, 3]
    assert sum(len(team.players) for team in teams) == 6


def test_assign_teams_rejects_bad_arguments():
    pool = _sample_pool()

    with pytest.raises(ValueError):
        assign_teams(pool, 0)
    with pytest.raises(ValueError):
        assign_teams([], 2)
    with pytest.raises(ValueError):
        assign_teams(pool, 2, sizes=[11])
    with pytest.raises(ValueError):
        assign_teams([pool[0], pool[0]], 1)


def test_generate_teams_records_request_and_seed():
    pool = _sample_pool()

    output = generate_teams(pool, 3, seed=77, formation="4-4-2")

    assert output.request == GenerationRequest(num_teams=3, selection="all", formation="4-4-2")
    assert output.seed == 77
    assert output.sizes == [8, 7, 7]
    assert output.player_count == len(pool)
    assert output.unassigned_player_ids == []
    assert not output.regenerated
    for team in output.teams:
        assert len(team.formation.forwards) <= 2


def test_generate_teams_draws_seed_when_missing():
    output = generate_teams(_sample_pool(), 2)

    assert output.seed >= 1
    replay = generate_teams(_sample_pool(), 2, seed=output.seed)
    assert _partition(replay.teams) == _partition(output.teams)


def test_generate_teams_uses_selected_players_only():
    pool = _sample_pool()
    pool = [
        player.model_copy(update={"selected": idx % 2 == 0})
        for idx, player in enumerate(pool)
    ]

    output = generate_teams(pool, 2, selection="selected", seed=3)

    chosen = {pid for team in output.teams for pid in team.player_ids}
    assert chosen == {player.player_id for player in pool if player.selected}


def test_generate_teams_errors():
    pool = [player.model_copy(update={"selected": False}) for player in _sample_pool()]

    with pytest.raises(TeamGenerationError):
        generate_teams(pool, 2, selection="selected")
    with pytest.raises(TeamGenerationError):
        generate_teams([], 2)
    with pytest.raises(TeamGenerationError):
        generate_teams(pool, 0)
    with pytest.raises(TeamGenerationError):
        generate_teams(pool, 2, formation="9-9-9")


def test_regenerate_reuses_request_and_is_seeded():
    pool = _sample_pool()
    request = GenerationRequest(num_teams=3, selection="all", formation="4-3-3")

    first = regenerate_teams(pool, request, seed=21, jitter=5.0)
    second = regenerate_teams(pool, request, seed=21, jitter=5.0)

    assert first.regenerated
    assert first.request == request
    assert _partition(first.teams) == _partition(second.teams)
    placed = {pid for team in first.teams for pid in team.player_ids}
    assert placed == {player.player_id for player in pool}


def test_regenerate_jitter_env(monkeypatch):
    monkeypatch.delenv("PYSQUAD_REGENERATE_JITTER", raising=False)
    assert _regenerate_jitter() == pytest.approx(5.0)

    monkeypatch.setenv("PYSQUAD_REGENERATE_JITTER", "12")
    assert _regenerate_jitter() == pytest.approx(12.0)

    monkeypatch.setenv("PYSQUAD_REGENERATE_JITTER", "-3")
    assert _regenerate_jitter() == pytest.approx(0.0)

    monkeypatch.setenv("PYSQUAD_REGENERATE_JITTER", "lots")
    assert _regenerate_jitter() == pytest.approx(5.0)
