import pytest

from swisstour.exceptions import InvalidStandingException
from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.participant import Participant
from swisstour.models.profile import (
    ScoreWeight,
    SortDirection,
    Tiebreaker,
    TiebreakerDefinition,
    TiebreakerType,
    default_score_weights,
)
from swisstour.models.standing import Standing
from swisstour.tournament import StandingCalculator


def _participants(*ids):
    return [Participant(id=pid, tournament_id="t1") for pid in ids]


def _match(p1, p2, result, round_number=1, **kwargs):
    return TournamentMatch(
        player1_id=p1,
        player2_id=p2,
        result=result,
        round_id=f"round-{round_number}",
        **kwargs,
    )


def _by_id(standings):
    return {s.participant_id: s for s in standings}


@pytest.fixture
def calculator():
    return StandingCalculator()


def test_no_participants_gives_empty_table(calculator):
    assert calculator.calculate([], [], default_score_weights(), []) == []


def test_four_player_first_round(calculator):
    participants = _participants("P1", "P2", "P3", "P4")
    matches = [
        _match("P1", "P2", MatchResult.PLAYER_ONE_WIN),
        _match("P3", "P4", MatchResult.PLAYER_ONE_WIN),
    ]
    standings = calculator.calculate(
        participants, matches, default_score_weights(), []
    )
    table = _by_id(standings)

    assert table["P1"].points == 3.0
    assert table["P2"].points == 0.0
    assert table["P1"].wins == 1 and table["P1"].matches_played == 1
    assert table["P2"].losses == 1
    assert sorted(s.rank for s in standings) == [1, 2, 3, 4]
    # Fully tied rows keep participant order
    assert [s.participant_id for s in standings] == ["P1", "P3", "P2", "P4"]


def test_unplayed_matches_are_skipped(calculator):
    participants = _participants("a", "b")
    matches = [_match("a", "b", MatchResult.NOT_PLAYED)]
    standings = calculator.calculate(
        participants, matches, default_score_weights(), []
    )
    assert all(s.matches_played == 0 and s.points == 0.0 for s in standings)


def test_bye_draw_and_double_loss_folding(calculator):
    participants = _participants("a", "b", "c", "d", "e")
    matches = [
        _match("a", "b", MatchResult.DRAW),
        _match("c", "d", MatchResult.DOUBLE_LOSS),
        _match("e", None, MatchResult.BYE),
    ]
    table = _by_id(
        calculator.calculate(participants, matches, default_score_weights(), [])
    )
    assert table["a"].draws == 1 and table["a"].points == 1.0
    assert table["b"].draws == 1 and table["b"].points == 1.0
    assert table["c"].losses == 1 and table["d"].losses == 1
    assert table["e"].byes == 1 and table["e"].points == 3.0
    assert table["e"].matches_played == 1


def test_missing_weights_count_zero(calculator):
    participants = _participants("a", "b")
    matches = [_match("a", "b", MatchResult.PLAYER_ONE_WIN)]
    weights = [ScoreWeight("Win", "win", 2.0)]
    table = _by_id(calculator.calculate(participants, matches, weights, []))
    assert table["a"].points == 2.0
    assert table["b"].points == 0.0


def test_point_total_matches_folded_weights(calculator):
    participants = _participants("a", "b", "c", "d", "e")
    matches = [
        _match("a", "b", MatchResult.PLAYER_ONE_WIN, 1),
        _match("c", "d", MatchResult.DRAW, 1),
        _match("e", None, MatchResult.BYE, 1),
        _match("a", "c", MatchResult.PLAYER_TWO_WIN, 2),
        _match("b", "e", MatchResult.DOUBLE_LOSS, 2),
        _match("d", None, MatchResult.BYE, 2),
    ]
    standings = calculator.calculate(
        participants,
        matches,
        default_score_weights(),
        [Tiebreaker.BUCHHOLZ, Tiebreaker.PROGRESSIVE],
    )
    # 3 + (1 + 1) + 3 + 3 + 0 + 3
    assert sum(s.points for s in standings) == pytest.approx(14.0)
    assert len(standings) == len(participants)


def test_ranks_follow_points_then_tiebreakers(calculator):
    participants = _participants("a", "b", "c", "d")
    matches = [
        _match("a", "b", MatchResult.PLAYER_ONE_WIN, 1),
        _match("c", "d", MatchResult.PLAYER_ONE_WIN, 1),
        _match("a", "c", MatchResult.DRAW, 2),
        _match("b", "d", MatchResult.PLAYER_ONE_WIN, 2),
    ]
    standings = calculator.calculate(
        participants, matches, default_score_weights(), [Tiebreaker.BUCHHOLZ]
    )
    ranks = [s.rank for s in standings]
    assert ranks == [1, 2, 3, 4]
    keys = [(s.points, s.buchholz) for s in standings]
    assert keys == sorted(keys, reverse=True)


def test_buchholz_breaks_tie(calculator):
    participants = _participants("a", "b", "c", "d")
    matches = [
        # a beats the strong b, c beats the weak d
        _match("a", "b", MatchResult.PLAYER_ONE_WIN, 1),
        _match("c", "d", MatchResult.PLAYER_ONE_WIN, 1),
        _match("b", "d", MatchResult.PLAYER_ONE_WIN, 2),
        _match("a", "c", MatchResult.DRAW, 2),
    ]
    standings = calculator.calculate(
        participants, matches, default_score_weights(), ["buchholz"]
    )
    table = _by_id(standings)
    assert table["a"].points == table["c"].points == 4.0
    assert table["a"].buchholz == 7.0  # b 3 + c 4
    assert table["c"].buchholz == 4.0  # d 0 + a 4
    assert table["a"].rank == 1 and table["c"].rank == 2


def test_unknown_tiebreaker_keys_are_ignored(calculator):
    participants = _participants("a", "b")
    matches = [_match("a", "b", MatchResult.PLAYER_TWO_WIN)]
    standings = calculator.calculate(
        participants, matches, default_score_weights(), ["coin_toss", "buchholz"]
    )
    assert [s.participant_id for s in standings] == ["b", "a"]


def test_median_buchholz_drops_best_and_worst(calculator):
    opponents = {"o1": 9.0, "o2": 6.0, "o3": 3.0, "o4": 0.0}
    standings = [Standing(participant_id="p", points=4.0)] + [
        Standing(participant_id=pid, points=points)
        for pid, points in opponents.items()
    ]
    matches = [
        _match("p", pid, MatchResult.DRAW, index)
        for index, pid in enumerate(opponents, start=1)
    ]
    assert calculator.calculate_buchholz("p", matches, standings) == 18.0
    assert calculator.calculate_median_buchholz("p", matches, standings) == 9.0


def test_median_buchholz_falls_back_with_few_opponents(calculator):
    standings = [
        Standing(participant_id="p"),
        Standing(participant_id="o1", points=6.0),
        Standing(participant_id="o2", points=1.0),
    ]
    matches = [
        _match("p", "o1", MatchResult.PLAYER_TWO_WIN, 1),
        _match("o2", "p", MatchResult.DRAW, 2),
    ]
    assert calculator.calculate_median_buchholz("p", matches, standings) == 7.0


def test_buchholz_ignores_byes_and_unplayed(calculator):
    standings = [Standing(participant_id="p"), Standing(participant_id="o", points=5.0)]
    matches = [
        _match("p", None, MatchResult.BYE, 1),
        _match("p", "o", MatchResult.NOT_PLAYED, 2),
    ]
    assert calculator.calculate_buchholz("p", matches, standings) == 0.0


def test_progressive_rewards_early_points(calculator):
    weights = default_score_weights()
    early = [
        _match("a", "x", MatchResult.PLAYER_ONE_WIN, 1),
        _match("a", "y", MatchResult.PLAYER_TWO_WIN, 2),
    ]
    late = [
        _match("b", "x", MatchResult.PLAYER_TWO_WIN, 1),
        _match("b", "y", MatchResult.PLAYER_ONE_WIN, 2),
    ]
    assert calculator.calculate_progressive("a", early, weights) == 6.0
    assert calculator.calculate_progressive("b", late, weights) == 3.0


def test_progressive_orders_rounds_naturally(calculator):
    weights = default_score_weights()
    matches = [
        _match("a", "x", MatchResult.PLAYER_ONE_WIN, 10),
        _match("a", "y", MatchResult.PLAYER_TWO_WIN, 2),
    ]
    # round-2 (loss) comes before round-10 (win): 0 + 3
    assert calculator.calculate_progressive("a", matches, weights) == 3.0


def test_opponent_win_percentage_skips_unplayed_opponents(calculator):
    standings = [
        Standing(participant_id="p"),
        Standing(participant_id="o1", wins=1, losses=1),
        Standing(participant_id="o2", wins=2),
        Standing(participant_id="o3"),
    ]
    matches = [
        _match("p", "o1", MatchResult.PLAYER_ONE_WIN, 1),
        _match("p", "o2", MatchResult.PLAYER_TWO_WIN, 2),
        _match("p", "o3", MatchResult.DRAW, 3),
    ]
    value = calculator.calculate_opponent_win_percentage("p", matches, standings)
    assert value == pytest.approx(0.75)


def test_accumulated_stats_are_summed(calculator):
    participants = _participants("a", "b")
    matches = [
        _match(
            "a",
            "b",
            MatchResult.PLAYER_ONE_WIN,
            1,
            player1_stats={"vp": 70, "general_killed": True},
            player2_stats={"vp": 40},
        ),
        _match(
            "a",
            "b",
            MatchResult.DRAW,
            2,
            player1_stats={"vp": 30},
            player2_stats={"vp": 30},
        ),
    ]
    table = _by_id(
        calculator.calculate(participants, matches, default_score_weights(), [])
    )
    assert table["a"].get_accumulated_stat("vp") == 100.0
    assert table["a"].get_accumulated_stat("general_killed") == 1.0
    assert table["b"].get_accumulated_stat("vp") == 70.0
    assert table["b"].get_accumulated_stat("missing") == 0.0


def test_calculate_with_profile_honours_direction(calculator):
    participants = _participants("a", "b")
    matches = [
        _match(
            "a",
            "b",
            MatchResult.DRAW,
            1,
            player1_stats={"penalties": 4},
            player2_stats={"penalties": 1},
        )
    ]
    definitions = [
        TiebreakerDefinition(
            "fewest_penalties",
            "Penalties",
            TiebreakerType.STAT_SUM,
            stat="penalties",
            direction=SortDirection.ASCENDING,
        )
    ]
    standings = calculator.calculate_with_profile(
        participants, matches, default_score_weights(), definitions
    )
    assert [s.participant_id for s in standings] == ["b", "a"]
    assert standings[0].get_tiebreaker("fewest_penalties") == 1.0
    assert standings[1].get_tiebreaker("fewest_penalties") == 4.0


# ========== Standing model ==========


def test_standing_records_keep_matches_played_consistent():
    standing = Standing(participant_id="p")
    standing.record_win(3)
    standing.record_draw(1)
    standing.record_loss(0)
    standing.record_bye(3)
    assert standing.matches_played == 4
    assert standing.points == 7.0
    assert (standing.wins, standing.draws, standing.losses, standing.byes) == (
        1,
        1,
        1,
        1,
    )


def test_standing_rejects_invalid_values():
    with pytest.raises(InvalidStandingException):
        Standing(participant_id="p", wins=-1)
    standing = Standing(participant_id="p")
    with pytest.raises(InvalidStandingException):
        standing.update_rank(0)


def test_head_to_head_never_separates():
    standing = Standing(participant_id="p", buchholz=5.0)
    assert standing.tiebreak_value(Tiebreaker.HEAD_TO_HEAD) == 0
    assert standing.tiebreak_value(Tiebreaker.BUCHHOLZ) == 5.0
