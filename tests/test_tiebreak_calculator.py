import pytest

from swisstour.exceptions import InvalidTiebreakerDefinitionException
from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.profile import (
    ScoreWeight,
    TiebreakerDefinition,
    TiebreakerType,
)
from swisstour.models.standing import Standing
from swisstour.tournament import TiebreakCalculator


def _match(p1, p2, result, round_number=1, **kwargs):
    return TournamentMatch(
        player1_id=p1,
        player2_id=p2,
        result=result,
        round_id=f"round-{round_number}",
        **kwargs,
    )


def _tb(type, stat=None, key=None, min_value=None):
    return TiebreakerDefinition(
        key or type.value, type.label, type, stat=stat, min_value=min_value
    )


@pytest.fixture
def calculator():
    return TiebreakCalculator()


@pytest.fixture
def league():
    """p played o1 (win), o2 (draw) and o3 (loss), then had a bye."""
    matches = [
        _match(
            "p",
            "o1",
            MatchResult.PLAYER_ONE_WIN,
            1,
            player1_score=10,
            player2_score=4,
            player1_stats={"vp": 60},
            player2_stats={"vp": 20},
        ),
        _match(
            "o2",
            "p",
            MatchResult.DRAW,
            2,
            player1_score=5,
            player2_score=5,
            player1_stats={"vp": 35},
            player2_stats={"vp": 35},
        ),
        _match(
            "o3",
            "p",
            MatchResult.PLAYER_ONE_WIN,
            3,
            player1_score=8,
            player2_score=2,
            player1_stats={"vp": 70},
            player2_stats={"vp": 10},
        ),
        _match("p", None, MatchResult.BYE, 4, player1_stats={"vp": 5}),
        _match("p", "o1", MatchResult.NOT_PLAYED, 5, player1_stats={"vp": 99}),
    ]
    standings = [
        Standing(participant_id="p", wins=1, draws=1, losses=1, byes=1, points=7.0),
        Standing(participant_id="o1", wins=1, losses=2, points=3.0),
        Standing(participant_id="o2", wins=2, draws=1, points=7.0),
        Standing(participant_id="o3", wins=3, points=9.0),
    ]
    return matches, standings


def test_empty_configuration_returns_empty_map(calculator, league):
    matches, standings = league
    assert calculator.calculate("p", matches, standings, []) == {}


def test_opponent_point_metrics(calculator, league):
    matches, standings = league
    values = calculator.calculate(
        "p",
        matches,
        standings,
        [
            _tb(TiebreakerType.BUCHHOLZ),
            _tb(TiebreakerType.MEDIAN_BUCHHOLZ),
            _tb(TiebreakerType.STRENGTH_OF_SCHEDULE),
            _tb(TiebreakerType.SONNEBORN_BERGER),
        ],
    )
    assert values["buchholz"] == 19.0
    assert values["median_buchholz"] == 7.0
    assert values["sos"] == pytest.approx(19.0 / 3)
    # Beat o1 (3) and drew o2 (7 / 2)
    assert values["sonneborn_berger"] == 6.5


def test_win_percentage_metrics(calculator, league):
    matches, standings = league
    values = calculator.calculate(
        "p",
        matches,
        standings,
        [
            _tb(TiebreakerType.OPPONENT_WIN_PERCENTAGE),
            _tb(TiebreakerType.GAME_WIN_PERCENTAGE),
        ],
    )
    assert values["owp"] == pytest.approx((1 / 3 + 2 / 3 + 1.0) / 3)
    assert values["gwp"] == pytest.approx(0.25)


def test_opponents_opponent_win_percentage(calculator):
    matches = [
        _match("a", "b", MatchResult.PLAYER_ONE_WIN, 1),
        _match("b", "c", MatchResult.PLAYER_ONE_WIN, 2),
    ]
    standings = [
        Standing(participant_id="a", wins=1),
        Standing(participant_id="b", wins=1, losses=1),
        Standing(participant_id="c", losses=1),
    ]
    values = calculator.calculate(
        "a",
        matches,
        standings,
        [_tb(TiebreakerType.OPPONENT_OPPONENT_WIN_PERCENTAGE)],
    )
    # a's only opponent is b; b's opponents a (1.0) and c (0.0)
    assert values["oowp"] == pytest.approx(0.5)


def test_margin_of_victory_counts_only_positive_margins(calculator, league):
    matches, standings = league
    values = calculator.calculate(
        "p", matches, standings, [_tb(TiebreakerType.MARGIN_OF_VICTORY)]
    )
    assert values["mov"] == 6.0


def test_stat_metrics_include_byes_but_not_unplayed(calculator, league):
    matches, standings = league
    values = calculator.calculate(
        "p",
        matches,
        standings,
        [
            _tb(TiebreakerType.STAT_SUM, "vp", "vp_sum"),
            _tb(TiebreakerType.STAT_DIFF, "vp", "vp_diff"),
            _tb(TiebreakerType.STAT_AVERAGE, "vp", "vp_avg"),
            _tb(TiebreakerType.STAT_MAX, "vp", "vp_max"),
        ],
    )
    assert values["vp_sum"] == 110.0
    # (60 - 20) + (35 - 35) + (10 - 70) + (5 - 0)
    assert values["vp_diff"] == -15.0
    assert values["vp_avg"] == 27.5
    assert values["vp_max"] == 60.0


def test_unknown_stat_resolves_to_zero(calculator, league):
    matches, standings = league
    values = calculator.calculate(
        "p",
        matches,
        standings,
        [
            _tb(TiebreakerType.STAT_SUM, "missing", "sum"),
            _tb(TiebreakerType.STAT_AVERAGE, "missing", "avg"),
            _tb(TiebreakerType.STAT_MAX, "missing", "max"),
        ],
    )
    assert values == {"sum": 0.0, "avg": 0.0, "max": 0.0}


def test_stat_max_is_floored_at_zero(calculator):
    matches = [
        _match(
            "p",
            "o",
            MatchResult.PLAYER_TWO_WIN,
            player1_stats={"delta": -4},
            player2_stats={"delta": 4},
        )
    ]
    values = calculator.calculate(
        "p", matches, [], [_tb(TiebreakerType.STAT_MAX, "delta")]
    )
    assert values["stat_max"] == 0.0


def test_unconvertible_stat_values_count_as_zero(calculator):
    matches = [
        _match(
            "p",
            "o",
            MatchResult.PLAYER_ONE_WIN,
            player1_stats={"vp": "n/a"},
            player2_stats={"vp": 10},
        ),
        _match(
            "q",
            "p",
            MatchResult.PLAYER_TWO_WIN,
            round_number=2,
            player1_stats={"vp": 5},
            player2_stats={"vp": "40"},
        ),
    ]
    values = calculator.calculate(
        "p",
        matches,
        [],
        [
            _tb(TiebreakerType.STAT_SUM, "vp"),
            _tb(TiebreakerType.STAT_AVERAGE, "vp"),
            _tb(TiebreakerType.STAT_DIFF, "vp"),
        ],
    )
    assert values["stat_sum"] == 40.0
    assert values["stat_average"] == 20.0
    assert values["stat_diff"] == 25.0


def test_progressive_with_and_without_weights(calculator, league):
    matches, standings = league
    definitions = [_tb(TiebreakerType.PROGRESSIVE)]

    nominal = calculator.calculate("p", matches, standings, definitions)
    # Running totals 3, 4.5, 4.5, 7.5
    assert nominal["progressive"] == 19.5

    weights = [
        ScoreWeight("Win", "win", 2),
        ScoreWeight("Draw", "draw", 1),
        ScoreWeight("Loss", "loss", 0),
        ScoreWeight("Bye", "bye", 2),
    ]
    weighted = calculator.calculate("p", matches, standings, definitions, weights)
    # Running totals 2, 3, 3, 5
    assert weighted["progressive"] == 13.0


def test_min_value_floor(calculator):
    matches = [_match("p", "o", MatchResult.PLAYER_ONE_WIN)]
    standings = [
        Standing(participant_id="p", wins=1, points=3.0),
        Standing(participant_id="o", losses=1),
    ]
    values = calculator.calculate(
        "p",
        matches,
        standings,
        [_tb(TiebreakerType.OPPONENT_WIN_PERCENTAGE, min_value=0.33)],
    )
    assert values["owp"] == 0.33


def test_uncomputable_types_resolve_to_zero(calculator, league):
    matches, standings = league
    values = calculator.calculate(
        "p",
        matches,
        standings,
        [
            _tb(TiebreakerType.HEAD_TO_HEAD),
            _tb(TiebreakerType.OPPONENT_GAME_WIN_PERCENTAGE),
            _tb(TiebreakerType.RANDOM),
        ],
    )
    assert set(values.values()) == {0.0}


def test_participant_without_matches(calculator):
    values = calculator.calculate(
        "ghost",
        [],
        [],
        [_tb(TiebreakerType.BUCHHOLZ), _tb(TiebreakerType.OPPONENT_WIN_PERCENTAGE)],
    )
    assert values == {"buchholz": 0.0, "owp": 0.0}


def test_calculate_all_covers_every_standing(calculator, league):
    matches, standings = league
    everything = calculator.calculate_all(
        matches, standings, [_tb(TiebreakerType.BUCHHOLZ)]
    )
    assert set(everything) == {"p", "o1", "o2", "o3"}
    assert everything["o3"]["buchholz"] == 7.0


def test_stat_types_require_a_stat():
    with pytest.raises(InvalidTiebreakerDefinitionException):
        TiebreakerDefinition("vp", "VP", TiebreakerType.STAT_SUM)
