import pytest

from swisstour.exceptions import (
    InvalidConfigurationException,
    InvalidScoringConditionException,
    InvalidScoringRuleException,
)
from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.profile import ConditionType, ScoringCondition, ScoringRule
from swisstour.scoring import ScoringRuleEvaluator, condition_matches, perspective


def _standard_rules():
    return [
        ScoringRule("Win", ScoringCondition.result("win"), 3),
        ScoringRule("Draw", ScoringCondition.result("draw"), 1),
        ScoringRule("Loss", ScoringCondition.result("loss"), 0),
        ScoringRule("Bye", ScoringCondition.result("bye"), 3),
    ]


@pytest.fixture
def evaluator():
    return ScoringRuleEvaluator()


def test_empty_rule_list_scores_nothing(evaluator):
    assert evaluator.evaluate(MatchResult.PLAYER_ONE_WIN, []) == (0.0, 0.0)


@pytest.mark.parametrize(
    "result, expected",
    [
        (MatchResult.PLAYER_ONE_WIN, (3.0, 0.0)),
        (MatchResult.PLAYER_TWO_WIN, (0.0, 3.0)),
        (MatchResult.DRAW, (1.0, 1.0)),
        (MatchResult.DOUBLE_LOSS, (0.0, 0.0)),
        (MatchResult.BYE, (3.0, 0.0)),
        (MatchResult.NOT_PLAYED, (0.0, 0.0)),
    ],
)
def test_result_rules(evaluator, result, expected):
    assert evaluator.evaluate(result, _standard_rules()) == expected


def test_perspective_labels():
    assert perspective(MatchResult.BYE, True) == "bye"
    assert perspective(MatchResult.BYE, False) == "loss"
    assert perspective(MatchResult.DOUBLE_LOSS, True) == "loss"
    assert perspective(MatchResult.DOUBLE_LOSS, False) == "loss"
    assert perspective(MatchResult.NOT_PLAYED, True) == "not_played"


def test_highest_priority_rule_wins(evaluator):
    rules = [
        ScoringRule("Win", ScoringCondition.result("win"), 3),
        ScoringRule("Big win", ScoringCondition.result("win"), 5, priority=10),
    ]
    assert evaluator.evaluate(MatchResult.PLAYER_ONE_WIN, rules) == (5.0, 0.0)


def test_equal_priorities_keep_rule_order(evaluator):
    rules = [
        ScoringRule("First", ScoringCondition.result("win"), 4),
        ScoringRule("Second", ScoringCondition.result("win"), 2),
    ]
    assert evaluator.evaluate(MatchResult.PLAYER_TWO_WIN, rules) == (0.0, 4.0)


def test_margin_difference_crushing_victory():
    rules = [
        ScoringRule(
            "Crushing",
            ScoringCondition.margin_difference("vp", ">=", 20),
            20,
            priority=10,
        ),
        ScoringRule("Win", ScoringCondition.result("win"), 13),
        ScoringRule("Loss", ScoringCondition.result("loss"), 0),
    ]
    evaluator = ScoringRuleEvaluator()

    points = evaluator.evaluate(
        MatchResult.PLAYER_ONE_WIN, rules, {"vp": 85}, {"vp": 60}
    )
    assert points == (20.0, 0.0)

    # Margin of 5 falls through to the plain win rule
    points = evaluator.evaluate(
        MatchResult.PLAYER_ONE_WIN, rules, {"vp": 65}, {"vp": 60}
    )
    assert points == (13.0, 0.0)


def test_margin_difference_close_loss_uses_absolute_margin():
    condition = ScoringCondition.margin_difference("vp", "<=", 5)

    assert condition_matches(condition, "loss", {"vp": 57}, {"vp": 60})
    assert not condition_matches(condition, "loss", {"vp": 50}, {"vp": 60})
    # The side ahead is never eligible for a "behind" margin
    assert not condition_matches(condition, "win", {"vp": 60}, {"vp": 57})
    assert not condition_matches(condition, "draw", {"vp": 60}, {"vp": 60})


def test_margin_difference_greater_requires_lead():
    condition = ScoringCondition.margin_difference("vp", ">", -10)
    assert not condition_matches(condition, "loss", {"vp": 55}, {"vp": 60})
    assert condition_matches(condition, "win", {"vp": 61}, {"vp": 60})


def test_stat_comparison_and_threshold():
    more_kills = ScoringCondition.stat_comparison("kills", ">")
    assert condition_matches(more_kills, "loss", {"kills": 4}, {"kills": 2})
    assert not condition_matches(more_kills, "win", {"kills": 2}, {"kills": 2})

    objective = ScoringCondition.stat_threshold("objectives", ">=", 3)
    assert condition_matches(objective, "loss", {"objectives": 3}, {})
    assert not condition_matches(objective, "win", {"objectives": 2}, {})


def test_missing_stats_count_as_zero(evaluator):
    rules = [
        ScoringRule(
            "Shutout", ScoringCondition.stat_threshold("goals_against", "==", 0), 1
        )
    ]
    assert evaluator.evaluate(MatchResult.DRAW, rules) == (1.0, 1.0)
    assert evaluator.evaluate(
        MatchResult.DRAW, rules, {"goals_against": None}, {"goals_against": 2}
    ) == (1.0, 0.0)


def test_unconvertible_stats_count_as_zero(evaluator):
    rules = [
        ScoringRule(
            "Big win", ScoringCondition.margin_difference("vp", ">=", 20), 5, 10
        ),
        ScoringRule("Win", ScoringCondition.result("win"), 3),
    ]
    assert evaluator.evaluate(
        MatchResult.PLAYER_ONE_WIN, rules, {"vp": "n/a"}, {"vp": 0}
    ) == (3.0, 0.0)
    assert evaluator.evaluate(
        MatchResult.PLAYER_ONE_WIN, rules, {"vp": "30"}, {"vp": [1]}
    ) == (5.0, 0.0)


def test_evaluate_match_uses_match_stats(evaluator):
    match = TournamentMatch(player1_id="a", player2_id="b")
    match.report_result(
        MatchResult.PLAYER_TWO_WIN,
        player1_stats={"vp": 10},
        player2_stats={"vp": 40},
    )
    rules = [
        ScoringRule(
            "Crushing",
            ScoringCondition.margin_difference("vp", ">=", 25),
            5,
            priority=1,
        ),
        *_standard_rules(),
    ]
    assert evaluator.evaluate_match(match, rules) == (0.0, 5.0)


def test_points_always_come_from_rule_set(evaluator):
    rules = _standard_rules() + [
        ScoringRule(
            "Margin", ScoringCondition.margin_difference("vp", ">=", 3), 7, priority=5
        )
    ]
    allowed = {float(rule.points) for rule in rules} | {0.0}
    for result in (
        MatchResult.PLAYER_ONE_WIN,
        MatchResult.PLAYER_TWO_WIN,
        MatchResult.DRAW,
        MatchResult.DOUBLE_LOSS,
    ):
        for own, other in ((0, 0), (5, 1), (1, 5), (10, 3)):
            points = evaluator.evaluate(result, rules, {"vp": own}, {"vp": other})
            assert set(points) <= allowed


# ========== Construction validation ==========


def test_result_condition_requires_known_label():
    with pytest.raises(InvalidScoringConditionException):
        ScoringCondition.result("victory")
    with pytest.raises(InvalidScoringConditionException):
        ScoringCondition(ConditionType.RESULT)


def test_threshold_condition_requires_value():
    with pytest.raises(InvalidScoringConditionException):
        ScoringCondition(ConditionType.STAT_THRESHOLD, stat="vp", operator=">=")


def test_condition_rejects_unknown_operator():
    with pytest.raises(InvalidScoringConditionException):
        ScoringCondition.stat_comparison("vp", "!=")


def test_rule_rejects_negative_points_and_empty_name():
    with pytest.raises(InvalidScoringRuleException):
        ScoringRule("Penalty", ScoringCondition.result("loss"), -1)
    with pytest.raises(InvalidScoringRuleException):
        ScoringRule("", ScoringCondition.result("loss"), 0)


def test_rule_dict_round_trip_and_unknown_type():
    rule = ScoringRule(
        "Crushing", ScoringCondition.margin_difference("vp", ">=", 20), 20, 10
    )
    assert ScoringRule.from_dict(rule.to_dict()) == rule

    data = rule.to_dict()
    data["condition"]["type"] = "coin_flip"
    with pytest.raises(InvalidConfigurationException):
        ScoringRule.from_dict(data)
