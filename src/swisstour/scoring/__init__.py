from swisstour.scoring.rule_evaluator import (
    ScoringRuleEvaluator,
    condition_matches,
    perspective,
)

__all__ = ["ScoringRuleEvaluator", "condition_matches", "perspective"]
