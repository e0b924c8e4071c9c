"""Built-in game profiles.

System profiles ship with the library and cannot be modified or deleted
(``is_system=True``). Use :func:`get_system_profile` to look one up by slug.
"""

# Swisstour
# Copyright (C) 2025  Swisstour developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from typing import Dict, List, Optional, Sequence, Tuple

from swisstour.constants import (
    OP_GTE,
    OUTCOME_BYE,
    OUTCOME_DRAW,
    OUTCOME_LOSS,
    OUTCOME_WIN,
)
from swisstour.models.profile import (
    GameProfile,
    ScoreWeight,
    ScoringCondition,
    ScoringRule,
    StatDefinition,
    StatType,
    TiebreakerDefinition,
    TiebreakerType,
    default_score_weights,
)


def _result_rules(
    win: float, draw: float, loss: float, bye: Optional[float] = None
) -> List[ScoringRule]:
    rules = [
        ScoringRule("Win", ScoringCondition.result(OUTCOME_WIN), win),
        ScoringRule("Draw", ScoringCondition.result(OUTCOME_DRAW), draw),
        ScoringRule("Loss", ScoringCondition.result(OUTCOME_LOSS), loss),
    ]
    if bye is not None:
        rules.append(ScoringRule("Bye", ScoringCondition.result(OUTCOME_BYE), bye))
    return rules


def _margin_scale(
    stat: str, steps: Sequence[Tuple[float, float, str]], top_priority: int
) -> List[ScoringRule]:
    """Margin bands, widest first, each ten priority points below the last."""
    return [
        ScoringRule(
            name,
            ScoringCondition.margin_difference(stat, OP_GTE, threshold),
            points,
            priority=top_priority - 10 * index,
        )
        for index, (threshold, points, name) in enumerate(steps)
    ]


def _weights(win: float, draw: float, loss: float, bye: float) -> List[ScoreWeight]:
    return [
        ScoreWeight("Win", "win", win),
        ScoreWeight("Draw", "draw", draw),
        ScoreWeight("Loss", "loss", loss),
        ScoreWeight("Bye", "bye", bye),
    ]


def _tiebreaker(
    key: str,
    name: str,
    type: TiebreakerType,
    stat: Optional[str] = None,
    min_value: Optional[float] = None,
) -> TiebreakerDefinition:
    return TiebreakerDefinition(key, name, type, stat=stat, min_value=min_value)


def _int_stat(
    key: str,
    name: str,
    max_value: Optional[int] = None,
    description: Optional[str] = None,
) -> StatDefinition:
    return StatDefinition(
        key,
        name,
        StatType.INTEGER,
        min_value=0,
        max_value=max_value,
        required=True,
        description=description,
    )


def generic_swiss() -> GameProfile:
    return GameProfile(
        name="Generic Swiss",
        slug="generic-swiss",
        description="Standard Swiss tournament with classic 3/1/0 scoring.",
        scoring_rules=_result_rules(3.0, 1.0, 0.0),
        tiebreakers=[
            _tiebreaker("buchholz", "Buchholz", TiebreakerType.BUCHHOLZ),
            _tiebreaker("progressive", "Progressive", TiebreakerType.PROGRESSIVE),
            _tiebreaker(
                "owp", "Opponent Win %", TiebreakerType.OPPONENT_WIN_PERCENTAGE
            ),
        ],
        is_system=True,
    )


def magic_the_gathering() -> GameProfile:
    return GameProfile(
        name="Magic: The Gathering",
        slug="mtg",
        description="Official Magic tournament format: 3/1/0, OWP%, GWP%, OGWP%.",
        stat_definitions=[
            _int_stat("games_won", "Games won", 3, "Games won in the best-of-three"),
            _int_stat("games_lost", "Games lost", 3, "Games lost in the best-of-three"),
        ],
        scoring_rules=_result_rules(3.0, 1.0, 0.0),
        tiebreakers=[
            _tiebreaker(
                "owp",
                "Opponent Win %",
                TiebreakerType.OPPONENT_WIN_PERCENTAGE,
                min_value=0.33,
            ),
            _tiebreaker(
                "gwp", "Game Win %", TiebreakerType.GAME_WIN_PERCENTAGE, min_value=0.33
            ),
            _tiebreaker(
                "ogwp",
                "Opponent Game Win %",
                TiebreakerType.OPPONENT_GAME_WIN_PERCENTAGE,
                min_value=0.33,
            ),
        ],
        is_system=True,
    )


def blood_bowl_naf() -> GameProfile:
    return GameProfile(
        name="Blood Bowl (NAF)",
        slug="blood-bowl-naf",
        description="NAF format with a touchdown margin bonus.",
        stat_definitions=[
            _int_stat("touchdowns", "Touchdowns"),
            _int_stat("casualties", "Casualties"),
        ],
        scoring_rules=[
            ScoringRule(
                "Crushing victory",
                ScoringCondition.margin_difference("touchdowns", OP_GTE, 3.0),
                3.0,
                priority=10,
            ),
            *_result_rules(2.0, 1.0, 0.0, bye=2.0),
        ],
        score_weights=_weights(2.0, 1.0, 0.0, 2.0),
        tiebreakers=[
            _tiebreaker(
                "td_diff", "Touchdown diff", TiebreakerType.STAT_DIFF, "touchdowns"
            ),
            _tiebreaker(
                "cas_diff", "Casualty diff", TiebreakerType.STAT_DIFF, "casualties"
            ),
            _tiebreaker("td_sum", "Touchdowns", TiebreakerType.STAT_SUM, "touchdowns"),
            _tiebreaker(
                "sos", "Strength of Schedule", TiebreakerType.STRENGTH_OF_SCHEDULE
            ),
        ],
        is_system=True,
    )


def warhammer_40k_wtc() -> GameProfile:
    return GameProfile(
        name="Warhammer 40K (WTC)",
        slug="warhammer-40k-wtc",
        description="WTC 20-0 scale driven by the victory point margin.",
        stat_definitions=[_int_stat("victory_points", "Victory points", 100)],
        scoring_rules=[
            *_margin_scale(
                "victory_points",
                [
                    (61.0, 20.0, "20-0 (margin 61+)"),
                    (51.0, 19.0, "19-1 (margin 51-60)"),
                    (41.0, 18.0, "18-2 (margin 41-50)"),
                    (31.0, 17.0, "17-3 (margin 31-40)"),
                    (21.0, 16.0, "16-4 (margin 21-30)"),
                    (11.0, 15.0, "15-5 (margin 11-20)"),
                    (6.0, 14.0, "14-6 (margin 6-10)"),
                    (1.0, 13.0, "13-7 (margin 1-5)"),
                ],
                top_priority=100,
            ),
            ScoringRule(
                "10-10 (draw)", ScoringCondition.result(OUTCOME_DRAW), 10.0, priority=20
            ),
            ScoringRule("Loss", ScoringCondition.result(OUTCOME_LOSS), 0.0),
        ],
        tiebreakers=[
            _tiebreaker(
                "vp_diff",
                "Victory point difference",
                TiebreakerType.STAT_DIFF,
                "victory_points",
            ),
            _tiebreaker(
                "vp_sum", "Victory points", TiebreakerType.STAT_SUM, "victory_points"
            ),
            _tiebreaker(
                "sos", "Strength of Schedule", TiebreakerType.STRENGTH_OF_SCHEDULE
            ),
        ],
        is_system=True,
    )


def chess_fide() -> GameProfile:
    return GameProfile(
        name="Chess (FIDE)",
        slug="chess-fide",
        description="1 / 0.5 / 0 scoring with Buchholz, Sonneborn-Berger, Progressive.",
        scoring_rules=_result_rules(1.0, 0.5, 0.0),
        score_weights=_weights(1.0, 0.5, 0.0, 1.0),
        tiebreakers=[
            _tiebreaker("buchholz", "Buchholz", TiebreakerType.BUCHHOLZ),
            _tiebreaker(
                "sonneborn_berger", "Sonneborn-Berger", TiebreakerType.SONNEBORN_BERGER
            ),
            _tiebreaker("progressive", "Progressive", TiebreakerType.PROGRESSIVE),
        ],
        is_system=True,
    )


def warhammer_age_of_sigmar() -> GameProfile:
    return GameProfile(
        name="Warhammer Age of Sigmar",
        slug="warhammer-aos",
        stat_definitions=[
            _int_stat("battle_points", "Battle points", 100),
            _int_stat("battle_tactics", "Battle tactics", 4),
        ],
        scoring_rules=_result_rules(3.0, 1.0, 0.0),
        tiebreakers=[
            _tiebreaker(
                "sos", "Strength of Schedule", TiebreakerType.STRENGTH_OF_SCHEDULE
            ),
            _tiebreaker(
                "bp_sum", "Battle points", TiebreakerType.STAT_SUM, "battle_points"
            ),
            _tiebreaker(
                "bt_sum", "Battle tactics", TiebreakerType.STAT_SUM, "battle_tactics"
            ),
        ],
        is_system=True,
    )


def warhammer_old_world() -> GameProfile:
    return GameProfile(
        name="Warhammer: The Old World",
        slug="warhammer-tow",
        stat_definitions=[
            _int_stat("victory_points", "Victory points"),
            StatDefinition("general_killed", "General killed", StatType.BOOLEAN),
        ],
        scoring_rules=[
            *_margin_scale(
                "victory_points",
                [
                    (1001.0, 6.0, "6-0 (margin 1001+)"),
                    (501.0, 5.0, "5-1 (margin 501-1000)"),
                    (301.0, 4.0, "4-2 (margin 301-500)"),
                    (151.0, 3.0, "3-3 (margin 151-300)"),
                ],
                top_priority=100,
            ),
            ScoringRule(
                "3-3 (draw, margin up to 150)",
                ScoringCondition.result(OUTCOME_DRAW),
                3.0,
                priority=60,
            ),
            ScoringRule("Loss", ScoringCondition.result(OUTCOME_LOSS), 0.0),
        ],
        tiebreakers=[
            _tiebreaker(
                "vp_sum", "Victory points", TiebreakerType.STAT_SUM, "victory_points"
            ),
            _tiebreaker(
                "general_killed_sum",
                "Generals killed",
                TiebreakerType.STAT_SUM,
                "general_killed",
            ),
            _tiebreaker(
                "sos", "Strength of Schedule", TiebreakerType.STRENGTH_OF_SCHEDULE
            ),
        ],
        is_system=True,
    )


def kill_team() -> GameProfile:
    return GameProfile(
        name="Kill Team",
        slug="kill-team",
        stat_definitions=[
            _int_stat("victory_points", "Victory points", 12),
            _int_stat("tac_ops", "Tac ops", 6),
        ],
        scoring_rules=_result_rules(3.0, 1.0, 0.0),
        tiebreakers=[
            _tiebreaker("tac_ops_sum", "Tac ops", TiebreakerType.STAT_SUM, "tac_ops"),
            _tiebreaker(
                "vp_sum", "Victory points", TiebreakerType.STAT_SUM, "victory_points"
            ),
            _tiebreaker(
                "sos", "Strength of Schedule", TiebreakerType.STRENGTH_OF_SCHEDULE
            ),
        ],
        is_system=True,
    )


def pokemon_tcg() -> GameProfile:
    return GameProfile(
        name="Pokemon TCG",
        slug="pokemon-tcg",
        scoring_rules=_result_rules(3.0, 1.0, 0.0),
        tiebreakers=[
            _tiebreaker(
                "owp",
                "Opponent Win %",
                TiebreakerType.OPPONENT_WIN_PERCENTAGE,
                min_value=0.25,
            ),
            _tiebreaker(
                "oowp",
                "Opponent's Opponent Win %",
                TiebreakerType.OPPONENT_OPPONENT_WIN_PERCENTAGE,
                min_value=0.25,
            ),
            _tiebreaker("head_to_head", "Head-to-Head", TiebreakerType.HEAD_TO_HEAD),
        ],
        is_system=True,
    )


_BUILDERS = (
    generic_swiss,
    magic_the_gathering,
    blood_bowl_naf,
    warhammer_40k_wtc,
    chess_fide,
    warhammer_age_of_sigmar,
    warhammer_old_world,
    kill_team,
    pokemon_tcg,
)


def system_profiles() -> Dict[str, GameProfile]:
    """Fresh copies of every built-in profile, keyed by slug."""
    profiles = (build() for build in _BUILDERS)
    return {profile.slug: profile for profile in profiles}


def get_system_profile(slug: str) -> Optional[GameProfile]:
    return system_profiles().get(slug)


__all__ = [
    "default_score_weights",
    "get_system_profile",
    "system_profiles",
]
