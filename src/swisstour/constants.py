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

# --- Score weight keys ---
WEIGHT_WIN = "win"
WEIGHT_DRAW = "draw"
WEIGHT_LOSS = "loss"
WEIGHT_BYE = "bye"
WEIGHT_KEYS = (WEIGHT_WIN, WEIGHT_DRAW, WEIGHT_LOSS, WEIGHT_BYE)

# Default points per outcome (3-1-0, full-point bye)
WIN_POINTS = 3.0
DRAW_POINTS = 1.0
LOSS_POINTS = 0.0
BYE_POINTS = 3.0

DEFAULT_SCORE_POINTS = {
    WEIGHT_WIN: WIN_POINTS,
    WEIGHT_DRAW: DRAW_POINTS,
    WEIGHT_LOSS: LOSS_POINTS,
    WEIGHT_BYE: BYE_POINTS,
}

DEFAULT_SCORE_NAMES = {
    WEIGHT_WIN: "Win",
    WEIGHT_DRAW: "Draw",
    WEIGHT_LOSS: "Loss",
    WEIGHT_BYE: "Bye",
}

# Progressive falls back to nominal result points (1 / 0.5 / 0) times this
# factor when no score weights are supplied.
PROGRESSIVE_POINT_SCALE = 3.0

# --- Outcome labels (a match result seen from one side) ---
OUTCOME_WIN = "win"
OUTCOME_DRAW = "draw"
OUTCOME_LOSS = "loss"
OUTCOME_BYE = "bye"
OUTCOME_NOT_PLAYED = "not_played"

# Labels a Result condition may test for
VALID_RESULT_VALUES = (OUTCOME_WIN, OUTCOME_DRAW, OUTCOME_LOSS, OUTCOME_BYE)

# --- Comparison operators for stat conditions ---
OP_GT = ">"
OP_GTE = ">="
OP_LT = "<"
OP_LTE = "<="
OP_EQ = "=="
COMPARISON_OPERATORS = (OP_GT, OP_GTE, OP_LT, OP_LTE, OP_EQ)

# --- Tiebreaker keys ---
TB_BUCHHOLZ = "buchholz"
TB_MEDIAN_BUCHHOLZ = "median_buchholz"
TB_PROGRESSIVE = "progressive"
TB_HEAD_TO_HEAD = "head_to_head"
TB_OPPONENT_WIN_PERCENTAGE = "opponent_win_percentage"
TB_OWP = "owp"
TB_OOWP = "oowp"
TB_GWP = "gwp"
TB_OGWP = "ogwp"
TB_SONNEBORN_BERGER = "sonneborn_berger"
TB_STAT_SUM = "stat_sum"
TB_STAT_DIFF = "stat_diff"
TB_STAT_AVERAGE = "stat_average"
TB_STAT_MAX = "stat_max"
TB_STRENGTH_OF_SCHEDULE = "sos"
TB_MARGIN_OF_VICTORY = "mov"
TB_RANDOM = "random"

# Default display names for tiebreaks
TIEBREAK_NAMES = {
    TB_BUCHHOLZ: "Buchholz",
    TB_MEDIAN_BUCHHOLZ: "Median Buchholz",
    TB_PROGRESSIVE: "Progressive",
    TB_HEAD_TO_HEAD: "Head-to-Head",
    TB_OPPONENT_WIN_PERCENTAGE: "Opponent Win %",
    TB_OWP: "Opponent Win %",
    TB_OOWP: "Opponent's Opponent Win %",
    TB_GWP: "Game Win %",
    TB_OGWP: "Opponent Game Win %",
    TB_SONNEBORN_BERGER: "Sonneborn-Berger",
    TB_STAT_SUM: "Stat Total",
    TB_STAT_DIFF: "Stat Differential",
    TB_STAT_AVERAGE: "Stat Average",
    TB_STAT_MAX: "Stat Best",
    TB_STRENGTH_OF_SCHEDULE: "Strength of Schedule",
    TB_MARGIN_OF_VICTORY: "Margin of Victory",
    TB_RANDOM: "Random",
}

# Default order used by the standings calculator if not configured otherwise
DEFAULT_TIEBREAK_ORDER = [
    TB_BUCHHOLZ,
    TB_MEDIAN_BUCHHOLZ,
    TB_PROGRESSIVE,
    TB_OPPONENT_WIN_PERCENTAGE,
]

# Median Buchholz needs this many opponents before trimming best and worst
MEDIAN_BUCHHOLZ_MIN_OPPONENTS = 3

# --- Ids ---
ROUND_ID_FORMAT = "round-{}"
MATCH_ID_PREFIX = "Match"
STANDING_ID_PREFIX = "Standing"
