"""Pairing checker: validates a generated round against the pairing rules.

Absolute checks must never fail for a round produced by
:class:`~swisstour.pairing.SwissPairingService`. Quality checks flag
legitimate but undesirable outcomes of the greedy matcher, such as a
rematch that a different pairing of the same pool would have avoided.
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

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.participant import Participant
from swisstour.models.tournament import PairingHistory
from swisstour.type_hints import Matchups
from swisstour.utils import setup_logger

logger = setup_logger(__name__)

# Largest pool searched exhaustively for a rematch-free pairing
EXHAUSTIVE_REMATCH_LIMIT = 12


class CheckStatus(Enum):
    """Outcome of a single check."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class Severity(Enum):
    ABSOLUTE = "ABSOLUTE"  # Must never happen
    QUALITY = "QUALITY"  # Allowed, but worth flagging


@dataclass
class CheckResult:
    """Result of one validation check."""

    check: str
    status: CheckStatus
    severity: Severity = Severity.ABSOLUTE
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.status is CheckStatus.FAILED


@dataclass
class ValidationReport:
    """All check results for one round."""

    results: List[CheckResult]

    @property
    def violations(self) -> List[CheckResult]:
        return [
            r for r in self.results if r.failed and r.severity is Severity.ABSOLUTE
        ]

    @property
    def quality_warnings(self) -> List[CheckResult]:
        return [r for r in self.results if r.failed and r.severity is Severity.QUALITY]

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def summary(self) -> str:
        if self.is_valid:
            return (
                f"All absolute checks passed; "
                f"{len(self.quality_warnings)} quality warnings"
            )
        return (
            f"{len(self.violations)} absolute checks failed; "
            f"{len(self.quality_warnings)} quality warnings"
        )


def _passed(check: str, description: str, **details) -> CheckResult:
    return CheckResult(
        check, CheckStatus.PASSED, description=description, details=details
    )


def _failed(
    check: str, description: str, severity: Severity = Severity.ABSOLUTE, **details
) -> CheckResult:
    return CheckResult(
        check, CheckStatus.FAILED, severity, description=description, details=details
    )


def rematch_free_pairing_exists(ids: Sequence[str], history: PairingHistory) -> bool:
    """Whether ``ids`` (even count) can be paired with no rematch at all."""
    if not ids:
        return True
    first, rest = ids[0], list(ids[1:])
    for index, candidate in enumerate(rest):
        if history.have_played(first, candidate):
            continue
        if rematch_free_pairing_exists(rest[:index] + rest[index + 1 :], history):
            return True
    return False


class PairingValidator:
    """Checks one generated round."""

    def validate_round(
        self,
        matches: Sequence[TournamentMatch],
        participants: Sequence[Participant],
        previous_matchups: Union[Matchups, PairingHistory],
    ) -> ValidationReport:
        """Run every check against ``matches``.

        Args:
            matches: The round as returned by the pairing service
            participants: Everyone who was to be paired (bye flags as they
                were before the round)
            previous_matchups: History the round was paired against
        """
        history = (
            previous_matchups
            if isinstance(previous_matchups, PairingHistory)
            else PairingHistory.from_matchups(previous_matchups)
        )
        results = [
            self.check_everyone_paired_once(matches, participants),
            self.check_bye_parity(matches, participants),
            self.check_bye_matches(matches),
            self.check_table_numbers(matches),
            self.check_initial_results(matches),
            self.check_bye_fairness(matches, participants),
            self.check_rematches(matches, history),
        ]
        report = ValidationReport(results)
        logger.debug("Pairing validation: %s", report.summary)
        return report

    # ========== Absolute ==========

    def check_everyone_paired_once(
        self, matches: Sequence[TournamentMatch], participants: Sequence[Participant]
    ) -> CheckResult:
        appearances = Counter(
            pid
            for match in matches
            for pid in (match.player1_id, match.player2_id)
            if pid is not None
        )
        expected = {p.id for p in participants}
        duplicated = sorted(pid for pid, count in appearances.items() if count > 1)
        missing = sorted(expected - set(appearances))
        unknown = sorted(set(appearances) - expected)
        if duplicated or missing or unknown:
            return _failed(
                "every_participant_once",
                "Participants are missing, repeated or unknown",
                duplicated=duplicated,
                missing=missing,
                unknown=unknown,
            )
        return _passed("every_participant_once", "Every participant plays once")

    def check_bye_parity(
        self, matches: Sequence[TournamentMatch], participants: Sequence[Participant]
    ) -> CheckResult:
        byes = sum(1 for match in matches if match.is_bye)
        odd = len(participants) % 2 == 1
        if byes > 1 or (byes == 1) != odd:
            return _failed(
                "bye_iff_odd",
                f"{byes} byes for {len(participants)} participants",
                byes=byes,
            )
        return _passed("bye_iff_odd", "Bye present exactly when the count is odd")

    def check_bye_matches(self, matches: Sequence[TournamentMatch]) -> CheckResult:
        bad = [
            match.id
            for match in matches
            if match.is_bye
            and (match.table_number is not None or match.result is not MatchResult.BYE)
        ]
        if bad:
            return _failed(
                "bye_shape",
                "Bye matches must have no table and result 'bye'",
                matches=bad,
            )
        return _passed("bye_shape", "Bye matches are well formed")

    def check_table_numbers(self, matches: Sequence[TournamentMatch]) -> CheckResult:
        tables = [match.table_number for match in matches if not match.is_bye]
        expected = list(range(1, len(tables) + 1))
        if sorted(t for t in tables if t is not None) != expected or None in tables:
            return _failed(
                "table_numbers",
                "Table numbers are not exactly 1..k",
                tables=tables,
            )
        return _passed("table_numbers", f"Tables 1..{len(tables)} assigned")

    def check_initial_results(self, matches: Sequence[TournamentMatch]) -> CheckResult:
        decided = [
            match.id
            for match in matches
            if not match.is_bye and match.result is not MatchResult.NOT_PLAYED
        ]
        if decided:
            return _failed(
                "initial_results",
                "New regular matches must start not played",
                matches=decided,
            )
        return _passed("initial_results", "Regular matches start not played")

    # ========== Quality ==========

    def check_bye_fairness(
        self, matches: Sequence[TournamentMatch], participants: Sequence[Participant]
    ) -> CheckResult:
        bye = next((match for match in matches if match.is_bye), None)
        if bye is None:
            return CheckResult(
                "bye_fairness", CheckStatus.NOT_APPLICABLE, Severity.QUALITY
            )
        by_id = {p.id: p for p in participants}
        receiver = by_id.get(bye.player1_id)
        others_without = [
            p.id
            for p in participants
            if not p.has_received_bye and p.id != bye.player1_id
        ]
        if receiver is not None and receiver.has_received_bye and others_without:
            return _failed(
                "bye_fairness",
                f"{receiver.id} received a second bye before others had one",
                Severity.QUALITY,
                participant_id=receiver.id,
            )
        return _passed("bye_fairness", "Bye went to someone without one")

    def check_rematches(
        self, matches: Sequence[TournamentMatch], history: PairingHistory
    ) -> CheckResult:
        rematches = [
            (match.player1_id, match.player2_id)
            for match in matches
            if not match.is_bye
            and history.have_played(match.player1_id, match.player2_id)
        ]
        if not rematches:
            return _passed("no_avoidable_rematch", "No rematches")

        pool = [
            pid
            for match in matches
            if not match.is_bye
            for pid in (match.player1_id, match.player2_id)
        ]
        if len(pool) > EXHAUSTIVE_REMATCH_LIMIT:
            return CheckResult(
                "no_avoidable_rematch",
                CheckStatus.NOT_APPLICABLE,
                Severity.QUALITY,
                description=f"Pool of {len(pool)} too large to search",
                details={"rematches": rematches},
            )
        if rematch_free_pairing_exists(pool, history):
            return _failed(
                "no_avoidable_rematch",
                "A rematch-free pairing of this pool existed",
                Severity.QUALITY,
                rematches=rematches,
            )
        return _passed(
            "no_avoidable_rematch", "Rematches were unavoidable", rematches=rematches
        )
