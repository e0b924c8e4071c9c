from swisstour.models.match import MatchResult, TournamentMatch
from swisstour.models.participant import Participant
from swisstour.models.tournament import PairingHistory
from swisstour.validation import (
    CheckStatus,
    PairingValidator,
    Severity,
    rematch_free_pairing_exists,
)


def _participants(*ids, with_bye=()):
    return [Participant(id=pid, has_received_bye=pid in with_bye) for pid in ids]


def _round(*pairs):
    matches = []
    table = 1
    for p1, p2 in pairs:
        if p2 is None:
            matches.append(TournamentMatch(player1_id=p1))
            continue
        matches.append(
            TournamentMatch(player1_id=p1, player2_id=p2, table_number=table)
        )
        table += 1
    return matches


def _result(report, check):
    return next(r for r in report.results if r.check == check)


def test_clean_round_is_valid():
    report = PairingValidator().validate_round(
        _round(("a", "b"), ("c", "d"), ("e", None)),
        _participants("a", "b", "c", "d", "e"),
        [],
    )
    assert report.is_valid
    assert report.quality_warnings == []
    assert "All absolute checks passed" in report.summary


def test_missing_and_duplicated_participants():
    report = PairingValidator().validate_round(
        _round(("a", "b"), ("a", "c")),
        _participants("a", "b", "c", "d"),
        [],
    )
    result = _result(report, "every_participant_once")
    assert result.failed
    assert result.details["duplicated"] == ["a"]
    assert result.details["missing"] == ["d"]
    assert not report.is_valid


def test_bye_with_even_count_fails():
    report = PairingValidator().validate_round(
        _round(("a", "b"), ("c", None), ("d", None)),
        _participants("a", "b", "c", "d"),
        [],
    )
    assert _result(report, "bye_iff_odd").failed


def test_table_numbers_must_be_contiguous():
    matches = [
        TournamentMatch(player1_id="a", player2_id="b", table_number=1),
        TournamentMatch(player1_id="c", player2_id="d", table_number=3),
    ]
    report = PairingValidator().validate_round(
        matches, _participants("a", "b", "c", "d"), []
    )
    assert _result(report, "table_numbers").failed


def test_decided_regular_match_fails_initial_results():
    matches = _round(("a", "b"))
    matches[0].report_result(MatchResult.DRAW)
    report = PairingValidator().validate_round(matches, _participants("a", "b"), [])
    assert _result(report, "initial_results").failed


def test_second_bye_is_a_quality_warning():
    report = PairingValidator().validate_round(
        _round(("b", "c"), ("a", None)),
        _participants("a", "b", "c", with_bye={"a"}),
        [],
    )
    result = _result(report, "bye_fairness")
    assert result.failed
    assert result.severity is Severity.QUALITY
    assert report.is_valid


def test_avoidable_rematch_is_flagged():
    history = [("a", "b")]
    report = PairingValidator().validate_round(
        _round(("a", "b"), ("c", "d")),
        _participants("a", "b", "c", "d"),
        history,
    )
    result = _result(report, "no_avoidable_rematch")
    assert result.failed
    assert result.severity is Severity.QUALITY
    assert report.quality_warnings == [result]


def test_unavoidable_rematch_passes():
    history = [("a", "b")]
    report = PairingValidator().validate_round(
        _round(("a", "b")), _participants("a", "b"), history
    )
    result = _result(report, "no_avoidable_rematch")
    assert result.status is CheckStatus.PASSED
    assert result.details["rematches"] == [("a", "b")]


def test_rematch_free_pairing_search():
    history = PairingHistory.from_matchups([("a", "b"), ("c", "d"), ("a", "c")])
    assert rematch_free_pairing_exists(["a", "b", "c", "d"], history)
    history.add_pairing("a", "d")
    assert not rematch_free_pairing_exists(["a", "b", "c", "d"], history)
