"""Tests for the head-to-head aggregation across holes."""

from __future__ import annotations

from datetime import datetime, timezone

from golf_rivals.aggregate import build_boards, compare, sort_score
from golf_rivals.models import ReportConfig, SolutionLog, Submission
from golf_rivals.reconstruct import build_board

AFTER_ALL = datetime(2030, 1, 1, tzinfo=timezone.utc)


def _log(hole: str, **lengths: int) -> SolutionLog:
    subs = tuple(
        Submission(
            hole=hole,
            golfer=golfer,
            lang="rust",
            scoring="bytes",
            bytes=length,
            chars=length,
            submitted=f"2024-02-{i + 1:02d}T08:30:00Z",
        )
        for i, (golfer, length) in enumerate(lengths.items())
    )
    return SolutionLog(hole=hole, submissions=subs)


def _boards(*logs: SolutionLog):
    return [build_board(log, "bytes", AFTER_ALL) for log in logs]


def test_win_draw_loss_tally_and_tie_headline() -> None:
    boards = _boards(_log("a", me=10, them=12), _log("b", me=8, them=8), _log("c", me=20, them=15))
    report = compare(boards, ["me", "them"])

    assert (report.wins, report.draws, report.losses) == (1, 1, 1)
    assert report.delta == 0
    assert report.total == 3 == len(report.boards)
    assert report.headline == "Tie"


def test_headline_pluralizes() -> None:
    one_loss = compare(_boards(_log("a", me=11, them=10)), ["me", "them"])
    two_wins = compare(_boards(_log("a", me=9, them=10), _log("b", me=9, them=10)), ["me", "them"])

    assert one_loss.headline == "1 loss"
    assert two_wins.headline == "2 wins"


def test_boards_missing_either_golfer_are_dropped() -> None:
    boards = _boards(_log("both", me=10, them=11), _log("only-me", me=10, x=5), _log("only-them", them=4))
    report = compare(boards, ["me", "them", "x"])

    assert [b.hole for b in report.boards] == ["both"]


def test_empty_comparison_is_valid() -> None:
    report = compare([], ["me", "them"])

    assert report.boards == ()
    assert (report.wins, report.draws, report.losses, report.total) == (0, 0, 0, 0)
    assert report.headline == "Tie"


def test_sort_score_rewards_sole_leader() -> None:
    board = _boards(_log("a", me=10, them=11))[0]

    assert sort_score("me", board) == 10_000_001
    assert sort_score("them", board) == round(10 / 11 * 1000 * 10000)
    assert sort_score("nobody", board) == 0


def test_default_order_is_descending_gap_and_reverse_flips_it() -> None:
    boards = _boards(
        _log("small-lead", me=10, them=11),
        _log("trailing", me=20, them=10),
        _log("big-lead", me=10, them=20),
    )

    default = compare(boards, ["me", "them"])
    flipped = compare(boards, ["me", "them"], reverse=True)

    assert [b.hole for b in default.boards] == ["big-lead", "small-lead", "trailing"]
    assert [b.hole for b in flipped.boards] == ["trailing", "small-lead", "big-lead"]


def test_equal_gaps_fall_back_to_own_standing() -> None:
    # both draws have a gap of 0, so ascending own score decides
    boards = _boards(
        _log("leading-draw", me=5, them=5),
        _log("back-of-field-draw", me=10, them=10, x=5),
    )
    flipped = compare(boards, ["me", "them"], reverse=True)

    assert [b.hole for b in flipped.boards] == ["back-of-field-draw", "leading-draw"]


def test_build_boards_ranks_against_full_field_then_narrows() -> None:
    config = ReportConfig(participants=("me", "them"), cutoff=AFTER_ALL)
    (board,) = build_boards([_log("a", x=4, me=8, them=10)], config)

    assert board.golfers == ("me", "them")
    assert board.leader_length == 4
    assert board.entry_for("me").rank == 2
    assert board.entry_for("me").score == 500.0
