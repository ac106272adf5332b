"""Rebuild one hole's leaderboard as it stood at a cutoff.

The API only hands us an append-only log of submissions, so ranks, medals and
scores are derived here. Each stage takes a tuple and returns a new one:

    measure -> qualifying -> best_per_golfer -> ranking_order -> assign_ranks -> apply_scores

`narrow` is applied last and only hides rows; it never recomputes anything.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime
from operator import attrgetter
from typing import Iterable, Optional, Tuple

from golf_rivals.models import Scoring, SolutionLog, Submission

SOLE_LEADER = 0  # rank sentinel: unambiguous leader (diamond)


@dataclass(frozen=True)
class ScoredSubmission:
    submission: Submission
    length: int
    rank: Optional[int] = None
    score: Optional[float] = None

    @property
    def golfer(self) -> str:
        return self.submission.golfer

    @property
    def submitted(self) -> datetime:
        return self.submission.submitted


@dataclass(frozen=True)
class Board:
    hole: str
    entries: Tuple[ScoredSubmission, ...] = ()
    leader_length: Optional[int] = None
    name: str = ""

    @property
    def title(self) -> str:
        return self.name or self.hole

    @property
    def golfers(self) -> Tuple[str, ...]:
        return tuple(e.golfer for e in self.entries)

    def entry_for(self, golfer: str) -> Optional[ScoredSubmission]:
        for entry in self.entries:
            if entry.golfer == golfer:
                return entry
        return None

    def length_of(self, golfer: str) -> float:
        entry = self.entry_for(golfer)
        return math.inf if entry is None else entry.length


# ----------------------------- STAGES ---------------------------------

_LENGTH_OF = {
    Scoring.BYTES: attrgetter("bytes"),
    Scoring.CHARS: attrgetter("chars"),
}


def measure(submissions: Iterable[Submission], scoring) -> Tuple[ScoredSubmission, ...]:
    length_of = _LENGTH_OF[Scoring.parse(scoring)]
    return tuple(ScoredSubmission(s, length_of(s)) for s in submissions)


def qualifying(
    entries: Iterable[ScoredSubmission], scoring: Scoring, cutoff: datetime
) -> Tuple[ScoredSubmission, ...]:
    """Submissions made under `scoring` strictly before `cutoff`."""
    return tuple(
        e for e in entries
        if e.submission.scoring == scoring.value and e.submitted < cutoff
    )


def best_per_golfer(entries: Iterable[ScoredSubmission]) -> Tuple[ScoredSubmission, ...]:
    """Each golfer's shortest submission.

    Equal lengths go to the earlier submission, then to the first one in the log.
    """
    best = {}
    for entry in entries:
        kept = best.get(entry.golfer)
        if kept is None or (entry.length, entry.submitted) < (kept.length, kept.submitted):
            best[entry.golfer] = entry
    return tuple(best.values())


def ranking_order(entries: Iterable[ScoredSubmission]) -> Tuple[ScoredSubmission, ...]:
    # two stable passes: whoever got there first wins a length tie
    by_time = sorted(entries, key=lambda e: e.submitted)
    return tuple(sorted(by_time, key=lambda e: e.length))


def assign_ranks(ordered: Tuple[ScoredSubmission, ...]) -> Tuple[ScoredSubmission, ...]:
    """Competition ranking (1, 1, 3) over an already ordered field."""
    ranks = []
    for i, entry in enumerate(ordered):
        if i and entry.length == ordered[i - 1].length:
            ranks.append(ranks[-1])
        else:
            ranks.append(i + 1)
    if len(ordered) >= 2 and ordered[0].length < ordered[1].length:
        ranks[0] = SOLE_LEADER
    return tuple(replace(e, rank=r) for e, r in zip(ordered, ranks))


def apply_scores(ranked: Tuple[ScoredSubmission, ...]) -> Tuple[ScoredSubmission, ...]:
    if not ranked:
        return ()
    leader = ranked[0].length
    out = []
    for entry in ranked:
        if entry.length == leader:
            score = 1000.0
        else:
            score = leader / entry.length * 1000
        out.append(replace(entry, score=score))
    return tuple(out)


# ----------------------------- BOARDS ---------------------------------

def build_board(log: SolutionLog, scoring, cutoff: datetime) -> Board:
    scoring = Scoring.parse(scoring)
    entries = measure(log.submissions, scoring)
    entries = qualifying(entries, scoring, cutoff)
    entries = best_per_golfer(entries)
    entries = ranking_order(entries)
    entries = apply_scores(assign_ranks(entries))
    leader = entries[0].length if entries else None
    return Board(hole=log.hole, entries=entries, leader_length=leader, name=log.name)


def narrow(board: Board, golfers: Iterable[str]) -> Board:
    keep = set(golfers)
    return replace(board, entries=tuple(e for e in board.entries if e.golfer in keep))
