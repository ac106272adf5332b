from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from golf_rivals.models import ReportConfig, SolutionLog
from golf_rivals.reconstruct import SOLE_LEADER, Board, build_board, narrow

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ComparisonReport:
    me: str
    them: str
    boards: Tuple[Board, ...]
    wins: int = 0
    draws: int = 0
    losses: int = 0

    @property
    def delta(self) -> int:
        return self.losses - self.wins

    @property
    def total(self) -> int:
        return self.wins + self.draws + self.losses

    @property
    def headline(self) -> str:
        n = abs(self.delta)
        if self.delta > 0:
            return f"{n} {'loss' if n == 1 else 'losses'}"
        if self.delta < 0:
            return f"{n} {'win' if n == 1 else 'wins'}"
        return "Tie"


def build_boards(logs: Iterable[SolutionLog], config: ReportConfig) -> List[Board]:
    """Reconstruct every hole against the full field, then keep only tracked golfers."""
    boards = []
    for solution_log in logs:
        board = build_board(solution_log, config.scoring, config.cutoff)
        boards.append(narrow(board, config.participants))
    return boards


def sort_score(golfer: str, board: Board) -> int:
    entry = board.entry_for(golfer)
    if entry is None:
        return 0
    # half away from zero; a diamond edges out anyone it merely ties on score
    proxy = math.floor(entry.score * 10000 + 0.5)
    return proxy + (1 if entry.rank == SOLE_LEADER else 0)


def compare(boards: Iterable[Board], participants: Sequence[str], reverse: bool = False) -> ComparisonReport:
    me, them = participants[0], participants[1]
    shared = [b for b in boards if b.entry_for(me) is not None and b.entry_for(them) is not None]

    ordered = sorted(shared, key=lambda b: sort_score(me, b))
    ordered = sorted(ordered, key=lambda b: sort_score(me, b) - sort_score(them, b))
    if not reverse:
        ordered.reverse()

    wins = draws = losses = 0
    for board in ordered:
        mine, theirs = board.length_of(me), board.length_of(them)
        if mine < theirs:
            wins += 1
        elif mine == theirs:
            draws += 1
        else:
            losses += 1
    log.debug("%s vs %s: %d shared holes", me, them, len(ordered))
    return ComparisonReport(me, them, tuple(ordered), wins, draws, losses)
