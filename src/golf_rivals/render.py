"""Text report: one bar per hole plus a summary block.

Lines are rich console markup. Column layout is driven entirely by
ReportConfig.name_width and ReportConfig.bar_width:

    <hole name, right-aligned> <bar> <delta annotation>
"""
from __future__ import annotations

import math
from typing import Dict, List

from rich.cells import cell_len, set_cell_size
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from golf_rivals import settings
from golf_rivals.aggregate import ComparisonReport
from golf_rivals.errors import RenderError
from golf_rivals.models import ReportConfig
from golf_rivals.reconstruct import SOLE_LEADER, Board


def _fit(name: str, width: int) -> str:
    """Right-align `name` in exactly `width` terminal cells."""
    cells = cell_len(name)
    if cells <= width:
        return " " * (width - cells) + name
    return set_cell_size(name, width - 1) + "…"


def _center(markup: str, width: int) -> str:
    visible = Text.from_markup(markup).cell_len
    return " " * max(0, (width - visible) // 2) + markup


def _plural(n: int, word: str) -> str:
    return f"{n} {word if n == 1 else word + 's'}"


def place_markers(board: Board, width: int) -> Dict[str, int]:
    """Bar cell for each golfer on the board, in board order.

    A marker whose cell is taken slides left to the nearest free cell; if it
    runs off the left edge it slides right from its original cell instead.
    """
    if len(board.entries) > width:
        raise RenderError(
            f"{len(board.entries)} markers do not fit in a bar {width} cells wide ({board.hole})"
        )
    taken = set()
    cells = {}
    for entry in board.entries:
        want = math.floor(entry.score / 1000 * (width - 1))
        want = min(max(want, 0), width - 1)
        cell = want
        while cell in taken and cell > 0:
            cell -= 1
        if cell in taken:
            cell = want
            while cell in taken:
                cell += 1
        taken.add(cell)
        cells[entry.golfer] = cell
    return cells


def render_bar(board: Board, config: ReportConfig) -> str:
    markers = {cell: golfer for golfer, cell in place_markers(board, config.bar_width).items()}
    out = []
    filler = 0
    for i in range(config.bar_width):
        golfer = markers.get(i)
        if golfer is None:
            filler += 1
            continue
        if filler:
            out.append(f"[dim]{settings.FILLER * filler}[/dim]")
            filler = 0
        color = config.color_for(golfer)
        out.append(f"[bold {color}]{escape(golfer[:1])}[/]")
    if filler:
        out.append(f"[dim]{settings.FILLER * filler}[/dim]")
    return "".join(out)


def render_delta(board: Board, config: ReportConfig) -> str:
    mine = int(board.length_of(config.me))
    theirs = int(board.length_of(config.them))
    diff = mine - theirs
    if diff < 0:
        color = settings.FAVORABLE
    elif diff > 0:
        color = settings.UNFAVORABLE
    else:
        color = settings.EVEN
    unit = config.scoring.value[:-1]  # "byte" / "char"
    sign = "+" if diff > 0 else ("-" if diff < 0 else "±")
    text = f"[{color}]{sign}{_plural(abs(diff), unit)}[/{color}]"
    if config.show_lengths:
        return f"{text} ({board.leader_length}: {mine} vs {theirs})"
    return f"{text} ({board.leader_length})"


def render_line(board: Board, config: ReportConfig) -> str:
    name = escape(_fit(board.title, config.name_width))
    return f"{name} {render_bar(board, config)} {render_delta(board, config)}"


def render_summary(report: ComparisonReport, config: ReportConfig) -> List[str]:
    pad = " " * (config.name_width + 1)
    width = config.bar_width
    if report.delta > 0:
        tone = settings.UNFAVORABLE
    elif report.delta < 0:
        tone = settings.FAVORABLE
    else:
        tone = settings.EVEN
    tally = (
        f"[{settings.FAVORABLE}]{report.wins}[/] / "
        f"[{settings.EVEN}]{report.draws}[/] / "
        f"[{settings.UNFAVORABLE}]{report.losses}[/]"
    )
    headline = f"[bold {tone}]{report.headline}[/] ({_plural(report.total, 'hole')})"
    banner = (
        f"[bold {config.color_for(report.me)}]{escape(report.me)}[/] vs "
        f"[bold {config.color_for(report.them)}]{escape(report.them)}[/]"
    )
    return [
        "",
        pad + _center(tally, width),
        pad + _center(headline, width),
        pad + _center(banner, width),
    ]


def render_report(report: ComparisonReport, config: ReportConfig) -> List[str]:
    lines = [render_line(board, config) for board in report.boards]
    lines.extend(render_summary(report, config))
    return lines


def render_board_detail(board: Board, config: ReportConfig) -> Table:
    """The whole reconstructed leaderboard for one hole."""
    table = Table(title=f"{board.title} ({config.scoring.value}, before {config.cutoff_label})")
    table.add_column("Rank", justify="right")
    table.add_column("Golfer")
    table.add_column("Length", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Lang")
    table.add_column("Submitted")
    for entry in board.entries:
        rank = "◆" if entry.rank == SOLE_LEADER else str(entry.rank)
        golfer = escape(entry.golfer)
        if entry.golfer in config.participants:
            golfer = f"[bold {config.color_for(entry.golfer)}]{golfer}[/]"
        table.add_row(
            rank,
            golfer,
            str(entry.length),
            f"{entry.score:.1f}",
            entry.submission.language,
            entry.submitted.isoformat(timespec="seconds"),
        )
    return table
