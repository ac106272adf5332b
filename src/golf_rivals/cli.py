from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional, Sequence, Tuple

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from golf_rivals import settings
from golf_rivals.aggregate import ComparisonReport, build_boards, compare
from golf_rivals.cutoff import parse_cutoff
from golf_rivals.errors import ConfigurationError, CutoffFormatError, GolfRivalsError
from golf_rivals.models import ReportConfig, SolutionLog
from golf_rivals.reconstruct import build_board
from golf_rivals.render import render_board_detail, render_report
from golf_rivals.sources.codegolf import fetch_all_logs, fetch_holes

log = logging.getLogger("golf_rivals")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="golf-rivals",
        description="Compare two code.golf golfers hole by hole, as the leaderboards stood at a point in time.",
    )
    parser.add_argument("me", help="Your code.golf handle")
    parser.add_argument("them", help="The golfer to compare against")
    parser.add_argument("--lang", default=settings.DEFAULT_LANGUAGE, help="Language whose leaderboards are compared")
    parser.add_argument("--scoring", choices=["bytes", "chars"], default=settings.DEFAULT_SCORING)
    parser.add_argument(
        "--cutoff",
        default=settings.DEFAULT_CUTOFF,
        help="now, YYYY, YYYY-MM, YYYY-MM-DD (inclusive) or YYYY-MM-DDTHH:MM[:SS[.ffffff]]",
    )
    parser.add_argument("--reference", help="A third golfer drawn on the bars for scale")
    parser.add_argument("--name-width", type=int, default=settings.NAME_WIDTH)
    parser.add_argument("--bar-width", type=int, default=settings.BAR_WIDTH)
    parser.add_argument("--reverse", action="store_true", help="List the holes you lead by most first")
    parser.add_argument("--show-lengths", action="store_true", help="Show both golfers' lengths after each bar")
    parser.add_argument("--hole", help="Also print the full reconstructed leaderboard for this hole id")
    noise = parser.add_mutually_exclusive_group()
    noise.add_argument("-v", "--verbose", action="store_true")
    noise.add_argument("-q", "--quiet", action="store_true")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    level = logging.DEBUG if verbose else (logging.WARNING if quiet else logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s | %(levelname)s | %(message)s")


def make_config(args: argparse.Namespace) -> ReportConfig:
    cutoff = parse_cutoff(args.cutoff)
    participants = [args.me, args.them]
    if args.reference:
        participants.append(args.reference)
    try:
        return ReportConfig(
            participants=tuple(participants),
            cutoff=cutoff.instant,
            cutoff_label=cutoff.label,
            scoring=args.scoring,
            language=args.lang,
            name_width=args.name_width,
            bar_width=args.bar_width,
            reverse=args.reverse,
            show_lengths=args.show_lengths,
        )
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e


def build_report(logs: Sequence[SolutionLog], config: ReportConfig) -> Tuple[ComparisonReport, List[str]]:
    """Raw logs in, report lines out. No I/O."""
    boards = build_boards(logs, config)
    report = compare(boards, config.participants, reverse=config.reverse)
    return report, render_report(report, config)


def run(config: ReportConfig, console: Console, hole: Optional[str] = None) -> ComparisonReport:
    log.info("Fetching list of holes...")
    holes = fetch_holes()
    if hole and hole not in {h.id for h in holes}:
        raise ConfigurationError(f"Unknown hole {hole!r}")

    logs = fetch_all_logs(holes, config.language)

    log.info("Processing data...")
    before = time.perf_counter()
    report, lines = build_report(logs, config)
    detail = None
    if hole:
        solution_log = next(sl for sl in logs if sl.hole == hole)
        detail = render_board_detail(build_board(solution_log, config.scoring, config.cutoff), config)
    log.info("Done processing in %dms.", (time.perf_counter() - before) * 1000)

    for line in lines:
        console.print(line, highlight=False, soft_wrap=True)
    if detail is not None:
        console.print()
        console.print(detail)
    return report


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)
    err = Console(stderr=True)

    try:
        config = make_config(args)
    except CutoffFormatError as e:
        err.print(f"[red]Unrecognized cutoff[/red] {escape(repr(e.text))}. Supported formats:")
        for fmt in e.formats:
            err.print(f"  {fmt}", highlight=False)
        return 2
    except ConfigurationError as e:
        err.print(f"[red]Invalid options:[/red] {escape(str(e))}")
        return 2

    try:
        run(config, Console(), hole=args.hole)
    except GolfRivalsError as e:
        log.error("%s", e)
        err.print(f"[red]Aborted:[/red] {escape(str(e))}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
