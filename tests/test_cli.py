"""End-to-end tests of the command line with the API layer stubbed."""

from __future__ import annotations

import pytest

from golf_rivals import cli
from golf_rivals.errors import FetchError
from golf_rivals.models import Hole, SolutionLog, Submission


def _sub(hole: str, golfer: str, length: int, when: str) -> Submission:
    return Submission(
        hole=hole, golfer=golfer, lang="rust", scoring="bytes", bytes=length, chars=length, submitted=when
    )


HOLES = [Hole(id="fizz-buzz", name="Fizz Buzz"), Hole(id="quine", name="Quine")]
LOGS = [
    SolutionLog(
        hole="fizz-buzz",
        name="Fizz Buzz",
        submissions=(
            _sub("fizz-buzz", "acotis", 80, "2024-03-01T00:00:00Z"),
            _sub("fizz-buzz", "lynn", 90, "2024-04-01T00:00:00Z"),
            _sub("fizz-buzz", "lynn", 70, "2025-06-01T00:00:00Z"),
        ),
    ),
    SolutionLog(
        hole="quine",
        name="Quine",
        submissions=(
            _sub("quine", "acotis", 30, "2024-03-01T00:00:00Z"),
            _sub("quine", "JayXon", 25, "2024-01-01T00:00:00Z"),
        ),
    ),
]


@pytest.fixture
def api(monkeypatch: pytest.MonkeyPatch) -> dict:
    calls = {"holes": 0, "logs": 0}

    def fake_holes():
        calls["holes"] += 1
        return HOLES

    def fake_logs(holes, language):
        calls["logs"] += 1
        assert language == "rust"
        return LOGS

    monkeypatch.setattr(cli, "fetch_holes", fake_holes)
    monkeypatch.setattr(cli, "fetch_all_logs", fake_logs)
    return calls


def test_report_as_of_cutoff(api: dict, capsys: pytest.CaptureFixture) -> None:
    code = cli.main(["acotis", "lynn", "--cutoff", "2024", "--name-width", "12", "--bar-width", "20"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Fizz Buzz" in out
    assert "Quine" not in out  # lynn never played it
    assert "-10 bytes (80)" in out
    assert "1 win (1 hole)" in out
    assert "acotis vs lynn" in out


def test_later_cutoff_sees_the_newer_submission(api: dict, capsys: pytest.CaptureFixture) -> None:
    code = cli.main(["acotis", "lynn", "--cutoff", "2025-06-02"])
    out = capsys.readouterr().out

    assert code == 0
    assert "+10 bytes (70)" in out
    assert "1 loss (1 hole)" in out


def test_bad_cutoff_exits_before_fetching(api: dict, capsys: pytest.CaptureFixture) -> None:
    code = cli.main(["acotis", "lynn", "--cutoff", "last tuesday"])
    captured = capsys.readouterr()

    assert code == 2
    assert "YYYY-MM-DD" in captured.err
    assert captured.out == ""
    assert api == {"holes": 0, "logs": 0}


@pytest.mark.parametrize("argv", [["acotis", "acotis"], ["acotis", "lynn", "--bar-width", "0"]])
def test_invalid_options_exit_before_fetching(api: dict, argv: list) -> None:
    assert cli.main(argv) == 2
    assert api["holes"] == 0


def test_fetch_failure_prints_no_report(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture) -> None:
    def failing():
        raise FetchError("Could not fetch the list of holes: HTTP 503")

    monkeypatch.setattr(cli, "fetch_holes", failing)

    code = cli.main(["acotis", "lynn"])
    captured = capsys.readouterr()

    assert code == 1
    assert captured.out == ""
    assert "HTTP 503" in captured.err


def test_hole_detail_shows_full_field(api: dict, capsys: pytest.CaptureFixture) -> None:
    code = cli.main(["acotis", "lynn", "--reference", "JayXon", "--hole", "quine"])
    out = capsys.readouterr().out

    assert code == 0
    assert "JayXon" in out
    assert "◆" in out


def test_unknown_hole_aborts(api: dict, capsys: pytest.CaptureFixture) -> None:
    assert cli.main(["acotis", "lynn", "--hole", "no-such-hole"]) == 1
    assert api["logs"] == 0
