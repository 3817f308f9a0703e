"""Tests for the simulation CLI."""

import pytest

from cli.simulate import main


def test_prints_final_results(capsys):
    exit_code = main(["--days", "5", "--fixed-games", "--games-per-day", "2", "--seed", "1"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "FINAL RESULTS" in out
    for label in ("Flat", "Kelly/3", "HalfKelly/3"):
        assert label in out
    assert "Games Per Day: 2" in out


def test_show_log(capsys):
    main(["--days", "2", "--seed", "3", "--show-log"])

    out = capsys.readouterr().out
    assert "Day 1:" in out
    assert "Day 2:" in out


def test_seeded_runs_repeat(capsys):
    main(["--days", "20", "--seed", "5"])
    first = capsys.readouterr().out
    main(["--days", "20", "--seed", "5"])
    second = capsys.readouterr().out

    assert first == second


def test_invalid_configuration_exit_code(capsys):
    exit_code = main(["--days", "0"])

    assert exit_code == 2
    assert "day_count" in capsys.readouterr().err


def test_bad_amount_is_an_argument_error():
    with pytest.raises(SystemExit) as exc_info:
        main(["--bankroll", "lots"])

    assert exc_info.value.code == 2
