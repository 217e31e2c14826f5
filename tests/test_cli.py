"""Tests for the terminal front end."""

import io

import pytest

from tictactoe import __version__
from tictactoe.ai import MinimaxAI
from tictactoe.cli import main, parse_move, play
from tictactoe.errors import GameError, OutOfRange
from tictactoe.game import GameEngine
from tictactoe.rules import Player


def test_parse_move_accepts_coordinates_and_positions():
    engine = GameEngine()
    assert parse_move("1 2\n", engine) == 7
    assert parse_move("2,0", engine) == 2
    assert parse_move("5", engine) == 5


@pytest.mark.parametrize("text", ["", "a b", "1 2 3"])
def test_parse_move_rejects_garbage(text):
    with pytest.raises(GameError):
        parse_move(text, GameEngine())


def test_parse_move_rejects_off_grid_coordinates():
    with pytest.raises(OutOfRange):
        parse_move("3 3", GameEngine())


def test_play_until_game_over():
    moves = ["nonsense"] + [str(i) for i in range(9)] * 2
    stdin = io.StringIO("\n".join(moves) + "\n")
    stdout = io.StringIO()

    winner = play(GameEngine(), MinimaxAI(player=Player.B), stdin=stdin, stdout=stdout)

    output = stdout.getvalue()
    assert winner is not Player.A
    assert "Invalid move" in output
    assert "Game over" in output


def test_play_quits_on_request():
    stdout = io.StringIO()
    result = play(
        GameEngine(), MinimaxAI(), stdin=io.StringIO("q\n"), stdout=stdout
    )
    assert result is None
    assert "Bye." in stdout.getvalue()


def test_version_flag(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


@pytest.mark.parametrize("size", ["4", "0"])
def test_unsupported_size_is_a_usage_error(size, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--size", size])
    assert excinfo.value.code == 2
    assert "invalid choice" in capsys.readouterr().err
