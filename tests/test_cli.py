import pytest

from gridtic.cli import build_players, main, run_game
from gridtic.config import GameConfig
from gridtic.models import ConfigurationError, Symbol

OUTCOMES = {"Player X wins!", "Player O wins!", "Player Y wins!", "It's a draw."}


def test_random_players_finish(capsys):
    assert main(["--players", "random", "random", "--seed", "3"]) == 0
    out = capsys.readouterr().out.strip().splitlines()
    assert out[-1] in OUTCOMES


def test_three_players_on_larger_board(capsys):
    assert main(["--rows", "4", "--columns", "4",
                 "--players", "random", "random", "random", "--seed", "1"]) == 0
    assert capsys.readouterr().out.strip().splitlines()[-1] in OUTCOMES


def test_bad_board_size_is_reported(capsys):
    assert main(["--rows", "0", "--players", "random", "random"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_too_many_players_is_reported(capsys):
    assert main(["--players"] + ["random"] * 5) == 1
    assert "symbols" in capsys.readouterr().err


def test_human_game_with_scripted_input():
    inputs = iter(["0 0", "1 1", "oops", "1 1", "0 1", "2 2", "0 2"])
    lines = []
    config = GameConfig(players=["human", "human"])

    game = run_game(config, input_fn=lambda prompt: next(inputs), output_fn=lines.append)

    assert game.winner.symbol is Symbol.X
    assert lines[-1] == "Player X wins!"
    assert "Invalid input. Please enter row and column as numbers." in lines
    assert "Invalid move. Try again!" in lines


def test_eof_aborts(monkeypatch, capsys):
    def closed(prompt):
        raise EOFError

    monkeypatch.setattr("builtins.input", closed)
    assert main([]) == 130


def test_build_players_kinds():
    config = GameConfig(players=["human", "random", "ai"], time_limit=1.0, seed=5)
    players = build_players(config)
    assert [p.symbol for p in players] == [Symbol.X, Symbol.O, Symbol.Y]
    assert players[2].move_source.turn_order == [Symbol.Y, Symbol.X, Symbol.O]


@pytest.mark.parametrize("kwargs", [
    {"players": ["human"]},
    {"players": ["robot", "human"]},
    {"columns": 0},
    {"time_limit": 0},
    {"max_depth": 0},
])
def test_config_validation(kwargs):
    with pytest.raises(ConfigurationError):
        GameConfig(**kwargs)
