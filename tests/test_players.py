import pytest

from gridtic.game.board import Board
from gridtic.models import ConfigurationError, MalformedInputError, MoveSourceError, Position, Symbol
from gridtic.players import (
    HumanMoveSource,
    Player,
    RandomMoveSource,
    ScriptedMoveSource,
    create_players,
    parse_position,
)

from conftest import fill


class TestParsePosition:
    @pytest.mark.parametrize("raw", ["1 2", " 1   2 ", "1,2", "1, 2"])
    def test_accepts_two_integers(self, raw):
        assert parse_position(raw) == Position(1, 2)

    def test_negative_numbers_parse(self):
        assert parse_position("-1 0") == Position(-1, 0)

    @pytest.mark.parametrize("raw", ["", "1", "a b", "1 2 3", "1.5 2", None])
    def test_rejects_malformed(self, raw):
        with pytest.raises(MalformedInputError):
            parse_position(raw)


class TestHumanMoveSource:
    def test_reprompts_until_valid(self):
        board = fill(Board(3, 3), ["X__", "___", "___"])
        inputs = iter(["abc", "5 5", "0 0", "1 1"])
        prompts, outputs = [], []

        def fake_input(prompt):
            prompts.append(prompt)
            return next(inputs)

        source = HumanMoveSource("Player O", input_fn=fake_input, output_fn=outputs.append)
        assert source(board) == Position(1, 1)

        assert outputs == [
            HumanMoveSource.INVALID_INPUT_MESSAGE,
            HumanMoveSource.INVALID_MOVE_MESSAGE,
            HumanMoveSource.INVALID_MOVE_MESSAGE,
        ]
        assert len(prompts) == 4
        assert prompts[0] == "Player O, enter your move (row [0-2] and column [0-2]): "
        assert board.state_hash() == "X________"

    def test_eof_propagates(self):
        def closed_input(prompt):
            raise EOFError

        source = HumanMoveSource("Player X", input_fn=closed_input, output_fn=lambda s: None)
        with pytest.raises(EOFError):
            source(Board(3, 3))


class TestScriptedMoveSource:
    def test_plays_in_order_then_fails(self):
        source = ScriptedMoveSource([(0, 0), Position(1, 2)])
        board = Board(3, 3)
        assert source(board) == Position(0, 0)
        assert source(board) == Position(1, 2)
        with pytest.raises(MoveSourceError):
            source(board)


class TestRandomMoveSource:
    def test_only_picks_empty_cells(self):
        board = fill(Board(3, 3), ["XOX", "O_O", "XOX"])
        assert RandomMoveSource(seed=1)(board) == Position(1, 1)

    def test_seeded_sources_agree(self):
        board = Board(4, 4)
        picks_a = [RandomMoveSource(seed=9)(board) for _ in range(3)]
        picks_b = [RandomMoveSource(seed=9)(board) for _ in range(3)]
        assert picks_a == picks_b

    def test_full_board_raises(self):
        board = fill(Board(1, 2), ["XO"])
        with pytest.raises(MoveSourceError):
            RandomMoveSource(seed=0)(board)


class TestCreatePlayers:
    def test_assigns_symbols_in_order(self):
        players = create_players([ScriptedMoveSource([])] * 4)
        assert [p.symbol for p in players] == [Symbol.X, Symbol.O, Symbol.Y, Symbol.Z]
        assert players[0].name == "Player X"

    def test_custom_names(self):
        players = create_players([ScriptedMoveSource([])] * 2, names=["Ann", "Bo"])
        assert [p.name for p in players] == ["Ann", "Bo"]

    def test_rejects_more_players_than_symbols(self):
        with pytest.raises(ConfigurationError):
            create_players([ScriptedMoveSource([])] * 5)

    def test_rejects_single_player(self):
        with pytest.raises(ConfigurationError):
            create_players([ScriptedMoveSource([])])

    def test_rejects_name_count_mismatch(self):
        with pytest.raises(ConfigurationError):
            create_players([ScriptedMoveSource([])] * 2, names=["Ann"])

    def test_player_validation(self):
        with pytest.raises(ValueError):
            Player("nobody", Symbol.EMPTY, ScriptedMoveSource([]))
        with pytest.raises(ValueError):
            Player("broken", Symbol.X, "not callable")
