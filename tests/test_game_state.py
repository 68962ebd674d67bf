import pytest

from gridtic.models import GameState, GameStatus, Symbol, advance


X, O, Y = Symbol.X, Symbol.O, Symbol.Y
TWO = [X, O]


def test_turn_alternates_for_two_players():
    in_progress = GameState.in_progress()
    assert advance(GameState.turn(X), in_progress, TWO) == GameState.turn(O)
    assert advance(GameState.turn(O), in_progress, TWO) == GameState.turn(X)


def test_turn_rotates_for_three_players():
    in_progress = GameState.in_progress()
    order = [X, O, Y]
    state = GameState.turn(X)
    seen = []
    for _ in range(4):
        state = advance(state, in_progress, order)
        seen.append(state.symbol)
    assert seen == [O, Y, X, O]


@pytest.mark.parametrize("result", [GameState.won(X), GameState.won(O), GameState.draw()])
def test_terminal_result_becomes_the_state(result):
    assert advance(GameState.turn(X), result, TWO) == result


@pytest.mark.parametrize("terminal", [GameState.won(O), GameState.draw()])
def test_terminal_states_absorb(terminal):
    assert advance(terminal, GameState.in_progress(), TWO) == terminal
    assert advance(terminal, GameState.won(X), TWO) == terminal


def test_is_game_over():
    assert GameState.won(X).is_game_over
    assert GameState.draw().is_game_over
    assert not GameState.turn(X).is_game_over
    assert not GameState.in_progress().is_game_over


def test_unregistered_symbol_raises():
    with pytest.raises(ValueError):
        advance(GameState.turn(Y), GameState.in_progress(), TWO)


def test_symbol_must_match_status():
    with pytest.raises(ValueError):
        GameState(GameStatus.TURN)
    with pytest.raises(ValueError):
        GameState(GameStatus.DRAW, X)
    with pytest.raises(ValueError):
        GameState.won(Symbol.EMPTY)


def test_str():
    assert str(GameState.turn(X)) == "Turn(X)"
    assert str(GameState.won(O)) == "Won(O)"
    assert str(GameState.draw()) == "Draw"
