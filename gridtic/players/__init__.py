# Players and move sources
from .player import Player, MoveSource, create_players
from .sources import (
    HumanMoveSource,
    ScriptedMoveSource,
    RandomMoveSource,
    parse_position,
)

__all__ = [
    'Player', 'MoveSource', 'create_players', 'HumanMoveSource',
    'ScriptedMoveSource', 'RandomMoveSource', 'parse_position',
]
