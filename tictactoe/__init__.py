"""Progression tic-tac-toe package exports."""

from .move_set import MoveSet, Node
from .tictactoe_game import TicTacToeGame
from .tictactoe_moves import ClaimCell
from .tictactoe_observation import TicTacToeObservation
from .tictactoe_player import Player
from .tictactoe_state import Phase, TicTacToeState, player_id_for

__all__ = [
    "ClaimCell",
    "MoveSet",
    "Node",
    "Phase",
    "Player",
    "TicTacToeGame",
    "TicTacToeObservation",
    "TicTacToeState",
    "player_id_for",
]
