"""Tic-tac-toe rules that are independent from HTTP and DB.

Rule of thumb:
- OK: board evaluation, move validation, state transitions.
- Not OK: touching DB sessions, FastAPI, datetime.now(), etc.

A board is a sequence of 9 cells, positions 0-8 laid out row by row
(row = position // 3, column = position % 3). A cell holds "X", "O" or None.
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from tictactoe_server.exceptions import CellOccupiedError, GameCompletedError

BOARD_SIZE = 9

PLAYER_X = "X"
PLAYER_O = "O"
FIRST_PLAYER = PLAYER_X

STATUS_IN_PROGRESS = "in_progress"
STATUS_WON = "won"
STATUS_DRAW = "draw"

# Rows, then columns, then diagonals.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

Board = Tuple[Optional[str], ...]


@dataclass(frozen=True)
class GameState:
    board: Board
    current_player: str
    status: str
    winner: Optional[str] = None

    @property
    def is_over(self) -> bool:
        return self.status != STATUS_IN_PROGRESS


def empty_board() -> Board:
    return (None,) * BOARD_SIZE


def new_game_state() -> GameState:
    """Return the state every game starts from (and returns to on reset)."""
    return GameState(
        board=empty_board(),
        current_player=FIRST_PLAYER,
        status=STATUS_IN_PROGRESS,
        winner=None,
    )


def other_player(player: str) -> str:
    return PLAYER_O if player == PLAYER_X else PLAYER_X


def check_winner(board: Sequence[Optional[str]]) -> Optional[str]:
    """Return the mark occupying a complete line, or None.

    Lines are checked in the fixed order of WINNING_LINES and the first
    match wins.
    """
    for a, b, c in WINNING_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return board[a]
    return None


def is_board_full(board: Sequence[Optional[str]]) -> bool:
    return all(cell is not None for cell in board)


def apply_move(state: GameState, position: int) -> GameState:
    """Place the current player's mark at position and compute the next state.

    Args:
        state: Current game state. Must be in progress.
        position: Target cell, 0..8.

    Raises:
        ValueError: position is outside the board.
        GameCompletedError: the game is already won or drawn.
        CellOccupiedError: the target cell already holds a mark.

    Returns:
        GameState: The next state. On a winning or drawing move the
        current player is left unchanged; otherwise it flips.
    """
    if position < 0 or position >= BOARD_SIZE:
        raise ValueError(f"position must be between 0 and {BOARD_SIZE - 1}")
    if len(state.board) != BOARD_SIZE:
        raise ValueError("Invalid board state")
    if state.is_over:
        raise GameCompletedError()
    if state.board[position] is not None:
        raise CellOccupiedError(position)

    board = list(state.board)
    board[position] = state.current_player
    new_board = tuple(board)

    winner = check_winner(new_board)
    if winner is not None:
        return replace(state, board=new_board, status=STATUS_WON, winner=winner)
    if is_board_full(new_board):
        return replace(state, board=new_board, status=STATUS_DRAW, winner=None)
    return replace(
        state,
        board=new_board,
        current_player=other_player(state.current_player),
        status=STATUS_IN_PROGRESS,
        winner=None,
    )
