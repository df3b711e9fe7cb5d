"""
Builders for outgoing UCI command strings.
"""

from typing import Optional

import chess


def format_setoption(name: str, value) -> str:
    """Format a "setoption name <name> value <value>" command."""
    return f"setoption name {name} value {value}"


def format_position(board: chess.Board) -> str:
    """
    Format a "position" command reproducing a board and its move history.

    The starting position is sent as "startpos"; any other root position is
    sent as a FEN. Moves played on the board follow as "moves ...".

    Args:
        board: Position to send

    Returns:
        Command such as "position startpos moves e2e4 e7e5"
    """
    root = board.root()

    if root.fen() == chess.STARTING_FEN:
        command = "position startpos"
    else:
        command = f"position fen {root.fen()}"

    if board.move_stack:
        command += " moves " + " ".join(move.uci() for move in board.move_stack)

    return command


def format_go(
    depth: Optional[int] = None,
    movetime: Optional[int] = None,
    nodes: Optional[int] = None,
    infinite: bool = False,
) -> str:
    """
    Format a "go" command.

    Args:
        depth: Search depth in plies
        movetime: Search time in milliseconds
        nodes: Node limit
        infinite: Search until "stop"

    Returns:
        Command such as "go depth 12"
    """
    tokens = ["go"]

    if depth is not None:
        tokens.append(f"depth {depth}")
    if movetime is not None:
        tokens.append(f"movetime {movetime}")
    if nodes is not None:
        tokens.append(f"nodes {nodes}")
    if infinite:
        tokens.append("infinite")

    return " ".join(tokens)
