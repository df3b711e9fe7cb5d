#!/usr/bin/env python3
"""
CLI tool for analysing one position with a UCI engine.

Prints every fresh line the engine sends for the position and exits after
the final bestmove.

Usage:
    python tools/analyse_position.py --engine /usr/bin/stockfish --depth 15

    python tools/analyse_position.py \\
        --fen "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3" \\
        --moves f1b5 a7a6 \\
        --option Threads=2 --option Hash=128 \\
        --depth 18 --log-file analysis.log --log-info-lines
"""

import argparse
import sys
import threading
from pathlib import Path

import chess

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from engine_link import EngineConfig, EngineSession, EngineSpawnError
from engine_link.commands import format_go, format_position
from engine_link.log import setup_logger


def build_board(fen, moves) -> chess.Board:
    """Build the position to analyse from an optional FEN and UCI moves."""
    board = chess.Board(fen) if fen else chess.Board()

    for move_str in moves:
        move = chess.Move.from_uci(move_str)
        if move not in board.legal_moves:
            raise ValueError(f"Illegal move: {move_str}")
        board.push(move)

    return board


def parse_option(text: str):
    """Split NAME=VALUE into its parts."""
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got {text!r}")
    return name, value


def analyse(args) -> int:
    """Run the analysis and return the process exit code."""
    try:
        board = build_board(args.fen, args.moves)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    logger = setup_logger(debug=args.verbose, log_file=args.log_file)

    try:
        config = EngineConfig(
            path=args.engine,
            args=args.engine_args,
            log_info_lines=args.log_info_lines,
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    done = threading.Event()

    def on_line(line: str):
        print(line)
        if line.startswith("bestmove"):
            done.set()

    def on_error_line(line: str):
        print(f"stderr: {line}", file=sys.stderr)

    session = EngineSession(config, logger=logger)

    try:
        session.setup(on_line, on_error_line)
    except EngineSpawnError:
        return 1

    try:
        session.send("uci")
        for name, value in args.option:
            print(session.setoption(name, value))
        session.send("isready")
        session.send(format_position(board))
        session.send(format_go(depth=args.depth, movetime=args.movetime))

        if not done.wait(timeout=args.timeout):
            print(f"Error: no bestmove within {args.timeout}s")
            session.send("stop")
            done.wait(timeout=1.0)
            return 1

        return 0

    finally:
        session.shutdown()
        session.process.close()


def main():
    parser = argparse.ArgumentParser(
        description="Analyse a chess position with a UCI engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--engine",
        default=None,
        help="Path to engine binary (default: auto-detect Stockfish)",
    )
    parser.add_argument(
        "--engine-args",
        nargs="*",
        default=[],
        help="Arguments passed to the engine",
    )
    parser.add_argument("--fen", default=None, help="Root position (default: start position)")
    parser.add_argument("--moves", nargs="*", default=[], help="UCI moves played from the root")
    parser.add_argument("--depth", type=int, default=None, help="Search depth")
    parser.add_argument("--movetime", type=int, default=None, help="Search time in ms")
    parser.add_argument(
        "--option",
        type=parse_option,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Engine option, may be repeated",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=60.0,
        help="Seconds to wait for bestmove (default: 60)",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Traffic log file")
    parser.add_argument(
        "--log-info-lines",
        action="store_true",
        help="Include info lines in the traffic log",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every line exchanged")

    args = parser.parse_args()

    if args.depth is None and args.movetime is None:
        args.depth = 15

    sys.exit(analyse(args))


if __name__ == "__main__":
    main()
