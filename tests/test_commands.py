"""Tests for UCI command builders."""

import chess

from engine_link.commands import format_go, format_position, format_setoption


class TestFormatPosition:
    """Tests for the "position" command."""

    def test_start_position(self):
        assert format_position(chess.Board()) == "position startpos"

    def test_start_position_with_moves(self):
        board = chess.Board()
        board.push_san("e4")
        board.push_san("e5")
        board.push_san("Nf3")

        assert format_position(board) == "position startpos moves e2e4 e7e5 g1f3"

    def test_fen_position(self):
        fen = "6k1/5ppp/8/8/8/8/5PPP/4Q1K1 w - - 0 1"

        assert format_position(chess.Board(fen)) == f"position fen {fen}"

    def test_fen_position_with_moves(self):
        fen = "6k1/5ppp/8/8/8/8/5PPP/4Q1K1 w - - 0 1"
        board = chess.Board(fen)
        board.push_uci("e1e8")

        assert format_position(board) == f"position fen {fen} moves e1e8"


class TestFormatGo:
    """Tests for the "go" command."""

    def test_bare(self):
        assert format_go() == "go"

    def test_depth(self):
        assert format_go(depth=12) == "go depth 12"

    def test_combined_limits(self):
        assert format_go(movetime=500, nodes=10000) == "go movetime 500 nodes 10000"

    def test_infinite(self):
        assert format_go(infinite=True) == "go infinite"


def test_format_setoption():
    assert format_setoption("Hash", 128) == "setoption name Hash value 128"
    assert format_setoption("UCI_ShowWDL", "true") == "setoption name UCI_ShowWDL value true"
