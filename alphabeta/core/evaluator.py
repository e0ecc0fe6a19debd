"""
Evaluator Module
================

Static evaluation of a search node from the maximizing side's perspective.

The score is a weighted sum of four (max side - min side) sub-scores:
    - Material: per-piece point values of the surviving pieces.
    - Mobility: number of legal moves each side has.
    - King safety: friendly/enemy/empty neighbours of each king.
    - Pawn structure: doubled and isolated pawn penalties.

A position where the minimizing side has lost its king (or is mated) scores
KING_CAPTURED_SCORE, which no ordinary position can reach.
"""

import math
import sys
from typing import List

import chess

from alphabeta.config import CONFIG
from alphabeta.core.errors import EvaluationError
from alphabeta.core.node import ChessNode

# Half the largest double, so the sentinel survives being combined with
# other terms without overflowing to infinity.
KING_CAPTURED_SCORE: float = sys.float_info.max / 2

# Largest magnitude an ordinary (both kings present) score may take.
MAX_ORDINARY_SCORE: float = math.nextafter(KING_CAPTURED_SCORE, 0.0)

# Bitmask of the A file; FILES[i] is the mask of file i.
FILE_A: int = 0x0101010101010101
FILES: List[int] = [FILE_A << i for i in range(8)]

# NEIGHBOR_FILES[i] is the union of the files adjacent to file i.
NEIGHBOR_FILES: List[int] = [
    (FILES[f - 1] if f > 0 else 0) | (FILES[f + 1] if f < 7 else 0) for f in range(8)
]


class Evaluator:
    """Heuristic scorer for ``ChessNode`` positions."""

    def __init__(self, cfg=None):
        self.cfg = cfg or CONFIG.eval

    def evaluate(self, node: ChessNode) -> float:
        """Return the node's value for ``node.max_color``."""
        board: chess.Board = node.board
        max_color = node.max_color
        min_color = not max_color

        if board.king(min_color) is None:
            return KING_CAPTURED_SCORE

        if board.is_game_over():
            if board.is_checkmate():
                return KING_CAPTURED_SCORE if board.turn == min_color else -KING_CAPTURED_SCORE
            return 0.0

        material = self.material(board, max_color) - self.material(board, min_color)
        mobility = self.mobility(board, max_color) - self.mobility(board, min_color)
        # higher when the opponent's king is less safe
        king_safety = self.king_safety(board, min_color) - self.king_safety(board, max_color)
        pawns = self.pawn_structure(board, max_color) - self.pawn_structure(board, min_color)

        w = self.cfg.weights
        score = (w["material"] * material
                 + w["mobility"] * mobility
                 + w["king_safety"] * king_safety
                 + w["pawn_structure"] * pawns)

        if math.isnan(score):
            raise EvaluationError(f"evaluation produced NaN for {board.fen()}")
        return max(-MAX_ORDINARY_SCORE, min(MAX_ORDINARY_SCORE, score))

    def material(self, board: chess.Board, color: chess.Color) -> int:
        total = 0
        for pt in chess.PIECE_TYPES:
            value = self.cfg.piece_values.get(chess.piece_name(pt).upper(), 0)
            total += value * len(board.pieces(pt, color))
        return total

    def mobility(self, board: chess.Board, color: chess.Color) -> int:
        """Count of legal moves ``color`` would have if it were to move.

        When the other side is in check, the flipped board would let ``color``
        take the king; such moves are not counted.
        """
        if board.turn == color:
            return board.legal_moves.count()
        flipped = board.copy(stack=False)
        flipped.turn = color
        flipped.ep_square = None
        enemy_king = flipped.king(not color)
        return sum(1 for move in flipped.legal_moves if move.to_square != enemy_king)

    def king_safety(self, board: chess.Board, color: chess.Color) -> int:
        king_sq = board.king(color)
        if king_sq is None:
            raise EvaluationError(
                f"no {chess.COLOR_NAMES[color]} king on the board: {board.fen()}"
            )

        ks = self.cfg.king_safety
        score = 0
        # BB_KING_ATTACKS only holds in-bounds neighbours
        for sq in chess.SquareSet(chess.BB_KING_ATTACKS[king_sq]):
            piece = board.piece_at(sq)
            if piece is None:
                score += ks["empty"]
            elif piece.color == color:
                score += ks["friendly"]
            else:
                score += ks["enemy"]
        return score

    def pawn_structure(self, board: chess.Board, color: chess.Color) -> int:
        ps = self.cfg.pawn_structure
        pawns = board.pieces_mask(chess.PAWN, color)
        score = 0
        for sq in chess.scan_forward(pawns):
            f = chess.square_file(sq)
            others = pawns & ~chess.BB_SQUARES[sq]
            if others & FILES[f]:
                score += ps["doubled"]
            if not pawns & NEIGHBOR_FILES[f]:
                score += ps["isolated"]
        return score
