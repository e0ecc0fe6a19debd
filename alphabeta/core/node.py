"""Game-tree node contract and its python-chess implementation."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Protocol, Sequence

import chess


class NodeType(Enum):
    MAXIMIZER = "MAX"
    MINIMIZER = "MIN"


class MoveType(Enum):
    CAPTURE = "capture"
    PROMOTION = "promotion"
    QUIET = "quiet"


class GameTreeNode(Protocol):
    """What the search needs from a node.

    ``utility_value`` is always from the maximizing side's perspective so
    alpha/beta bounds stay comparable between siblings.
    """

    type: NodeType
    move: Optional[object]
    move_type: Optional[MoveType]
    utility_value: float

    def is_terminal(self) -> bool: ...

    def children(self) -> Sequence["GameTreeNode"]: ...


def classify_move(board: chess.Board, move: chess.Move) -> MoveType:
    """Bucket a move played from ``board``. Capture-promotions count as captures."""
    if board.is_capture(move):
        return MoveType.CAPTURE
    if move.promotion is not None:
        return MoveType.PROMOTION
    return MoveType.QUIET


class ChessNode:
    """A position in the search tree, backed by its own ``chess.Board``.

    Children are created on first request, each on a private board copy, so
    no board is shared between nodes of the tree.
    """

    __slots__ = ("board", "max_color", "move", "move_type", "utility_value", "_children")

    def __init__(
        self,
        board: chess.Board,
        max_color: chess.Color,
        move: Optional[chess.Move] = None,
        move_type: Optional[MoveType] = None,
    ):
        self.board = board
        self.max_color = max_color
        self.move = move
        self.move_type = move_type
        self.utility_value = 0.0
        self._children: Optional[List[ChessNode]] = None

    @classmethod
    def root(cls, board: chess.Board, max_color: Optional[chess.Color] = None) -> "ChessNode":
        """Build a fresh root from a copy of ``board``; defaults to the side to move as MAX."""
        color = board.turn if max_color is None else max_color
        return cls(board.copy(), color)

    @property
    def type(self) -> NodeType:
        return NodeType.MAXIMIZER if self.board.turn == self.max_color else NodeType.MINIMIZER

    @property
    def min_color(self) -> chess.Color:
        return not self.max_color

    def is_terminal(self) -> bool:
        return self.board.is_game_over()

    def children(self) -> List["ChessNode"]:
        if self._children is None:
            kids = []
            for move in self.board.legal_moves:
                move_type = classify_move(self.board, move)
                child_board = self.board.copy()
                child_board.push(move)
                kids.append(ChessNode(child_board, self.max_color, move, move_type))
            self._children = kids
        return self._children

    def __repr__(self) -> str:
        move = self.move.uci() if self.move else "root"
        return f"ChessNode({move}, {self.type.value}, utility={self.utility_value})"
