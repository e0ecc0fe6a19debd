"""Cheap move ordering for alpha-beta: captures, then promotions, then the rest."""

from typing import List, Sequence

from alphabeta.core.node import GameTreeNode, MoveType


def order(children: Sequence[GameTreeNode]) -> List[GameTreeNode]:
    """Stable reordering of ``children`` by the type of move that produced each.

    Nodes without a move (the root, or ``move_type is None``) go last.
    """
    captures, promotions, other = [], [], []
    for child in children:
        move_type = child.move_type if child.move is not None else None
        if move_type is MoveType.CAPTURE:
            captures.append(child)
        elif move_type is MoveType.PROMOTION:
            promotions.append(child)
        else:
            other.append(child)
    return captures + promotions + other
