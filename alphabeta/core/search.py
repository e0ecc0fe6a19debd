import threading
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from loguru import logger

from alphabeta.core.errors import SearchCancelled
from alphabeta.core.evaluator import Evaluator
from alphabeta.core.node import GameTreeNode, NodeType
from alphabeta.core.ordering import order
from alphabeta.core.utils import format_info

INF = float("inf")


@dataclass(frozen=True)
class SearchTask:
    """A root node and the depth to search it to."""
    root: GameTreeNode
    depth: int

    def __post_init__(self):
        if isinstance(self.depth, bool) or not isinstance(self.depth, int):
            raise TypeError(f"search depth must be an int, got {self.depth!r}")
        if self.depth < 0:
            raise ValueError(f"search depth must be >= 0, got {self.depth}")


@dataclass(frozen=True)
class SearchResult:
    move: Optional[object]
    elapsed_ms: int


@dataclass
class SearchStats:
    nodes: int = 0
    evaluations: int = 0
    cutoffs: int = 0


class BaseSearch:
    """Shared plumbing: evaluator, move orderer, stop flag, timing and stats.

    A searcher whose stop flag has been set stays stopped; build a new one
    for the next search.
    """

    def __init__(self, evaluator=None, orderer: Callable[[Sequence], List] = order):
        self.evaluator = evaluator or Evaluator()
        self.orderer = orderer
        self.stats = SearchStats()
        self._stop_event = threading.Event()

    def stop(self):
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def search(self, node: GameTreeNode, depth: int, alpha: float = -INF, beta: float = INF) -> GameTreeNode:
        raise NotImplementedError

    def run(self, task: SearchTask) -> SearchResult:
        """Search ``task.root`` to ``task.depth`` and time it on a monotonic clock."""
        self.stats = SearchStats()
        start = time.perf_counter_ns()
        best = self.search(task.root, task.depth)
        elapsed_ms = (time.perf_counter_ns() - start) // 1_000_000

        logger.debug(format_info(task.depth, best.utility_value, self.stats.nodes,
                                 elapsed_ms, best.move, self.stats.cutoffs))
        return SearchResult(best.move, int(elapsed_ms))

    def _enter(self):
        if self._stop_event.is_set():
            raise SearchCancelled("search stopped")
        self.stats.nodes += 1

    def _leaf(self, node: GameTreeNode) -> GameTreeNode:
        node.utility_value = self.evaluator.evaluate(node)
        self.stats.evaluations += 1
        return node


class AlphaBetaSearch(BaseSearch):
    """Depth-limited minimax with alpha-beta pruning.

    ``search`` returns the best child of ``node`` with its ``utility_value``
    set to the backed-up value, or ``node`` itself when it was evaluated
    directly (terminal, depth 0) or had no children. The first child to
    reach the best value wins ties.
    """

    def search(self, node: GameTreeNode, depth: int, alpha: float = -INF, beta: float = INF) -> GameTreeNode:
        self._enter()
        if node.is_terminal() or depth == 0:
            return self._leaf(node)

        children = self.orderer(node.children())
        best_child = None

        if node.type is NodeType.MAXIMIZER:
            best = -INF
            for child in children:
                value = self.search(child, depth - 1, alpha, beta).utility_value
                if value > best:
                    best = value
                    best_child = child
                alpha = max(alpha, best)
                if alpha >= beta:
                    self.stats.cutoffs += 1
                    break
        else:
            best = INF
            for child in children:
                value = self.search(child, depth - 1, alpha, beta).utility_value
                if value < best:
                    best = value
                    best_child = child
                beta = min(beta, best)
                if alpha >= beta:
                    self.stats.cutoffs += 1
                    break

        if best_child is None:
            return node
        best_child.utility_value = best
        return best_child


class MinimaxSearch(BaseSearch):
    """Exhaustive minimax with the same contract as ``AlphaBetaSearch``.

    Visits every child; ``alpha`` and ``beta`` are accepted and ignored.
    Used to cross-check pruned results.
    """

    def search(self, node: GameTreeNode, depth: int, alpha: float = -INF, beta: float = INF) -> GameTreeNode:
        self._enter()
        if node.is_terminal() or depth == 0:
            return self._leaf(node)

        maximizing = node.type is NodeType.MAXIMIZER
        best = -INF if maximizing else INF
        best_child = None
        for child in self.orderer(node.children()):
            value = self.search(child, depth - 1).utility_value
            if (value > best) if maximizing else (value < best):
                best = value
                best_child = child

        if best_child is None:
            return node
        best_child.utility_value = best
        return best_child
