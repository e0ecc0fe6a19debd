# alphabeta/validator.py
import concurrent.futures
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Optional

import chess
from loguru import logger

from alphabeta.config import CONFIG
from alphabeta.core.errors import SearchFailure, ValidationTimeout
from alphabeta.core.evaluator import Evaluator
from alphabeta.core.node import ChessNode
from alphabeta.core.search import AlphaBetaSearch, MinimaxSearch

# utilities closer than this are considered equal
UTILITY_TOLERANCE = 1e-12


@dataclass(frozen=True)
class ValidationRecord:
    minimax_move: Optional[chess.Move]
    minimax_utility: float
    alphabeta_move: Optional[chess.Move]
    alphabeta_utility: float

    @property
    def utilities_match(self) -> bool:
        return abs(self.minimax_utility - self.alphabeta_utility) <= UTILITY_TOLERANCE


class ShadowValidator:
    """Cross-checks alpha-beta against plain minimax, one position at a time.

    Both searches run concurrently, each over its own tree built from its
    own board copy, so neither writes utilities the other can read.
    """

    def __init__(self, max_depth: Optional[int] = None, max_moves: Optional[int] = None,
                 evaluator: Optional[Evaluator] = None):
        self.max_depth = CONFIG.search.depth if max_depth is None else max_depth
        self.max_moves = CONFIG.search.validate_moves if max_moves is None else max_moves
        self.evaluator = evaluator or Evaluator()
        self.num_moves = 0
        self.num_different_utility_moves = 0

    @property
    def done(self) -> bool:
        return self.num_moves >= self.max_moves

    def _search(self, searcher, board: chess.Board, color: chess.Color):
        root = ChessNode.root(board, max_color=color)
        best = searcher.search(root, self.max_depth)
        return best.move, best.utility_value

    def check(self, board: chess.Board, deadline_ms: Optional[int] = None) -> ValidationRecord:
        """Search ``board`` with both algorithms and record whether they agree."""
        color = board.turn
        minimax = MinimaxSearch(self.evaluator)
        alphabeta = AlphaBetaSearch(self.evaluator)
        timeout = None if deadline_ms is None else max(0, deadline_ms) / 1000.0

        pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="alphabeta-shadow")
        try:
            mm_future = pool.submit(self._search, minimax, board, color)
            ab_future = pool.submit(self._search, alphabeta, board, color)
            done, pending = concurrent.futures.wait([mm_future, ab_future], timeout=timeout)
            if pending:
                minimax.stop()
                alphabeta.stop()
                raise ValidationTimeout(f"validation exceeded {deadline_ms} ms")
            try:
                mm_move, mm_value = mm_future.result()
                ab_move, ab_value = ab_future.result()
            except Exception as exc:
                logger.exception("shadow validation search failed")
                raise SearchFailure(f"validation search failed: {exc!r}") from exc
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        record = ValidationRecord(mm_move, mm_value, ab_move, ab_value)
        self.num_moves += 1
        if not record.utilities_match:
            self.num_different_utility_moves += 1
            logger.warning(f"alphabeta and minimax produced different utilities: "
                           f"{ab_value} vs {mm_value} at {board.fen()}")
        return record

    def summary(self) -> Dict[str, Any]:
        return {
            "num_moves": self.num_moves,
            "num_different_utility_moves": self.num_different_utility_moves,
        }
