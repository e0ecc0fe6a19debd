from typing import Optional

import chess
from loguru import logger

from alphabeta.config import CONFIG
from alphabeta.core.errors import SearchFailure
from alphabeta.core.evaluator import Evaluator
from alphabeta.core.executor import TimedOut, run_with_deadline
from alphabeta.core.node import ChessNode
from alphabeta.core.search import AlphaBetaSearch, SearchTask


class Agent:
    """Plays one side: owns its time bank and turns positions into moves.

    Every call to ``select_move`` builds a fresh tree from a copy of the
    board, so nothing from an abandoned search is ever revisited.
    """

    def __init__(self, color: chess.Color, max_depth: Optional[int] = None,
                 max_playtime_ms: Optional[int] = None, evaluator: Optional[Evaluator] = None):
        max_depth = CONFIG.search.depth if max_depth is None else max_depth
        max_playtime_ms = CONFIG.search.time_limit_ms if max_playtime_ms is None else max_playtime_ms
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        if max_playtime_ms is None or max_playtime_ms < 0:
            raise ValueError(f"max_playtime_ms must be a non-negative budget, got {max_playtime_ms}")

        self.color = color
        self.max_depth = max_depth
        self.max_playtime_ms = int(max_playtime_ms)
        self.time_left_ms = self.max_playtime_ms
        self.evaluator = evaluator or Evaluator()
        self.last_elapsed_ms = 0

        logger.info(f"Constructed Agent(color={chess.COLOR_NAMES[color]}, "
                    f"timeLimit(ms)={self.max_playtime_ms}, maxDepth={self.max_depth})")

    @property
    def out_of_time(self) -> bool:
        return self.time_left_ms <= 0

    def charge(self, elapsed_ms: int):
        self.last_elapsed_ms = elapsed_ms
        self.time_left_ms = max(0, self.time_left_ms - elapsed_ms)

    def select_move(self, board: chess.Board) -> Optional[chess.Move]:
        """Search ``board`` within the remaining budget.

        Returns None when the position is terminal or the search timed out;
        a timeout costs the whole playing time. A failing search ends the
        session with ``SystemExit(1)``.
        """
        root = ChessNode.root(board, max_color=self.color)
        task = SearchTask(root, self.max_depth)
        searcher = AlphaBetaSearch(self.evaluator)

        try:
            outcome = run_with_deadline(task, self.time_left_ms, searcher)
        except SearchFailure as exc:
            logger.critical(f"Agent({chess.COLOR_NAMES[self.color]}) cannot continue: {exc}")
            raise SystemExit(1) from exc

        if isinstance(outcome, TimedOut):
            # out of time: the whole allotted budget is spent
            self.charge(outcome.charged_ms)
            return None

        self.charge(outcome.elapsed_ms)
        logger.info(f"{chess.COLOR_NAMES[self.color]} plays "
                    f"{outcome.move.uci() if outcome.move else None} "
                    f"in {outcome.elapsed_ms} ms ({self.time_left_ms} ms left)")
        return outcome.move
